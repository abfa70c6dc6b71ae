from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Index, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    # Trip-level photos have no destination
    destination_id = Column(Integer, ForeignKey("destinations.id", ondelete="SET NULL"), nullable=True)
    image_url = Column(String, nullable=False)
    caption = Column(Text, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    trip = relationship("Trip", back_populates="photos")
    destination = relationship("Destination", back_populates="photos")

    __table_args__ = (
        Index("ix_photos_trip_id", "trip_id"),
    )
