from sqlalchemy import Column, Integer, String, Text, Date, Time, Boolean, Float, ForeignKey, DateTime, Index, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Destination(Base):
    __tablename__ = "destinations"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    order_index = Column(Integer, nullable=True)
    destination_type = Column(String, nullable=True)
    address = Column(String, nullable=True)
    visit_date = Column(Date, nullable=True)
    visit_time = Column(Time, nullable=True)
    price_range = Column(String, nullable=True)
    # 1 = must see, 5 = if there is time
    priority_level = Column(Integer, nullable=False, default=3)
    is_completed = Column(Boolean, nullable=False, default=False)
    location_lat = Column(Float, nullable=True)
    location_lng = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trip = relationship("Trip", back_populates="destinations")
    photos = relationship("Photo", back_populates="destination", passive_deletes=True)

    __table_args__ = (
        Index("ix_destinations_trip_id", "trip_id"),
    )
