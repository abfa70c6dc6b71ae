from sqlalchemy import Column, Integer, String, Text, Date, Boolean, Numeric, ForeignKey, DateTime, func
from app.core.database import Base
from sqlalchemy.orm import relationship
import enum


class TripTypeEnum(str, enum.Enum):
    vacation = "vacation"
    business = "business"
    adventure = "adventure"
    family = "family"
    romantic = "romantic"
    solo = "solo"
    road_trip = "road_trip"
    backpacking = "backpacking"
    cultural = "cultural"
    other = "other"


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    owner_subject_id = Column(
        String(128), ForeignKey("users.subject_id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String, nullable=False)
    country = Column(String, nullable=True)
    city = Column(String, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)

    # Stored as plain text so new trip types need no migration
    trip_type = Column(String(32), nullable=False, default=TripTypeEnum.vacation.value)
    budget = Column(Numeric(12, 2), nullable=True)
    traveler_count = Column(Integer, nullable=False, default=1)
    is_favorite = Column(Boolean, nullable=False, default=False)
    trip_rating = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="trips")
    destinations = relationship("Destination", back_populates="trip", cascade="all, delete", passive_deletes=True)
    photos = relationship("Photo", back_populates="trip", cascade="all, delete", passive_deletes=True)
