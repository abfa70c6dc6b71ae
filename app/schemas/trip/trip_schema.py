from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from app.models.trips.trip_model import TripTypeEnum
from app.schemas.common import PartialUpdate, blank_to_none


class TripFields(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    country: Optional[str] = None
    city: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        use_enum_values = True


class TripBase(TripFields):
    @model_validator(mode="after")
    def check_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class TripCreate(TripBase):
    trip_type: TripTypeEnum = TripTypeEnum.vacation
    budget: Optional[Decimal] = Field(None, ge=0)
    traveler_count: int = Field(1, ge=1)
    is_favorite: bool = False
    trip_rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("budget", "trip_rating", mode="before")
    @classmethod
    def empty_is_null(cls, value):
        return blank_to_none(value)

    @field_validator("traveler_count", mode="before")
    @classmethod
    def default_traveler_count(cls, value):
        return 1 if blank_to_none(value) is None else value

    @field_validator("trip_type", mode="before")
    @classmethod
    def default_trip_type(cls, value):
        return TripTypeEnum.vacation if blank_to_none(value) is None else value


class TripUpdate(TripBase, PartialUpdate):
    REPLACE_FIELDS = ("title", "country", "city", "start_date", "end_date", "notes", "image_url")
    KEEP_IF_ABSENT_FIELDS = ("trip_type", "budget", "traveler_count", "is_favorite", "trip_rating")
    NOT_NULL_FIELDS = ("trip_type", "traveler_count", "is_favorite")

    trip_type: Optional[TripTypeEnum] = None
    budget: Optional[Decimal] = Field(None, ge=0)
    traveler_count: Optional[int] = Field(None, ge=1)
    is_favorite: Optional[bool] = None
    trip_rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("trip_type", "budget", "traveler_count", "trip_rating", mode="before")
    @classmethod
    def empty_is_null(cls, value):
        return blank_to_none(value)


class TripRatingUpdate(BaseModel):
    rating: int


class TripResponse(TripFields):
    id: int
    owner_subject_id: str
    trip_type: str
    budget: Optional[float] = None
    traveler_count: int
    is_favorite: bool
    trip_rating: Optional[int] = None
    created_at: Optional[datetime] = None

    # Computed on read
    trip_status: str
    days_info: Optional[str] = None
    duration_days: Optional[int] = None
    destination_count: int = 0
    completed_destinations: int = 0
    photo_count: int = 0


class FavoriteResponse(BaseModel):
    is_favorite: bool


class RatingResponse(BaseModel):
    message: str
    trip_rating: int


class TripStats(BaseModel):
    total_destinations: int
    completed_destinations: int
    total_photos: int
    must_see_destinations: int
    progress_percentage: int
