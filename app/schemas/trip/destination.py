from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, time, datetime
from app.schemas.common import MAX_ID, PartialUpdate


class DestinationFields(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = None
    order_index: Optional[int] = None
    destination_type: Optional[str] = None
    address: Optional[str] = None
    visit_date: Optional[date] = None
    visit_time: Optional[time] = None
    price_range: Optional[str] = None
    location_lat: Optional[float] = Field(None, ge=-90, le=90)
    location_lng: Optional[float] = Field(None, ge=-180, le=180)


class DestinationCreate(DestinationFields):
    priority_level: int = Field(3, ge=1, le=5)
    is_completed: bool = False


class DestinationCreateForTrip(DestinationCreate):
    """Body of POST /destinations, where the trip comes with the payload."""
    trip_id: int = Field(..., gt=0, le=MAX_ID)


class DestinationUpdate(DestinationFields, PartialUpdate):
    REPLACE_FIELDS = ("name", "description", "image_url", "order_index")
    KEEP_IF_ABSENT_FIELDS = (
        "destination_type", "address", "visit_date", "visit_time", "price_range",
        "priority_level", "is_completed", "location_lat", "location_lng",
    )
    NOT_NULL_FIELDS = ("priority_level", "is_completed")

    priority_level: Optional[int] = Field(None, ge=1, le=5)
    is_completed: Optional[bool] = None


class DestinationResponse(DestinationFields):
    id: int
    trip_id: int
    priority_level: int
    is_completed: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CompletionResponse(BaseModel):
    is_completed: bool
