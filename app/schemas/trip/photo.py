from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from app.schemas.common import MAX_ID


class PhotoCreate(BaseModel):
    image_url: str = Field(..., min_length=1)
    caption: Optional[str] = None
    destination_id: Optional[int] = Field(None, gt=0, le=MAX_ID)

    @field_validator("destination_id", mode="before")
    @classmethod
    def falsy_destination_is_none(cls, value):
        # Clients send "" or 0 for a trip-level photo
        return value or None


class PhotoResponse(BaseModel):
    id: int
    trip_id: int
    destination_id: Optional[int] = None
    image_url: str
    caption: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    class Config:
        from_attributes = True
