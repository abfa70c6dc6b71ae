from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ProfileBase(BaseModel):
    display_name: Optional[str] = None
    location: Optional[str] = None
    location_lat: Optional[float] = Field(None, ge=-90, le=90)
    location_lng: Optional[float] = Field(None, ge=-180, le=180)
    travel_style: Optional[str] = None
    favorite_destinations: Optional[str] = None
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = None


class ProfileUpdate(ProfileBase):
    pass


class ProfileResponse(ProfileBase):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileWriteResponse(BaseModel):
    message: str
    profile: ProfileResponse


class ProfileStats(BaseModel):
    total_trips: int
    highly_rated_trips: int
    total_destinations: int
    completed_destinations: int
    total_photos: int
    countries_visited: int
    completion_rate: int
