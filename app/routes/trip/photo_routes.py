from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.schemas.common import MAX_ID, MessageResponse
from app.schemas.trip.photo import PhotoCreate, PhotoResponse
from app.schemas.user.user import VerifiedIdentity
from app.services.trips.photo_service import add_photo, delete_photo, list_photos

router = APIRouter(tags=["Photos"])


@router.get("/trips/{trip_id}/photos", response_model=List[PhotoResponse])
async def get_trip_photos(
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    """Newest photos first."""
    return await list_photos(session, trip_id, current_user.subject_id)


@router.post("/trips/{trip_id}/photos", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def add_trip_photo(
    photo: PhotoCreate,
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await add_photo(session, trip_id, photo, current_user.subject_id)


@router.delete("/photos/{photo_id}", response_model=MessageResponse)
async def delete_photo_route(
    photo_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await delete_photo(session, photo_id, current_user.subject_id)
