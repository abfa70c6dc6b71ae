from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.schemas.common import MAX_ID, MessageResponse
from app.schemas.trip.trip_schema import (
    FavoriteResponse, RatingResponse, TripCreate, TripRatingUpdate, TripResponse, TripStats, TripUpdate
)
from app.schemas.user.user import VerifiedIdentity
from app.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.create_trip(db, trip, current_user.subject_id)


@router.get("", response_model=List[TripResponse])
async def get_my_trips(
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.list_trips(session, current_user.subject_id)


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.get_trip(session, trip_id, current_user.subject_id)


@router.put("/{trip_id}", response_model=MessageResponse)
async def update_trip_route(
    trip_update: TripUpdate,
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.update_trip(session, trip_id, trip_update, current_user.subject_id)


@router.patch("/{trip_id}/favorite", response_model=FavoriteResponse)
async def toggle_favorite_route(
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.toggle_favorite(session, trip_id, current_user.subject_id)


@router.patch("/{trip_id}/rating", response_model=RatingResponse)
async def rate_trip_route(
    body: TripRatingUpdate,
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.set_rating(session, trip_id, body.rating, current_user.subject_id)


@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip_route(
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.delete_trip(session, trip_id, current_user.subject_id)


@router.get("/{trip_id}/stats", response_model=TripStats)
async def get_trip_stats_route(
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await TripService.get_trip_stats(session, trip_id, current_user.subject_id)
