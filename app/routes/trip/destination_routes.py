from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.schemas.common import MAX_ID, MessageResponse
from app.schemas.trip.destination import (
    CompletionResponse, DestinationCreate, DestinationCreateForTrip, DestinationResponse, DestinationUpdate
)
from app.schemas.user.user import VerifiedIdentity
from app.services.trips.destination_service import (
    create_destination, delete_destination, get_owned_destination, list_destinations,
    toggle_destination_completed, update_destination
)

router = APIRouter(tags=["Destinations"])


@router.get("/trips/{trip_id}/destinations", response_model=List[DestinationResponse])
async def get_trip_destinations(
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    """Destinations of a trip in itinerary order."""
    return await list_destinations(session, trip_id, current_user.subject_id)


@router.get("/destinations", response_model=List[DestinationResponse])
async def get_destinations(
    trip_id: int = Query(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await list_destinations(session, trip_id, current_user.subject_id)


@router.post("/trips/{trip_id}/destinations", response_model=DestinationResponse, status_code=status.HTTP_201_CREATED)
async def add_trip_destination(
    destination: DestinationCreate,
    trip_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await create_destination(session, trip_id, destination, current_user.subject_id)


@router.post("/destinations", response_model=DestinationResponse, status_code=status.HTTP_201_CREATED)
async def add_destination(
    destination: DestinationCreateForTrip,
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await create_destination(session, destination.trip_id, destination, current_user.subject_id)


@router.get("/destinations/{destination_id}", response_model=DestinationResponse)
async def get_destination(
    destination_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await get_owned_destination(session, destination_id, current_user.subject_id)


@router.put("/destinations/{destination_id}", response_model=MessageResponse)
async def update_destination_route(
    update_data: DestinationUpdate,
    destination_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await update_destination(session, destination_id, update_data, current_user.subject_id)


@router.patch("/destinations/{destination_id}/complete", response_model=CompletionResponse)
async def toggle_destination_route(
    destination_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await toggle_destination_completed(session, destination_id, current_user.subject_id)


@router.delete("/destinations/{destination_id}", response_model=MessageResponse)
async def delete_destination_route(
    destination_id: int = Path(..., gt=0, le=MAX_ID),
    session: AsyncSession = Depends(get_db),
    current_user: VerifiedIdentity = Depends(get_current_user)
):
    return await delete_destination(session, destination_id, current_user.subject_id)
