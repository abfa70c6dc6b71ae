from typing import List

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.errors import AuthorizationError, NotFoundError
from app.core.logger import logger
from app.models.trips.destination import Destination
from app.models.trips.photo import Photo
from app.models.trips.trip_model import Trip
from app.schemas.common import MessageResponse
from app.schemas.trip.destination import CompletionResponse, DestinationCreate, DestinationUpdate
from app.services.trips.trip_service import TripService


async def get_owned_destination(
    session: AsyncSession,
    destination_id: int,
    subject_id: str,
    for_update: bool = False
) -> Destination:
    """Load a destination, authorizing through the owner of its trip."""
    stmt = (
        select(Destination, Trip.owner_subject_id)
        .join(Trip, Trip.id == Destination.trip_id)
        .where(Destination.id == destination_id)
    )
    if for_update:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt)
    row = result.one_or_none()

    if row is None:
        raise NotFoundError("Destination not found")
    if row.owner_subject_id != subject_id:
        logger.warning(f"Unauthorized access attempt: destination {destination_id} by {subject_id}")
        raise AuthorizationError(
            "Not authorized to access this destination", concealed_message="Destination not found"
        )
    return row.Destination


async def list_destinations(session: AsyncSession, trip_id: int, subject_id: str) -> List[Destination]:
    """Destinations in itinerary order: priority, then visit date, then manual order."""
    await TripService.get_owned_trip(session, trip_id, subject_id)

    result = await session.execute(
        select(Destination)
        .where(Destination.trip_id == trip_id)
        .order_by(
            Destination.priority_level.asc(),
            Destination.visit_date.asc().nulls_last(),
            Destination.order_index.asc().nulls_last(),
            Destination.id.asc(),
        )
    )
    return result.scalars().all()


async def create_destination(
    session: AsyncSession,
    trip_id: int,
    destination_data: DestinationCreate,
    subject_id: str
) -> Destination:
    await TripService.get_owned_trip(session, trip_id, subject_id, for_update=True)

    new_destination = Destination(
        trip_id=trip_id,
        **destination_data.model_dump(exclude={"trip_id"})
    )
    session.add(new_destination)
    await session.commit()
    await session.refresh(new_destination)

    logger.info(f"Destination {new_destination.id} added to trip {trip_id} by {subject_id}")
    return new_destination


async def update_destination(
    session: AsyncSession,
    destination_id: int,
    update_data: DestinationUpdate,
    subject_id: str
) -> MessageResponse:
    destination = await get_owned_destination(session, destination_id, subject_id, for_update=True)

    for field, value in update_data.changes().items():
        setattr(destination, field, value)

    await session.commit()
    logger.info(f"Destination {destination_id} updated by {subject_id}")
    return MessageResponse(message="Destination updated successfully")


async def toggle_destination_completed(
    session: AsyncSession,
    destination_id: int,
    subject_id: str
) -> CompletionResponse:
    destination = await get_owned_destination(session, destination_id, subject_id, for_update=True)
    destination.is_completed = not destination.is_completed
    await session.commit()

    return CompletionResponse(is_completed=destination.is_completed)


async def delete_destination(session: AsyncSession, destination_id: int, subject_id: str) -> MessageResponse:
    destination = await get_owned_destination(session, destination_id, subject_id, for_update=True)

    # Its photos stay on the trip as trip-level photos
    await session.execute(
        update(Photo).where(Photo.destination_id == destination_id).values(destination_id=None)
    )
    await session.delete(destination)
    await session.commit()

    logger.info(f"Destination {destination_id} deleted by {subject_id}")
    return MessageResponse(message="Destination deleted successfully")
