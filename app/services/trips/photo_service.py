from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.core.logger import logger
from app.models.trips.destination import Destination
from app.models.trips.photo import Photo
from app.models.trips.trip_model import Trip
from app.schemas.common import MessageResponse
from app.schemas.trip.photo import PhotoCreate
from app.services.trips.trip_service import TripService


async def list_photos(session: AsyncSession, trip_id: int, subject_id: str) -> List[Photo]:
    await TripService.get_owned_trip(session, trip_id, subject_id)

    result = await session.execute(
        select(Photo)
        .where(Photo.trip_id == trip_id)
        .order_by(Photo.uploaded_at.desc(), Photo.id.desc())
    )
    return result.scalars().all()


async def add_photo(session: AsyncSession, trip_id: int, photo_data: PhotoCreate, subject_id: str) -> Photo:
    await TripService.get_owned_trip(session, trip_id, subject_id, for_update=True)

    if photo_data.destination_id is not None:
        result = await session.execute(
            select(Destination.id).where(
                Destination.id == photo_data.destination_id,
                Destination.trip_id == trip_id
            )
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError("Destination does not belong to this trip")

    photo = Photo(trip_id=trip_id, **photo_data.model_dump())
    session.add(photo)
    await session.commit()
    await session.refresh(photo)

    logger.info(f"Photo {photo.id} added to trip {trip_id} by {subject_id}")
    return photo


async def delete_photo(session: AsyncSession, photo_id: int, subject_id: str) -> MessageResponse:
    result = await session.execute(
        select(Photo, Trip.owner_subject_id)
        .join(Trip, Trip.id == Photo.trip_id)
        .where(Photo.id == photo_id)
        .with_for_update()
    )
    row = result.one_or_none()

    if row is None:
        raise NotFoundError("Photo not found")
    if row.owner_subject_id != subject_id:
        logger.warning(f"Unauthorized delete attempt: photo {photo_id} by {subject_id}")
        raise AuthorizationError("Not authorized to delete this photo", concealed_message="Photo not found")

    await session.delete(row.Photo)
    await session.commit()

    logger.info(f"Photo {photo_id} deleted by {subject_id}")
    return MessageResponse(message="Photo deleted successfully")
