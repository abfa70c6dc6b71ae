from datetime import date
from typing import List, Optional

from sqlalchemy import case, delete, distinct, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.core.logger import logger
from app.models.trips.destination import Destination
from app.models.trips.photo import Photo
from app.models.trips.trip_model import Trip
from app.schemas.common import MessageResponse
from app.schemas.trip.trip_schema import (
    FavoriteResponse, RatingResponse, TripCreate, TripResponse, TripStats, TripUpdate
)
from app.utils.stats import percentage
from app.utils.trip_dates import days_info, duration_days, trip_status


def _enriched_trips():
    """SELECT trips with their destination and photo counts as extra columns."""
    destination_count = (
        select(func.count(Destination.id))
        .where(Destination.trip_id == Trip.id)
        .correlate(Trip)
        .scalar_subquery()
    )
    completed_destinations = (
        select(func.count(Destination.id))
        .where(Destination.trip_id == Trip.id, Destination.is_completed.is_(True))
        .correlate(Trip)
        .scalar_subquery()
    )
    photo_count = (
        select(func.count(Photo.id))
        .where(Photo.trip_id == Trip.id)
        .correlate(Trip)
        .scalar_subquery()
    )
    return select(
        Trip,
        destination_count.label("destination_count"),
        completed_destinations.label("completed_destinations"),
        photo_count.label("photo_count"),
    )


def _to_response(row, today: Optional[date] = None) -> TripResponse:
    trip: Trip = row.Trip
    data = {column.key: getattr(trip, column.key) for column in Trip.__table__.columns}
    data["budget"] = float(trip.budget) if trip.budget is not None else None
    data.update(
        trip_status=trip_status(trip.start_date, trip.end_date, today),
        days_info=days_info(trip.start_date, trip.end_date, today),
        duration_days=duration_days(trip.start_date, trip.end_date),
        destination_count=row.destination_count or 0,
        completed_destinations=row.completed_destinations or 0,
        photo_count=row.photo_count or 0,
    )
    return TripResponse.model_validate(data)


class TripService:
    @staticmethod
    async def get_owned_trip(db: AsyncSession, trip_id: int, subject_id: str, for_update: bool = False) -> Trip:
        """
        Load a trip and check it belongs to ``subject_id``.

        Raises NotFoundError when the trip does not exist and AuthorizationError
        when someone else owns it. With ``for_update`` the row stays locked until
        the caller commits, so the ownership check and the write share one
        transaction.
        """
        stmt = select(Trip).where(Trip.id == trip_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        trip = result.scalar_one_or_none()

        if not trip:
            logger.warning(f"Trip not found: ID {trip_id}")
            raise NotFoundError("Trip not found")
        if trip.owner_subject_id != subject_id:
            logger.warning(f"Unauthorized access attempt: trip {trip_id} by {subject_id}")
            raise AuthorizationError("Not authorized to access this trip", concealed_message="Trip not found")
        return trip

    @staticmethod
    async def create_trip(db: AsyncSession, trip_data: TripCreate, subject_id: str) -> TripResponse:
        new_trip = Trip(**trip_data.model_dump(), owner_subject_id=subject_id)
        db.add(new_trip)
        await db.commit()
        await db.refresh(new_trip)

        logger.info(f"Trip {new_trip.id} created by {subject_id}")
        return await TripService.get_trip(db, new_trip.id, subject_id)

    @staticmethod
    async def list_trips(db: AsyncSession, subject_id: str) -> List[TripResponse]:
        result = await db.execute(
            _enriched_trips()
            .where(Trip.owner_subject_id == subject_id)
            .order_by(Trip.start_date.desc().nulls_last(), Trip.id.desc())
        )
        trips = [_to_response(row) for row in result.all()]
        logger.info(f"Retrieved {len(trips)} trips for {subject_id}")
        return trips

    @staticmethod
    async def get_trip(db: AsyncSession, trip_id: int, subject_id: str) -> TripResponse:
        result = await db.execute(_enriched_trips().where(Trip.id == trip_id))
        row = result.one_or_none()

        if row is None:
            logger.warning(f"Trip not found: ID {trip_id}")
            raise NotFoundError("Trip not found")
        if row.Trip.owner_subject_id != subject_id:
            logger.warning(f"Unauthorized access attempt: trip {trip_id} by {subject_id}")
            raise AuthorizationError("Not authorized to access this trip", concealed_message="Trip not found")
        return _to_response(row)

    @staticmethod
    async def update_trip(db: AsyncSession, trip_id: int, trip_data: TripUpdate, subject_id: str) -> MessageResponse:
        trip = await TripService.get_owned_trip(db, trip_id, subject_id, for_update=True)

        for key, value in trip_data.changes().items():
            setattr(trip, key, value)

        await db.commit()
        logger.info(f"Trip {trip_id} updated by {subject_id}")
        return MessageResponse(message="Trip updated successfully")

    @staticmethod
    async def delete_trip(db: AsyncSession, trip_id: int, subject_id: str) -> MessageResponse:
        trip = await TripService.get_owned_trip(db, trip_id, subject_id, for_update=True)

        # Children go first so nothing is left behind on stores without FK cascades
        await db.execute(delete(Photo).where(Photo.trip_id == trip_id))
        await db.execute(delete(Destination).where(Destination.trip_id == trip_id))
        await db.delete(trip)
        await db.commit()

        logger.info(f"Trip {trip_id} deleted by {subject_id}")
        return MessageResponse(message="Trip deleted successfully")

    @staticmethod
    async def toggle_favorite(db: AsyncSession, trip_id: int, subject_id: str) -> FavoriteResponse:
        trip = await TripService.get_owned_trip(db, trip_id, subject_id, for_update=True)
        trip.is_favorite = not trip.is_favorite
        await db.commit()

        logger.info(f"Trip {trip_id} favorite set to {trip.is_favorite}")
        return FavoriteResponse(is_favorite=trip.is_favorite)

    @staticmethod
    async def set_rating(db: AsyncSession, trip_id: int, rating: int, subject_id: str) -> RatingResponse:
        if rating < 1 or rating > 5:
            raise ValidationError("Rating must be between 1 and 5")

        trip = await TripService.get_owned_trip(db, trip_id, subject_id, for_update=True)
        trip.trip_rating = rating
        await db.commit()

        logger.info(f"Trip {trip_id} rated {rating} by {subject_id}")
        return RatingResponse(message="Trip rated successfully", trip_rating=rating)

    @staticmethod
    async def get_trip_stats(db: AsyncSession, trip_id: int, subject_id: str) -> TripStats:
        await TripService.get_owned_trip(db, trip_id, subject_id)

        result = await db.execute(
            select(
                func.count(distinct(Destination.id)).label("total_destinations"),
                func.count(distinct(case((Destination.is_completed.is_(True), Destination.id)))).label("completed_destinations"),
                func.count(distinct(Photo.id)).label("total_photos"),
                func.count(distinct(case((Destination.priority_level == 1, Destination.id)))).label("must_see_destinations"),
            )
            .select_from(Trip)
            .outerjoin(Destination, Destination.trip_id == Trip.id)
            .outerjoin(Photo, Photo.trip_id == Trip.id)
            .where(Trip.id == trip_id)
        )
        row = result.one()

        return TripStats(
            total_destinations=row.total_destinations,
            completed_destinations=row.completed_destinations,
            total_photos=row.total_photos,
            must_see_destinations=row.must_see_destinations,
            progress_percentage=percentage(row.completed_destinations, row.total_destinations),
        )
