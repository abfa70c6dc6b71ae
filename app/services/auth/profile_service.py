from typing import Tuple

from sqlalchemy import case, distinct, func, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.errors import NotFoundError
from app.core.logger import logger
from app.models.trips.destination import Destination
from app.models.trips.photo import Photo
from app.models.trips.trip_model import Trip
from app.models.user.profile import UserProfile
from app.schemas.user.profile import ProfileStats, ProfileUpdate
from app.utils.stats import percentage


class ProfileService:
    @staticmethod
    async def get_profile(subject_id: str, db: AsyncSession) -> UserProfile:
        result = await db.execute(select(UserProfile).where(UserProfile.subject_id == subject_id))
        profile = result.scalar_one_or_none()
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    @staticmethod
    async def put_profile(subject_id: str, data: ProfileUpdate, db: AsyncSession) -> Tuple[UserProfile, bool]:
        """
        Create the profile on first write, replace every field afterwards. Returns (profile, created).

        The insert skips on conflict and reports whether it wrote a row, so
        concurrent first writes for one subject end in one insert plus updates.
        """
        fields = data.model_dump()
        dialect = db.bind.dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        inserted = await db.execute(
            insert(UserProfile)
            .values(subject_id=subject_id, **fields)
            .on_conflict_do_nothing(index_elements=[UserProfile.subject_id])
            .returning(UserProfile.subject_id)
        )
        created = inserted.scalar_one_or_none() is not None

        if not created:
            await db.execute(
                update(UserProfile)
                .where(UserProfile.subject_id == subject_id)
                .values(**fields, updated_at=func.now())
            )

        await db.commit()

        result = await db.execute(
            select(UserProfile)
            .where(UserProfile.subject_id == subject_id)
            .execution_options(populate_existing=True)
        )
        profile = result.scalar_one()

        logger.info(f"Profile {'created' if created else 'updated'} for {subject_id}")
        return profile, created

    @staticmethod
    async def get_profile_stats(subject_id: str, db: AsyncSession) -> ProfileStats:
        result = await db.execute(
            select(
                func.count(distinct(Trip.id)).label("total_trips"),
                func.count(distinct(case((Trip.trip_rating >= 4, Trip.id)))).label("highly_rated_trips"),
                func.count(distinct(Destination.id)).label("total_destinations"),
                func.count(distinct(case((Destination.is_completed.is_(True), Destination.id)))).label("completed_destinations"),
                func.count(distinct(Photo.id)).label("total_photos"),
                func.count(distinct(Trip.country)).label("countries_visited"),
            )
            .select_from(Trip)
            .outerjoin(Destination, Destination.trip_id == Trip.id)
            .outerjoin(Photo, Photo.trip_id == Trip.id)
            .where(Trip.owner_subject_id == subject_id)
        )
        row = result.one()

        return ProfileStats(
            total_trips=row.total_trips,
            highly_rated_trips=row.highly_rated_trips,
            total_destinations=row.total_destinations,
            completed_destinations=row.completed_destinations,
            total_photos=row.total_photos,
            countries_visited=row.countries_visited,
            completion_rate=percentage(row.completed_destinations, row.total_destinations),
        )
