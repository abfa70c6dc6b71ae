from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import logger
from app.models.user.user import User
from app.schemas.user.user import VerifiedIdentity


class UserService:
    @staticmethod
    async def upsert(db: AsyncSession, identity: VerifiedIdentity) -> User:
        """
        Insert the user on first sight, otherwise refresh email and display name
        from the token. Safe to call on every request.
        """
        dialect = db.bind.dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        stmt = insert(User).values(
            subject_id=identity.subject_id,
            email=identity.email,
            display_name=identity.display_name,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.subject_id],
            set_={
                "email": stmt.excluded.email,
                "display_name": stmt.excluded.display_name,
                "last_seen_at": func.now(),
            },
        )
        await db.execute(stmt)
        await db.commit()

        result = await db.execute(select(User).where(User.subject_id == identity.subject_id))
        user = result.scalar_one()
        logger.debug(f"Synced local user {identity.subject_id}")
        return user
