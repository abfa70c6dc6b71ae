from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.errors import AuthError, ErrorCode, StoreError
from app.core.logger import logger
from app.schemas.user.user import VerifiedIdentity
from app.services.auth.identity import IdentityVerifier
from app.services.auth.user_service import UserService

# auto_error=False so a missing or non-Bearer header reaches us as None
# and is answered with our own 401 body
security = HTTPBearer(auto_error=False)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    db: AsyncSession = Depends(get_db)
) -> VerifiedIdentity:
    if credentials is None or not credentials.credentials:
        raise AuthError("Unauthorized: No token provided", ErrorCode.MISSING_TOKEN)

    identity = await verifier.verify(credentials.credentials)

    try:
        await UserService.upsert(db, identity)
    except SQLAlchemyError as e:
        await db.rollback()
        if request.app.state.settings.USER_SYNC_FAILURE_POLICY == "fail":
            logger.error(f"Failed to sync user {identity.subject_id}: {e}")
            raise StoreError.from_exception(e) from e
        logger.error(f"Failed to sync user {identity.subject_id}, continuing: {e}")

    return identity
