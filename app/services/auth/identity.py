from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth, credentials, exceptions as firebase_exceptions
from jose import JWTError, jwt
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings
from app.core.errors import AuthError, ErrorCode
from app.core.logger import logger
from app.schemas.user.user import VerifiedIdentity

INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid token"


class IdentityVerifier(ABC):
    """Turns an opaque bearer token into a verified identity, or raises AuthError."""

    @abstractmethod
    async def verify(self, token: str) -> VerifiedIdentity: ...


class FirebaseIdentityVerifier(IdentityVerifier):
    def __init__(self, settings: Settings):
        self._settings = settings
        self._app = None

    def _get_app(self):
        if self._app is not None:
            return self._app

        settings = self._settings
        if not firebase_admin._apps:  # initialize the default app only once per process
            options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
            if settings.FIREBASE_CREDENTIALS_FILE:
                firebase_admin.initialize_app(credentials.Certificate(settings.FIREBASE_CREDENTIALS_FILE), options)
            elif settings.FIREBASE_PRIVATE_KEY:
                firebase_admin.initialize_app(credentials.Certificate(settings.firebase_certificate()), options)
            else:
                # Application default credentials; verifying ID tokens only needs the project id
                firebase_admin.initialize_app(options=options)
        self._app = firebase_admin.get_app()
        return self._app

    async def verify(self, token: str) -> VerifiedIdentity:
        # Setup errors propagate; only token errors map to 401
        firebase_app = self._get_app()
        try:
            decoded = await run_in_threadpool(firebase_auth.verify_id_token, token, firebase_app)
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            logger.warning(f"Firebase rejected ID token: {e}")
            raise AuthError(INVALID_TOKEN_MESSAGE, ErrorCode.INVALID_TOKEN) from e

        return VerifiedIdentity(
            subject_id=decoded["uid"],
            email=decoded.get("email"),
            display_name=decoded.get("name"),
        )


class JwtIdentityVerifier(IdentityVerifier):
    """Locally signed tokens; for development and tests."""

    def __init__(self, secret_key: str, algorithm: str = "HS256",
                 audience: Optional[str] = None, issuer: Optional[str] = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer

    def issue_token(self, subject_id: str, email: Optional[str] = None,
                    display_name: Optional[str] = None, expires_delta: timedelta = timedelta(hours=1)) -> str:
        claims = {"sub": subject_id, "exp": datetime.now(timezone.utc) + expires_delta}
        if email:
            claims["email"] = email
        if display_name:
            claims["name"] = display_name
        if self.audience:
            claims["aud"] = self.audience
        if self.issuer:
            claims["iss"] = self.issuer
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    async def verify(self, token: str) -> VerifiedIdentity:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise AuthError(INVALID_TOKEN_MESSAGE, ErrorCode.INVALID_TOKEN) from e

        subject_id = claims.get("sub")
        if not subject_id:
            logger.warning("Rejected bearer token without a subject")
            raise AuthError(INVALID_TOKEN_MESSAGE, ErrorCode.INVALID_TOKEN)

        return VerifiedIdentity(
            subject_id=str(subject_id),
            email=claims.get("email"),
            display_name=claims.get("name"),
        )


def get_identity_verifier(settings: Settings) -> IdentityVerifier:
    if settings.IDENTITY_PROVIDER == "jwt":
        if not settings.JWT_SECRET_KEY:
            raise ValueError("JWT_SECRET_KEY not configured")
        return JwtIdentityVerifier(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    return FirebaseIdentityVerifier(settings)
