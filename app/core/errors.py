"""
Application exceptions and their HTTP mapping.

Services raise these; the handlers registered by ``register_exception_handlers``
turn them into ``{"error": ...}`` JSON responses.

Usage:
    from app.core.errors import NotFoundError

    raise NotFoundError("Trip not found")
"""

from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from app.core.logger import logger


class ErrorCode(str, Enum):
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    STORE_ERROR = "STORE_ERROR"


class AppError(Exception):
    """Base exception for all Travel Companion errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: ErrorCode = ErrorCode.STORE_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)


class AuthError(AppError):
    """No usable bearer credential, or the identity provider rejected it."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = ErrorCode.INVALID_TOKEN


class AuthorizationError(AppError):
    """Authenticated, but the resource belongs to another subject."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = ErrorCode.FORBIDDEN

    def __init__(self, message: str, concealed_message: str = "Not found"):
        super().__init__(message)
        # What a non-owner sees when foreign resources are concealed
        self.concealed_message = concealed_message


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = ErrorCode.NOT_FOUND


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = ErrorCode.VALIDATION_ERROR


class StoreError(AppError):
    """The relational store failed or is unreachable."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = ErrorCode.STORE_ERROR

    def __init__(self, message: str, details: Optional[str] = None, sql_code: Optional[str] = None):
        super().__init__(message)
        self.details = details
        self.sql_code = sql_code

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "StoreError":
        orig = getattr(exc, "orig", None) if isinstance(exc, DBAPIError) else None
        sql_code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        return cls("Database error", details=str(orig or exc), sql_code=sql_code)


def _store_error_response(exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details, "code": exc.sql_code},
    )


def register_exception_handlers(app: FastAPI, conceal_foreign_resources: bool = True):

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        if conceal_foreign_resources:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.concealed_message})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return _store_error_response(exc)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return _store_error_response(StoreError.from_exception(exc))
