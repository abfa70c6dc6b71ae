from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, settings as default_settings
from app import models  # noqa: F401
from app.core.database import Database
from app.core.errors import register_exception_handlers
from app.core.logger import logger
from app.routes import api_router
from app.services.auth.identity import IdentityVerifier, get_identity_verifier


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.settings.CREATE_TABLES_ON_STARTUP:
        await app.state.db.create_all()
    logger.info(f"{app.state.settings.PROJECT_NAME} started with {app.state.settings.IDENTITY_PROVIDER} identity provider")
    yield
    await app.state.db.dispose()


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    identity_verifier: Optional[IdentityVerifier] = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    app.state.identity_verifier = identity_verifier or get_identity_verifier(settings)

    # Set all CORS enabled origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, conceal_foreign_resources=settings.CONCEAL_FOREIGN_RESOURCES)

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    @app.get("/health")
    async def health_check(request: Request):
        try:
            await request.app.state.db.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(status_code=503, content={"status": "unhealthy"})
        return {"status": "healthy"}

    return app


app = create_app()
