# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.auth import profile
from app.routes.trip import trip_routes, destination_routes, photo_routes


api_router = APIRouter()

# Profile routes
api_router.include_router(profile.router)

# Trip routes
api_router.include_router(trip_routes.router)
api_router.include_router(destination_routes.router)
api_router.include_router(photo_routes.router)
