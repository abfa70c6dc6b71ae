from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.schemas.user.profile import ProfileResponse, ProfileStats, ProfileUpdate, ProfileWriteResponse
from app.schemas.user.user import VerifiedIdentity
from app.services.auth.profile_service import ProfileService

router = APIRouter(prefix="/user/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
async def get_my_profile(
    current_user: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ProfileService.get_profile(current_user.subject_id, db)


@router.put("", response_model=ProfileWriteResponse, responses={201: {"model": ProfileWriteResponse}})
async def put_my_profile(
    data: ProfileUpdate,
    response: Response,
    current_user: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    profile, created = await ProfileService.put_profile(current_user.subject_id, data, db)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return ProfileWriteResponse(
        message="Profile created successfully" if created else "Profile updated successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.get("/stats", response_model=ProfileStats)
async def get_my_profile_stats(
    current_user: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ProfileService.get_profile_stats(current_user.subject_id, db)
