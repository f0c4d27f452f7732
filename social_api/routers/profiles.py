from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.database import get_db
from social_api.exceptions import NotFoundError
from social_api.schemas import ProfileResponse, ProfileUpdate
from social_api.services import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(db: AsyncSession = Depends(get_db)):
    return [profile_service.profile_to_dict(p) for p in await profile_service.find_profiles(db)]


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(user_id: int, db: AsyncSession = Depends(get_db)):
    profile = await profile_service.get_profile_by_user_id(db, user_id)
    return profile_service.profile_to_dict(profile)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(profile_id: int, db: AsyncSession = Depends(get_db)):
    profile = await profile_service.find_profile(db, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile_service.profile_to_dict(profile)


@router.put("/{profile_id}", response_model=ProfileResponse)
async def update_profile(profile_id: int, data: ProfileUpdate, db: AsyncSession = Depends(get_db)):
    profile = await profile_service.update_profile(db, profile_id, data)
    return profile_service.profile_to_dict(profile)


@router.delete("/{profile_id}", status_code=204)
async def delete_profile(profile_id: int, db: AsyncSession = Depends(get_db)):
    await profile_service.delete_profile(db, profile_id)
