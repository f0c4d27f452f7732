"""
Profile service — reads and pass-through writes for Profile.

The one-image invariant is established by ``user_service.save_user`` when
the profile is created; nothing here adds or removes images.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from social_api.exceptions import NotFoundError
from social_api.models import Profile
from social_api.schemas import ProfileUpdate


def profile_to_dict(profile: Profile) -> dict:
    """Serialise a Profile with its current (most recent) image flattened in."""
    current = profile.images[-1] if profile.images else None
    return {
        "id_profile": profile.id,
        "id_user": profile.user_id,
        "biography": profile.biography,
        "image_url": current.image_url if current else None,
        "image_thumbnail_url": current.image_thumbnail_url if current else None,
    }


async def find_profiles(db: AsyncSession) -> list[Profile]:
    q = select(Profile).options(selectinload(Profile.images)).order_by(Profile.id)
    result = await db.execute(q)
    return list(result.scalars().all())


async def find_profile(db: AsyncSession, profile_id: int) -> Profile | None:
    q = select(Profile).where(Profile.id == profile_id).options(selectinload(Profile.images))
    result = await db.execute(q)
    return result.scalar_one_or_none()


async def find_profile_by_user_id(db: AsyncSession, user_id: int) -> Profile | None:
    q = select(Profile).where(Profile.user_id == user_id).options(selectinload(Profile.images))
    result = await db.execute(q)
    return result.scalar_one_or_none()


async def get_profile_by_user_id(db: AsyncSession, user_id: int) -> Profile:
    profile = await find_profile_by_user_id(db, user_id)
    if profile is None:
        raise NotFoundError(f"Profile not found for user with ID: {user_id}")
    return profile


async def update_profile(db: AsyncSession, profile_id: int, data: ProfileUpdate) -> Profile:
    """Apply the fields set in *data*; raises NotFoundError for an unknown id."""
    profile = await find_profile(db, profile_id)
    if profile is None:
        raise NotFoundError(f"Profile {profile_id} not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    await db.flush()
    return profile


async def delete_profile(db: AsyncSession, profile_id: int) -> None:
    profile = await db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError(f"Profile {profile_id} not found")
    await db.delete(profile)
    await db.flush()
