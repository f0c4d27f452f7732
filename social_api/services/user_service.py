"""
User service — creation and deletion of the User aggregate.

A user is always created together with its profile and exactly one profile
image. The image points at ``settings.DEFAULT_PROFILE_IMAGE_URL`` unless an
upload was stored first.

Deleting a user goes through ``delete_user``: the user's reactions are
removed before the user row because ``reactions.user_id`` carries no
``ON DELETE`` action. Both statements run in the request transaction owned
by ``get_db``, so a failure in either leaves the database untouched.
``delete_by_id`` skips the reaction step and lets the store reject the
delete when reactions remain.
"""
import logging

from fastapi import UploadFile
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from social_api.config import settings
from social_api.exceptions import NotFoundError, ValidationError
from social_api.models import ImageProfile, Profile, User
from social_api.schemas import UserCreate
from social_api.services import image_profile_service, image_storage_service, reaction_service
from social_api.services.profile_service import profile_to_dict

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def user_to_dict(user: User) -> dict:
    return {
        "id_user": user.id,
        "username": user.username,
        "email": user.email,
        "name": user.name,
        "created_at": user.created_at,
        "profile": profile_to_dict(user.profile) if user.profile else None,
    }


def _with_profile():
    return selectinload(User.profile).selectinload(Profile.images)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

async def find_users(db: AsyncSession) -> list[User]:
    q = select(User).options(_with_profile()).order_by(User.id)
    result = await db.execute(q)
    return list(result.scalars().all())


async def find_user(db: AsyncSession, user_id: int) -> User | None:
    q = select(User).where(User.id == user_id).options(_with_profile())
    result = await db.execute(q)
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await find_user(db, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

async def save_user(db: AsyncSession, data: UserCreate, image_url: str | None = None) -> User:
    """
    Create a user, its profile and the profile's single image.

    Raises ValidationError when *data* carries no profile. Username and
    email uniqueness is enforced by the schema; the router translates the
    resulting IntegrityError into 409.
    """
    if data.profile is None:
        raise ValidationError("A user must be created with a profile")

    url = image_url or settings.DEFAULT_PROFILE_IMAGE_URL
    profile = Profile(biography=data.profile.biography)
    profile.images = [ImageProfile(image_url=url, image_thumbnail_url=url)]

    user = User(
        username=data.username,
        email=data.email,
        name=data.name,
        profile=profile,
    )
    db.add(user)
    await db.flush()
    return user


async def save_user_with_image(db: AsyncSession, data: UserCreate, upload: UploadFile) -> User:
    """
    Store *upload* and create the user with it as profile image.

    The profile check runs first so nothing is written to disk for a request
    that would be rejected anyway. StorageError from the upload propagates.
    If the insert fails (e.g. a duplicate username) the stored file is
    removed again before the error propagates.
    """
    if data.profile is None:
        raise ValidationError("A user must be created with a profile")
    image_url = await image_storage_service.store_image(upload)
    try:
        return await save_user(db, data, image_url=image_url)
    except Exception:
        image_storage_service.remove_image(image_url)
        raise


# ---------------------------------------------------------------------------
# Profile image reset
# ---------------------------------------------------------------------------

async def delete_profile_image(db: AsyncSession, user_id: int) -> ImageProfile:
    """
    Point the user's current image back at the placeholder.

    The row is kept; only both URLs are overwritten. Raises NotFoundError
    for an unknown user and ValidationError when the placeholder is already
    in place.
    """
    if await db.get(User, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    image = await image_profile_service.get_image_profile_by_user_id(db, user_id)
    placeholder = settings.DEFAULT_PROFILE_IMAGE_URL
    if image.image_url == placeholder:
        raise ValidationError("The user has the default profile image")

    image.image_url = placeholder
    image.image_thumbnail_url = placeholder
    await image_profile_service.update_image_profile(db, image)
    logger.info("Reset profile image %d of user %d to the placeholder", image.id, user_id)
    return image


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------

async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")

    removed = await reaction_service.delete_by_user_id(db, user.id)
    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %d after removing %d reaction(s)", user_id, removed)


async def delete_by_id(db: AsyncSession, user_id: int) -> None:
    if await db.get(User, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")
    await db.execute(delete(User).where(User.id == user_id))
