from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.exceptions import NotFoundError
from social_api.models import ImageProfile, Profile


def image_profile_to_dict(image: ImageProfile) -> dict:
    return {
        "id_image": image.id,
        "id_profile": image.profile_id,
        "image_url": image.image_url,
        "image_thumbnail_url": image.image_thumbnail_url,
    }


async def get_image_profile_by_user_id(db: AsyncSession, user_id: int) -> ImageProfile:
    """
    Return the current image of *user_id*'s profile (the most recent row).

    Raises NotFoundError when the user has no profile image at all.
    """
    q = (
        select(ImageProfile)
        .join(Profile, ImageProfile.profile_id == Profile.id)
        .where(Profile.user_id == user_id)
        .order_by(ImageProfile.id.desc())
        .limit(1)
    )
    result = await db.execute(q)
    image = result.scalar_one_or_none()
    if image is None:
        raise NotFoundError(f"No profile image for user {user_id}")
    return image


async def save_image_profile(db: AsyncSession, image: ImageProfile) -> ImageProfile:
    db.add(image)
    await db.flush()
    return image


async def update_image_profile(db: AsyncSession, image: ImageProfile) -> ImageProfile:
    db.add(image)
    await db.flush()
    return image
