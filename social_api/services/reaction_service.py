"""
Reaction service — one reaction per (user, post) pair.

Uniqueness is owned by the composite primary key of ``reactions``: a
second insert for the same key fails with ``IntegrityError`` at flush time,
which the router translates into 409. No application-level check-then-insert
is done, so concurrent requests cannot both succeed.
"""
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.exceptions import NotFoundError
from social_api.models import Post, Reaction, ReactionKey, User
from social_api.schemas import ReactionCreate

logger = logging.getLogger(__name__)


def reaction_to_dict(reaction: Reaction) -> dict:
    return {
        "id_user": reaction.user_id,
        "id_post": reaction.post_id,
        "reaction_type": reaction.reaction_type,
        "date": reaction.date,
    }


async def find_reaction(db: AsyncSession, key: ReactionKey) -> Reaction | None:
    return await db.get(Reaction, (key.user_id, key.post_id))


async def get_reactions_by_post_id(db: AsyncSession, post_id: int) -> list[Reaction]:
    q = select(Reaction).where(Reaction.post_id == post_id).order_by(Reaction.date, Reaction.user_id)
    result = await db.execute(q)
    return list(result.scalars().all())


async def save_reaction(db: AsyncSession, data: ReactionCreate) -> Reaction:
    """
    Persist a reaction of ``data.id_user`` on ``data.id_post``.

    Raises NotFoundError when either side does not exist.
    """
    if await db.get(User, data.id_user) is None:
        raise NotFoundError(f"User {data.id_user} not found")
    if await db.get(Post, data.id_post) is None:
        raise NotFoundError(f"Post {data.id_post} not found")

    reaction = Reaction(
        user_id=data.id_user,
        post_id=data.id_post,
        reaction_type=data.reaction_type,
    )
    db.add(reaction)
    await db.flush()
    return reaction


async def delete_reaction(db: AsyncSession, key: ReactionKey) -> None:
    reaction = await find_reaction(db, key)
    if reaction is None:
        raise NotFoundError(f"Reaction of user {key.user_id} on post {key.post_id} not found")
    await db.delete(reaction)
    await db.flush()


async def delete_by_user_id(db: AsyncSession, user_id: int) -> int:
    """Delete every reaction authored by *user_id*; return how many went."""
    result = await db.execute(delete(Reaction).where(Reaction.user_id == user_id))
    logger.info("Deleted %d reaction(s) of user %d", result.rowcount, user_id)
    return result.rowcount
