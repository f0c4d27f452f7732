"""
Comment service — persistence and scoped, paginated retrieval of comments.

Pages are 0-based and ordered by comment id, i.e. insertion order. Only the
requested page's rows are returned; no total count is computed. Deciding
what an empty page means is left to the router.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.exceptions import NotFoundError
from social_api.models import Comment

logger = logging.getLogger(__name__)


def comment_to_dict(comment: Comment) -> dict:
    return {
        "id_comment": comment.id,
        "id_user": comment.user_id,
        "id_post": comment.post_id,
        "comment": comment.comment,
        "date": comment.date,
    }


async def _page(db: AsyncSession, q, page: int, page_size: int) -> list[Comment]:
    q = q.order_by(Comment.id).offset(page * page_size).limit(page_size)
    result = await db.execute(q)
    return list(result.scalars().all())


async def save_comment(db: AsyncSession, comment: Comment) -> Comment:
    db.add(comment)
    await db.flush()
    return comment


async def find_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    return await db.get(Comment, comment_id)


async def get_comment(db: AsyncSession, comment_id: int) -> Comment:
    comment = await find_comment(db, comment_id)
    if comment is None:
        raise NotFoundError(f"Comment {comment_id} not found")
    return comment


async def delete_comment(db: AsyncSession, comment_id: int) -> Comment:
    """Delete and return the comment; raises NotFoundError before touching anything."""
    comment = await get_comment(db, comment_id)
    await db.delete(comment)
    await db.flush()
    logger.info("Deleted comment %d", comment_id)
    return comment


async def get_comments_by_post_id(
    db: AsyncSession, post_id: int, page: int = 0, page_size: int = 10
) -> list[Comment]:
    q = select(Comment).where(Comment.post_id == post_id)
    return await _page(db, q, page, page_size)


async def get_comments_by_user_id(
    db: AsyncSession, user_id: int, page: int = 0, page_size: int = 10
) -> list[Comment]:
    q = select(Comment).where(Comment.user_id == user_id)
    return await _page(db, q, page, page_size)


async def get_comments_by_post_id_and_user_id(
    db: AsyncSession, post_id: int, user_id: int, page: int = 0, page_size: int = 10
) -> list[Comment]:
    q = select(Comment).where(Comment.post_id == post_id, Comment.user_id == user_id)
    return await _page(db, q, page, page_size)


async def find_comment_by_post_id_and_user_id_and_comment_id(
    db: AsyncSession, post_id: int, user_id: int, comment_id: int
) -> Comment | None:
    q = select(Comment).where(
        Comment.id == comment_id,
        Comment.post_id == post_id,
        Comment.user_id == user_id,
    )
    result = await db.execute(q)
    return result.scalar_one_or_none()
