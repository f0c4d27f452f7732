"""Post service — CRUD for Post plus the author-scoped paginated listing."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.exceptions import NotFoundError
from social_api.models import Post, User
from social_api.schemas import PostCreate, PostUpdate


def post_to_dict(post: Post) -> dict:
    return {
        "id_post": post.id,
        "id_user": post.user_id,
        "content": post.content,
        "date": post.date,
    }


async def find_post(db: AsyncSession, post_id: int) -> Post | None:
    return await db.get(Post, post_id)


async def get_post(db: AsyncSession, post_id: int) -> Post:
    post = await find_post(db, post_id)
    if post is None:
        raise NotFoundError(f"Post {post_id} not found")
    return post


async def get_posts_by_user_id(
    db: AsyncSession, user_id: int, page: int = 0, page_size: int = 10
) -> list[Post]:
    """Return one page (0-based) of *user_id*'s posts, newest first."""
    q = (
        select(Post)
        .where(Post.user_id == user_id)
        .order_by(Post.date.desc(), Post.id.desc())
        .offset(page * page_size)
        .limit(page_size)
    )
    result = await db.execute(q)
    return list(result.scalars().all())


async def save_post(db: AsyncSession, data: PostCreate) -> Post:
    if await db.get(User, data.id_user) is None:
        raise NotFoundError(f"User {data.id_user} not found")
    post = Post(content=data.content, user_id=data.id_user)
    db.add(post)
    await db.flush()
    return post


async def update_post(db: AsyncSession, post_id: int, data: PostUpdate) -> Post:
    post = await get_post(db, post_id)
    post.content = data.content
    await db.flush()
    return post


async def delete_post(db: AsyncSession, post_id: int) -> None:
    """Delete a post; its comments and reactions go with it (ON DELETE CASCADE)."""
    post = await get_post(db, post_id)
    await db.delete(post)
    await db.flush()
