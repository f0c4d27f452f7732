from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.database import get_db
from social_api.dependencies import PaginationParams
from social_api.schemas import PostCreate, PostResponse, PostUpdate
from social_api.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", status_code=201, response_model=PostResponse)
async def create_post(data: PostCreate, db: AsyncSession = Depends(get_db)):
    post = await post_service.save_post(db, data)
    return post_service.post_to_dict(post)


@router.get("/user/{user_id}", response_model=list[PostResponse])
async def list_posts_by_user(
    user_id: int,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    posts = await post_service.get_posts_by_user_id(db, user_id, pagination.page, pagination.page_size)
    return [post_service.post_to_dict(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return post_service.post_to_dict(await post_service.get_post(db, post_id))


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(post_id: int, data: PostUpdate, db: AsyncSession = Depends(get_db)):
    post = await post_service.update_post(db, post_id, data)
    return post_service.post_to_dict(post)


@router.delete("/{post_id}", status_code=204)
async def delete_post(post_id: int, db: AsyncSession = Depends(get_db)):
    await post_service.delete_post(db, post_id)
