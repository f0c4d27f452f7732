from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.database import get_db
from social_api.dependencies import PaginationParams
from social_api.exceptions import NotFoundError, ValidationError
from social_api.models import Comment
from social_api.schemas import CommentCreate, CommentResponse, CommentUpdate
from social_api.services import comment_service, post_service, user_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/post/{post_id}", status_code=201, response_model=CommentResponse)
async def create_comment(post_id: int, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    if data.user is None:
        raise ValidationError("User must not be null")

    user = await user_service.find_user(db, data.user.id_user)
    post = await post_service.find_post(db, post_id)
    if user is None or post is None:
        raise NotFoundError("User or Post not found")

    comment = Comment(comment=data.comment, user_id=user.id, post_id=post.id)
    if data.date is not None:
        comment.date = data.date
    comment = await comment_service.save_comment(db, comment)
    return comment_service.comment_to_dict(comment)


@router.get("/post/{post_id}", response_model=list[CommentResponse])
async def list_comments_by_post(
    post_id: int,
    user_id: int | None = Query(None, alias="userId"),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    if user_id is not None:
        comments = await comment_service.get_comments_by_post_id_and_user_id(
            db, post_id, user_id, pagination.page, pagination.page_size
        )
    else:
        comments = await comment_service.get_comments_by_post_id(
            db, post_id, pagination.page, pagination.page_size
        )
    if not comments:
        raise NotFoundError("No comments found for the given criteria.")
    return [comment_service.comment_to_dict(c) for c in comments]


@router.get("/post/{post_id}/user/{user_id}/{comment_id}", response_model=CommentResponse)
async def get_comment_of_post_and_user(
    post_id: int, user_id: int, comment_id: int, db: AsyncSession = Depends(get_db)
):
    comment = await comment_service.find_comment_by_post_id_and_user_id_and_comment_id(
        db, post_id, user_id, comment_id
    )
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment_service.comment_to_dict(comment)


@router.get("/user/{user_id}", response_model=list[CommentResponse])
async def list_comments_by_user(
    user_id: int,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    comments = await comment_service.get_comments_by_user_id(
        db, user_id, pagination.page, pagination.page_size
    )
    if not comments:
        raise NotFoundError("No comments found for the given user.")
    return [comment_service.comment_to_dict(c) for c in comments]


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(comment_id: int, data: CommentUpdate, db: AsyncSession = Depends(get_db)):
    comment = await comment_service.get_comment(db, comment_id)
    # Only content and date change; author and post are fixed at creation.
    comment.comment = data.comment
    if data.date is not None:
        comment.date = data.date
    comment = await comment_service.save_comment(db, comment)
    return comment_service.comment_to_dict(comment)


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: int, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id)
