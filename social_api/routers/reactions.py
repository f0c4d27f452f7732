from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.database import get_db
from social_api.models import ReactionKey
from social_api.schemas import ReactionCreate, ReactionResponse
from social_api.services import reaction_service

router = APIRouter(prefix="/reactions", tags=["reactions"])


@router.post("", status_code=201, response_model=ReactionResponse)
async def create_reaction(data: ReactionCreate, db: AsyncSession = Depends(get_db)):
    try:
        reaction = await reaction_service.save_reaction(db, data)
    except IntegrityError:
        raise HTTPException(
            status_code=409,
            detail="The user has already reacted to this post",
        )
    return reaction_service.reaction_to_dict(reaction)


@router.get("/post/{post_id}", response_model=list[ReactionResponse])
async def list_reactions_by_post(post_id: int, db: AsyncSession = Depends(get_db)):
    reactions = await reaction_service.get_reactions_by_post_id(db, post_id)
    return [reaction_service.reaction_to_dict(r) for r in reactions]


@router.delete("/user/{user_id}/post/{post_id}", status_code=204)
async def delete_reaction(user_id: int, post_id: int, db: AsyncSession = Depends(get_db)):
    await reaction_service.delete_reaction(db, ReactionKey(user_id, post_id))
