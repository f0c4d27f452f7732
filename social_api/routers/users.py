from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.database import get_db
from social_api.schemas import ImageProfileResponse, ProfileCreate, UserCreate, UserResponse
from social_api.services import image_profile_service, user_service

router = APIRouter(prefix="/users", tags=["users"])

_DUPLICATE_DETAIL = "A user with this username or email already exists"


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    return [user_service.user_to_dict(u) for u in await user_service.find_users(db)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await user_service.get_user(db, user_id)
    return user_service.user_to_dict(user)


@router.post("", status_code=201, response_model=UserResponse)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        user = await user_service.save_user(db, data)
    except IntegrityError:
        raise HTTPException(status_code=409, detail=_DUPLICATE_DETAIL)
    return user_service.user_to_dict(user)


@router.post("/upload", status_code=201, response_model=UserResponse)
async def create_user_with_image(
    username: str = Form(...),
    email: str = Form(...),
    name: str | None = Form(None),
    biography: str | None = Form(None),
    image: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    # Form fields skip the body validation FastAPI applies to POST /users.
    try:
        data = UserCreate(
            username=username,
            email=email,
            name=name,
            profile=ProfileCreate(biography=biography),
        )
    except SchemaError as exc:
        raise RequestValidationError(exc.errors(include_url=False))
    try:
        user = await user_service.save_user_with_image(db, data, image)
    except IntegrityError:
        raise HTTPException(status_code=409, detail=_DUPLICATE_DETAIL)
    return user_service.user_to_dict(user)


@router.delete("/{user_id}/profile-image", response_model=ImageProfileResponse)
async def delete_profile_image(user_id: int, db: AsyncSession = Depends(get_db)):
    image = await user_service.delete_profile_image(db, user_id)
    return image_profile_service.image_profile_to_dict(image)


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    await user_service.delete_user(db, user_id)
