from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (``id_user`` <-> ``idUser``)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- ImageProfile ---

class ImageProfileResponse(CamelModel):
    id_image: int
    id_profile: int
    image_url: str
    image_thumbnail_url: str


# --- Profile ---

class ProfileCreate(CamelModel):
    biography: str | None = None


class ProfileUpdate(CamelModel):
    biography: str | None = None


class ProfileResponse(CamelModel):
    id_profile: int
    id_user: int
    biography: str | None
    image_url: str | None = None
    image_thumbnail_url: str | None = None


# --- User ---

class UserBase(CamelModel):
    username: str = Field(max_length=100)
    email: str = Field(max_length=255)
    name: str | None = Field(None, max_length=150)


class UserCreate(UserBase):
    # Optional in the schema so that a missing profile is reported as 400
    # by user_service rather than as a generic 422.
    profile: ProfileCreate | None = None


class UserResponse(UserBase):
    id_user: int
    created_at: datetime
    profile: ProfileResponse | None = None


class UserReference(CamelModel):
    id_user: int


# --- Post ---

class PostCreate(CamelModel):
    content: str
    id_user: int


class PostUpdate(CamelModel):
    content: str


class PostResponse(CamelModel):
    id_post: int
    id_user: int
    content: str
    date: datetime


# --- Comment ---

class CommentCreate(CamelModel):
    comment: str
    date: datetime | None = None
    user: UserReference | None = None


class CommentUpdate(CamelModel):
    comment: str
    date: datetime | None = None


class CommentResponse(CamelModel):
    id_comment: int
    id_user: int
    id_post: int
    comment: str
    date: datetime


# --- Reaction ---

class ReactionCreate(CamelModel):
    id_user: int
    id_post: int
    reaction_type: str = Field("like", max_length=20)


class ReactionResponse(CamelModel):
    id_user: int
    id_post: int
    reaction_type: str
    date: datetime


# --- Metrics ---

class MetricsResponse(CamelModel):
    total_users: int
    total_posts: int
    total_comments: int
    total_reactions: int
    avg_comments_per_post: float
