"""Pydantic schemas for Post.

Create and update have separate schemas: create requires ``title`` and
``content`` and defaults ``is_draft`` to true, update accepts any subset.
"""
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, Field

from blog_api.models.post import TITLE_MAX_LENGTH
from blog_api.schemas.user import UserPublic


def _strict_flag(value: Any) -> Any:
    """Accept only true/false, 1/0 and "1"/"0" as booleans."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value in ("0", "1"):
        return value == "1"
    raise ValueError("The field must be true or false.")


Flag = Annotated[bool, BeforeValidator(_strict_flag)]


class PostCreate(BaseModel):
    model_config = {"str_strip_whitespace": True}

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1)
    is_draft: Flag = True
    published_at: datetime | None = None


class PostUpdate(BaseModel):
    model_config = {"str_strip_whitespace": True}

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(None, min_length=1)
    is_draft: Flag | None = None
    published_at: datetime | None = None


class PostResponse(BaseModel):
    id: int
    user_id: UUID
    title: str
    content: str
    is_draft: bool
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserPublic | None = None

    model_config = {"from_attributes": True}


class PostPage(BaseModel):
    data: list[PostResponse]
    current_page: int
    per_page: int
    total: int
    last_page: int
    path: str
    first_page_url: str
    last_page_url: str
    next_page_url: str | None = None
    prev_page_url: str | None = None


class FormField(BaseModel):
    name: str
    type: str
    required: bool
    max_length: int | None = None


class PostForm(BaseModel):
    """Description of the post editor form, served by the create and edit pages."""

    action: str
    method: str
    fields: list[FormField]
    defaults: dict[str, Any] = {}
    post: PostResponse | None = None
