"""Request body models.

Update models have every field optional; handlers apply only the fields
present in the request (``model_dump(exclude_unset=True)``).
"""

from datetime import date
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, RootModel, field_validator, model_validator

from portfolio.core.slugs import SLUG_RE, generate_slug

SLUG_PATTERN = SLUG_RE.pattern
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _default_slug(data: Any) -> Any:
    """Derive a missing slug from the title."""
    if isinstance(data, dict) and not data.get("slug") and isinstance(data.get("title"), str):
        return {**data, "slug": generate_slug(data["title"])}
    return data


def _reject_null(value: Any) -> Any:
    """Omitted fields stay unchanged; an explicit null is not a valid value."""
    if value is None:
        raise ValueError("must not be null")
    return value


ContactStatus = Literal["unread", "read", "archived"]
TestimonialStatus = Literal["pending", "approved", "rejected"]


class ProjectCreate(BaseModel):
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: str = Field(..., min_length=1, max_length=300)
    title_fr: str | None = None
    description: str | None = None
    description_fr: str | None = None
    excerpt: str | None = None
    excerpt_fr: str | None = None
    content: str = "[]"
    content_fr: str | None = None
    tags: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    thumbnail: str | None = None
    live_url: str | None = None
    github_url: str | None = None
    published: bool = False
    featured: bool = False
    order: int = 0
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="before")
    @classmethod
    def slug_from_title(cls, data: Any) -> Any:
        return _default_slug(data)


class ProjectUpdate(BaseModel):
    slug: str | None = Field(None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: str | None = Field(None, min_length=1, max_length=300)
    title_fr: str | None = None
    description: str | None = None
    description_fr: str | None = None
    excerpt: str | None = None
    excerpt_fr: str | None = None
    content: str | None = None
    content_fr: str | None = None
    tags: list[str] | None = None
    technologies: list[str] | None = None
    thumbnail: str | None = None
    live_url: str | None = None
    github_url: str | None = None
    published: bool | None = None
    featured: bool | None = None
    order: int | None = None
    start_date: date | None = None
    end_date: date | None = None

    @field_validator(
        "slug", "title", "content", "tags", "technologies", "published", "featured", "order"
    )
    @classmethod
    def check_not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class PageCreate(BaseModel):
    project_id: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: str = Field(..., min_length=1, max_length=300)
    title_fr: str | None = None
    content: str = "[]"
    content_fr: str | None = None
    order: int = 0
    is_start_page: bool = False

    @model_validator(mode="before")
    @classmethod
    def slug_from_title(cls, data: Any) -> Any:
        return _default_slug(data)


class PageUpdate(BaseModel):
    """Page changes; the start flag has its own endpoint."""

    slug: str | None = Field(None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: str | None = Field(None, min_length=1, max_length=300)
    title_fr: str | None = None
    content: str | None = None
    content_fr: str | None = None
    order: int | None = None

    @field_validator("slug", "title", "content", "order")
    @classmethod
    def check_not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class ConnectionCreate(BaseModel):
    source_page_id: str = Field(..., min_length=1)
    target_page_id: str = Field(..., min_length=1)
    label: str | None = Field(None, max_length=200)


class ConnectionUpdate(BaseModel):
    label: str | None = Field(None, max_length=200)


class ReorderRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    name_fr: str | None = None
    order: int = 0


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    icon: str | None = None
    category_id: str | None = None
    order: int = 0


class MediaCreate(BaseModel):
    url: str = Field(..., min_length=1)
    caption: str | None = None
    caption_fr: str | None = None
    order: int = 0


class ExperienceCreate(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    role_fr: str | None = None
    description: str | None = None
    description_fr: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    order: int = 0
    media: list[MediaCreate] = Field(default_factory=list)


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    subject: str = Field(..., min_length=1, max_length=300)
    message: str = Field(..., min_length=10, max_length=5000)


class ContactUpdate(BaseModel):
    status: ContactStatus


class TestimonialCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str | None = Field(None, max_length=200)
    avatar: str | None = None
    linkedin: str | None = None
    message: str = Field(..., min_length=10, max_length=2000)
    rating: float = Field(..., ge=0, le=5, multiple_of=0.5)

    @field_validator("linkedin")
    @classmethod
    def check_linkedin(cls, value: str | None) -> str | None:
        if not value:
            return None
        host = urlparse(value).hostname or ""
        if host != "linkedin.com" and not host.endswith(".linkedin.com"):
            raise ValueError("must be a linkedin.com URL")
        return value


class TestimonialUpdate(BaseModel):
    status: TestimonialStatus | None = None
    name: str | None = Field(None, min_length=1, max_length=200)
    role: str | None = None
    message: str | None = Field(None, min_length=10, max_length=2000)
    rating: float | None = Field(None, ge=0, le=5, multiple_of=0.5)


class SettingsUpdate(RootModel[dict[str, str]]):
    """Key/value pairs to upsert."""
