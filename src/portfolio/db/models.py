"""ORM models for portfolio content.

Translated columns carry the ``_fr`` suffix and are optional; the
localization overlay falls back to the base column when they are empty.
"""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class Base(DeclarativeBase):
    pass


class Project(Base):
    """Published or draft portfolio project."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    slug: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    title_fr: Mapped[str | None] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text)
    description_fr: Mapped[str | None] = mapped_column(Text)
    excerpt: Mapped[str | None] = mapped_column(Text)
    excerpt_fr: Mapped[str | None] = mapped_column(Text)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    content_fr: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    technologies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    thumbnail: Mapped[str | None] = mapped_column(String(500))
    live_url: Mapped[str | None] = mapped_column(String(500))
    github_url: Mapped[str | None] = mapped_column(String(500))
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_date: Mapped[date | None] = mapped_column(Date)
    end_date: Mapped[date | None] = mapped_column(Date)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    pages: Mapped[list[ProjectPage]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectPage.order",
    )

    def to_dict(self, *, include_pages: bool = False) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "title_fr": self.title_fr,
            "description": self.description,
            "description_fr": self.description_fr,
            "excerpt": self.excerpt,
            "excerpt_fr": self.excerpt_fr,
            "content": self.content,
            "content_fr": self.content_fr,
            "tags": list(self.tags or []),
            "technologies": list(self.technologies or []),
            "thumbnail": self.thumbnail,
            "live_url": self.live_url,
            "github_url": self.github_url,
            "published": self.published,
            "featured": self.featured,
            "order": self.order,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "published_at": _iso(self.published_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if include_pages:
            result["pages"] = [page.to_dict() for page in self.pages]
        return result


class ProjectPage(Base):
    """Navigable content page within a project."""

    __tablename__ = "project_pages"
    __table_args__ = (UniqueConstraint("project_id", "slug", name="uq_project_pages_project_slug"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    title_fr: Mapped[str | None] = mapped_column(String(300))
    content: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    content_fr: Mapped[str | None] = mapped_column(Text)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_start_page: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    project: Mapped[Project] = relationship(back_populates="pages")
    outgoing_connections: Mapped[list[PageConnection]] = relationship(
        back_populates="source_page",
        foreign_keys="PageConnection.source_page_id",
        order_by="PageConnection.created_at",
        cascade="all, delete-orphan",
    )
    incoming_connections: Mapped[list[PageConnection]] = relationship(
        back_populates="target_page",
        foreign_keys="PageConnection.target_page_id",
        cascade="all, delete-orphan",
    )

    def to_dict(self, *, include_connections: bool = False) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "project_id": self.project_id,
            "slug": self.slug,
            "title": self.title,
            "title_fr": self.title_fr,
            "content": self.content,
            "content_fr": self.content_fr,
            "order": self.order,
            "is_start_page": self.is_start_page,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if include_connections:
            result["outgoing_connections"] = [
                conn.to_dict(include_target=True) for conn in self.outgoing_connections
            ]
            result["incoming_connections"] = [
                conn.to_dict(include_source=True) for conn in self.incoming_connections
            ]
        return result


class PageConnection(Base):
    """Directed, optionally labeled edge between two pages of a project."""

    __tablename__ = "page_connections"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    source_page_id: Mapped[str] = mapped_column(
        ForeignKey("project_pages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    target_page_id: Mapped[str] = mapped_column(
        ForeignKey("project_pages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    label: Mapped[str | None] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)

    source_page: Mapped[ProjectPage] = relationship(
        back_populates="outgoing_connections", foreign_keys=[source_page_id]
    )
    target_page: Mapped[ProjectPage] = relationship(
        back_populates="incoming_connections", foreign_keys=[target_page_id]
    )

    def to_dict(
        self,
        *,
        include_source: bool = False,
        include_target: bool = False,
    ) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "source_page_id": self.source_page_id,
            "target_page_id": self.target_page_id,
            "label": self.label,
        }
        if include_source:
            result["source_page"] = self.source_page.to_dict()
        if include_target:
            result["target_page"] = self.target_page.to_dict()
        return result


class Category(Base):
    """Skill category shown on the about page."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    name_fr: Mapped[str | None] = mapped_column(String(200))
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    skills: Mapped[list[Skill]] = relationship(back_populates="category", order_by="Skill.order")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "name_fr": self.name_fr, "order": self.order}


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(200))
    category_id: Mapped[str | None] = mapped_column(ForeignKey("categories.id", ondelete="SET NULL"))
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    category: Mapped[Category | None] = relationship(back_populates="skills")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "category_id": self.category_id,
            "order": self.order,
        }


class Experience(Base):
    """Work experience entry with an optional media gallery."""

    __tablename__ = "experiences"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(200), nullable=False)
    role_fr: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    description_fr: Mapped[str | None] = mapped_column(Text)
    start_date: Mapped[date | None] = mapped_column(Date)
    end_date: Mapped[date | None] = mapped_column(Date)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    media: Mapped[list[ExperienceMedia]] = relationship(
        back_populates="experience",
        cascade="all, delete-orphan",
        order_by="ExperienceMedia.order",
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "company": self.company,
            "role": self.role,
            "role_fr": self.role_fr,
            "description": self.description,
            "description_fr": self.description_fr,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "order": self.order,
            "media": [item.to_dict() for item in self.media],
        }


class ExperienceMedia(Base):
    __tablename__ = "experience_media"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    experience_id: Mapped[str] = mapped_column(
        ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    caption: Mapped[str | None] = mapped_column(String(500))
    caption_fr: Mapped[str | None] = mapped_column(String(500))
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    experience: Mapped[Experience] = relationship(back_populates="media")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "caption": self.caption,
            "caption_fr": self.caption_fr,
            "order": self.order,
        }


class Testimonial(Base):
    """Visitor-submitted testimonial, visible once approved."""

    __tablename__ = "testimonials"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str | None] = mapped_column(String(200))
    avatar: Mapped[str | None] = mapped_column(String(500))
    linkedin: Mapped[str | None] = mapped_column(String(500))
    message: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "avatar": self.avatar,
            "linkedin": self.linkedin,
            "message": self.message,
            "rating": self.rating,
            "status": self.status,
            "created_at": _iso(self.created_at),
        }


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    subject: Mapped[str] = mapped_column(String(300), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="unread")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "created_at": _iso(self.created_at),
        }


class Setting(Base):
    """Site-wide key/value setting."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
