"""Project CRUD."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.db.models import Project
from portfolio.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

PROJECT_FIELDS = frozenset(
    {
        "slug",
        "title",
        "title_fr",
        "description",
        "description_fr",
        "excerpt",
        "excerpt_fr",
        "content",
        "content_fr",
        "tags",
        "technologies",
        "thumbnail",
        "live_url",
        "github_url",
        "published",
        "featured",
        "order",
        "start_date",
        "end_date",
    }
)


def list_projects(session: Session, *, published_only: bool = False) -> list[Project]:
    """Projects by ``order``, newest first among equal orders."""
    stmt = select(Project).order_by(Project.order, Project.created_at.desc())
    if published_only:
        stmt = stmt.where(Project.published.is_(True))
    return list(session.scalars(stmt))


def get_project(session: Session, project_id: str) -> Project:
    project = session.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def get_project_by_slug(session: Session, slug: str, *, published_only: bool = False) -> Project:
    project = session.scalar(select(Project).where(Project.slug == slug))
    if project is None or (published_only and not project.published):
        raise NotFoundError("Project not found")
    return project


def create_project(session: Session, data: dict[str, Any]) -> Project:
    """Create a project.

    Raises:
        ConflictError: If the slug is already used
    """
    _ensure_slug_available(session, data["slug"])
    project = Project(**{name: value for name, value in data.items() if name in PROJECT_FIELDS})
    if project.published:
        project.published_at = datetime.now(UTC)
    session.add(project)
    session.flush()
    logger.info("Created project %s", project.slug)
    return project


def update_project(session: Session, project_id: str, changes: dict[str, Any]) -> Project:
    project = get_project(session, project_id)
    new_slug = changes.get("slug")
    if new_slug is not None and new_slug != project.slug:
        _ensure_slug_available(session, new_slug)

    was_published = project.published
    for name, value in changes.items():
        if name in PROJECT_FIELDS:
            setattr(project, name, value)
    if project.published and not was_published and project.published_at is None:
        project.published_at = datetime.now(UTC)
    session.flush()
    return project


def delete_project(session: Session, project_id: str) -> None:
    """Delete a project along with its pages and their connections."""
    project = get_project(session, project_id)
    session.delete(project)
    session.flush()
    logger.info("Deleted project %s", project.slug)


def _ensure_slug_available(session: Session, slug: str) -> None:
    if session.scalar(select(Project.id).where(Project.slug == slug)) is not None:
        raise ConflictError("A project with this slug already exists")
