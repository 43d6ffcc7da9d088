"""Project pages and the connections between them.

Enforces the start-page rules: a project with pages has exactly one start
page, the first page of a project becomes it, and it cannot be deleted.
"""

import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from portfolio.core.pages import ConnectionRef, PageSnapshot
from portfolio.core.types import PageId
from portfolio.db.models import PageConnection, Project, ProjectPage
from portfolio.services.errors import ConflictError, NotFoundError, StartPageDeletionError

logger = logging.getLogger(__name__)

PAGE_UPDATE_FIELDS = frozenset({"slug", "title", "title_fr", "content", "content_fr", "order"})


def get_page(session: Session, page_id: str) -> ProjectPage:
    page = session.get(ProjectPage, page_id)
    if page is None:
        raise NotFoundError("Page not found")
    return page


def list_pages(session: Session, project_id: str) -> list[ProjectPage]:
    stmt = (
        select(ProjectPage)
        .where(ProjectPage.project_id == project_id)
        .order_by(ProjectPage.order, ProjectPage.created_at)
    )
    return list(session.scalars(stmt))


def create_page(
    session: Session,
    project_id: str,
    *,
    slug: str,
    title: str,
    content: str = "[]",
    title_fr: str | None = None,
    content_fr: str | None = None,
    order: int = 0,
    is_start_page: bool = False,
) -> ProjectPage:
    """Create a page in a project.

    The first page of a project always becomes its start page. Creating a
    page with ``is_start_page`` on a project that already has pages moves
    the start flag to the new page.

    Raises:
        NotFoundError: If the project does not exist
        ConflictError: If the slug is taken within the project
    """
    if session.get(Project, project_id) is None:
        raise NotFoundError("Project not found")
    _ensure_slug_available(session, project_id, slug)

    existing = session.scalar(
        select(func.count()).select_from(ProjectPage).where(ProjectPage.project_id == project_id)
    )
    if not existing:
        is_start_page = True
    elif is_start_page:
        _clear_start_page(session, project_id)

    page = ProjectPage(
        project_id=project_id,
        slug=slug,
        title=title,
        title_fr=title_fr,
        content=content,
        content_fr=content_fr,
        order=order,
        is_start_page=is_start_page,
    )
    session.add(page)
    session.flush()
    logger.info("Created page %s in project %s", page.slug, project_id)
    return page


def update_page(session: Session, page_id: str, changes: dict[str, Any]) -> ProjectPage:
    """Apply field changes to a page.

    The start flag is not an updatable field; use set_start_page.
    """
    page = get_page(session, page_id)
    new_slug = changes.get("slug")
    if new_slug is not None and new_slug != page.slug:
        _ensure_slug_available(session, page.project_id, new_slug)

    for name, value in changes.items():
        if name in PAGE_UPDATE_FIELDS:
            setattr(page, name, value)
    session.flush()
    return page


def set_start_page(session: Session, page_id: str) -> ProjectPage:
    """Make a page the start page of its project, unsetting any other."""
    page = get_page(session, page_id)
    if page.is_start_page:
        return page
    _clear_start_page(session, page.project_id)
    page.is_start_page = True
    session.flush()
    logger.info("Start page of project %s is now %s", page.project_id, page.slug)
    return page


def delete_page(session: Session, page_id: str) -> None:
    """Delete a page together with its incoming and outgoing connections.

    Raises:
        NotFoundError: If the page does not exist
        StartPageDeletionError: If the page is the start page
    """
    page = get_page(session, page_id)
    if page.is_start_page:
        raise StartPageDeletionError()
    session.delete(page)
    session.flush()


def get_connection(session: Session, connection_id: str) -> PageConnection:
    connection = session.get(PageConnection, connection_id)
    if connection is None:
        raise NotFoundError("Connection not found")
    return connection


def list_connections(session: Session, project_id: str) -> list[PageConnection]:
    """Connections whose source page belongs to the project, endpoints loaded."""
    stmt = (
        select(PageConnection)
        .join(ProjectPage, PageConnection.source_page_id == ProjectPage.id)
        .where(ProjectPage.project_id == project_id)
        .options(
            selectinload(PageConnection.source_page),
            selectinload(PageConnection.target_page),
        )
        .order_by(PageConnection.created_at)
    )
    return list(session.scalars(stmt))


def create_connection(
    session: Session,
    source_page_id: str,
    target_page_id: str,
    label: str | None = None,
) -> PageConnection:
    """Create a directed connection between two pages of one project.

    Cycles and self-loops are accepted; the tree builder tolerates them.

    Raises:
        NotFoundError: If either page does not exist
        ConflictError: If the pages are in different projects or the
            connection already exists
    """
    source = session.get(ProjectPage, source_page_id)
    target = session.get(ProjectPage, target_page_id)
    if source is None or target is None:
        raise NotFoundError("Page not found")
    if source.project_id != target.project_id:
        raise ConflictError("Pages must belong to the same project")

    duplicate = session.scalar(
        select(PageConnection.id).where(
            PageConnection.source_page_id == source_page_id,
            PageConnection.target_page_id == target_page_id,
        )
    )
    if duplicate is not None:
        raise ConflictError("Connection already exists")

    connection = PageConnection(
        source_page_id=source_page_id,
        target_page_id=target_page_id,
        label=label,
    )
    session.add(connection)
    session.flush()
    return connection


def update_connection(session: Session, connection_id: str, label: str | None) -> PageConnection:
    connection = get_connection(session, connection_id)
    connection.label = label
    session.flush()
    return connection


def delete_connection(session: Session, connection_id: str) -> None:
    session.delete(get_connection(session, connection_id))
    session.flush()


def load_page_snapshots(session: Session, project_id: str) -> list[PageSnapshot]:
    """Load a project's pages as immutable snapshots, ordered by ``order``."""
    stmt = (
        select(ProjectPage)
        .where(ProjectPage.project_id == project_id)
        .options(selectinload(ProjectPage.outgoing_connections))
        .order_by(ProjectPage.order, ProjectPage.created_at)
    )
    return [to_snapshot(page) for page in session.scalars(stmt)]


def to_snapshot(page: ProjectPage) -> PageSnapshot:
    return PageSnapshot(
        id=PageId(page.id),
        slug=page.slug,
        title=page.title,
        content=page.content or "",
        order=page.order,
        is_start_page=page.is_start_page,
        title_fr=page.title_fr,
        content_fr=page.content_fr,
        outgoing_connections=tuple(
            ConnectionRef(
                id=conn.id,
                source_page_id=PageId(conn.source_page_id),
                target_page_id=PageId(conn.target_page_id),
                label=conn.label,
            )
            for conn in page.outgoing_connections
        ),
    )


def _ensure_slug_available(session: Session, project_id: str, slug: str) -> None:
    taken = session.scalar(
        select(ProjectPage.id).where(
            ProjectPage.project_id == project_id,
            ProjectPage.slug == slug,
        )
    )
    if taken is not None:
        raise ConflictError("A page with this slug already exists in this project")


def _clear_start_page(session: Session, project_id: str) -> None:
    session.execute(
        update(ProjectPage)
        .where(ProjectPage.project_id == project_id, ProjectPage.is_start_page.is_(True))
        .values(is_start_page=False)
        .execution_options(synchronize_session="fetch")
    )
