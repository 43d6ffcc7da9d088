"""Immutable page snapshots consumed by the navigation core.

Snapshots are taken from ORM rows once per request so the tree builder,
pagination and localization never touch the database.
"""

from dataclasses import dataclass, field

from portfolio.core.types import PageId


@dataclass(frozen=True)
class ConnectionRef:
    """Directed edge between two pages of the same project."""

    id: str
    source_page_id: PageId
    target_page_id: PageId
    label: str | None = None


@dataclass(frozen=True)
class PageSnapshot:
    """Project page data with its outgoing connections."""

    id: PageId
    slug: str
    title: str
    content: str = ""
    order: int = 0
    is_start_page: bool = False
    title_fr: str | None = None
    content_fr: str | None = None
    outgoing_connections: tuple[ConnectionRef, ...] = field(default_factory=tuple)

    @property
    def target_ids(self) -> list[PageId]:
        """Targets of outgoing connections, in stored order."""
        return [conn.target_page_id for conn in self.outgoing_connections]
