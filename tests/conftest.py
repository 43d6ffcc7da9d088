"""Shared test fixtures."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from portfolio.config import AdminConfig, Config, DatabaseConfig, ServerConfig
from portfolio.core.pages import ConnectionRef, PageSnapshot
from portfolio.core.types import PageId
from portfolio.db.database import Database

ADMIN_TOKEN = "test-admin-token"

PageFactory = Callable[..., PageSnapshot]


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration backed by a SQLite file in tmp_path."""
    return Config(
        server=ServerConfig(),
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'test.db'}"),
        admin=AdminConfig(token=ADMIN_TOKEN),
    )


@pytest.fixture
def database(test_config: Config) -> Iterator[Database]:
    """Database with all tables created."""
    db = Database(test_config.database.url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def make_page() -> PageFactory:
    """Factory for page snapshots linked by target slugs.

    ``make_page("b", order=1, targets=["c"])`` creates page ``b`` with an
    outgoing connection to page ``c``. Ids equal slugs.
    """

    def factory(
        slug: str,
        *,
        order: int = 0,
        start: bool = False,
        targets: list[str] | None = None,
        title: str | None = None,
        title_fr: str | None = None,
        content: str = "",
    ) -> PageSnapshot:
        connections = tuple(
            ConnectionRef(
                id=f"{slug}->{target}",
                source_page_id=PageId(slug),
                target_page_id=PageId(target),
            )
            for target in targets or []
        )
        return PageSnapshot(
            id=PageId(slug),
            slug=slug,
            title=title or slug.upper(),
            content=content,
            order=order,
            is_start_page=start,
            title_fr=title_fr,
            outgoing_connections=connections,
        )

    return factory
