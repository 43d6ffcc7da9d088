"""GitHub statistics endpoints."""

import logging

from aiohttp import web

from portfolio.api.common import require_admin
from portfolio.app_keys import database_key, github_client_key
from portfolio.services.github import (
    fetch_github_stats,
    load_github_stats,
    read_credentials,
    store_github_stats,
)

logger = logging.getLogger(__name__)


def create_github_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/github", get_stats),
        web.post("/api/github", refresh_stats),
    ]


async def get_stats(request: web.Request) -> web.Response:
    with request.app[database_key].session() as session:
        data = load_github_stats(session)
    return web.json_response(data)


async def refresh_stats(request: web.Request) -> web.Response:
    """Fetch fresh statistics from GitHub and replace the cache."""
    require_admin(request)
    database = request.app[database_key]
    with database.session() as session:
        username, token = read_credentials(session)

    stats = await fetch_github_stats(request.app[github_client_key], username, token)

    with database.session() as session:
        store_github_stats(session, stats)
    logger.info(
        "GitHub cache refreshed: %d repositories, %d languages",
        len(stats["repos"]),
        len(stats["languages"]),
    )
    return web.json_response(stats)
