"""aiohttp server for Portfolio.

Application factory, error handling and route registration.
"""

import logging
from collections.abc import Awaitable, Callable

import httpx
from aiohttp import web
from pydantic import ValidationError

from portfolio.api.common import json_error, validation_error_response
from portfolio.api.connections import create_connections_routes
from portfolio.api.experience import create_experience_routes
from portfolio.api.feedback import create_feedback_routes
from portfolio.api.github import create_github_routes
from portfolio.api.pages import create_pages_routes
from portfolio.api.project_pages import create_project_pages_routes
from portfolio.api.projects import create_projects_routes
from portfolio.api.settings import create_settings_routes
from portfolio.api.skills import create_skills_routes
from portfolio.app_keys import admin_token_key, database_key, github_client_key
from portfolio.config import Config
from portfolio.db.database import Database
from portfolio.services.errors import ServiceError
from portfolio.services.github import GitHubClient

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Translate service and validation errors into JSON error responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ServiceError as e:
        return json_error(e.message, e.status)
    except ValidationError as e:
        return validation_error_response(e)
    except Exception:
        logger.exception("Unhandled exception for %s %s", request.method, request.path)
        return json_error("Internal server error", 500)


def create_app(
    config: Config,
    *,
    database: Database | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        database: Database to use instead of one built from config
        http_client: Client for outbound GitHub requests; created per
            application when omitted

    Returns:
        Configured aiohttp application
    """
    app = web.Application(middlewares=[error_middleware])

    if database is None:
        database = Database(config.database.url, echo=config.database.echo)
    app[database_key] = database
    app[admin_token_key] = config.admin.token or ""

    if config.admin.token is None:
        logger.warning("No admin token configured; admin endpoints will reject all requests")

    if http_client is None:
        http_client = httpx.AsyncClient(timeout=config.github.timeout)
        app.on_cleanup.append(_close_github_client)
    app[github_client_key] = GitHubClient(http_client, config.github.api_url)

    app.router.add_routes(create_projects_routes())
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_project_pages_routes())
    app.router.add_routes(create_connections_routes())
    app.router.add_routes(create_skills_routes())
    app.router.add_routes(create_experience_routes())
    app.router.add_routes(create_feedback_routes())
    app.router.add_routes(create_settings_routes())
    app.router.add_routes(create_github_routes())

    return app


async def _close_github_client(app: web.Application) -> None:
    """Close the GitHub HTTP client on application cleanup."""
    await app[github_client_key].client.aclose()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    database = Database(config.database.url, echo=config.database.echo)
    database.create_all()
    app = create_app(config, database=database)
    web.run_app(app, host=config.server.host, port=config.server.port)
