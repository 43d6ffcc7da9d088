"""CLI interface for Portfolio.

Command-line tool for running the API server and inspecting content.
"""

import logging
import sys
from pathlib import Path

import click

from portfolio.config import Config
from portfolio.core.localize import SUPPORTED_LOCALES, localize_page, resolve
from portfolio.core.tree import build_page_tree
from portfolio.db.database import Database
from portfolio.services.errors import NotFoundError
from portfolio.services.pages import load_page_snapshots
from portfolio.services.projects import get_project_by_slug

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover portfolio.toml)",
)


@click.group()
def cli() -> None:
    """Portfolio - projects, pages and the paths between them."""


@cli.command()
@config_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy database URL (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    database_url: str | None,
    verbose: bool,
) -> None:
    """Start the API server."""
    from portfolio.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        database_url=database_url,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Database: {config.database.url}")
    if config.admin.token:
        click.echo("Admin API: enabled")
    else:
        click.echo("Admin API: disabled (no admin.token in config)")

    run_server(config)


@cli.command("init-db")
@config_option
def init_db(config_path: Path | None) -> None:
    """Create database tables."""
    _configure_logging(False)
    config = _load_config(config_path)
    database = Database(config.database.url, echo=config.database.echo)
    database.create_all()
    database.dispose()
    click.echo(f"Database initialized: {config.database.url}")


@cli.command()
@click.argument("project_slug")
@config_option
@click.option(
    "--locale",
    "-l",
    type=click.Choice(SUPPORTED_LOCALES),
    default="en",
    help="Locale of page titles",
)
def tree(project_slug: str, config_path: Path | None, locale: str) -> None:
    """Print the page tree of a project."""
    config = _load_config(config_path)
    database = Database(config.database.url, echo=config.database.echo)
    try:
        with database.session() as session:
            project = get_project_by_slug(session, project_slug)
            title = resolve(project.title, project.title_fr, locale)
            pages = [localize_page(page, locale) for page in load_page_snapshots(session, project.id)]
    except NotFoundError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    finally:
        database.dispose()

    click.echo(title)
    page_tree = build_page_tree(pages)
    if not len(page_tree):
        click.echo("(no pages)")
        return
    for node in page_tree.nodes:
        marker = " *" if node.level == 0 else ""
        click.echo(f"{'  ' * node.level}- {node.page.title} [{node.page.slug}]{marker}")


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except ValueError as e:
        click.echo(click.style(f"Error: invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
