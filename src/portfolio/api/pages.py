"""Project page view endpoints.

Returns JSON view models for a project's pages: metadata, breadcrumbs,
sidebar, pagination, table of contents and content blocks.
"""

import asyncio
import json
from hashlib import md5
from typing import Any

from aiohttp import web

from portfolio.api.common import is_admin, request_locale
from portfolio.app_keys import database_key
from portfolio.core.blocks import load_blocks
from portfolio.core.localize import localize_page, resolve
from portfolio.core.navigation import PROJECTS_PATH, build_breadcrumbs, build_sidebar, page_href
from portfolio.core.pages import PageSnapshot
from portfolio.core.pagination import paginate
from portfolio.core.toc import extract_toc
from portfolio.core.tree import PageTree, build_page_tree
from portfolio.core.types import Locale
from portfolio.db.database import Database
from portfolio.db.models import Project
from portfolio.services.pages import load_page_snapshots
from portfolio.services.projects import get_project_by_slug


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/projects/{slug}/tree", get_tree),
        web.get("/api/projects/{slug}/view", get_overview),
        web.get("/api/projects/{slug}/pages/{page_slug}", get_page),
    ]


async def get_tree(request: web.Request) -> web.Response:
    data = await asyncio.to_thread(
        _load_tree,
        request.app[database_key],
        request.match_info["slug"],
        request_locale(request),
        not is_admin(request),
    )
    return web.json_response(data)


async def get_overview(request: web.Request) -> web.Response:
    """Render the project root: the start page, or the project itself without one."""
    data = await asyncio.to_thread(
        _load_overview,
        request.app[database_key],
        request.match_info["slug"],
        request_locale(request),
        not is_admin(request),
    )
    return _cached_json_response(request, data)


async def get_page(request: web.Request) -> web.Response:
    project_slug = request.match_info["slug"]
    page_slug = request.match_info["page_slug"]
    data = await asyncio.to_thread(
        _load_page,
        request.app[database_key],
        project_slug,
        page_slug,
        request_locale(request),
        not is_admin(request),
    )
    if data is None:
        return web.json_response(
            {"error": "Page not found", "path": f"{project_slug}/{page_slug}"},
            status=404,
        )
    return _cached_json_response(request, data)


# Loaders below run in a worker thread so queries and tree building stay off the event loop.


def _load_tree(
    database: Database, slug: str, locale: Locale, published_only: bool
) -> dict[str, Any]:
    with database.session() as session:
        project = get_project_by_slug(session, slug, published_only=published_only)
        pages = [localize_page(page, locale) for page in load_page_snapshots(session, project.id)]
        title = resolve(project.title, project.title_fr, locale)
        project_info = {"id": project.id, "slug": project.slug, "title": title}

    tree = build_page_tree(pages)
    return {"project": project_info, "nodes": tree.to_list()}


def _load_overview(
    database: Database, slug: str, locale: Locale, published_only: bool
) -> dict[str, Any]:
    with database.session() as session:
        project = get_project_by_slug(session, slug, published_only=published_only)
        pages = [localize_page(page, locale) for page in load_page_snapshots(session, project.id)]
        tree = build_page_tree(pages)
        start = tree.start_node
        if start is not None:
            return _page_view(project, tree, start.page, locale)
        return _project_view(project, tree, locale)


def _load_page(
    database: Database, project_slug: str, page_slug: str, locale: Locale, published_only: bool
) -> dict[str, Any] | None:
    with database.session() as session:
        project = get_project_by_slug(session, project_slug, published_only=published_only)
        pages = [localize_page(page, locale) for page in load_page_snapshots(session, project.id)]
        page = next((p for p in pages if p.slug == page_slug), None)
        if page is None:
            return None
        return _page_view(project, build_page_tree(pages), page, locale)


def _page_view(
    project: Project,
    tree: PageTree,
    page: PageSnapshot,
    locale: Locale,
) -> dict[str, Any]:
    blocks = load_blocks(page.content)
    project_title = resolve(project.title, project.title_fr, locale)
    node = tree.get_node(page.id)
    return {
        "meta": {
            "project": {"id": project.id, "slug": project.slug, "title": project_title},
            "id": page.id,
            "slug": page.slug,
            "title": page.title,
            "path": page_href(project.slug, page, tree.start_id),
            "level": node.level if node is not None else 0,
            "is_start_page": page.id == tree.start_id,
            "locale": locale,
        },
        "breadcrumbs": [
            item.to_dict()
            for item in build_breadcrumbs(tree, project_title, project.slug, page.id)
        ],
        "sidebar": build_sidebar(tree, project.slug, page.id).to_dict(),
        "pagination": paginate(tree.nodes, page.id).to_dict(),
        "toc": [entry.to_dict() for entry in extract_toc(blocks)],
        "blocks": [block.to_dict() for block in blocks],
        "continue_reading": _continue_reading(project.slug, tree, page),
    }


def _project_view(project: Project, tree: PageTree, locale: Locale) -> dict[str, Any]:
    blocks = load_blocks(resolve(project.content, project.content_fr, locale))
    project_title = resolve(project.title, project.title_fr, locale)
    nodes = tree.nodes
    return {
        "meta": {
            "project": {"id": project.id, "slug": project.slug, "title": project_title},
            "id": None,
            "slug": None,
            "title": project_title,
            "path": f"{PROJECTS_PATH}/{project.slug}",
            "level": 0,
            "is_start_page": False,
            "locale": locale,
        },
        "breadcrumbs": [
            item.to_dict() for item in build_breadcrumbs(tree, project_title, project.slug, None)
        ],
        "sidebar": build_sidebar(tree, project.slug).to_dict(),
        "pagination": {"previous": None, "next": nodes[0].to_dict() if nodes else None},
        "toc": [entry.to_dict() for entry in extract_toc(blocks)],
        "blocks": [block.to_dict() for block in blocks],
        "continue_reading": [],
    }


def _continue_reading(project_slug: str, tree: PageTree, page: PageSnapshot) -> list[dict[str, Any]]:
    """Targets of the page's outgoing connections, in connection order."""
    items: list[dict[str, Any]] = []
    seen = {page.id}
    for conn in page.outgoing_connections:
        target = tree.get_node(conn.target_page_id)
        if target is None or target.page.id in seen:
            continue
        seen.add(target.page.id)
        items.append(
            {
                "id": target.page.id,
                "slug": target.page.slug,
                "title": target.page.title,
                "path": page_href(project_slug, target.page, tree.start_id),
                "label": conn.label,
            }
        )
    return items


def _cached_json_response(request: web.Request, data: dict[str, Any]) -> web.Response:
    etag = _compute_etag(json.dumps(data, sort_keys=True))
    if request.headers.get("If-None-Match") == etag:
        return web.Response(status=304, headers={"ETag": etag})
    return web.json_response(
        data,
        headers={"ETag": etag, "Cache-Control": "private, max-age=60"},
    )


def _compute_etag(content: str) -> str:
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
