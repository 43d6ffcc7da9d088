"""Projects API endpoints.

Public reads return published projects only unless the admin token is sent.
"""

from aiohttp import web

from portfolio.api.common import is_admin, parse_body, query_flag, request_locale, require_admin
from portfolio.api.schemas import ProjectCreate, ProjectUpdate, ReorderRequest
from portfolio.app_keys import database_key
from portfolio.core.localize import localize_project
from portfolio.db.models import Project
from portfolio.services import projects as project_service
from portfolio.services.ordering import reorder


def create_projects_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/projects", list_projects),
        web.post("/api/projects", create_project),
        web.post("/api/projects/reorder", reorder_projects),
        web.get("/api/projects/{slug}", get_project),
        web.put("/api/projects/{id}", update_project),
        web.delete("/api/projects/{id}", delete_project),
    ]


async def list_projects(request: web.Request) -> web.Response:
    published_only = query_flag(request, "published") or not is_admin(request)
    locale = request_locale(request)
    with request.app[database_key].session() as session:
        projects = project_service.list_projects(session, published_only=published_only)
        data = [localize_project(project.to_dict(), locale) for project in projects]
    return web.json_response(data)


async def get_project(request: web.Request) -> web.Response:
    slug = request.match_info["slug"]
    locale = request_locale(request)
    with request.app[database_key].session() as session:
        project = project_service.get_project_by_slug(
            session, slug, published_only=not is_admin(request)
        )
        data = localize_project(project.to_dict(include_pages=True), locale)
    return web.json_response(data)


async def create_project(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ProjectCreate)
    with request.app[database_key].session() as session:
        project = project_service.create_project(session, body.model_dump())
        data = project.to_dict()
    return web.json_response(data, status=201)


async def update_project(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ProjectUpdate)
    with request.app[database_key].session() as session:
        project = project_service.update_project(
            session, request.match_info["id"], body.model_dump(exclude_unset=True)
        )
        data = project.to_dict()
    return web.json_response(data)


async def delete_project(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        project_service.delete_project(session, request.match_info["id"])
    return web.json_response({"success": True})


async def reorder_projects(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ReorderRequest)
    with request.app[database_key].session() as session:
        reorder(session, Project, body.ids)
    return web.json_response({"success": True})
