"""Admin endpoints for project pages."""

from aiohttp import web

from portfolio.api.common import json_error, parse_body, require_admin
from portfolio.api.schemas import PageCreate, PageUpdate
from portfolio.app_keys import database_key
from portfolio.services import pages as page_service


def create_project_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/project-pages", list_pages),
        web.post("/api/project-pages", create_page),
        web.get("/api/project-pages/{id}", get_page),
        web.put("/api/project-pages/{id}", update_page),
        web.delete("/api/project-pages/{id}", delete_page),
        web.post("/api/project-pages/{id}/start", set_start_page),
    ]


async def list_pages(request: web.Request) -> web.Response:
    require_admin(request)
    project_id = request.query.get("project_id")
    if not project_id:
        return json_error("project_id is required", 400)
    with request.app[database_key].session() as session:
        data = [page.to_dict() for page in page_service.list_pages(session, project_id)]
    return web.json_response(data)


async def get_page(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        page = page_service.get_page(session, request.match_info["id"])
        data = page.to_dict(include_connections=True)
    return web.json_response(data)


async def create_page(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, PageCreate)
    with request.app[database_key].session() as session:
        page = page_service.create_page(
            session,
            body.project_id,
            slug=body.slug,
            title=body.title,
            title_fr=body.title_fr,
            content=body.content,
            content_fr=body.content_fr,
            order=body.order,
            is_start_page=body.is_start_page,
        )
        data = page.to_dict()
    return web.json_response(data, status=201)


async def update_page(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, PageUpdate)
    with request.app[database_key].session() as session:
        page = page_service.update_page(
            session, request.match_info["id"], body.model_dump(exclude_unset=True)
        )
        data = page.to_dict()
    return web.json_response(data)


async def set_start_page(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        page = page_service.set_start_page(session, request.match_info["id"])
        data = page.to_dict()
    return web.json_response(data)


async def delete_page(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        page_service.delete_page(session, request.match_info["id"])
    return web.json_response({"success": True})
