"""Admin endpoints for page connections."""

from aiohttp import web

from portfolio.api.common import json_error, parse_body, require_admin
from portfolio.api.schemas import ConnectionCreate, ConnectionUpdate
from portfolio.app_keys import database_key
from portfolio.services import pages as page_service


def create_connections_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/page-connections", list_connections),
        web.post("/api/page-connections", create_connection),
        web.put("/api/page-connections/{id}", update_connection),
        web.delete("/api/page-connections/{id}", delete_connection),
    ]


async def list_connections(request: web.Request) -> web.Response:
    require_admin(request)
    project_id = request.query.get("project_id")
    if not project_id:
        return json_error("project_id is required", 400)
    with request.app[database_key].session() as session:
        data = [
            conn.to_dict(include_source=True, include_target=True)
            for conn in page_service.list_connections(session, project_id)
        ]
    return web.json_response(data)


async def create_connection(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ConnectionCreate)
    with request.app[database_key].session() as session:
        connection = page_service.create_connection(
            session, body.source_page_id, body.target_page_id, body.label
        )
        data = connection.to_dict()
    return web.json_response(data, status=201)


async def update_connection(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ConnectionUpdate)
    with request.app[database_key].session() as session:
        connection = page_service.update_connection(session, request.match_info["id"], body.label)
        data = connection.to_dict()
    return web.json_response(data)


async def delete_connection(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        page_service.delete_connection(session, request.match_info["id"])
    return web.json_response({"success": True})
