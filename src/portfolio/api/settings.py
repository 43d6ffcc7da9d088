"""Site settings endpoints (admin only)."""

from aiohttp import web

from portfolio.api.common import parse_body, require_admin
from portfolio.api.schemas import SettingsUpdate
from portfolio.app_keys import database_key
from portfolio.services.settings import MASK, SENSITIVE_KEYS, list_settings, set_setting


def create_settings_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/settings", get_settings),
        web.put("/api/settings", update_settings),
    ]


async def get_settings(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        data = list_settings(session)
    return web.json_response(data)


async def update_settings(request: web.Request) -> web.Response:
    """Upsert settings; masked secrets echoed back by clients are left unchanged."""
    require_admin(request)
    body = await parse_body(request, SettingsUpdate)
    with request.app[database_key].session() as session:
        for key, value in body.root.items():
            if key in SENSITIVE_KEYS and MASK in value:
                continue
            set_setting(session, key, value)
        data = list_settings(session)
    return web.json_response(data)
