"""Work experience endpoints."""

from aiohttp import web
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from portfolio.api.common import parse_body, request_locale, require_admin
from portfolio.api.schemas import ExperienceCreate
from portfolio.app_keys import database_key
from portfolio.core.localize import localize_experience
from portfolio.db.models import Experience, ExperienceMedia


def create_experience_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/experience", list_experience),
        web.post("/api/experience", create_experience),
    ]


async def list_experience(request: web.Request) -> web.Response:
    locale = request_locale(request)
    with request.app[database_key].session() as session:
        entries = session.scalars(
            select(Experience)
            .options(selectinload(Experience.media))
            .order_by(Experience.order, Experience.start_date.desc())
        )
        data = [localize_experience(entry.to_dict(), locale) for entry in entries]
    return web.json_response(data)


async def create_experience(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ExperienceCreate)
    with request.app[database_key].session() as session:
        entry = Experience(**body.model_dump(exclude={"media"}))
        entry.media = [ExperienceMedia(**item.model_dump()) for item in body.media]
        session.add(entry)
        session.flush()
        data = entry.to_dict()
    return web.json_response(data, status=201)
