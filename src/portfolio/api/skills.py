"""Skill categories and skills endpoints."""

from aiohttp import web
from sqlalchemy import select

from portfolio.api.common import parse_body, request_locale, require_admin
from portfolio.api.schemas import CategoryCreate, ReorderRequest, SkillCreate
from portfolio.app_keys import database_key
from portfolio.core.localize import localize_category
from portfolio.db.models import Category, Skill
from portfolio.services.errors import NotFoundError
from portfolio.services.ordering import reorder


def create_skills_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/categories", list_categories),
        web.post("/api/categories", create_category),
        web.post("/api/categories/reorder", reorder_categories),
        web.get("/api/skills", list_skills),
        web.post("/api/skills", create_skill),
        web.post("/api/skills/reorder", reorder_skills),
    ]


async def list_categories(request: web.Request) -> web.Response:
    locale = request_locale(request)
    with request.app[database_key].session() as session:
        categories = session.scalars(select(Category).order_by(Category.order))
        data = []
        for category in categories:
            item = localize_category(category.to_dict(), locale)
            item["skills"] = [skill.to_dict() for skill in category.skills]
            data.append(item)
    return web.json_response(data)


async def create_category(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, CategoryCreate)
    with request.app[database_key].session() as session:
        category = Category(**body.model_dump())
        session.add(category)
        session.flush()
        data = category.to_dict()
    return web.json_response(data, status=201)


async def reorder_categories(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ReorderRequest)
    with request.app[database_key].session() as session:
        reorder(session, Category, body.ids)
    return web.json_response({"success": True})


async def list_skills(request: web.Request) -> web.Response:
    with request.app[database_key].session() as session:
        skills = session.scalars(select(Skill).order_by(Skill.order))
        data = [skill.to_dict() for skill in skills]
    return web.json_response(data)


async def create_skill(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, SkillCreate)
    with request.app[database_key].session() as session:
        if body.category_id is not None and session.get(Category, body.category_id) is None:
            raise NotFoundError("Category not found")
        skill = Skill(**body.model_dump())
        session.add(skill)
        session.flush()
        data = skill.to_dict()
    return web.json_response(data, status=201)


async def reorder_skills(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ReorderRequest)
    with request.app[database_key].session() as session:
        reorder(session, Skill, body.ids)
    return web.json_response({"success": True})
