"""Contact messages and testimonials.

Both accept public submissions guarded by the spam checks; listing contact
messages and moderating either requires the admin token.
"""

import logging

from aiohttp import web
from sqlalchemy import select

from portfolio.api.common import (
    json_error,
    parse_body,
    query_flag,
    read_json,
    require_admin,
    validate,
)
from portfolio.api.schemas import ContactCreate, ContactUpdate, TestimonialCreate, TestimonialUpdate
from portfolio.app_keys import database_key
from portfolio.db.models import ContactMessage, Testimonial
from portfolio.services.errors import NotFoundError
from portfolio.services.spam import SpamError, check_spam, strip_spam_fields

logger = logging.getLogger(__name__)


def create_feedback_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/contacts", list_contacts),
        web.post("/api/contacts", submit_contact),
        web.put("/api/contacts/{id}", update_contact),
        web.get("/api/testimonials", list_testimonials),
        web.post("/api/testimonials", submit_testimonial),
        web.put("/api/testimonials/{id}", update_testimonial),
    ]


async def list_contacts(request: web.Request) -> web.Response:
    require_admin(request)
    with request.app[database_key].session() as session:
        messages = session.scalars(select(ContactMessage).order_by(ContactMessage.created_at.desc()))
        data = [message.to_dict() for message in messages]
    return web.json_response(data)


async def submit_contact(request: web.Request) -> web.Response:
    raw = await read_json(request)
    try:
        check_spam(raw)
    except SpamError as e:
        return json_error(str(e), 400)
    body = validate(ContactCreate, strip_spam_fields(raw))

    with request.app[database_key].session() as session:
        message = ContactMessage(**body.model_dump(), status="unread")
        session.add(message)
        session.flush()
        data = message.to_dict()
    logger.info("Contact message received from %s", body.email)
    return web.json_response(data, status=201)


async def update_contact(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, ContactUpdate)
    with request.app[database_key].session() as session:
        message = session.get(ContactMessage, request.match_info["id"])
        if message is None:
            raise NotFoundError("Contact message not found")
        message.status = body.status
        data = message.to_dict()
    return web.json_response(data)


async def list_testimonials(request: web.Request) -> web.Response:
    show_all = query_flag(request, "all")
    if show_all:
        require_admin(request)
    stmt = select(Testimonial).order_by(Testimonial.created_at.desc())
    if not show_all:
        stmt = stmt.where(Testimonial.status == "approved")
    with request.app[database_key].session() as session:
        data = [item.to_dict() for item in session.scalars(stmt)]
    return web.json_response(data)


async def submit_testimonial(request: web.Request) -> web.Response:
    raw = await read_json(request)
    try:
        check_spam(raw)
    except SpamError as e:
        return json_error(str(e), 400)
    body = validate(TestimonialCreate, strip_spam_fields(raw))

    with request.app[database_key].session() as session:
        testimonial = Testimonial(**body.model_dump(), status="pending")
        session.add(testimonial)
        session.flush()
        data = testimonial.to_dict()
    return web.json_response(data, status=201)


async def update_testimonial(request: web.Request) -> web.Response:
    require_admin(request)
    body = await parse_body(request, TestimonialUpdate)
    with request.app[database_key].session() as session:
        testimonial = session.get(Testimonial, request.match_info["id"])
        if testimonial is None:
            raise NotFoundError("Testimonial not found")
        for name, value in body.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(testimonial, name, value)
        data = testimonial.to_dict()
    return web.json_response(data)
