"""Helpers shared by API handlers: body parsing, validation and admin checks."""

import hmac
import json
from typing import Any, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from portfolio.app_keys import admin_token_key
from portfolio.core.localize import normalize_locale
from portfolio.core.types import Locale
from portfolio.services.errors import ServiceError

M = TypeVar("M", bound=BaseModel)


class UnauthorizedError(ServiceError):
    """Request lacks a valid admin token."""

    status = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class InvalidBodyError(ServiceError):
    """Request body is not a JSON object."""

    def __init__(self) -> None:
        super().__init__("Invalid JSON body")


def json_error(message: str, status: int, **extra: Any) -> web.Response:
    return web.json_response({"error": message, **extra}, status=status)


def validation_error_response(exc: ValidationError) -> web.Response:
    return json_error(
        "Validation failed",
        400,
        details=json.loads(exc.json(include_url=False)),
    )


async def read_json(request: web.Request) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Raises:
        InvalidBodyError: If the body is not valid JSON or not an object
    """
    try:
        data = await request.json()
    except ValueError as e:
        raise InvalidBodyError() from e
    if not isinstance(data, dict):
        raise InvalidBodyError()
    return data


def validate(model: type[M], data: Any) -> M:
    """Validate data against a request model; errors propagate as ValidationError."""
    return model.model_validate(data)


async def parse_body(request: web.Request, model: type[M]) -> M:
    return validate(model, await read_json(request))


def is_admin(request: web.Request) -> bool:
    """Check the ``Authorization: Bearer`` header against the admin token."""
    expected = request.app[admin_token_key]
    if not expected:
        return False
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not credentials:
        return False
    return hmac.compare_digest(credentials.strip().encode(), expected.encode())


def require_admin(request: web.Request) -> None:
    if not is_admin(request):
        raise UnauthorizedError()


def request_locale(request: web.Request) -> Locale:
    return normalize_locale(request.query.get("locale"))


def query_flag(request: web.Request, name: str) -> bool:
    return request.query.get(name, "").lower() in ("1", "true", "yes")
