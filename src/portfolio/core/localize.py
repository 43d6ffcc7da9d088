"""Read-time localization overlay.

Entities store base-language fields (``title``) next to optional French
counterparts (``title_fr``). Under the French locale the translation wins when
present and non-empty; under the base locale it is ignored. Inputs are never
mutated.
"""

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from portfolio.core.pages import PageSnapshot
from portfolio.core.types import Locale

DEFAULT_LOCALE: Locale = "en"
TRANSLATED_LOCALE: Locale = "fr"
SUPPORTED_LOCALES: tuple[Locale, ...] = (DEFAULT_LOCALE, TRANSLATED_LOCALE)
TRANSLATION_SUFFIX = "_fr"

PROJECT_FIELDS = ("title", "description", "excerpt", "content")
PAGE_FIELDS = ("title", "content")
CATEGORY_FIELDS = ("name",)
EXPERIENCE_FIELDS = ("role", "description")
MEDIA_FIELDS = ("caption",)

T = TypeVar("T")


def normalize_locale(value: str | None) -> Locale:
    """Map a requested locale (``fr``, ``fr-CA``, ``EN``...) to a supported one."""
    if value and value.strip().lower().split("-")[0] == TRANSLATED_LOCALE:
        return TRANSLATED_LOCALE
    return DEFAULT_LOCALE


def resolve(base: T, translated: T | None, locale: str) -> T:
    """Pick the translated value under the French locale when it is non-empty."""
    if locale != TRANSLATED_LOCALE:
        return base
    return translated if translated else base


def localize_fields(
    data: Mapping[str, Any],
    fields: Iterable[str],
    locale: str,
) -> dict[str, Any]:
    """Return a copy of data with each listed field resolved for locale."""
    result = dict(data)
    if locale != TRANSLATED_LOCALE:
        return result
    for name in fields:
        result[name] = resolve(data.get(name), data.get(f"{name}{TRANSLATION_SUFFIX}"), locale)
    return result


def localize_project(data: Mapping[str, Any], locale: str) -> dict[str, Any]:
    """Localize a serialized project, including its pages when present."""
    result = localize_fields(data, PROJECT_FIELDS, locale)
    pages = data.get("pages")
    if isinstance(pages, list):
        result["pages"] = [localize_fields(page, PAGE_FIELDS, locale) for page in pages]
    return result


def localize_category(data: Mapping[str, Any], locale: str) -> dict[str, Any]:
    """Localize a serialized skill category."""
    return localize_fields(data, CATEGORY_FIELDS, locale)


def localize_experience(data: Mapping[str, Any], locale: str) -> dict[str, Any]:
    """Localize a serialized experience entry and its media captions."""
    result = localize_fields(data, EXPERIENCE_FIELDS, locale)
    media = data.get("media")
    if isinstance(media, list):
        result["media"] = [localize_fields(item, MEDIA_FIELDS, locale) for item in media]
    return result


def localize_page(page: PageSnapshot, locale: str) -> PageSnapshot:
    """Return a page snapshot whose title and content match locale."""
    if locale != TRANSLATED_LOCALE:
        return page
    return dataclasses.replace(
        page,
        title=resolve(page.title, page.title_fr, locale),
        content=resolve(page.content, page.content_fr, locale),
    )
