"""Slug helpers shared by validation and anchor generation."""

import re

SLUG_RE = re.compile(r"^[a-z0-9-]+$")

_NON_WORD_RE = re.compile(r"[^\w\s-]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")
_ANCHOR_RE = re.compile(r"[^a-z0-9]+")


def generate_slug(text: str) -> str:
    """Generate a URL-friendly slug from free text."""
    slug = _NON_WORD_RE.sub("", text.lower().strip())
    slug = _SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")


def anchor_id(text: str) -> str:
    """Derive an in-page anchor from heading text."""
    return _ANCHOR_RE.sub("-", text.lower()).strip("-")
