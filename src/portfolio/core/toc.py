"""Table of contents extraction from heading blocks."""

from dataclasses import dataclass
from typing import TypedDict

from portfolio.core.blocks import Block
from portfolio.core.slugs import anchor_id

FALLBACK_ANCHOR = "section"


class TocEntryDict(TypedDict):
    """Dictionary representation of a ToC entry."""

    level: int
    title: str
    id: str
    block_id: str


@dataclass(frozen=True)
class TocEntry:
    """Outline entry pointing at a heading block."""

    level: int
    title: str
    id: str
    block_id: str

    def to_dict(self) -> TocEntryDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "level": self.level,
            "title": self.title,
            "id": self.id,
            "block_id": self.block_id,
        }


def extract_toc(blocks: list[Block] | None) -> list[TocEntry]:
    """Build the in-page outline for a block sequence.

    Anchors are derived from heading text. Repeated anchors get an occurrence
    suffix (``intro``, ``intro-1``, ``intro-2``) so every entry is unique
    within the page. Headings without text are skipped.

    Args:
        blocks: Parsed blocks; None is treated as an empty page

    Returns:
        ToC entries in document order
    """
    if not blocks:
        return []

    entries: list[TocEntry] = []
    used: set[str] = set()
    occurrences: dict[str, int] = {}

    for block in blocks:
        if block.type != "heading":
            continue
        text = block.props.get("text")
        if not isinstance(text, str) or not text.strip():
            continue

        base = anchor_id(text) or FALLBACK_ANCHOR
        anchor = base
        while anchor in used:
            occurrences[base] = occurrences.get(base, 0) + 1
            anchor = f"{base}-{occurrences[base]}"
        used.add(anchor)

        entries.append(
            TocEntry(
                level=_heading_level(block.props.get("level")),
                title=text,
                id=anchor,
                block_id=block.id,
            )
        )

    return entries


def _heading_level(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 3:
        return value
    return 2
