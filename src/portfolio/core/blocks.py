"""Content block model.

A page body is an ordered list of typed blocks stored as a compact JSON
array. Each block is ``{"id": ..., "type": ..., "props": {...}}`` where the
shape of ``props`` depends on ``type``.
"""

import copy
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

BlockType = Literal[
    "heading",
    "paragraph",
    "image",
    "divider",
    "code",
    "callout",
    "stats",
    "features",
]

BLOCK_TYPES: tuple[BlockType, ...] = (
    "heading",
    "paragraph",
    "image",
    "divider",
    "code",
    "callout",
    "stats",
    "features",
)


class HeadingProps(TypedDict):
    level: Literal[1, 2, 3]
    text: str


class ParagraphProps(TypedDict):
    html: str


class ImageProps(TypedDict):
    src: str
    alt: str
    caption: str
    size: Literal["full", "medium", "small"]


class DividerProps(TypedDict):
    style: Literal["solid", "dashed", "dots"]


class CodeProps(TypedDict):
    language: str
    code: str


class CalloutProps(TypedDict):
    variant: Literal["info", "warning", "success", "danger"]
    title: str
    body: str


class StatItem(TypedDict):
    value: str
    label: str


class StatsProps(TypedDict):
    items: list[StatItem]


class FeatureItem(TypedDict):
    icon: str
    title: str
    description: str


class FeaturesProps(TypedDict):
    items: list[FeatureItem]


BLOCK_DEFAULTS: dict[BlockType, dict[str, Any]] = {
    "heading": {"level": 2, "text": "Section Heading"},
    "paragraph": {"html": "<p>Write something here...</p>"},
    "image": {"src": "", "alt": "", "caption": "", "size": "full"},
    "divider": {"style": "solid"},
    "code": {"language": "typescript", "code": "// Your code here"},
    "callout": {"variant": "info", "title": "Note", "body": "Something worth highlighting."},
    "stats": {"items": [{"value": "100+", "label": "Users"}, {"value": "2 yrs", "label": "In production"}]},
    "features": {
        "items": [
            {"icon": "⚡", "title": "Fast", "description": "Built for speed from the ground up."},
            {"icon": "🔒", "title": "Secure", "description": "Security-first design."},
        ],
    },
}

BLOCK_LABELS: dict[BlockType, str] = {
    "heading": "Heading",
    "paragraph": "Paragraph",
    "image": "Image",
    "divider": "Divider",
    "code": "Code Block",
    "callout": "Callout",
    "stats": "Stats Grid",
    "features": "Feature List",
}


@dataclass
class Block:
    """One renderable unit of page content."""

    id: str
    type: str
    props: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "type": self.type, "props": self.props}


def create_block(block_type: BlockType) -> Block:
    """Create a block with a fresh id and default props.

    Raises:
        ValueError: If block_type is not a known block type
    """
    if block_type not in BLOCK_DEFAULTS:
        raise ValueError(f"Unknown block type: {block_type}")
    return Block(
        id=uuid.uuid4().hex,
        type=block_type,
        props=copy.deepcopy(BLOCK_DEFAULTS[block_type]),
    )


def parse_blocks(content: str | None) -> list[Block] | None:
    """Parse stored content into blocks.

    Args:
        content: Serialized block array

    Returns:
        List of blocks, or None when content is empty, not JSON, or not an
        array. Array elements that are not block objects are skipped.
    """
    if not content or not content.lstrip().startswith("["):
        return None
    try:
        data = json.loads(content)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, list):
        return None

    blocks: list[Block] = []
    for item in data:
        block = _block_from_dict(item)
        if block is not None:
            blocks.append(block)
    return blocks


def serialize_blocks(blocks: list[Block]) -> str:
    """Serialize blocks to their stored compact JSON form."""
    return json.dumps(
        [block.to_dict() for block in blocks],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def migrate_html_to_blocks(html: str) -> list[Block]:
    """Wrap legacy HTML content in a single paragraph block."""
    return [Block(id=uuid.uuid4().hex, type="paragraph", props={"html": html})]


def load_blocks(content: str | None) -> list[Block]:
    """Return blocks ready for rendering.

    Stored block arrays are parsed; any other non-blank content is treated as
    legacy HTML; everything else yields no blocks.
    """
    blocks = parse_blocks(content)
    if blocks is not None:
        return blocks
    if content and content.strip() and not content.lstrip().startswith("["):
        return migrate_html_to_blocks(content)
    return []


def _block_from_dict(item: object) -> Block | None:
    if not isinstance(item, dict):
        return None
    block_type = item.get("type")
    if not isinstance(block_type, str):
        return None
    block_id = item.get("id")
    props = item.get("props")
    return Block(
        id=block_id if isinstance(block_id, str) else "",
        type=block_type,
        props=props if isinstance(props, dict) else {},
    )
