"""Page tree builder.

Reduces the directed connection graph of a project's pages to the hierarchy
shown in the sidebar: the start page (level 0), top-level chapters (level 1)
and nested child pages (parent level + 1).

The graph is authored by hand and may contain self-loops, cycles, fan-in and
disconnected islands. The builder never raises for any of them; ambiguous or
unreachable pages degrade to top-level chapters.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypedDict

from portfolio.core.pages import PageSnapshot
from portfolio.core.types import PageId


class TreeNodeDict(TypedDict):
    """Dictionary representation of a tree node."""

    id: str
    slug: str
    title: str
    level: int
    parent_id: str | None
    is_start_page: bool


@dataclass(frozen=True)
class TreeNode:
    """Page placed in the navigation hierarchy."""

    page: PageSnapshot
    level: int
    parent_id: PageId | None = None

    def to_dict(self) -> TreeNodeDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.page.id,
            "slug": self.page.slug,
            "title": self.page.title,
            "level": self.level,
            "parent_id": self.parent_id,
            "is_start_page": self.level == 0,
        }


class PageTree:
    """Flattened page hierarchy with id lookups.

    Nodes are stored in reading order: the start page first, then every
    chapter followed by its descendants in depth-first pre-order. This order
    drives both the sidebar and previous/next pagination.
    """

    __slots__ = ("_children", "_index", "_nodes", "_start_id")

    def __init__(
        self,
        nodes: list[TreeNode],
        children: dict[PageId, list[PageId]],
        start_id: PageId | None,
    ) -> None:
        """Initialize page tree.

        Args:
            nodes: Nodes in reading order
            children: Child page ids for each page, sorted by page order
            start_id: Id of the start page, None if the project has none
        """
        self._nodes = nodes
        self._children = children
        self._start_id = start_id
        self._index = {node.page.id: i for i, node in enumerate(nodes)}

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> list[TreeNode]:
        """All nodes in reading order."""
        return list(self._nodes)

    @property
    def start_id(self) -> PageId | None:
        """Id of the page chosen as start page, None if the project has none."""
        return self._start_id

    @property
    def start_node(self) -> TreeNode | None:
        """Node of the start page, rendered as the project overview."""
        if self._start_id is None:
            return None
        return self.get_node(self._start_id)

    @property
    def chapters(self) -> list[TreeNode]:
        """Top-level chapters in sibling order."""
        return [node for node in self._nodes if node.level == 1]

    def get_node(self, page_id: str) -> TreeNode | None:
        """Get node by page id."""
        idx = self._index.get(PageId(page_id))
        if idx is None:
            return None
        return self._nodes[idx]

    def index_of(self, page_id: str) -> int | None:
        """Position of a page in reading order, None if absent."""
        return self._index.get(PageId(page_id))

    def get_children(self, page_id: str) -> list[TreeNode]:
        """Direct children of a page, empty if not found or no children."""
        return [
            self._nodes[self._index[child_id]]
            for child_id in self._children.get(PageId(page_id), [])
        ]

    def get_ancestors(self, page_id: str) -> list[TreeNode]:
        """Ancestors of a page, outermost first, excluding the page itself."""
        node = self.get_node(page_id)
        ancestors: list[TreeNode] = []
        while node is not None and node.parent_id is not None and len(ancestors) < len(self._nodes):
            node = self.get_node(node.parent_id)
            if node is not None:
                ancestors.append(node)
        ancestors.reverse()
        return ancestors

    def to_list(self) -> list[TreeNodeDict]:
        """Convert nodes to dictionaries for JSON serialization."""
        return [node.to_dict() for node in self._nodes]


def build_page_tree(pages: Sequence[PageSnapshot]) -> PageTree:
    """Build the navigation hierarchy for a project's pages.

    The parent of a page is, among the pages linking to it, the one with the
    lowest ``order`` (ties broken by input position). Links from the start
    page, and pages nobody links to, make a page a top-level chapter. Cycles
    in the resulting parent relation are broken by promoting the cycle's
    lowest-order page to a chapter.

    Args:
        pages: Pages of one project with outgoing connections populated

    Returns:
        PageTree with exactly one node per distinct page id
    """
    ranked = _rank_pages(pages)
    rank = {page.id: position for position, page in enumerate(ranked)}

    start = next((page for page in ranked if page.is_start_page), None)
    start_id = start.id if start is not None else None

    sources_by_target = _index_sources(ranked, rank)
    parents: dict[PageId, PageId | None] = {}
    for page in ranked:
        if page.id == start_id:
            parents[page.id] = None
            continue
        candidates = sources_by_target.get(page.id, [])
        parent = min(candidates, key=rank.__getitem__, default=None)
        parents[page.id] = None if parent == start_id else parent

    _break_cycles(ranked, parents, rank)

    children: dict[PageId, list[PageId]] = {page.id: [] for page in ranked}
    roots: list[PageId] = []
    for page in ranked:
        if page.id == start_id:
            continue
        parent = parents[page.id]
        if parent is None:
            roots.append(page.id)
        else:
            children[parent].append(page.id)

    by_id = {page.id: page for page in ranked}
    nodes: list[TreeNode] = []
    if start is not None:
        nodes.append(TreeNode(page=start, level=0))

    for root_id in roots:
        stack: list[tuple[PageId, int]] = [(root_id, 1)]
        while stack:
            page_id, level = stack.pop()
            nodes.append(TreeNode(page=by_id[page_id], level=level, parent_id=parents[page_id]))
            for child_id in reversed(children[page_id]):
                stack.append((child_id, level + 1))

    return PageTree(nodes, children, start_id)


def _rank_pages(pages: Sequence[PageSnapshot]) -> list[PageSnapshot]:
    """Sort pages by order, keeping input position for ties and first duplicates."""
    seen: set[PageId] = set()
    ranked: list[PageSnapshot] = []
    for _, page in sorted(enumerate(pages), key=lambda item: (item[1].order, item[0])):
        if page.id in seen:
            continue
        seen.add(page.id)
        ranked.append(page)
    return ranked


def _index_sources(
    pages: list[PageSnapshot],
    rank: dict[PageId, int],
) -> dict[PageId, list[PageId]]:
    """Map each target page id to the pages linking to it.

    Self-loops and connections to pages outside the set are ignored.
    """
    sources: dict[PageId, list[PageId]] = {}
    for page in pages:
        for target_id in page.target_ids:
            if target_id == page.id or target_id not in rank:
                continue
            bucket = sources.setdefault(target_id, [])
            if page.id not in bucket:
                bucket.append(page.id)
    return sources


def _break_cycles(
    pages: list[PageSnapshot],
    parents: dict[PageId, PageId | None],
    rank: dict[PageId, int],
) -> None:
    """Detach pages so that every parent chain ends at a chapter.

    Walks up from each page at most ``len(pages)`` steps. A walk that returns
    to a page already on its path has found a cycle; the lowest-order page of
    that cycle loses its parent.
    """
    settled: set[PageId] = set()
    limit = len(pages)

    for page in pages:
        path: list[PageId] = []
        on_path: set[PageId] = set()
        current: PageId | None = page.id
        while (
            current is not None
            and current not in settled
            and current not in on_path
            and len(path) <= limit
        ):
            path.append(current)
            on_path.add(current)
            current = parents[current]

        if current is not None and current in on_path:
            cycle = path[path.index(current):]
            head = min(cycle, key=rank.__getitem__)
            parents[head] = None
        elif current is not None and current not in settled:
            parents[page.id] = None

        settled.update(path)
