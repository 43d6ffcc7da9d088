"""Previous/next sequencing over the flattened page tree."""

from collections.abc import Sequence
from dataclasses import dataclass

from portfolio.core.tree import TreeNode, TreeNodeDict


@dataclass(frozen=True)
class Pagination:
    """Neighbours of the current page in reading order."""

    previous: TreeNode | None = None
    next: TreeNode | None = None

    def to_dict(self) -> dict[str, TreeNodeDict | None]:
        """Convert to dictionary for JSON serialization."""
        return {
            "previous": self.previous.to_dict() if self.previous else None,
            "next": self.next.to_dict() if self.next else None,
        }


def paginate(nodes: Sequence[TreeNode], current_page_id: str | None) -> Pagination:
    """Find the nodes around the current page.

    Args:
        nodes: Tree nodes in reading order
        current_page_id: Id of the page being viewed

    Returns:
        Pagination with absent neighbours set to None. An unknown page id
        yields an empty Pagination.
    """
    index = next(
        (i for i, node in enumerate(nodes) if node.page.id == current_page_id),
        None,
    )
    if index is None:
        return Pagination()

    previous = nodes[index - 1] if index > 0 else None
    following = nodes[index + 1] if index < len(nodes) - 1 else None
    return Pagination(previous=previous, next=following)
