"""Sidebar navigation and breadcrumbs.

Navigation is a view layer over the page tree: an "Overview" link for the
start page followed by collapsible chapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypedDict

from portfolio.core.pages import PageSnapshot
from portfolio.core.tree import PageTree, TreeNode
from portfolio.core.types import URLPath

PROJECTS_PATH = URLPath("/projects")


class NavItemDict(TypedDict, total=False):
    """Dictionary representation of a navigation item."""

    id: str
    title: str
    path: str
    level: int
    active: bool
    children: list[NavItemDict]


class SidebarDict(TypedDict):
    """Dictionary representation of the sidebar."""

    overview: NavItemDict | None
    chapters: list[NavItemDict]


@dataclass
class NavItem:
    """Navigation item with children for UI tree."""

    id: str
    title: str
    path: URLPath
    level: int
    active: bool = False
    children: list[NavItem] = field(default_factory=list)

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NavItemDict = {
            "id": self.id,
            "title": self.title,
            "path": self.path,
            "level": self.level,
            "active": self.active,
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class Sidebar:
    """Project sidebar: overview link plus chapters."""

    overview: NavItem | None
    chapters: list[NavItem]

    def to_dict(self) -> SidebarDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "overview": self.overview.to_dict() if self.overview else None,
            "chapters": [chapter.to_dict() for chapter in self.chapters],
        }


@dataclass(frozen=True)
class BreadcrumbItem:
    """Breadcrumb navigation item."""

    title: str
    path: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "path": self.path}


def page_href(project_slug: str, page: PageSnapshot, start_id: str | None) -> URLPath:
    """Public path of a page; the tree's start page is the project root.

    Only the page chosen as start by the tree maps to the root. Other pages
    still flagged as start pages keep their own path.
    """
    if start_id is not None and page.id == start_id:
        return URLPath(f"{PROJECTS_PATH}/{project_slug}")
    return URLPath(f"{PROJECTS_PATH}/{project_slug}/{page.slug}")


def build_sidebar(
    tree: PageTree,
    project_slug: str,
    current_page_id: str | None = None,
) -> Sidebar:
    """Build sidebar navigation from a page tree.

    Args:
        tree: Page tree of the project
        project_slug: Slug used to build page paths
        current_page_id: Page to mark as active

    Returns:
        Sidebar with the overview entry and nested chapters
    """
    overview = None
    start = tree.start_node
    if start is not None:
        overview = NavItem(
            id=start.page.id,
            title="Overview",
            path=page_href(project_slug, start.page, tree.start_id),
            level=0,
            active=start.page.id == current_page_id,
        )

    chapters = [
        _build_nav_item(tree, node, project_slug, current_page_id)
        for node in tree.chapters
    ]
    return Sidebar(overview=overview, chapters=chapters)


def build_breadcrumbs(
    tree: PageTree,
    project_title: str,
    project_slug: str,
    current_page_id: str | None,
) -> list[BreadcrumbItem]:
    """Build breadcrumbs for a page.

    Returns "Projects" and the project itself followed by ancestor chapters.
    The current page is not included. The start page is represented by the
    project entry.
    """
    breadcrumbs = [
        BreadcrumbItem(title="Projects", path=PROJECTS_PATH),
        BreadcrumbItem(title=project_title, path=f"{PROJECTS_PATH}/{project_slug}"),
    ]
    if current_page_id is None:
        return breadcrumbs

    for ancestor in tree.get_ancestors(current_page_id):
        if ancestor.page.id == tree.start_id:
            continue
        breadcrumbs.append(
            BreadcrumbItem(
                title=ancestor.page.title,
                path=page_href(project_slug, ancestor.page, tree.start_id),
            )
        )
    return breadcrumbs


def _build_nav_item(
    tree: PageTree,
    node: TreeNode,
    project_slug: str,
    current_page_id: str | None,
) -> NavItem:
    """Recursively build NavItem from tree node."""
    return NavItem(
        id=node.page.id,
        title=node.page.title,
        path=page_href(project_slug, node.page, tree.start_id),
        level=node.level,
        active=node.page.id == current_page_id,
        children=[
            _build_nav_item(tree, child, project_slug, current_page_id)
            for child in tree.get_children(node.page.id)
        ],
    )
