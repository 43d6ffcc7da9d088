"""Tests for sidebar navigation, breadcrumbs and pagination."""

import pytest

from portfolio.core.navigation import build_breadcrumbs, build_sidebar, page_href
from portfolio.core.pagination import Pagination, paginate
from portfolio.core.tree import build_page_tree


@pytest.fixture
def demo_tree(make_page):
    """Pages A (start) -> B -> C."""
    return build_page_tree(
        [
            make_page("a", order=0, start=True, targets=["b"]),
            make_page("b", order=1, targets=["c"]),
            make_page("c", order=2),
        ]
    )


class TestBuildSidebar:
    """Tests for build_sidebar function."""

    def test__start_page__renders_as_overview(self, demo_tree) -> None:
        """Expose the start page as an Overview link to the project root."""
        sidebar = build_sidebar(demo_tree, "demo")

        assert sidebar.overview is not None
        assert sidebar.overview.title == "Overview"
        assert sidebar.overview.path == "/projects/demo"
        assert sidebar.overview.level == 0

    def test__chapters__nest_children(self, demo_tree) -> None:
        """Render chapter B with nested child C."""
        sidebar = build_sidebar(demo_tree, "demo")

        assert [item.id for item in sidebar.chapters] == ["b"]
        chapter = sidebar.chapters[0]
        assert chapter.path == "/projects/demo/b"
        assert [child.id for child in chapter.children] == ["c"]
        assert chapter.children[0].level == 2

    def test__current_page__is_marked_active(self, demo_tree) -> None:
        """Mark only the current page as active."""
        sidebar = build_sidebar(demo_tree, "demo", current_page_id="c")

        assert sidebar.overview.active is False
        assert sidebar.chapters[0].active is False
        assert sidebar.chapters[0].children[0].active is True

    def test__no_start_page__has_no_overview(self, make_page) -> None:
        """Omit the overview when the project has no start page."""
        tree = build_page_tree([make_page("x"), make_page("y", order=1)])

        sidebar = build_sidebar(tree, "demo")

        assert sidebar.overview is None
        assert [item.id for item in sidebar.chapters] == ["x", "y"]

    def test__to_dict__omits_empty_children(self, demo_tree) -> None:
        """Serialize children only where present."""
        data = build_sidebar(demo_tree, "demo").to_dict()

        assert "children" not in data["overview"]
        assert data["chapters"][0]["children"][0] == {
            "id": "c",
            "title": "C",
            "path": "/projects/demo/c",
            "level": 2,
            "active": False,
        }


class TestBuildBreadcrumbs:
    """Tests for build_breadcrumbs function."""

    def test__nested_page__includes_ancestor_chapters(self, demo_tree) -> None:
        """Return Projects, the project and chapter B for page C."""
        crumbs = build_breadcrumbs(demo_tree, "Demo", "demo", "c")

        assert [item.to_dict() for item in crumbs] == [
            {"title": "Projects", "path": "/projects"},
            {"title": "Demo", "path": "/projects/demo"},
            {"title": "B", "path": "/projects/demo/b"},
        ]

    def test__chapter__stops_at_project(self, demo_tree) -> None:
        """A chapter's breadcrumbs end at the project."""
        crumbs = build_breadcrumbs(demo_tree, "Demo", "demo", "b")

        assert [item.title for item in crumbs] == ["Projects", "Demo"]

    def test__unknown_page__returns_project_trail(self, demo_tree) -> None:
        """Fall back to the project trail for unknown pages."""
        crumbs = build_breadcrumbs(demo_tree, "Demo", "demo", "missing")

        assert len(crumbs) == 2


class TestPageHref:
    """Tests for page_href function."""

    def test__regular_page__uses_slug(self, make_page) -> None:
        assert page_href("demo", make_page("setup"), "intro") == "/projects/demo/setup"

    def test__start_page__uses_project_root(self, make_page) -> None:
        assert page_href("demo", make_page("intro", start=True), "intro") == "/projects/demo"

    def test__flagged_page_not_chosen_as_start__uses_slug(self, make_page) -> None:
        assert page_href("demo", make_page("extra", start=True), "intro") == "/projects/demo/extra"
        assert page_href("demo", make_page("extra", start=True), None) == "/projects/demo/extra"


class TestMultipleStartPages:
    """Navigation when more than one page carries the start flag."""

    @pytest.fixture
    def tree(self, make_page):
        """A and B both flagged as start; B links to C."""
        return build_page_tree(
            [
                make_page("a", order=0, start=True),
                make_page("b", order=1, start=True, targets=["c"]),
                make_page("c", order=2),
            ]
        )

    def test__demoted_start_page__keeps_own_path(self, tree) -> None:
        """Only the chosen start page maps to the project root."""
        sidebar = build_sidebar(tree, "demo")

        assert sidebar.overview.id == "a"
        assert sidebar.overview.path == "/projects/demo"
        assert [(item.id, item.path) for item in sidebar.chapters] == [("b", "/projects/demo/b")]

    def test__demoted_start_page__appears_in_breadcrumbs(self, tree) -> None:
        crumbs = build_breadcrumbs(tree, "Demo", "demo", "c")

        assert [item.to_dict() for item in crumbs][-1] == {"title": "B", "path": "/projects/demo/b"}

    def test__serialized_nodes__flag_only_chosen_start(self, tree) -> None:
        assert [node["is_start_page"] for node in tree.to_list()] == [True, False, False]


class TestPaginate:
    """Tests for paginate function."""

    def test__middle_page__has_both_neighbours(self, demo_tree) -> None:
        """Pagination from B yields previous A and next C."""
        pagination = paginate(demo_tree.nodes, "b")

        assert pagination.previous.page.id == "a"
        assert pagination.next.page.id == "c"

    def test__first_page__has_no_previous(self, demo_tree) -> None:
        pagination = paginate(demo_tree.nodes, "a")

        assert pagination.previous is None
        assert pagination.next.page.id == "b"

    def test__last_page__has_no_next(self, demo_tree) -> None:
        pagination = paginate(demo_tree.nodes, "c")

        assert pagination.previous.page.id == "b"
        assert pagination.next is None

    def test__unknown_page__returns_empty_pagination(self, demo_tree) -> None:
        """An unknown id is not an error."""
        assert paginate(demo_tree.nodes, "missing") == Pagination()
        assert paginate([], None) == Pagination()

    def test__linear_chain__is_symmetric(self, make_page) -> None:
        """Each page in a chain sees its predecessor and successor."""
        slugs = [f"p{i}" for i in range(1, 6)]
        pages = [
            make_page(slug, order=i, targets=[slugs[i + 1]] if i + 1 < len(slugs) else [])
            for i, slug in enumerate(slugs)
        ]
        nodes = build_page_tree(pages).nodes

        for i, slug in enumerate(slugs):
            pagination = paginate(nodes, slug)
            expected_previous = slugs[i - 1] if i > 0 else None
            expected_next = slugs[i + 1] if i + 1 < len(slugs) else None
            assert (pagination.previous.page.id if pagination.previous else None) == expected_previous
            assert (pagination.next.page.id if pagination.next else None) == expected_next

    def test__to_dict__serializes_neighbours(self, demo_tree) -> None:
        data = paginate(demo_tree.nodes, "a").to_dict()

        assert data["previous"] is None
        assert data["next"]["id"] == "b"
