"""Tests for CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from portfolio.cli import cli
from portfolio.db.database import Database
from portfolio.services import pages as page_service
from portfolio.services import projects as project_service


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "portfolio.toml"
    path.write_text('[database]\nurl = "sqlite:///site.db"\n')
    return path


def _seed(tmp_path: Path) -> None:
    """Project demo: intro (start) -> setup -> usage, plus an island faq."""
    database = Database(f"sqlite:///{tmp_path / 'site.db'}")
    database.create_all()
    with database.session() as session:
        project = project_service.create_project(
            session, {"slug": "demo", "title": "Demo", "title_fr": "Démo"}
        )
        ids = {}
        for order, slug in enumerate(("intro", "setup", "usage", "faq")):
            page = page_service.create_page(
                session, project.id, slug=slug, title=slug.capitalize(), order=order
            )
            ids[slug] = page.id
        page_service.create_connection(session, ids["intro"], ids["setup"])
        page_service.create_connection(session, ids["setup"], ids["usage"])
    database.dispose()


class TestInitDbCommand:
    """Tests for the init-db command."""

    def test__creates_database_file(self, tmp_path: Path, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["init-db", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Database initialized" in result.output
        assert (tmp_path / "site.db").exists()

    def test__invalid_config__exits_with_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "portfolio.toml"
        config_file.write_text("[database]\nurl = 1\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["init-db", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "database.url must be a string" in result.output


class TestTreeCommand:
    """Tests for the tree command."""

    def test__prints_indented_tree(self, tmp_path: Path, config_file: Path) -> None:
        """Start page first, chapters at level 1, nested pages deeper."""
        _seed(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["tree", "demo", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Demo",
            "- Intro [intro] *",
            "  - Setup [setup]",
            "    - Usage [usage]",
            "  - Faq [faq]",
        ]

    def test__french_locale__uses_translated_title(
        self, tmp_path: Path, config_file: Path
    ) -> None:
        _seed(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["tree", "demo", "-c", str(config_file), "-l", "fr"])

        assert result.output.splitlines()[0] == "Démo"

    def test__project_without_pages__says_so(self, tmp_path: Path, config_file: Path) -> None:
        database = Database(f"sqlite:///{tmp_path / 'site.db'}")
        database.create_all()
        with database.session() as session:
            project_service.create_project(session, {"slug": "empty", "title": "Empty"})
        database.dispose()

        runner = CliRunner()
        result = runner.invoke(cli, ["tree", "empty", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "(no pages)" in result.output

    def test__unknown_project__exits_with_error(self, tmp_path: Path, config_file: Path) -> None:
        Database(f"sqlite:///{tmp_path / 'site.db'}").create_all()

        runner = CliRunner()
        result = runner.invoke(cli, ["tree", "missing", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Project not found" in result.output
