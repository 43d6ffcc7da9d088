"""Tests for configuration loading."""

from pathlib import Path

import pytest

from portfolio.config import Config


class TestConfigLoad:
    """Tests for Config.load."""

    def test__explicit_file__parses_all_sections(self, tmp_path: Path) -> None:
        config_file = tmp_path / "portfolio.toml"
        config_file.write_text(
            "[server]\n"
            'host = "0.0.0.0"\n'
            "port = 9000\n"
            "[database]\n"
            'url = "postgresql://localhost/portfolio"\n'
            "echo = true\n"
            "[admin]\n"
            'token = "secret"\n'
            "[github]\n"
            'api_url = "https://github.example.com/api"\n'
            "timeout = 5\n"
        )

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9000
        assert config.database.url == "postgresql://localhost/portfolio"
        assert config.database.echo is True
        assert config.admin.token == "secret"
        assert config.github.api_url == "https://github.example.com/api"
        assert config.github.timeout == 5.0
        assert config.config_path == config_file

    def test__relative_sqlite_path__resolves_against_config_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / "portfolio.toml"
        config_file.write_text('[database]\nurl = "sqlite:///data/site.db"\n')

        config = Config.load(config_file)

        assert config.database.url == f"sqlite:///{tmp_path / 'data' / 'site.db'}"

    def test__missing_sections__use_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "portfolio.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.port == 8080
        assert config.admin.token is None
        assert config.database.url == f"sqlite:///{tmp_path / 'portfolio.db'}"

    def test__missing_explicit_file__raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "nope.toml")

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('[server]\nport = "80"\n', "server.port must be an integer"),
            ("[server]\nhost = 1\n", "server.host must be a string"),
            ("[database]\nurl = 1\n", "database.url must be a string"),
            ('[database]\necho = "yes"\n', "database.echo must be a boolean"),
            ("[admin]\ntoken = 42\n", "admin.token must be a string"),
            ('[github]\ntimeout = "slow"\n', "github.timeout must be a number"),
            ('server = "x"\n', "server section must be a dictionary"),
        ],
    )
    def test__invalid_values__raise_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        config_file = tmp_path / "portfolio.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)

    def test__discovery__finds_config_in_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "portfolio.toml").write_text("[server]\nport = 7000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.server.port == 7000
        assert config.config_path.resolve() == (tmp_path / "portfolio.toml").resolve()

    def test__no_config_anywhere__returns_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        if any((parent / "portfolio.toml").exists() for parent in tmp_path.parents):
            pytest.skip("portfolio.toml present above tmp_path")

        config = Config.load()

        assert config.config_path is None
        assert config.server.host == "127.0.0.1"


class TestWithOverrides:
    """Tests for Config.with_overrides."""

    def test__overrides__return_new_config(self) -> None:
        original = Config()

        updated = original.with_overrides(port=9999, database_url="sqlite:///:memory:")

        assert updated.server.port == 9999
        assert updated.server.host == "127.0.0.1"
        assert updated.database.url == "sqlite:///:memory:"
        assert original.server.port == 8080

    def test__no_overrides__keeps_values(self) -> None:
        original = Config()

        assert original.with_overrides() == original
