"""Configuration management for Portfolio.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "portfolio.toml"
DEFAULT_DATABASE_URL = "sqlite:///portfolio.db"
SQLITE_PREFIX = "sqlite:///"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class DatabaseConfig:
    """Database configuration."""

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False


@dataclass
class AdminConfig:
    """Admin API configuration."""

    token: str | None = None


@dataclass
class GitHubConfig:
    """GitHub API configuration."""

    api_url: str = "https://api.github.com"
    timeout: float = 10.0


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    admin: AdminConfig = field(default_factory=AdminConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for portfolio.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls()

        return cls._load_from_file(discovered_path)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        database_url: str | None = None,
    ) -> Config:
        """Return a copy with CLI overrides applied.

        Args:
            host: Override server host
            port: Override server port
            database_url: Override database URL

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                server,
                host=host if host is not None else server.host,
                port=port if port is not None else server.port,
            )

        database = self.database
        if database_url is not None:
            database = replace(database, url=database_url)

        return replace(self, server=server, database=database)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        return cls(
            server=cls._parse_server(data.get("server")),
            database=cls._parse_database(data.get("database"), path.parent),
            admin=cls._parse_admin(data.get("admin")),
            github=cls._parse_github(data.get("github")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_database(cls, data: object, config_dir: Path) -> DatabaseConfig:
        """Parse database configuration section.

        Relative SQLite paths are resolved against the config directory.

        Args:
            data: Raw database section data
            config_dir: Directory containing config file

        Returns:
            DatabaseConfig instance
        """
        if data is None:
            return DatabaseConfig(url=_resolve_sqlite_url(DEFAULT_DATABASE_URL, config_dir))

        if not isinstance(data, dict):
            raise ValueError("database section must be a dictionary")

        url = data.get("url", DEFAULT_DATABASE_URL)
        if not isinstance(url, str):
            raise ValueError("database.url must be a string")

        echo = data.get("echo", False)
        if not isinstance(echo, bool):
            raise ValueError("database.echo must be a boolean")

        return DatabaseConfig(url=_resolve_sqlite_url(url, config_dir), echo=echo)

    @classmethod
    def _parse_admin(cls, data: object) -> AdminConfig:
        if data is None:
            return AdminConfig()

        if not isinstance(data, dict):
            raise ValueError("admin section must be a dictionary")

        token = data.get("token")
        if token is not None and not isinstance(token, str):
            raise ValueError("admin.token must be a string")

        return AdminConfig(token=token or None)

    @classmethod
    def _parse_github(cls, data: object) -> GitHubConfig:
        if data is None:
            return GitHubConfig()

        if not isinstance(data, dict):
            raise ValueError("github section must be a dictionary")

        api_url = data.get("api_url", "https://api.github.com")
        if not isinstance(api_url, str):
            raise ValueError("github.api_url must be a string")

        timeout = data.get("timeout", 10.0)
        if not isinstance(timeout, int | float) or isinstance(timeout, bool):
            raise ValueError("github.timeout must be a number")

        return GitHubConfig(api_url=api_url, timeout=float(timeout))


def _resolve_sqlite_url(url: str, config_dir: Path) -> str:
    if not url.startswith(SQLITE_PREFIX):
        return url
    db_path = url[len(SQLITE_PREFIX):]
    if not db_path or db_path == ":memory:" or Path(db_path).is_absolute():
        return url
    return f"{SQLITE_PREFIX}{config_dir / db_path}"
