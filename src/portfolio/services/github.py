"""GitHub repository statistics.

Repositories and their language byte counts are fetched from the GitHub REST
API on demand and cached in settings; public reads only see the cache.
"""

import asyncio
import json
import logging
from typing import Any, TypedDict
from urllib.parse import quote

import httpx
from sqlalchemy.orm import Session

from portfolio.services.errors import ConflictError, ServiceError
from portfolio.services.settings import get_setting, set_setting

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
USERNAME_KEY = "github_username"
TOKEN_KEY = "github_token"
CACHE_REPOS_KEY = "github_cache_repos"
CACHE_LANGUAGES_KEY = "github_cache_languages"
TOP_LANGUAGES = 10


class LanguageStatDict(TypedDict):
    """Byte share of one language."""

    language: str
    bytes: int
    percentage: float


class RepoDict(TypedDict):
    """Cached repository summary."""

    name: str
    description: str | None
    language: str | None
    html_url: str
    stars: int
    forks: int
    updated_at: str
    private: bool
    languages: list[str]
    language_stats: list[LanguageStatDict]


class GitHubStatsDict(TypedDict):
    repos: list[RepoDict]
    languages: list[LanguageStatDict]


class GitHubAPIError(ServiceError):
    """GitHub answered with an error status."""

    status = 502


class GitHubClient:
    """Async HTTP client for the GitHub REST API."""

    def __init__(self, client: httpx.AsyncClient, api_url: str = GITHUB_API_URL):
        """Initialize GitHub client.

        Args:
            client: httpx AsyncClient used for all requests
            api_url: GitHub API base URL
        """
        self.client = client
        self.api_url = api_url.rstrip("/")

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "portfolio",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def list_repos(self, username: str, token: str | None = None) -> list[dict[str, Any]]:
        """List repositories of a user, including private ones when authenticated.

        Raises:
            GitHubAPIError: If GitHub is unreachable or responds with an error status
        """
        if token:
            url = f"{self.api_url}/user/repos"
            params = {"sort": "updated", "per_page": "100", "visibility": "all", "affiliation": "owner"}
        else:
            url = f"{self.api_url}/users/{quote(username, safe='')}/repos"
            params = {"sort": "updated", "per_page": "100"}

        try:
            response = await self.client.get(url, params=params, headers=self._headers(token))
        except httpx.HTTPError as e:
            logger.error(f"GitHub repos request failed: {e}")
            raise GitHubAPIError(f"GitHub API unreachable: {e}") from e
        if response.status_code >= 400:
            logger.error(f"GitHub repos API error {response.status_code}: {response.text}")
            raise GitHubAPIError(f"GitHub API error: {response.status_code}")

        data: list[dict[str, Any]] = response.json()
        logger.info(f"Fetched {len(data)} repositories for {username}")
        return data

    async def get_languages(self, owner: str, repo: str, token: str | None = None) -> dict[str, int]:
        """Language byte counts of a repository, empty on any failure."""
        url = f"{self.api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/languages"
        try:
            response = await self.client.get(url, headers=self._headers(token))
        except httpx.HTTPError as e:
            logger.warning(f"Languages request for {repo} failed: {e}")
            return {}
        if response.status_code >= 400:
            logger.warning(f"Languages request for {repo} returned {response.status_code}")
            return {}
        return response.json()


async def fetch_github_stats(
    client: GitHubClient,
    username: str,
    token: str | None = None,
) -> GitHubStatsDict:
    """Fetch non-fork repositories and summarize their languages."""
    raw_repos = [repo for repo in await client.list_repos(username, token) if not repo.get("fork")]
    language_maps = await asyncio.gather(
        *(client.get_languages(username, repo["name"], token) for repo in raw_repos)
    )
    return summarize_repos(raw_repos, list(language_maps))


def summarize_repos(
    raw_repos: list[dict[str, Any]],
    language_maps: list[dict[str, int]],
) -> GitHubStatsDict:
    """Build repository summaries and the top aggregated languages.

    Args:
        raw_repos: Repository objects as returned by GitHub, forks removed
        language_maps: Language byte counts, one per repository

    Returns:
        Repositories with per-repo language shares and the top languages
        across all repositories, both sorted by bytes descending
    """
    repos: list[RepoDict] = []
    totals: dict[str, int] = {}
    for raw, languages in zip(raw_repos, language_maps, strict=True):
        for language, count in languages.items():
            totals[language] = totals.get(language, 0) + count
        repos.append(
            {
                "name": raw["name"],
                "description": raw.get("description"),
                "language": raw.get("language"),
                "html_url": raw.get("html_url", ""),
                "stars": raw.get("stargazers_count", 0),
                "forks": raw.get("forks_count", 0),
                "updated_at": raw.get("updated_at", ""),
                "private": bool(raw.get("private", False)),
                "languages": list(languages),
                "language_stats": _language_stats(languages),
            }
        )
    return {"repos": repos, "languages": _language_stats(totals)[:TOP_LANGUAGES]}


def _language_stats(byte_counts: dict[str, int]) -> list[LanguageStatDict]:
    total = sum(byte_counts.values())
    stats: list[LanguageStatDict] = [
        {
            "language": language,
            "bytes": count,
            "percentage": round(count / total * 100, 1) if total > 0 else 0,
        }
        for language, count in byte_counts.items()
    ]
    stats.sort(key=lambda item: item["bytes"], reverse=True)
    return stats


def read_credentials(session: Session) -> tuple[str, str | None]:
    """GitHub username and optional token from settings.

    Raises:
        ConflictError: If no username is configured
    """
    username = get_setting(session, USERNAME_KEY)
    if not username:
        raise ConflictError("GitHub username not configured")
    return username, get_setting(session, TOKEN_KEY) or None


def store_github_stats(session: Session, stats: GitHubStatsDict) -> None:
    set_setting(session, CACHE_REPOS_KEY, json.dumps(stats["repos"]))
    set_setting(session, CACHE_LANGUAGES_KEY, json.dumps(stats["languages"]))


def load_github_stats(session: Session) -> GitHubStatsDict:
    """Cached statistics, empty lists when nothing was fetched yet."""
    repos = get_setting(session, CACHE_REPOS_KEY)
    languages = get_setting(session, CACHE_LANGUAGES_KEY)
    return {
        "repos": json.loads(repos) if repos else [],
        "languages": json.loads(languages) if languages else [],
    }
