"""Application keys for type-safe app configuration access."""

from aiohttp import web

from portfolio.db.database import Database
from portfolio.services.github import GitHubClient

database_key = web.AppKey("database", Database)
admin_token_key = web.AppKey("admin_token", str)
github_client_key = web.AppKey("github_client", GitHubClient)
