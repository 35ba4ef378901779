"""GitHub REST client construction — one authenticated client per call."""

import httpx

from feedback_github.config import get_settings


def github_headers(token: str | None = None) -> dict[str, str]:
    """Build standard GitHub API request headers.

    Includes the Authorization header only when a token is given.
    """
    headers: dict[str, str] = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def create_github_client(token: str | None = None) -> httpx.AsyncClient:
    """Return a new AsyncClient bound to the configured GitHub API.

    Callers own the client and should use it as an async context manager.
    """
    settings = get_settings()
    return httpx.AsyncClient(
        base_url=settings.github_api_url,
        headers=github_headers(token),
        timeout=settings.http_timeout,
    )
