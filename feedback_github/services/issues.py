"""GitHub issue creation."""

import logging

from feedback_github.models.github import Issue
from feedback_github.services.github_client import create_github_client
from feedback_github.services.repository import parse_repository_slug

logger = logging.getLogger(__name__)


async def create_github_issue(
    repo_url: str,
    title: str,
    body: str,
    github_token: str,
    labels: list[str] | None = None,
) -> Issue:
    """Create an issue on the repository at *repo_url*.

    Raises:
        InvalidRepositoryUrl: If *repo_url* cannot be parsed.
        httpx.HTTPStatusError: On a non-2xx response (auth, rate limit, ...).
        httpx.HTTPError: On transport errors.
    """
    slug = parse_repository_slug(repo_url)
    labels = ["feedback"] if labels is None else [label for label in labels if label]

    async with create_github_client(github_token) as client:
        resp = await client.post(
            f"/repos/{slug.owner}/{slug.name}/issues",
            json={"title": title, "body": body, "labels": labels},
        )
        resp.raise_for_status()
        issue = Issue.model_validate(resp.json())

    logger.info("Created issue #%d on %s", issue.number, slug.full_name)
    return issue
