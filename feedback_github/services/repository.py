"""Repository URL parsing."""

from feedback_github.models.github import RepositorySlug


class InvalidRepositoryUrl(ValueError):
    """Repository URL does not end in ``<owner>/<repo>``."""

    pass


def parse_repository_slug(repo_url: str) -> RepositorySlug:
    """Parse the owner/name pair from a GitHub repository URL.

    Supports URLs like:
    - https://github.com/owner/repo
    - https://github.com/owner/repo.git
    - owner/repo

    Raises:
        InvalidRepositoryUrl: If fewer than two path segments are present.
    """
    segments = repo_url.strip().rstrip("/").split("/")
    if len(segments) < 2:
        raise InvalidRepositoryUrl(
            f"Repository URL must end in <owner>/<repo>: {repo_url!r}"
        )

    owner = segments[-2]
    name = segments[-1].removesuffix(".git")
    if not owner or not name:
        raise InvalidRepositoryUrl(
            f"Repository URL has an empty owner or name: {repo_url!r}"
        )
    return RepositorySlug(owner=owner, name=name)
