"""Screenshot upload into the target repository via the contents API."""

import base64
import logging
import uuid

from feedback_github.config import get_settings
from feedback_github.models.github import Skipped, Uploaded, UploadResult
from feedback_github.services.github_client import create_github_client
from feedback_github.services.repository import parse_repository_slug

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = "upload feedback screenshot"
DEFAULT_BRANCH = "main"


def image_path(filename: str, image_dir: str = "images") -> str:
    """Return a fresh ``<image_dir>/<uuid4>.<ext>`` path for *filename*."""
    ext = filename.rsplit(".", 1)[-1]
    return f"{image_dir.strip('/')}/{uuid.uuid4()}.{ext}"


def raw_image_url(owner: str, name: str, branch: str, path: str) -> str:
    """Public URL that serves the stored file's raw bytes without auth."""
    return f"https://github.com/{owner}/{name}/blob/{branch}/{path}?raw=true"


async def upload_image_to_storage(
    image: bytes,
    filename: str,
    repo_url: str,
    github_token: str,
    *,
    branch: str | None = None,
    image_dir: str | None = None,
) -> UploadResult:
    """Store *image* in the repository and return where it can be viewed.

    Any failure is logged and reported as ``Skipped`` so that the caller
    can still create the issue without an image.

    Args:
        image: Raw image bytes.
        filename: Original filename; only its extension is used.
        repo_url: URL of the target GitHub repository.
        github_token: Token with contents write permission.
        branch: Branch to commit to (defaults to settings.github_image_branch).
        image_dir: Directory inside the repository (defaults to settings).
    """
    settings = get_settings()
    branch = branch or settings.github_image_branch
    image_dir = image_dir or settings.github_image_dir

    try:
        slug = parse_repository_slug(repo_url)
        path = image_path(filename, image_dir)
        payload = {
            "message": COMMIT_MESSAGE,
            "content": base64.b64encode(image).decode("ascii"),
            "path": path,
        }
        # Omitted branch commits to the repository default
        if branch != DEFAULT_BRANCH:
            payload["branch"] = branch

        async with create_github_client(github_token) as client:
            resp = await client.put(
                f"/repos/{slug.owner}/{slug.name}/contents/{path}",
                json=payload,
            )
            resp.raise_for_status()
    except Exception as e:
        logger.warning("Screenshot upload skipped: %s", e, exc_info=True)
        return Skipped(reason=str(e) or type(e).__name__)

    logger.info("Uploaded screenshot to %s/%s", slug.full_name, path)
    return Uploaded(url=raw_image_url(slug.owner, slug.name, branch, path), path=path)
