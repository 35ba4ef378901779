"""GitHub-side data models: repository slugs, uploads and issues."""

from typing import Literal

from pydantic import BaseModel, model_validator


class RepositorySlug(BaseModel):
    """Owner/name pair uniquely identifying a GitHub repository."""

    model_config = {"frozen": True}

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class Uploaded(BaseModel):
    """Screenshot stored in the repository, reachable at ``url``."""

    kind: Literal["uploaded"] = "uploaded"
    url: str
    path: str


class Skipped(BaseModel):
    """No screenshot was stored; ``reason`` says why."""

    kind: Literal["skipped"] = "skipped"
    reason: str


UploadResult = Uploaded | Skipped


class IssueDraft(BaseModel):
    """Issue payload ready to be sent to the issues API."""

    title: str
    body: str
    labels: list[str] = []


class Issue(BaseModel):
    """Subset of the GitHub issue resource returned on creation."""

    number: int
    html_url: str
    title: str
    body: str | None = None
    state: str = "open"
    labels: list[str] = []

    @model_validator(mode="before")
    @classmethod
    def _flatten_labels(cls, data: dict) -> dict:
        """GitHub returns label objects; keep only their names."""
        if isinstance(data, dict) and isinstance(data.get("labels"), list):
            data = dict(data)
            data["labels"] = [
                label.get("name", "") if isinstance(label, dict) else label
                for label in data["labels"]
            ]
        return data
