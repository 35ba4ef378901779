"""Issue title and Markdown body assembly."""

from feedback_github.models.feedback import (
    DEVICE_KEYS,
    PACKAGE_KEYS,
    DeviceInfo,
    PackageInfo,
)
from feedback_github.models.github import IssueDraft, Uploaded, UploadResult
from feedback_github.services.metadata import format_keys

TITLE_PREFIX = "[FEEDBACK] "
TITLE_MAX_TEXT = 100
NO_IMAGE_TEXT = "no image attached"


def compose_title(feedback_text: str, title: str | None = None) -> str:
    """Explicit title, or the tagged first 100 characters of the feedback."""
    if title is not None:
        return title
    return TITLE_PREFIX + feedback_text[:TITLE_MAX_TEXT]


def image_section(upload: UploadResult | None, width: int = 300) -> str:
    if isinstance(upload, Uploaded):
        return f'<img src="{upload.url}" width="{width}" />\n\n'
    return NO_IMAGE_TEXT


def package_section(info: PackageInfo | None, operating_system: str | None) -> str:
    if info is None:
        return ""
    return (
        f"## Package\n{operating_system or 'unknown'}\n"
        f"{format_keys(info.data, PACKAGE_KEYS)}\n\n"
    )


def device_section(info: DeviceInfo | None) -> str:
    if info is None:
        return ""
    return f"## Device\n{format_keys(info.data, DEVICE_KEYS)}\n\n"


def extra_section(extra_data: str | None) -> str:
    return f"## Extra\n{extra_data}" if extra_data is not None else ""


def compose_body(
    feedback_text: str,
    upload: UploadResult | None = None,
    *,
    package: PackageInfo | None = None,
    device: DeviceInfo | None = None,
    operating_system: str | None = None,
    extra_data: str | None = None,
    image_display_width: int = 300,
) -> str:
    """Assemble the issue body from its fixed-order sections.

    Disabled sections render as empty strings, so the separating spaces
    remain in the output (``"text \\n\\n no image attached   "`` when only
    the text is present).
    """
    image = image_section(upload, image_display_width)
    pkg = package_section(package, operating_system)
    dev = device_section(device)
    extra = extra_section(extra_data)
    return f"{feedback_text} \n\n {image} {pkg} {dev} {extra}"


def compose_issue(
    feedback_text: str,
    upload: UploadResult | None = None,
    *,
    title: str | None = None,
    labels: list[str] | None = None,
    package: PackageInfo | None = None,
    device: DeviceInfo | None = None,
    operating_system: str | None = None,
    extra_data: str | None = None,
    image_display_width: int = 300,
) -> IssueDraft:
    """Build the full issue payload. Pure — no I/O."""
    return IssueDraft(
        title=compose_title(feedback_text, title),
        body=compose_body(
            feedback_text,
            upload,
            package=package,
            device=device,
            operating_system=operating_system,
            extra_data=extra_data,
            image_display_width=image_display_width,
        ),
        labels=list(labels) if labels is not None else ["feedback"],
    )
