"""Feedback to GitHub issue flow: upload screenshot, compose, create issue."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from feedback_github.config import get_settings
from feedback_github.models.feedback import DeviceInfo, FeedbackSubmission, PackageInfo
from feedback_github.models.github import Issue, Skipped
from feedback_github.services.composer import compose_issue
from feedback_github.services.issues import create_github_issue
from feedback_github.services.metadata import (
    collect_device_info,
    collect_package_info,
)
from feedback_github.services.uploader import upload_image_to_storage

logger = logging.getLogger(__name__)


class EmulatorFeedbackNotAllowed(Exception):
    """Feedback from a non-physical mobile device in production."""

    pass


class FeedbackPanel(Protocol):
    """Capture panel shown to the user; calls back once with the submission."""

    def show(
        self, on_submit: Callable[[FeedbackSubmission], Awaitable[None]]
    ) -> None: ...

    def hide(self) -> None: ...


def check_emulator_policy(
    device: DeviceInfo, allow_prod_emulator_feedback: bool
) -> None:
    """Reject emulator feedback in production builds on mobile platforms.

    Raises:
        EmulatorFeedbackNotAllowed: When the policy applies and the device
            does not report itself as physical.
    """
    if allow_prod_emulator_feedback or not get_settings().is_production:
        return
    if device.is_mobile and not device.is_physical_device:
        raise EmulatorFeedbackNotAllowed(
            "Emulator feedback not allowed in production"
        )


async def upload_to_github(
    repo_url: str,
    github_token: str,
    feedback_text: str,
    *,
    screenshot: bytes | None = None,
    filename: str | None = None,
    title: str | None = None,
    labels: Sequence[str] = ("feedback",),
    package_info: bool = True,
    device_info: bool = True,
    extra_data: str | None = None,
    allow_prod_emulator_feedback: bool = True,
    image_display_width: int = 300,
    branch: str | None = None,
    package: PackageInfo | None = None,
    device: DeviceInfo | None = None,
) -> Issue:
    """Store the screenshot in the repository and open an issue for the feedback.

    Args:
        repo_url: URL of the GitHub repository.
        github_token: Token with contents and issues write permission.
        feedback_text: Main content of the feedback.
        screenshot: Screenshot bytes; requires *filename*.
        filename: Screenshot filename, used for its extension.
        title: Issue title. Defaults to ``[FEEDBACK]`` plus the text start.
        labels: Labels applied to the issue.
        package_info: Include the package section.
        device_info: Include the device section.
        extra_data: Free-form text appended under ``## Extra``.
        allow_prod_emulator_feedback: If False, emulator feedback in
            production is rejected (could be store review bots).
        image_display_width: Width of the image shown in the issue.
        branch: Branch the screenshot is committed to.
        package: Client-reported package info; read from the host if omitted.
        device: Client-reported device info; read from the host if omitted.

    Raises:
        ValueError: If only one of screenshot/filename is given.
        EmulatorFeedbackNotAllowed: See ``check_emulator_policy``.
        httpx.HTTPError: If the issue could not be created.
    """
    if (screenshot is None) != (filename is None):
        raise ValueError(
            "Both screenshot and filename should be either provided "
            "or neither should be provided"
        )

    if device is None:
        device = collect_device_info()
    check_emulator_policy(device, allow_prod_emulator_feedback)
    if package_info and package is None:
        package = collect_package_info()

    # 1. Upload (a failure degrades to an issue without image)
    if screenshot is not None:
        upload = await upload_image_to_storage(
            screenshot, filename, repo_url, github_token, branch=branch
        )
    else:
        upload = Skipped(reason="no screenshot")

    # 2. Compose
    draft = compose_issue(
        feedback_text,
        upload,
        title=title,
        labels=list(labels),
        package=package if package_info else None,
        device=device if device_info else None,
        operating_system=device.operating_system,
        extra_data=extra_data,
        image_display_width=image_display_width,
    )

    # 3. Create
    return await create_github_issue(
        repo_url, draft.title, draft.body, github_token, labels=draft.labels
    )


def show_and_upload_to_github(
    panel: FeedbackPanel,
    repo_url: str,
    github_token: str,
    *,
    labels: Sequence[str] = ("feedback",),
    package_info: bool = True,
    device_info: bool = True,
    allow_empty_text: bool = True,
    extra_data: str | None = None,
    allow_prod_emulator_feedback: bool = True,
    submit_delay: float = 0.0,
    on_success: Callable[[Issue], None] | None = None,
    on_error: Callable[[Exception], None] | None = None,
    on_cancel: Callable[[], None] | None = None,
) -> "asyncio.Future[Issue]":
    """Show the capture panel and upload whatever the user submits.

    Must be called from a running event loop. The returned future resolves
    with the created issue, fails with the upload error, or is cancelled
    when empty text is submitted and ``allow_empty_text`` is False.
    """
    future: asyncio.Future[Issue] = asyncio.get_running_loop().create_future()

    async def _on_submit(submission: FeedbackSubmission) -> None:
        panel.hide()
        if not allow_empty_text and not submission.text:
            logger.info("Feedback text is empty, cancelling")
            if on_cancel is not None:
                on_cancel()
            future.cancel()
            return
        if submit_delay > 0:
            await asyncio.sleep(submit_delay)
        try:
            issue = await upload_to_github(
                repo_url,
                github_token,
                submission.text,
                screenshot=submission.screenshot,
                filename=submission.filename,
                labels=labels,
                package_info=package_info,
                device_info=device_info,
                extra_data=extra_data,
                allow_prod_emulator_feedback=allow_prod_emulator_feedback,
            )
        except Exception as e:
            logger.error("Feedback upload failed: %s", e)
            if on_error is not None:
                on_error(e)
            if not future.done():
                future.set_exception(e)
            return
        if on_success is not None:
            on_success(issue)
        if not future.done():
            future.set_result(issue)

    panel.show(_on_submit)
    return future
