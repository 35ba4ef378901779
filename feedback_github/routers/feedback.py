"""Feedback submission endpoint — screenshot upload and issue creation."""

import logging

from fastapi import APIRouter, HTTPException

from feedback_github.config import get_settings
from feedback_github.models.feedback import (
    FeedbackRequest,
    FeedbackResponse,
    FeedbackSubmission,
)
from feedback_github.services.feedback import (
    EmulatorFeedbackNotAllowed,
    upload_to_github,
)
from feedback_github.services.repository import InvalidRepositoryUrl

router = APIRouter(prefix="/feedback", tags=["feedback"])
logger = logging.getLogger(__name__)

# Empty feedback is dropped without telling the client
_CANCELLED_RESPONSE = FeedbackResponse(
    issue_url="",
    issue_number=0,
    message="Empty feedback was not submitted.",
)


@router.post("", response_model=FeedbackResponse)
async def submit_feedback(request: FeedbackRequest):
    """Submit feedback. Stores the screenshot and opens a GitHub issue."""
    settings = get_settings()
    if not settings.github_repo_url:
        raise HTTPException(
            status_code=503, detail="Feedback repository is not configured."
        )

    if not settings.allow_empty_text and not request.text:
        logger.info("Feedback text is empty, cancelling")
        return _CANCELLED_RESPONSE

    try:
        submission = FeedbackSubmission(
            text=request.text,
            screenshot=request.screenshot,
            filename=request.filename,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        issue = await upload_to_github(
            settings.github_repo_url,
            settings.github_token,
            submission.text,
            screenshot=submission.screenshot,
            filename=submission.filename,
            title=request.title,
            labels=(
                request.labels
                if request.labels is not None
                else settings.feedback_labels
            ),
            package_info=settings.include_package_info,
            # Host details never stand in for a client that sent none
            device_info=(
                settings.include_device_info and request.device_info is not None
            ),
            extra_data=request.extra_data,
            allow_prod_emulator_feedback=settings.allow_prod_emulator_feedback,
            image_display_width=settings.image_display_width,
            package=request.package_info,
            device=request.device_info,
        )
    except EmulatorFeedbackNotAllowed as e:
        logger.warning("Rejected feedback: %s", e)
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidRepositoryUrl as e:
        logger.error("Feedback repository is misconfigured: %s", e)
        raise HTTPException(
            status_code=503, detail="Feedback repository is misconfigured."
        )
    except Exception as e:
        logger.error("GitHub issue creation failed: %s", e)
        raise HTTPException(
            status_code=502, detail="Failed to create issue. Please try again."
        )

    return FeedbackResponse(
        issue_url=issue.html_url,
        issue_number=issue.number,
        message=f"Your feedback has been created as issue #{issue.number}.",
    )
