"""Shared fixtures for feedback-github tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level caches between tests."""
    yield

    from feedback_github.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from feedback_github.config import Settings, get_settings

    test_settings = Settings(
        environment="development",
        github_repo_url="https://github.com/testowner/testrepo",
        github_token="test-token",
        github_api_url="https://api.github.com",
        github_image_branch="main",
        github_image_dir="images",
    )

    get_settings.cache_clear()
    monkeypatch.setattr("feedback_github.config.get_settings", lambda: test_settings)

    # Patch get_settings in every module that imports it directly
    for mod_path in [
        "feedback_github.services.github_client",
        "feedback_github.services.uploader",
        "feedback_github.services.feedback",
        "feedback_github.routers.feedback",
        "feedback_github.main",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings

