"""Tests for screenshot upload — contents API call, URL building, degrade on failure."""

import base64
import uuid

import httpx
import pytest

from feedback_github.models.github import Skipped, Uploaded
from feedback_github.services.uploader import (
    COMMIT_MESSAGE,
    image_path,
    raw_image_url,
    upload_image_to_storage,
)

FIXED_UUID = uuid.UUID("12345678-1234-4678-9234-567812345678")


def _response(method, url, status_code, payload):
    request = httpx.Request(method, f"https://api.github.com{url}")
    return httpx.Response(status_code, json=payload, request=request)


@pytest.fixture
def fixed_uuid(mocker):
    mocker.patch("feedback_github.services.uploader.uuid.uuid4", return_value=FIXED_UUID)
    return FIXED_UUID


class TestPaths:
    def test_image_path_keeps_extension(self, fixed_uuid):
        assert image_path("shot.jpeg") == f"images/{fixed_uuid}.jpeg"

    def test_image_path_uses_last_extension(self, fixed_uuid):
        assert image_path("archive.tar.png", "screens/") == f"screens/{fixed_uuid}.png"

    def test_image_paths_are_unique(self):
        assert image_path("a.png") != image_path("a.png")

    def test_raw_image_url(self):
        assert raw_image_url("octo", "widget", "main", "images/a.png") == (
            "https://github.com/octo/widget/blob/main/images/a.png?raw=true"
        )


class TestUploadImageToStorage:
    async def test_puts_base64_content_and_returns_raw_url(
        self, mock_settings, monkeypatch, fixed_uuid
    ):
        captured = {}

        async def mock_put(self, url, **kwargs):
            captured["url"] = url
            captured["json"] = kwargs.get("json")
            captured["auth"] = self.headers.get("Authorization")
            return _response("PUT", url, 201, {"content": {"path": "x"}})

        monkeypatch.setattr(httpx.AsyncClient, "put", mock_put)
        result = await upload_image_to_storage(
            b"\x89PNG", "file.png", "https://github.com/octo/widget.git", "tok"
        )

        path = f"images/{fixed_uuid}.png"
        assert result == Uploaded(
            url=f"https://github.com/octo/widget/blob/main/{path}?raw=true",
            path=path,
        )
        assert captured["url"] == f"/repos/octo/widget/contents/{path}"
        assert captured["json"] == {
            "message": COMMIT_MESSAGE,
            "content": base64.b64encode(b"\x89PNG").decode(),
            "path": path,
        }
        assert captured["auth"] == "Bearer tok"

    async def test_custom_branch_is_committed_and_linked(
        self, mock_settings, monkeypatch, fixed_uuid
    ):
        captured = {}

        async def mock_put(self, url, **kwargs):
            captured["json"] = kwargs.get("json")
            return _response("PUT", url, 201, {})

        monkeypatch.setattr(httpx.AsyncClient, "put", mock_put)
        result = await upload_image_to_storage(
            b"img", "a.png", "https://github.com/octo/widget", "tok", branch="master"
        )

        assert captured["json"]["branch"] == "master"
        assert isinstance(result, Uploaded)
        assert "/blob/master/" in result.url

    async def test_http_error_status_is_skipped(self, mock_settings, monkeypatch):
        async def mock_put(self, url, **kwargs):
            return _response("PUT", url, 401, {"message": "Bad credentials"})

        monkeypatch.setattr(httpx.AsyncClient, "put", mock_put)
        result = await upload_image_to_storage(
            b"img", "a.png", "https://github.com/octo/widget", "bad"
        )

        assert isinstance(result, Skipped)
        assert "401" in result.reason

    async def test_network_error_is_skipped(self, mock_settings, monkeypatch):
        async def mock_put(self, url, **kwargs):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(httpx.AsyncClient, "put", mock_put)
        result = await upload_image_to_storage(
            b"img", "a.png", "https://github.com/octo/widget", "tok"
        )

        assert result == Skipped(reason="connection refused")

    async def test_invalid_repo_url_is_skipped_without_request(
        self, mock_settings, mocker
    ):
        mock_put = mocker.patch.object(httpx.AsyncClient, "put")
        result = await upload_image_to_storage(b"img", "a.png", "widget", "tok")

        assert isinstance(result, Skipped)
        mock_put.assert_not_called()
