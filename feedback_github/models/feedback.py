"""Feedback submission and client metadata models."""

from typing import Any

from pydantic import Base64Bytes, BaseModel, ConfigDict, Field, model_validator

PACKAGE_KEYS = ["version", "buildNumber", "installerStore"]
DEVICE_KEYS = ["model", "brand", "version", "systemVersion", "isPhysicalDevice"]

MOBILE_PLATFORMS = frozenset({"android", "ios"})

DEFAULT_SCREENSHOT_FILENAME = "file.png"


class FeedbackSubmission(BaseModel):
    """Text plus an optional screenshot captured by the client."""

    text: str = ""
    screenshot: bytes | None = None
    filename: str | None = None

    @model_validator(mode="after")
    def _default_screenshot_filename(self) -> "FeedbackSubmission":
        if self.filename is not None and self.screenshot is None:
            raise ValueError("filename given without a screenshot")
        if self.screenshot is not None and self.filename is None:
            self.filename = DEFAULT_SCREENSHOT_FILENAME
        return self


class PackageInfo(BaseModel):
    """Application package metadata reported by the client."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    app_name: str | None = Field(None, alias="appName")
    package_name: str | None = Field(None, alias="packageName")
    version: str | None = None
    build_number: str | int | None = Field(None, alias="buildNumber")
    installer_store: str | None = Field(None, alias="installerStore")

    @property
    def data(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class DeviceInfo(BaseModel):
    """Device metadata reported by the client."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    operating_system: str | None = Field(None, alias="operatingSystem")
    model: str | None = None
    brand: str | None = None
    version: Any = None  # Android reports a nested map
    system_version: str | None = Field(None, alias="systemVersion")
    is_physical_device: bool | None = Field(None, alias="isPhysicalDevice")

    @property
    def data(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    @property
    def is_mobile(self) -> bool:
        return (self.operating_system or "").lower() in MOBILE_PLATFORMS


class FeedbackResponse(BaseModel):
    """Response after feedback submission."""

    issue_url: str
    issue_number: int
    message: str


class FeedbackRequest(BaseModel):
    """Feedback posted by a client over HTTP."""

    text: str = Field("", max_length=20000)
    title: str | None = Field(None, max_length=256)
    labels: list[str] | None = None
    extra_data: str | None = None
    screenshot: Base64Bytes | None = None  # base64-encoded image
    filename: str | None = None
    package_info: PackageInfo | None = None
    device_info: DeviceInfo | None = None
