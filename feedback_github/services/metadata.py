"""Package/device metadata rendering and host-side collection."""

import logging
import platform
from collections.abc import Iterable, Mapping
from importlib import metadata
from typing import Any

from feedback_github.models.feedback import DeviceInfo, PackageInfo

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "feedback-github"


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_keys(data: Mapping[str, Any], keys: Iterable[str]) -> str:
    """Render ``key: value`` lines for each requested key with a value.

    Keys that are missing or ``None`` are skipped; the result is an empty
    string when nothing matches.
    """
    return "\n".join(
        f"{key}: {_render_value(data[key])}"
        for key in keys
        if data.get(key) is not None
    )


def collect_package_info(distribution: str = DISTRIBUTION_NAME) -> PackageInfo:
    """Read package metadata for an installed distribution.

    Returns an empty ``PackageInfo`` when the distribution is not installed.
    """
    try:
        dist = metadata.distribution(distribution)
    except metadata.PackageNotFoundError:
        logger.debug("Distribution %s not installed", distribution)
        return PackageInfo()

    return PackageInfo(
        app_name=dist.metadata["Name"],
        package_name=distribution,
        version=dist.version,
    )


def collect_device_info() -> DeviceInfo:
    """Describe the host this process runs on.

    Only the OS family and architecture are reported; hostname and kernel
    details stay out of issue bodies. Server hosts are never emulators, so
    ``is_physical_device`` is True.
    """
    uname = platform.uname()
    return DeviceInfo(
        operating_system=uname.system.lower() or None,
        model=uname.machine or None,
        is_physical_device=True,
    )
