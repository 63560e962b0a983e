"""Custom firmware detection and Atmosphère version reporting."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

VERSION_UNAVAILABLE = "Couldn't retrieve AMS version"


class Cfw(Enum):
    """Custom firmware that can be running on the console."""

    AMS = "ams"
    RNX = "rnx"
    SXOS = "sxos"


def _byte(value: int, shift: int) -> int:
    return (value >> shift) & 0xFF


def ams_version_parts(version: int) -> tuple[int, int, int]:
    """Split a packed Atmosphère version config value into (major, minor, micro)."""
    return _byte(version, 56), _byte(version, 48), _byte(version, 40)


def is_post_019(version: int | None) -> bool:
    """Tell whether the packed version is Atmosphère 0.19 or newer.

    ``None`` stands for a version that could not be read.
    """
    if version is None:
        return False
    major, minor, _ = ams_version_parts(version)
    return major > 0 or minor >= 19


def format_ams_info(version: int | None, emummc: bool | None = None) -> str:
    """Render the running Atmosphère version, e.g. ``1.2.3|E``.

    ``emummc`` adds ``|E`` (emuMMC) or ``|S`` (sysMMC) when known.
    """
    if version is None:
        return VERSION_UNAVAILABLE
    text = ".".join(str(part) for part in ams_version_parts(version))
    if emummc is not None:
        text += "|E" if emummc else "|S"
    return text


def detect_cfw(has_service: Callable[[str], bool]) -> Cfw:
    """Identify the running firmware from which services are registered."""
    if has_service("rnx"):
        return Cfw.RNX
    if has_service("tx"):
        return Cfw.SXOS
    return Cfw.AMS