"""Cheat sheet helpers: titles, build ids and cheat files on the SD card."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

ATTRIBUTION_KEY = "attribution"
CHEAT_SEPARATOR = "\n\n"

_CHEAT_PATTERN = re.compile(r"\[.+\]|\{.+\}")


def format_title_id(tid: int) -> str:
    """Render a title id as 16 upper-case hexadecimal digits."""
    return f"{tid:016X}"


def cheats_title(cheat: Mapping[str, Any]) -> str:
    """Join a cheat entry's titles as ``[a] - [b]``; empty when there are none."""
    titles = cheat.get("titles") or []
    return " - ".join(f"[{title}]" for title in titles)


def cheat_names(path: str | Path) -> list[str]:
    """List the cheat headers (``[name]`` or ``{name}`` lines) of a cheat file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            lines = [line.rstrip("\r\n") for line in handle]
    except OSError:
        return []
    return [line for line in lines if line and _CHEAT_PATTERN.search(line)]


def build_id_from_bytes(raw: bytes) -> str:
    """Format the first eight bytes of a module build id as hexadecimal text."""
    if len(raw) < 8:
        raise ValueError("a build id needs at least 8 bytes")
    return bytes(raw[:8]).hex().upper()


def build_id_for_version(versions: Mapping[str, Any], version: int) -> str:
    """Look up the build id for a title version; empty when it is unknown."""
    bid = versions.get(str(version), "")
    if not isinstance(bid, str):
        raise TypeError(f"build id for version {version} must be a string")
    return bid


def cheats_dir(contents_path: str | Path, tid: int) -> Path:
    """Directory holding the cheat files of a title."""
    return Path(contents_path) / format_title_id(tid) / "cheats"


def write_cheats(contents_path: str | Path, tid: int, bid: str, content: str) -> Path:
    """Append ``content`` to the cheat file of a build and return its path."""
    directory = cheats_dir(contents_path, tid)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / f"{bid}.txt"
    with target.open("a", encoding="utf-8") as handle:
        handle.write(CHEAT_SEPARATOR + content)
    return target


def delete_cheats(contents_path: str | Path, tid: int, bid: str) -> bool:
    """Remove the cheat file of a build; tell whether a file was removed."""
    target = cheats_dir(contents_path, tid) / f"{bid}.txt"
    try:
        target.unlink()
    except FileNotFoundError:
        return False
    return True


def versions_with_cheats(cheats_json: Mapping[str, Any]) -> str:
    """List the build ids that have cheats, each followed by a space."""
    return "".join(f"{key} " for key in cheats_json if key != ATTRIBUTION_KEY)


def latest_version(versions: Iterable[int]) -> int:
    """Highest installed version of a title, or 0 when nothing is installed."""
    return max(versions, default=0)