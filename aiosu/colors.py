"""Controller colour profiles: parsing, conversion and backups."""

from __future__ import annotations

import json
import string
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

BACKUP_NAME = "_backup"
UNNAMED = "Unamed"

JOYCON_KEYS = ("L_JC", "L_BTN", "R_JC", "R_BTN")
PROCON_KEYS = ("BODY", "BTN")

DEFAULT_JOYCON_PROFILES = [
    {
        "L_BTN": "0A1E0A",
        "L_JC": "82FF96",
        "R_BTN": "0A1E28",
        "R_JC": "96F5F5",
        "name": "Animal Crossing: New Horizons",
    }
]

DEFAULT_PROCON_PROFILES = [
    {"BTN": "e6e6e6", "BODY": "2d2d2d", "name": "Default black"},
]


@dataclass(frozen=True)
class ColorProfile:
    """A named set of controller colours in BGR form."""

    name: str
    colors: tuple[int, ...]

    @property
    def is_backup(self) -> bool:
        return self.name == BACKUP_NAME


def hex_to_bgr(hex_color: str) -> int:
    """Convert an ``RRGGBB`` string into the controller's BGR integer."""
    red, green, blue = hex_color[0:2], hex_color[2:4], hex_color[4:6]
    return int(blue + green + red, 16)


def bgr_to_hex(value: int) -> str:
    """Convert a controller colour value into the hex text stored in backups."""
    value = ((value & 0xFF) << 16) + (value & 0xFF00) + (value >> 16) + 256
    return f"{value:06x}"


def is_hex_color(text: str) -> bool:
    """Tell whether ``text`` is exactly three bytes of hexadecimal."""
    return len(text) == 6 and all(c in string.hexdigits for c in text)


def _entries(document: Any) -> Iterable[Any]:
    if isinstance(document, dict):
        return document.values()
    if isinstance(document, list):
        return document
    return ()


def _text(entry: dict, key: str) -> str:
    value = entry[key]
    if not isinstance(value, str):
        raise TypeError(f"profile field {key!r} must be a string, got {type(value).__name__}")
    return value


def parse_profiles(documents: Iterable[Any], keys: Sequence[str]) -> list[ColorProfile]:
    """Collect valid profiles from the given JSON documents.

    Entries whose colours are not all ``RRGGBB`` are skipped; a backup
    profile is placed first.
    """
    result: deque[ColorProfile] = deque()
    for document in documents:
        for entry in _entries(document):
            name = _text(entry, "name")
            values = [_text(entry, key) for key in keys]
            if not all(is_hex_color(v) for v in values):
                continue
            profile = ColorProfile(name or UNNAMED, tuple(hex_to_bgr(v) for v in values))
            if profile.is_backup:
                result.appendleft(profile)
            else:
                result.append(profile)
    return list(result)


def joycon_profiles(local: Any, remote: Any = None) -> list[ColorProfile]:
    """Joy-Con profiles from the local file and the fetched list, with a fallback."""
    return parse_profiles([local, remote or DEFAULT_JOYCON_PROFILES], JOYCON_KEYS)


def procon_profiles(local: Any, remote: Any = None) -> list[ColorProfile]:
    """Pro Controller profiles from the local file and the fetched list, with a fallback."""
    return parse_profiles([local, remote or DEFAULT_PROCON_PROFILES], PROCON_KEYS)


def load_profiles_file(path: str | Path) -> Any:
    """Read a profiles JSON file; a missing file yields an empty list."""
    path = Path(path)
    if not path.exists():
        return []
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def store_backup(path: str | Path, backup: dict) -> list:
    """Replace any previous backup in the profiles file with ``backup``."""
    profiles = load_profiles_file(path)
    if not isinstance(profiles, list):
        raise ValueError(f"{path}: profiles file must hold a JSON array")
    profiles = [p for p in profiles if not (isinstance(p, dict) and p.get("name") == BACKUP_NAME)]
    profiles.append(backup)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(profiles, handle, indent=4)
    return profiles


def joycon_backup(left_main: int, left_sub: int, right_main: int, right_sub: int) -> dict:
    """Build the backup entry for the current Joy-Con colours."""
    return {
        "name": BACKUP_NAME,
        "L_JC": bgr_to_hex(left_main),
        "L_BTN": bgr_to_hex(left_sub),
        "R_JC": bgr_to_hex(right_main),
        "R_BTN": bgr_to_hex(right_sub),
    }


def procon_backup(main: int, sub: int) -> dict:
    """Build the backup entry for the current Pro Controller colours."""
    return {"name": BACKUP_NAME, "BODY": bgr_to_hex(main), "BTN": bgr_to_hex(sub)}