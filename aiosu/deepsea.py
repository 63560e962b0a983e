"""DeepSea package builder helpers and user-defined custom download packs."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

MODULES_KEY = "modules"
CATEGORY_KEY = "category"
REQUIRES_KEY = "requires"
PACK_CATEGORIES = ("ams", "misc")


def _read_json(path: str | Path) -> Any:
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError):
        return {}


def repo_name(repo: str) -> str:
    """Drop the owner part of an ``owner/name`` repository string."""
    return repo[repo.find("/") + 1 :]


def last_downloaded_modules(json_path: str | Path) -> set[str]:
    """Module names recorded in a previously downloaded package description."""
    package = _read_json(json_path)
    if not isinstance(package, Mapping):
        return set()
    modules = package.get(MODULES_KEY, [])
    result = set()
    for module in modules:
        if not isinstance(module, str):
            raise TypeError(f"module name must be a string, got {type(module).__name__}")
        result.add(module)
    return result


def sort_modules(modules: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Group the ``modules`` of a DeepSea metadata document by category.

    Categories and modules keep the order in which they first appear.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for key, module in modules.get(MODULES_KEY, {}).items():
        category = module[CATEGORY_KEY]
        if not isinstance(category, str):
            raise TypeError(f"category of module {key!r} must be a string")
        grouped.setdefault(category, {})[key] = module
    return grouped


def requirements_text(module: Mapping[str, Any], prefix: str) -> str:
    """Describe a module's dependencies as ``prefix a, b``; empty when it has none."""
    requires = module[REQUIRES_KEY]
    if not requires:
        return ""
    return prefix + "".join(f" {name}," for name in requires)[:-1]


def build_request_url(base_url: str, modules: Iterable[str]) -> str:
    """Append each distinct module, in sorted order and followed by ``;``, to the URL."""
    return base_url + "".join(f"{name};" for name in sorted(set(modules)))


@dataclass
class CustomPacks:
    """User-defined download links, kept in a JSON file by category."""

    path: Path
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: str | Path) -> CustomPacks:
        """Read the packs file; a missing or unreadable file gives no packs."""
        document = _read_json(path)
        if not isinstance(document, dict):
            raise ValueError(f"{path}: custom packs file must hold a JSON object")
        return cls(Path(path), document)

    def links(self, category: str) -> dict[str, str]:
        """The links of one category; empty when the category is absent."""
        return dict(self.data.get(category) or {})

    def add_link(self, category: str, title: str, link: str) -> None:
        """Add or replace a link in a category."""
        links = self.links(category)
        links[title] = link
        self.data[category] = links

    def remove_link(self, category: str, title: str) -> None:
        """Remove a link; raises KeyError when the category does not exist."""
        links = self.data[category]
        links.pop(title, None)

    def save(self) -> None:
        """Write the packs back to their file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(self.data, handle, indent=4)