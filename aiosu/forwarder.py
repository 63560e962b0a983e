"""Finish an application update by moving the new build into place."""

from __future__ import annotations

import argparse
import shutil
from collections.abc import Sequence
from pathlib import Path

APP_DIR = Path("switch/aio-switch-updater")
APP_FILE = APP_DIR / "aio-switch-updater.nro"
OLD_BUILD_PREFIX = "aio-switch-updater-v"
CONFIG_DIR = Path("config/aio-switch-updater")
STAGED_FILE = CONFIG_DIR / "switch/aio-switch-updater/aio-switch-updater.nro"
FORWARDER_FILE = CONFIG_DIR / "aiosu-forwarder.nro"
STAGED_SWITCH_DIR = CONFIG_DIR / "switch"
HIDDEN_FILE = CONFIG_DIR / ".aio-switch-updater"


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def relaunch_update(root: str | Path) -> Path:
    """Clean old builds, install a staged build and return the file to launch next."""
    root = Path(root)
    app_dir = root / APP_DIR
    app_dir.mkdir(parents=True, exist_ok=True)

    old_builds = [entry for entry in app_dir.iterdir() if entry.name.startswith(OLD_BUILD_PREFIX)]
    for entry in old_builds:
        _remove(entry)
        _remove(entry.with_name(entry.name + ".star"))
    _remove(root / HIDDEN_FILE)

    staged = root / STAGED_FILE
    target = root / APP_FILE
    if staged.exists():
        app_dir.mkdir(parents=True, exist_ok=True)
        _remove(target)
        staged.rename(target)
        shutil.rmtree(root / STAGED_SWITCH_DIR, ignore_errors=True)

    _remove(root / FORWARDER_FILE)
    return target


def main(argv: Sequence[str] | None = None) -> int:
    """Run the update step on an SD card root and print what to launch next."""
    parser = argparse.ArgumentParser(description="Install a staged application update.")
    parser.add_argument("root", nargs="?", default="/", help="root of the SD card")
    args = parser.parse_args(argv)
    print(relaunch_update(args.root))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())