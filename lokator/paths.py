"""Shared filesystem paths and helpers for Lokator."""

from __future__ import annotations

import os
from hashlib import sha256
from pathlib import Path


def _xdg_path(env_var: str, fallback: Path) -> Path:
    raw = os.environ.get(env_var)
    if raw:
        return Path(raw).expanduser()
    return fallback


CONFIG_ROOT = _xdg_path("XDG_CONFIG_HOME", Path.home() / ".config")
CACHE_ROOT = _xdg_path("XDG_CACHE_HOME", Path.home() / ".cache")

CONFIG_HOME = CONFIG_ROOT / "lokator"
CACHE_HOME = CACHE_ROOT / "lokator"

DEFAULT_ASSETS_DIRECTORY_NAME = ".daten"
DEFAULT_ARCHIVE_EXTENSION = ".zip"
DEFAULT_EXTRACTION_DIRECTORY = CACHE_HOME / "extracted"


def file_stem(name: str) -> str:
    """Return ``name`` without its last extension.

    Leading dots are part of the stem, so ``.env`` has the stem ``.env``.
    """
    return Path(name).stem


def archive_digest(archive_path: Path) -> str:
    """Return a short stable directory name for an archive's extracted entries."""
    resolved = str(archive_path.resolve(strict=False))
    digest = sha256(resolved.encode("utf-8")).hexdigest()[:16]
    return f"{archive_path.stem}-{digest}"


def is_within_root(path: Path, root: Path) -> bool:
    """Return True if path resolves within root."""
    try:
        path.resolve(strict=False).relative_to(root.resolve(strict=False))
    except ValueError:
        return False
    return True


__all__ = [
    "CONFIG_HOME",
    "CACHE_HOME",
    "CONFIG_ROOT",
    "CACHE_ROOT",
    "DEFAULT_ASSETS_DIRECTORY_NAME",
    "DEFAULT_ARCHIVE_EXTENSION",
    "DEFAULT_EXTRACTION_DIRECTORY",
    "file_stem",
    "archive_digest",
    "is_within_root",
]
