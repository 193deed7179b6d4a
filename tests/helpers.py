"""Test utilities for the Lokator test suite.

Usage:
    from tests.helpers import make_zip, write_file, InMemoryDirectory
"""

from __future__ import annotations

import zipfile
from pathlib import Path, PurePosixPath


# =============================================================================
# ON-DISK BUILDERS
# =============================================================================


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def make_zip(path: Path, entries: dict[str, str]) -> Path:
    """Create a zip archive at ``path`` holding ``entries`` (name -> text)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


def make_test_module(root: Path, name: str = "test_orders.py") -> Path:
    """Create an empty test module below ``root`` and return its path."""
    return write_file(root / "tests" / name, "")


# =============================================================================
# IN-MEMORY CAPABILITIES
# =============================================================================


class InMemoryDirectory:
    """OsDirectory over a set of file paths; records every directory it lists."""

    def __init__(self, files: list[Path] | None = None) -> None:
        self.files = {Path(p) for p in files or []}
        self.listed: list[Path] = []

    def exists(self, path: Path) -> bool:
        path = Path(path)
        return any(path in f.parents for f in self.files)

    def list_files(self, path: Path) -> list[Path]:
        self.listed.append(Path(path))
        return sorted(f for f in self.files if f.parent == Path(path))


class InMemoryArchive:
    """OsArchive over a mapping of archive path -> {entry: content}."""

    def __init__(self, archives: dict[Path, dict[str, str]] | None = None) -> None:
        self.archives = {Path(k): v for k, v in (archives or {}).items()}
        self.opened: list[Path] = []
        self.extracted: list[tuple[Path, str]] = []
        self.closed = 0

    def exists(self, path: Path) -> bool:
        return Path(path) in self.archives

    def list_entries(self, path: Path) -> list[str]:
        self.opened.append(Path(path))
        return list(self.archives[Path(path)])

    def extract(self, path: Path, entry: str, destination: Path) -> Path:
        self.extracted.append((Path(path), entry))
        return Path(destination).joinpath(*PurePosixPath(entry).parts)

    def close(self) -> None:
        self.closed += 1
