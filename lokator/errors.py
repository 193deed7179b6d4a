"""Lokator error hierarchy.

All project exceptions inherit from LokatorError, enabling:
- ``except LokatorError`` at the test-harness boundary
- Fine-grained catches deeper in the stack (``except AmbiguousMatchError``)

Hierarchy:
    LokatorError
    ├── ConfigError
    ├── NotInitializedError          (also RuntimeError)
    ├── AmbiguousMatchError
    ├── DataFileNotFoundError        (also FileNotFoundError)
    └── ArchiveReadError             (also OSError)
        └── UnsafeArchiveEntryError
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class LokatorError(Exception):
    """Base class for all Lokator errors."""


class ConfigError(LokatorError):
    """Settings could not be loaded or name an unknown option."""


class NotInitializedError(LokatorError, RuntimeError):
    """A resolution was attempted before setup."""


class AmbiguousMatchError(LokatorError):
    """More than one candidate in a single location matches the requested stem."""

    def __init__(self, stem: str, location: str, candidates: Sequence[str]) -> None:
        self.stem = stem
        self.location = location
        self.candidates = list(candidates)
        names = ", ".join(sorted(self.candidates))
        super().__init__(f"Several files match `{stem}` in `{location}`: {names}")


class DataFileNotFoundError(LokatorError, FileNotFoundError):
    """No search location yielded a data file for the requested stem."""

    def __init__(self, directory: Path | None, file_name: str) -> None:
        self.directory = directory
        self.file_name = file_name
        super().__init__(
            f"Unable to find the requested input file. Directory=`{directory or ''}`, File=`{file_name}`"
        )


class ArchiveReadError(LokatorError, OSError):
    """An archive could not be opened or an entry could not be read."""


class UnsafeArchiveEntryError(ArchiveReadError):
    """An archive entry would be extracted outside its destination."""


__all__ = [
    "LokatorError",
    "ConfigError",
    "NotInitializedError",
    "AmbiguousMatchError",
    "DataFileNotFoundError",
    "ArchiveReadError",
    "UnsafeArchiveEntryError",
]
