"""Caller-facing access to the data file of the executing test."""

from __future__ import annotations

import io
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional, TextIO, Union

from lokator.errors import DataFileNotFoundError
from lokator.identity import TestIdentity
from lokator.log import get_logger

if TYPE_CHECKING:
    from lokator.registry import Lokator

logger = get_logger(__name__)


class Using(Enum):
    """Registered files that bypass the naming convention."""

    DEFAULT_FILE_NAME = "default-file-name"


Source = Union[None, str, Using]


class Daten:
    """Retrieves data for one test.

    Every accessor takes an optional ``source``:

    - ``None``: the file named by the naming convention for this test
    - a file name: that file, searched beside this test's sources
    - ``Using.DEFAULT_FILE_NAME``: the default file registered with the Lokator

    Search order: the local directory, an archive standing in for it, then
    the shared global directory. A missing file raises DataFileNotFoundError
    before anything is read.
    """

    def __init__(self, lokator: "Lokator", identity: TestIdentity) -> None:
        if lokator is None:
            raise TypeError("lokator must not be None")
        if identity is None:
            raise TypeError("identity must not be None")
        self._identity = identity
        # Raises NotInitializedError when the lokator has not been set up
        self._coordinator = lokator.coordinator
        self._os_file = lokator.os_file

    @property
    def identity(self) -> TestIdentity:
        return self._identity

    def as_file_path(self, source: Source = None) -> Path:
        return self._resolve(source)

    def as_string(self, source: Source = None, encoding: str = "utf-8") -> str:
        return self._os_file.read_all_text(self._resolve(source), encoding=encoding)

    def as_bytes(self, source: Source = None) -> bytes:
        with self._os_file.open_read(self._resolve(source)) as handle:
            return handle.read()

    def as_stream(self, source: Source = None) -> BinaryIO:
        return self._os_file.open_read(self._resolve(source))

    def as_reader(self, source: Source = None, encoding: str = "utf-8") -> TextIO:
        return io.TextIOWrapper(self._os_file.open_read(self._resolve(source)), encoding=encoding)

    def _resolve(self, source: Source) -> Path:
        if source is None:
            resolution = self._coordinator.get_file_path(
                self._identity.method_name, self._identity.source_file_path
            )
        elif isinstance(source, Using):
            resolution = self._registered(source)
        else:
            resolution = self._coordinator.get_file_path(
                source, self._identity.source_file_path, use_naming_convention=False
            )
        return self._require_file(resolution.path, resolution.directory, resolution.stem)

    def _registered(self, source: Using):
        if source is Using.DEFAULT_FILE_NAME:
            return self._coordinator.get_default_file_path()
        raise ValueError(f"Expected {Using.DEFAULT_FILE_NAME!r}, got {source!r}")

    def _require_file(self, path: Optional[Path], directory: Path, stem: str) -> Path:
        if path is None or not self._os_file.exists(path):
            raise DataFileNotFoundError(directory, stem)
        logger.info("Source data has been selected. FileName=`%s`", path.name)
        return path


__all__ = ["Daten", "Using"]
