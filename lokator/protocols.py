"""Protocol definitions for the collaborators of the resolution core.

The core never touches the operating system directly. Directory listing,
file access, and archive reading go through the capability protocols below,
and the two swappable strategies (naming and file management) are described
here as well so the coordinator can be wired with any conforming object.

Concrete implementations:
- Capabilities: lokator.filesystem
- Naming strategies: lokator.naming
- File management strategies: lokator.strategies
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lokator.strategies import Resolution


@runtime_checkable
class OsDirectory(Protocol):
    """Directory queries against the host file system."""

    def exists(self, path: Path) -> bool: ...

    def list_files(self, path: Path) -> list[Path]: ...


@runtime_checkable
class OsFile(Protocol):
    """File queries and reads against the host file system."""

    def exists(self, path: Path) -> bool: ...

    def read_all_text(self, path: Path, encoding: str = "utf-8") -> str: ...

    def open_read(self, path: Path) -> BinaryIO: ...


@runtime_checkable
class OsArchive(Protocol):
    """Read access to compressed archives standing in for a directory."""

    def exists(self, path: Path) -> bool: ...

    def list_entries(self, path: Path) -> list[str]:
        """Return the names of the file entries stored in the archive.

        Raises:
            ArchiveReadError: If the archive cannot be opened
        """
        ...

    def extract(self, path: Path, entry: str, destination: Path) -> Path:
        """Extract a single entry below ``destination`` and return its path.

        Raises:
            ArchiveReadError: If the archive or entry cannot be read
            UnsafeArchiveEntryError: If the entry would land outside ``destination``
        """
        ...

    def close(self) -> None: ...


@runtime_checkable
class NamingStrategy(Protocol):
    """Maps a test's identity to the stem of the data file it consumes."""

    def derive_stem(self, method_name: str, class_path: str) -> str:
        """Return the data file stem for a test.

        Args:
            method_name: Name of the test function or method
            class_path: Path of the source file declaring the test

        Returns:
            File name without extension, used as the match key
        """
        ...


@runtime_checkable
class FileManagementStrategy(Protocol):
    """Searches the candidate locations for a data file."""

    def setup(self, root_directory: Path, environment_settings: Mapping[str, object]) -> None: ...

    def teardown(self) -> None: ...

    def get_file_path(
        self,
        naming_strategy: Optional[NamingStrategy],
        file_name: str,
        source_path: str,
    ) -> Resolution:
        """Resolve the data file for a test.

        A miss is reported through the returned Resolution, never raised.

        Raises:
            NotInitializedError: If called before setup
            AmbiguousMatchError: If a location holds several candidates
        """
        ...

    def get_default_file_path(self, default_file_name: str) -> Resolution: ...


__all__ = [
    "OsDirectory",
    "OsFile",
    "OsArchive",
    "NamingStrategy",
    "FileManagementStrategy",
]
