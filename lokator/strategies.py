"""File management strategies: locate a test's data file on disk.

Search order for every request:
    1. the test's local directory (``<source dir>/.daten/<ClassName>``)
    2. a zip archive standing in for that directory (``<ClassName>.zip`` beside it)
    3. the shared global directory, then its own archive sibling

The first location holding a match wins. A requested name with an extension
selects that exact file. A bare stem matches every file sharing it, so a
location holding several such files (an extensionless one included) raises
AmbiguousMatchError rather than guessing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from lokator.errors import AmbiguousMatchError, NotInitializedError
from lokator.filesystem import HostDirectory, ZipArchive
from lokator.log import get_logger
from lokator.paths import (
    DEFAULT_ARCHIVE_EXTENSION,
    DEFAULT_ASSETS_DIRECTORY_NAME,
    DEFAULT_EXTRACTION_DIRECTORY,
    archive_digest,
    file_stem,
)
from lokator.protocols import NamingStrategy, OsArchive, OsDirectory

logger = get_logger(__name__)

# Keys read from the environment settings passed to setup()
ASSETS_DIRECTORY_KEY = "assets_directory_name"
GLOBAL_DIRECTORY_KEY = "global_directory"
EXTRACTION_DIRECTORY_KEY = "extraction_directory"
ARCHIVE_EXTENSION_KEY = "archive_extension"


class SearchLocation(Enum):
    LOCAL_DIRECTORY = "local-directory"
    ARCHIVE_SIBLING = "archive-sibling"
    SHARED_GLOBAL_DIRECTORY = "shared-global-directory"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one lookup.

    ``path`` is None on a miss; ``directory`` and ``stem`` still describe what
    was expected so the caller can report it.
    """

    stem: str
    directory: Path
    path: Optional[Path] = None
    location: Optional[SearchLocation] = None

    @property
    def found(self) -> bool:
        return self.path is not None


def _match_name(requested: str, names: Iterable[str], where: str) -> Optional[str]:
    names = list(names)
    if requested in names and file_stem(requested) != requested:
        return requested
    candidates = [name for name in names if file_stem(name) == requested]
    if len(candidates) > 1:
        logger.warning("Ambiguous data file %s in %s: %s", requested, where, candidates)
        raise AmbiguousMatchError(requested, where, candidates)
    return candidates[0] if candidates else None


class SimpleFileManagementStrategy:
    """Resolves data files from directories beside the test sources."""

    def __init__(
        self,
        directory: Optional[OsDirectory] = None,
        archive: Optional[OsArchive] = None,
    ) -> None:
        self._directory = directory or HostDirectory()
        self._archive = archive or ZipArchive()

        self._root: Optional[Path] = None
        self._assets_directory_name = DEFAULT_ASSETS_DIRECTORY_NAME
        self._global_directory: Optional[Path] = None
        self._extraction_directory = DEFAULT_EXTRACTION_DIRECTORY
        self._archive_extension = DEFAULT_ARCHIVE_EXTENSION

    @property
    def is_setup(self) -> bool:
        return self._root is not None

    @property
    def root_directory(self) -> Path:
        return self._require_root()

    @property
    def global_directory(self) -> Optional[Path]:
        return self._global_directory

    def setup(self, root_directory: Path, environment_settings: Optional[Mapping[str, object]] = None) -> None:
        if root_directory is None:
            raise TypeError("root_directory must not be None")
        settings = dict(environment_settings or {})
        root = Path(root_directory).expanduser().resolve()

        assets = settings.get(ASSETS_DIRECTORY_KEY) or DEFAULT_ASSETS_DIRECTORY_NAME
        extension = str(settings.get(ARCHIVE_EXTENSION_KEY) or DEFAULT_ARCHIVE_EXTENSION)
        if not extension.startswith("."):
            extension = f".{extension}"

        self._assets_directory_name = str(assets)
        self._archive_extension = extension
        self._global_directory = self._optional_path(root, settings.get(GLOBAL_DIRECTORY_KEY))
        self._extraction_directory = (
            self._optional_path(root, settings.get(EXTRACTION_DIRECTORY_KEY)) or DEFAULT_EXTRACTION_DIRECTORY
        )
        self._root = root

        if self._global_directory is None:
            logger.debug("No shared global directory configured")
        logger.debug(
            "File management ready root=%s assets=%s global=%s",
            root,
            self._assets_directory_name,
            self._global_directory,
        )

    def teardown(self) -> None:
        self._archive.close()
        self._root = None
        self._global_directory = None

    def local_directory_for(self, source_path: str) -> Path:
        """Return the asset directory belonging to a test source file."""
        root = self._require_root()
        source = Path(source_path)
        if not source.is_absolute():
            source = root / source
        return source.parent / self._assets_directory_name / source.stem

    def get_file_path(
        self,
        naming_strategy: Optional[NamingStrategy],
        file_name: str,
        source_path: str,
    ) -> Resolution:
        self._require_root()
        if file_name is None or source_path is None:
            raise TypeError("file_name and source_path must not be None")
        requested = naming_strategy.derive_stem(file_name, source_path) if naming_strategy else file_name
        return self._search(requested, self.local_directory_for(source_path))

    def get_default_file_path(self, default_file_name: str) -> Resolution:
        root = self._require_root()
        local = root / self._assets_directory_name
        if not default_file_name:
            return Resolution(stem="", directory=local)
        return self._search(default_file_name, local)

    def _search(self, requested: str, local_directory: Path) -> Resolution:
        path = self._search_directory(requested, local_directory)
        if path is not None:
            return self._found(requested, local_directory, path, SearchLocation.LOCAL_DIRECTORY)

        path = self._search_archive(requested, self._archive_sibling(local_directory))
        if path is not None:
            return self._found(requested, local_directory, path, SearchLocation.ARCHIVE_SIBLING)

        shared = self._global_directory
        if shared is not None:
            path = self._search_directory(requested, shared)
            if path is None:
                path = self._search_archive(requested, self._archive_sibling(shared))
            if path is not None:
                return self._found(requested, local_directory, path, SearchLocation.SHARED_GLOBAL_DIRECTORY)

        logger.warning("No data file found for %s (local directory %s)", requested, local_directory)
        return Resolution(stem=requested, directory=local_directory)

    def _found(self, requested: str, directory: Path, path: Path, location: SearchLocation) -> Resolution:
        logger.debug("Resolved %s via %s: %s", requested, location.value, path)
        return Resolution(stem=requested, directory=directory, path=path, location=location)

    def _search_directory(self, requested: str, directory: Path) -> Optional[Path]:
        if not self._directory.exists(directory):
            return None
        files = {path.name: path for path in self._directory.list_files(directory)}
        match = _match_name(requested, files, str(directory))
        return files[match].resolve() if match else None

    def _search_archive(self, requested: str, archive_path: Path) -> Optional[Path]:
        if not self._archive.exists(archive_path):
            return None
        entries = self._archive_entries(archive_path)
        match = _match_name(requested, entries, str(archive_path))
        if match is None:
            return None
        destination = self._extraction_directory / archive_digest(archive_path)
        return self._archive.extract(archive_path, entries[match], destination).resolve()

    def _archive_entries(self, archive_path: Path) -> dict[str, str]:
        """Map top-level names to entry names.

        Entries either sit at the archive root or inside one folder named
        after the archive (what zipping the directory itself produces).
        """
        folder = f"{archive_path.stem}/"
        entries: dict[str, str] = {}
        for entry in self._archive.list_entries(archive_path):
            name = entry[len(folder):] if entry.startswith(folder) else entry
            if name and "/" not in name:
                entries.setdefault(name, entry)
        return entries

    def _archive_sibling(self, directory: Path) -> Path:
        return directory.with_name(directory.name + self._archive_extension)

    def _require_root(self) -> Path:
        if self._root is None:
            raise NotInitializedError(
                "The file management strategy has not been initialized. Hint: call setup()"
            )
        return self._root

    @staticmethod
    def _optional_path(root: Path, value: object) -> Optional[Path]:
        if value is None or not str(value).strip():
            return None
        path = Path(str(value)).expanduser()
        return path if path.is_absolute() else root / path


__all__ = [
    "SearchLocation",
    "Resolution",
    "SimpleFileManagementStrategy",
    "ASSETS_DIRECTORY_KEY",
    "GLOBAL_DIRECTORY_KEY",
    "EXTRACTION_DIRECTORY_KEY",
    "ARCHIVE_EXTENSION_KEY",
]
