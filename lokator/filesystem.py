"""Host file system and zip archive capabilities."""

from __future__ import annotations

import os
import shutil
import tempfile
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from lokator.errors import ArchiveReadError, UnsafeArchiveEntryError
from lokator.log import get_logger
from lokator.paths import is_within_root

logger = get_logger(__name__)


class HostDirectory:
    def exists(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_files(self, path: Path) -> list[Path]:
        return sorted(p for p in Path(path).iterdir() if p.is_file())


class HostFile:
    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_all_text(self, path: Path, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def open_read(self, path: Path) -> BinaryIO:
        return open(path, "rb")


def _matches_entry(target: Path, info: zipfile.ZipInfo) -> bool:
    """True when ``target`` already holds the bytes of ``info`` (size and CRC-32)."""
    if not target.is_file() or target.stat().st_size != info.file_size:
        return False
    crc = 0
    with target.open("rb") as fh:
        for chunk in iter(lambda: fh.read(65536), b""):
            crc = zlib.crc32(chunk, crc)
    return crc == info.CRC


class ZipArchive:
    """Zip reader that keeps one handle per archive until ``close``."""

    __slots__ = ("_handles",)

    def __init__(self) -> None:
        self._handles: dict[Path, zipfile.ZipFile] = {}

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def _open(self, path: Path) -> zipfile.ZipFile:
        key = Path(path)
        handle = self._handles.get(key)
        if handle is None:
            try:
                handle = zipfile.ZipFile(key)
            except (zipfile.BadZipFile, OSError) as exc:
                raise ArchiveReadError(f"Unable to open archive `{key}`: {exc}") from exc
            self._handles[key] = handle
        return handle

    def list_entries(self, path: Path) -> list[str]:
        return [info.filename for info in self._open(path).infolist() if not info.is_dir()]

    def extract(self, path: Path, entry: str, destination: Path) -> Path:
        archive = self._open(path)
        try:
            info = archive.getinfo(entry)
        except KeyError as exc:
            raise ArchiveReadError(f"Archive `{path}` has no entry `{entry}`") from exc

        target = Path(destination).joinpath(*PurePosixPath(entry).parts)
        if not is_within_root(target, Path(destination)):
            raise UnsafeArchiveEntryError(f"Entry `{entry}` in `{path}` escapes `{destination}`")

        if _matches_entry(target, info):
            logger.debug("Reusing extracted entry %s from %s", entry, path)
            return target

        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".extract-", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as out, archive.open(info) as src:
                shutil.copyfileobj(src, out)
            os.replace(tmp_name, target)
        except (zipfile.BadZipFile, zlib.error, OSError) as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise ArchiveReadError(f"Unable to extract `{entry}` from `{path}`: {exc}") from exc
        logger.debug("Extracted %s from %s to %s", entry, path, target)
        return target

    def close(self) -> None:
        handles, self._handles = self._handles, {}
        for handle in handles.values():
            handle.close()


__all__ = ["HostDirectory", "HostFile", "ZipArchive"]
