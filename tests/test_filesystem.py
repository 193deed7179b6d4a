"""Tests for the host file system and zip archive capabilities."""

from __future__ import annotations

import zipfile

import pytest

from lokator.errors import ArchiveReadError, UnsafeArchiveEntryError
from lokator.filesystem import HostDirectory, HostFile, ZipArchive
from lokator.protocols import OsArchive, OsDirectory, OsFile
from tests.helpers import make_zip, write_file


def test_capabilities_conform_to_protocols():
    assert isinstance(HostDirectory(), OsDirectory)
    assert isinstance(HostFile(), OsFile)
    assert isinstance(ZipArchive(), OsArchive)


class TestHostDirectory:
    def test_lists_only_files_sorted(self, tmp_path):
        write_file(tmp_path / "b.txt")
        write_file(tmp_path / "a.json")
        (tmp_path / "nested").mkdir()

        names = [p.name for p in HostDirectory().list_files(tmp_path)]

        assert names == ["a.json", "b.txt"]

    def test_exists_is_false_for_files(self, tmp_path):
        path = write_file(tmp_path / "a.txt")
        assert HostDirectory().exists(tmp_path)
        assert not HostDirectory().exists(path)


class TestHostFile:
    def test_reads_text_and_bytes(self, tmp_path):
        path = write_file(tmp_path / "a.txt", "héllo")
        host = HostFile()

        assert host.exists(path)
        assert host.read_all_text(path) == "héllo"
        with host.open_read(path) as handle:
            assert handle.read() == "héllo".encode("utf-8")


class TestZipArchive:
    def test_list_entries_skips_directories(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"one.txt": "1", "dir/two.txt": "2"})
        with zipfile.ZipFile(archive_path, "a") as zf:
            zf.writestr("empty/", "")

        archive = ZipArchive()
        try:
            assert sorted(archive.list_entries(archive_path)) == ["dir/two.txt", "one.txt"]
        finally:
            archive.close()

    def test_extract_writes_entry_content(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"one.txt": "payload"})
        archive = ZipArchive()

        target = archive.extract(archive_path, "one.txt", tmp_path / "out")

        assert target == tmp_path / "out" / "one.txt"
        assert target.read_text(encoding="utf-8") == "payload"
        archive.close()

    def test_extract_twice_reuses_file(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"one.txt": "payload"})
        archive = ZipArchive()

        first = archive.extract(archive_path, "one.txt", tmp_path / "out")
        mtime = first.stat().st_mtime_ns
        second = archive.extract(archive_path, "one.txt", tmp_path / "out")

        assert first == second
        assert second.stat().st_mtime_ns == mtime
        archive.close()

    def test_extract_rewrites_truncated_file(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"one.txt": "payload"})
        write_file(tmp_path / "out" / "one.txt", "pay")
        archive = ZipArchive()

        target = archive.extract(archive_path, "one.txt", tmp_path / "out")

        assert target.read_text(encoding="utf-8") == "payload"
        archive.close()

    def test_extract_rewrites_same_size_file_after_archive_edit(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"totals.json": '{"total": 0}'})
        first_session = ZipArchive()
        first_session.extract(archive_path, "totals.json", tmp_path / "out")
        first_session.close()

        make_zip(archive_path, {"totals.json": '{"total": 1}'})
        second_session = ZipArchive()
        target = second_session.extract(archive_path, "totals.json", tmp_path / "out")

        assert target.read_text(encoding="utf-8") == '{"total": 1}'
        second_session.close()

    def test_entry_escaping_destination_rejected(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"../evil.txt": "x"})
        archive = ZipArchive()

        with pytest.raises(UnsafeArchiveEntryError):
            archive.extract(archive_path, "../evil.txt", tmp_path / "out")
        assert not (tmp_path / "evil.txt").exists()
        archive.close()

    def test_missing_entry_raises_archive_error(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"one.txt": "1"})
        archive = ZipArchive()

        with pytest.raises(ArchiveReadError, match="no entry"):
            archive.extract(archive_path, "two.txt", tmp_path / "out")
        archive.close()

    def test_corrupt_archive_raises_os_error(self, tmp_path):
        archive_path = write_file(tmp_path / "a.zip", "not a zip")

        with pytest.raises(ArchiveReadError) as excinfo:
            ZipArchive().list_entries(archive_path)

        assert isinstance(excinfo.value, OSError)
        assert isinstance(excinfo.value.__cause__, zipfile.BadZipFile)

    def test_close_releases_handles(self, tmp_path):
        archive_path = make_zip(tmp_path / "a.zip", {"one.txt": "1"})
        archive = ZipArchive()
        archive.list_entries(archive_path)

        archive.close()
        archive.close()

        # A fresh handle is opened after close
        assert archive.list_entries(archive_path) == ["one.txt"]
        archive.close()
