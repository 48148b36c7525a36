"""Tests for artifact archive loading."""

import pytest

from headerscope.core.errors import ArchiveError
from headerscope.services.archive import find_archives, load_archive


class TestLoadArchive:
    """Tests for load_archive."""

    def test_from_bytes(self, sample_archive):
        files = load_archive(sample_archive, "MyFlow")
        assert files.iflw_file_name == "MyFlow.iflw"
        assert "CallActivity_1_SAP_Receiver=S4HCLNT100" in files.prop_content
        assert "<bpmn2:definitions" in files.iflw_content

    def test_from_path(self, tmp_path, sample_archive):
        path = tmp_path / "MyFlow.zip"
        path.write_bytes(sample_archive)
        assert load_archive(path).iflw_file_name == "MyFlow.iflw"

    def test_empty_bytes(self):
        with pytest.raises(ArchiveError, match="empty zip buffer"):
            load_archive(b"", "MyFlow")

    def test_not_a_zip(self):
        with pytest.raises(ArchiveError):
            load_archive(b"not a zip", "MyFlow")

    def test_missing_file_path(self, tmp_path):
        with pytest.raises(ArchiveError, match="not found"):
            load_archive(tmp_path / "missing.zip")

    def test_corrupt_entry(self, make_archive):
        archive = make_archive().replace(b"ErrorTarget", b"ErrorTargex", 1)
        with pytest.raises(ArchiveError, match="Corrupt zip entry"):
            load_archive(archive, "MyFlow")

    def test_directory_path(self, tmp_path):
        path = tmp_path / "Dir.zip"
        path.mkdir()
        with pytest.raises(ArchiveError, match="Invalid zip archive"):
            load_archive(path)

    def test_missing_parameters(self, make_archive):
        archive = make_archive(prop=None)
        with pytest.raises(ArchiveError, match="parameters.prop"):
            load_archive(archive, "MyFlow")

    def test_missing_iflw(self, make_archive):
        archive = make_archive(iflw=None)
        with pytest.raises(ArchiveError, match=r"\.iflw"):
            load_archive(archive, "MyFlow")

    def test_iflw_outside_flow_folder_is_ignored(self, make_archive, sample_iflw):
        archive = make_archive(
            iflw=None,
            extra={"MyFlow/src/main/resources/other/Stray.iflw": sample_iflw},
        )
        with pytest.raises(ArchiveError):
            load_archive(archive, "MyFlow")


class TestFindArchives:
    """Tests for find_archives."""

    def test_lists_zips_sorted(self, tmp_path):
        for name in ["b.zip", "a.zip", "notes.txt"]:
            (tmp_path / name).write_bytes(b"")
        assert [p.name for p in find_archives(tmp_path)] == ["a.zip", "b.zip"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ArchiveError):
            find_archives(tmp_path / "nope")
