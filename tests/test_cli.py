"""Tests for the command-line interface."""

import pytest

from headerscope.cli import collect_archives, create_parser, main
from headerscope.config import get_settings
from headerscope.core.errors import ArchiveError


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ["API_BASE_URL", "TOKEN_URL", "CLIENT_ID", "CLIENT_SECRET"]:
        monkeypatch.delenv(f"HEADERSCOPE_{var}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args(["a.zip"])
        assert args.sources == ["a.zip"]
        assert args.remote is False
        assert args.print_results is False
        assert args.no_excel is False

    def test_requires_source(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])


class TestCollectArchives:
    """Tests for source expansion."""

    def test_files_and_directories(self, tmp_path, sample_archive):
        folder = tmp_path / "flows"
        folder.mkdir()
        (folder / "B.zip").write_bytes(sample_archive)
        (folder / "A.zip").write_bytes(sample_archive)
        single = tmp_path / "Single.zip"
        single.write_bytes(sample_archive)

        paths = collect_archives([str(single), str(folder)])
        assert [p.name for p in paths] == ["Single.zip", "A.zip", "B.zip"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchiveError, match="not found"):
            collect_archives([str(tmp_path / "missing.zip")])

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "flow.txt"
        path.write_text("x")
        with pytest.raises(ArchiveError, match="Expected .zip"):
            collect_archives([str(path)])


class TestMain:
    """Tests for the CLI entry point."""

    def test_extracts_and_writes_report(self, tmp_path, sample_archive, capsys):
        archive = tmp_path / "MyFlow.zip"
        archive.write_bytes(sample_archive)
        out_dir = tmp_path / "reports"

        assert main([str(archive), "-o", str(out_dir), "--print"]) == 0

        assert (out_dir / "CPI_Headers_Extract.xlsx").exists()
        printed = capsys.readouterr().out
        assert "iFlow File : MyFlow.iflw" in printed
        assert "Total headers    : 3" in printed

    def test_no_excel(self, tmp_path, sample_archive):
        archive = tmp_path / "MyFlow.zip"
        archive.write_bytes(sample_archive)
        out_dir = tmp_path / "reports"

        assert main([str(archive), "-o", str(out_dir), "--no-excel"]) == 0
        assert not (out_dir / "CPI_Headers_Extract.xlsx").exists()

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.zip")]) == 1

    def test_all_artifacts_failed(self, tmp_path, make_archive):
        archive = tmp_path / "Broken.zip"
        archive.write_bytes(make_archive(iflw="<not-xml"))
        assert main([str(archive), "-o", str(tmp_path / "reports")]) == 2

    def test_remote_without_configuration(self, caplog):
        assert main(["--remote", "MyFlow"]) == 1
        assert "HEADERSCOPE_CLIENT_SECRET" in caplog.text
