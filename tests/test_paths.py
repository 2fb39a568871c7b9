"""
Tests for directory scanning.
"""
import pytest

from logscope.utils.paths import scan_directory


class TestScanDirectory:
    """Tests for scan_directory."""

    def test_filters_and_sorts(self, tmp_path):
        (tmp_path / "b.log").write_text("x\n")
        (tmp_path / "a.log").write_text("x\n")
        (tmp_path / ".hidden.log").write_text("x\n")
        (tmp_path / "empty.log").write_text("")
        (tmp_path / "sub").mkdir()

        entries = scan_directory(tmp_path)

        assert [e.name for e in entries] == ["a.log", "b.log"]
        assert entries[0].size == 2
        assert entries[0].path.is_absolute()

    def test_relative_directory(self, tmp_path, monkeypatch):
        (tmp_path / "a.log").write_text("x\n")
        monkeypatch.chdir(tmp_path)
        assert [e.path for e in scan_directory(".")] == [tmp_path.resolve() / "a.log"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OSError):
            scan_directory(tmp_path / "nope")
