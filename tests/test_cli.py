"""
Tests for the command-line interface.
"""
import os

import pytest

from logscope.cli import build_parser, load_dotenv, main, poll_ms_from_env

from .conftest import stamp


def run(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    return info.value.code


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep .env lookup and the diagnostic log inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOGSCOPE_LOG_ROOT", str(tmp_path / "diag"))


class TestMergeCommand:
    """Tests for `logscope merge`."""

    def test_prints_merged_stream(self, two_logs, capsys):
        assert run(["--no-log", "merge", *map(str, two_logs)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 8
        assert lines[0] == f"{stamp(0)} INFO A-0 at 0s"
        assert lines[7] == f"{stamp(45)} INFO B-3 at 45s"

    def test_prefix(self, two_logs, capsys):
        run(["--no-log", "merge", "--prefix", *map(str, two_logs)])
        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == f"b.log: {stamp(7)} INFO B-0 at 7s"

    def test_load_error_exit_code(self, tmp_path, capsys):
        (tmp_path / "bad.log").write_text("nope\n")
        assert run(["--no-log", "merge", str(tmp_path / "bad.log")]) == 1
        assert "[logscope] error: cannot load" in capsys.readouterr().err


class TestFilesCommand:
    """Tests for `logscope files`."""

    def test_lists_files(self, tmp_path, two_logs, capsys):
        assert run(["--no-log", "files", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "a.log" in out and "b.log" in out

    def test_missing_directory(self, tmp_path, capsys):
        assert run(["--no-log", "files", str(tmp_path / "nope")]) == 1
        assert "[logscope] error" in capsys.readouterr().err

    def test_error_points_at_diagnostic_log(self, tmp_path, capsys):
        assert run(["files", str(tmp_path / "nope")]) == 1
        err = capsys.readouterr().err
        assert f"details in {tmp_path / 'diag' / 'logscope.log'}" in err

    def test_writes_diagnostic_log(self, tmp_path, two_logs):
        run(["files", str(tmp_path)])
        text = (tmp_path / "diag" / "logscope.log").read_text()
        assert "[cli] INFO start command=files" in text
        assert "[cli] INFO end command=files code=0" in text


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_view_defaults(self):
        args = build_parser().parse_args(["view"])
        assert args.directory == "."
        assert args.poll_ms is None


class TestConfiguration:
    """Tests for .env loading and environment settings."""

    def test_dotenv_does_not_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOGSCOPE_POLL_MS", "50")
        # setenv first so teardown removes whatever load_dotenv adds
        monkeypatch.setenv("LOGSCOPE_TEST_VALUE", "")
        monkeypatch.delenv("LOGSCOPE_TEST_VALUE")
        (tmp_path / ".env").write_text(
            "# comment\n"
            "LOGSCOPE_POLL_MS=250\n"
            "malformed line\n"
            "LOGSCOPE_TEST_VALUE=a=b\n"
        )
        load_dotenv()

        assert os.environ["LOGSCOPE_POLL_MS"] == "50"
        assert os.environ["LOGSCOPE_TEST_VALUE"] == "a=b"

    def test_poll_ms(self, monkeypatch):
        monkeypatch.setenv("LOGSCOPE_POLL_MS", "250")
        assert poll_ms_from_env() == 250
        monkeypatch.setenv("LOGSCOPE_POLL_MS", "soon")
        assert poll_ms_from_env() == 100
        monkeypatch.setenv("LOGSCOPE_POLL_MS", "-5")
        assert poll_ms_from_env() == 100
