"""
Shared fixtures for logscope tests.
"""
from pathlib import Path

import pytest


def stamp(seconds: int, micros: int = 0) -> str:
    """Timestamp text for a time on 2023-05-03, `seconds` after 10:00:00."""
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"2023-05-03 {10 + hours:02d}:{minutes:02d}:{secs:02d}.{micros:06d}"


def write_log(path: Path, seconds, tag: str) -> Path:
    """Write one line per entry of `seconds`, each tagged with its origin."""
    lines = [f"{stamp(s)} INFO {tag}-{i} at {s}s" for i, s in enumerate(seconds)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def two_logs(tmp_path):
    """Files A [0,10,15,30] and B [7,13,21,45] (seconds, same day)."""
    a = write_log(tmp_path / "a.log", [0, 10, 15, 30], "A")
    b = write_log(tmp_path / "b.log", [7, 13, 21, 45], "B")
    return a, b
