"""
Data models for the TUI log viewer.

This module defines the small value types passed between the loader,
the merge engine and the viewport.

Purpose:
    Merging several large files must not copy their text around. A Record
    is just enough to find a line again (which file, which line) and to
    order it (its timestamp), so the merged stream costs a few integers per
    line no matter how long the lines are.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Record:
    """
    Position and instant of one log line, without its text.

    Attributes:
        timestamp: Microseconds since the Unix epoch (UTC). May be negative.
        file_id: Index of the source file in load order.
        line_index: 0-based line number within that file.
    """
    timestamp: int
    file_id: int
    line_index: int


@dataclass(frozen=True)
class FileEntry:
    """
    A candidate log file as listed on the file selection screen.

    Attributes:
        path: Absolute path to the file.
        size: File size in bytes at scan time.
    """
    path: Path
    size: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class Frame:
    """
    What a navigation command leaves on screen.

    Attributes:
        rows: Visible rows, top to bottom, filler rows included.
        selected: Index into rows of the highlighted row, or None when
                  there is nothing to highlight.
    """
    rows: List[str]
    selected: Optional[int] = None
