"""
Random-access line indexing over a raw file buffer.

This module turns the bytes of a log file into addressable lines. The
buffer is scanned for newlines exactly once; afterwards any line can be
sliced out in O(1) without rescanning or keeping a list of strings.

Purpose:
    Both the merge step and the scrolling viewport touch lines in an
    arbitrary order across potentially large files. Keeping one bytes
    object plus a list of offsets is far cheaper than holding every line
    as a separate str, and text is only decoded for lines actually shown.

Offsets Layout:
    offsets[0]        always 0
    offsets[1..n]     byte position right after each newline (plus the
                      buffer length when the last line has no newline)
    offsets[-1]       sentinel, len(raw) + 1

    So len(offsets) == line_count + 2 and line i is
    raw[offsets[i]:offsets[i + 1]] with one trailing newline stripped.
"""

from pathlib import Path
from typing import List, Tuple, Union

NEWLINE = b"\n"


class LineIndexError(IndexError):
    """A line number outside ``0 <= i < line_count()`` was requested."""

    def __init__(self, index: int, line_count: int):
        super().__init__(f"line {index} out of range (file has {line_count} lines)")
        self.index = index
        self.line_count = line_count


def compute_offsets(raw: bytes) -> List[int]:
    """
    Return the line start offsets for a buffer, including the sentinel.

    Args:
        raw: The complete file content.

    Returns:
        List[int]: Offsets as described in the module docstring. An empty
                   buffer yields [0, 1], an index of zero lines.
    """
    if not raw:
        return [0, 1]

    offsets = [0]
    # bytes.find runs in C; one pass over the buffer in total
    position = raw.find(NEWLINE)
    while position != -1:
        offsets.append(position + 1)
        position = raw.find(NEWLINE, position + 1)

    # Keep a trailing partial line addressable
    if not raw.endswith(NEWLINE):
        offsets.append(len(raw))

    offsets.append(len(raw) + 1)
    return offsets


class LineIndex:
    """
    Immutable line index owning one file's raw bytes.

    Attributes:
        raw: The file content, never modified.
        offsets: Line start offsets plus the trailing sentinel.

    Example:
        >>> index = LineIndex.build(b"first\\nsecond\\n")
        >>> index.line_count()
        2
        >>> index.line_at(1)
        'second'
    """

    __slots__ = ("raw", "offsets")

    def __init__(self, raw: bytes, offsets: List[int]):
        self.raw = raw
        self.offsets = offsets

    @classmethod
    def build(cls, raw: bytes) -> "LineIndex":
        """Scan the buffer once and return its index."""
        return cls(raw, compute_offsets(raw))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "LineIndex":
        """
        Read a file fully and index it.

        Raises:
            OSError: The file cannot be read.
        """
        return cls.build(Path(path).read_bytes())

    def line_count(self) -> int:
        """Number of addressable lines."""
        return len(self.offsets) - 2

    def __len__(self) -> int:
        return self.line_count()

    def byte_range(self, i: int) -> Tuple[int, int]:
        """
        Return the (start, stop) byte positions of line i, newline excluded.

        Raises:
            LineIndexError: i is negative or >= line_count().
        """
        count = self.line_count()
        if i < 0 or i >= count:
            raise LineIndexError(i, count)

        start = self.offsets[i]
        stop = min(self.offsets[i + 1], len(self.raw))
        # Strip exactly one "\n"; a preceding "\r" is part of the line
        if stop > start and self.raw[stop - 1:stop] == NEWLINE:
            stop -= 1
        return start, stop

    def line_at(self, i: int) -> str:
        """
        Return the text of line i.

        Invalid UTF-8 is replaced rather than raised, matching how the
        viewer treats every other byte it cannot display.

        Raises:
            LineIndexError: i is negative or >= line_count().
        """
        start, stop = self.byte_range(i)
        return self.raw[start:stop].decode("utf-8", errors="replace")
