"""
Windowed view over a merged log stream.

This module holds the loaded files, their merged Record sequence and the
small sliding window of text that is actually on screen.

Purpose:
    A merged stream can easily reach millions of lines. Only the rows that
    fit in the terminal are ever turned into text; everything else stays
    as Records pointing into the per-file line indexes. Scrolling moves a
    window over the Records and fetches text for the rows that enter it.

Window Model:
    anchor      position in the merged sequence of the top row
    rows        materialized text, top to bottom (at most height rows)
    filler      number of "~" rows padding the window past end of stream
    selected    highlighted row within rows

    The absolute index (anchor + selected) is the position of the
    highlighted line in the merged stream.

Navigation never raises. At either end of the stream a command simply
leaves the window as it is.
"""

from collections import deque
from pathlib import Path
from typing import Deque, List, Optional

from .line_index import LineIndex
from .model import Frame, Record

# Row shown in place of lines past the end of the stream
FILLER = "~"


class Viewport:
    """
    Cursor and visible window shared by all navigation commands.

    Attributes:
        height: Number of rows the window holds.
        anchor: Merged-sequence position of the top row.
        rows: Materialized text of the visible lines.
        filler: Filler rows after the last real row.
        selected: Highlighted row within rows.
    """

    def __init__(self, height: int):
        self.height = max(1, height)
        self.anchor = 0
        self.rows: Deque[str] = deque()
        self.filler = self.height
        self.selected = 0

    @property
    def absolute_index(self) -> int:
        """Merged-sequence position of the highlighted line."""
        return self.anchor + self.selected

    @property
    def at_last_row(self) -> bool:
        return self.selected >= len(self.rows) - 1

    def fill(self, anchor: int, rows: List[str], selected: int) -> None:
        """
        Replace the window contents.

        The highlight is clamped onto a real row so the absolute index
        always names an existing line; the remainder is padded with filler.
        """
        self.anchor = anchor
        self.rows = deque(rows)
        self.filler = max(0, self.height - len(self.rows))
        self.selected = min(max(0, selected), max(0, len(self.rows) - 1))

    def frame(self) -> Frame:
        """Snapshot of what the renderer should draw."""
        visible = list(self.rows) + [FILLER] * self.filler
        return Frame(rows=visible, selected=self.selected if self.rows else None)


class TextView:
    """
    Loaded files, their merged line order and the window over it.

    A TextView is built in one go by loader.build_view and never changes
    afterwards except for its viewport. Dropping it releases every file
    buffer it holds.

    Attributes:
        paths: Source files, position == file_id.
        indexes: Line index of each file, position == file_id.
        records: The merged sequence, sorted by timestamp.
        viewport: The visible window and cursor.
    """

    def __init__(
        self,
        paths: List[Path],
        indexes: List[LineIndex],
        records: List[Record],
        height: int,
    ):
        self.paths = paths
        self.indexes = indexes
        self.records = records
        self.viewport = Viewport(height)
        self.home()

    def __len__(self) -> int:
        return len(self.records)

    @property
    def total_length(self) -> int:
        return len(self.records)

    def record_text(self, record: Record) -> str:
        """Materialize the text of one record from its file's index."""
        return self.indexes[record.file_id].line_at(record.line_index)

    def get_lines(self, start: int, stop: int) -> List[str]:
        """
        Return the text of merged lines start..stop-1.

        Both bounds are clamped to [0, total_length]. Ranges that are empty
        after clamping, reversed, or past the end yield an empty list.

        Example:
            With 5 lines: get_lines(0, 137) -> 5 rows;
            get_lines(0, 0), get_lines(2, 0), get_lines(9, 10) -> []
        """
        total = len(self.records)
        start = min(max(0, start), total)
        stop = min(max(0, stop), total)

        if stop <= start or start > total - 1:
            return []

        return [self.record_text(record) for record in self.records[start:stop]]

    def current_record(self) -> Optional[Record]:
        """Record under the highlight, or None for an empty stream."""
        if not self.viewport.rows:
            return None
        return self.records[self.viewport.absolute_index]

    def current_line(self) -> Optional[str]:
        """Full text of the highlighted line, or None for an empty stream."""
        if not self.viewport.rows:
            return None
        return self.viewport.rows[self.viewport.selected]

    def frame(self) -> Frame:
        return self.viewport.frame()

    # --- line by line ---

    def scroll_forward(self) -> Frame:
        """
        Move the highlight one line down.

        Inside the window only the highlight moves. On the last row the
        next line is fetched and the window slides by one: the new line is
        appended and the top row dropped. At end of stream nothing happens.
        """
        vp = self.viewport
        if not vp.rows:
            return vp.frame()

        if not vp.at_last_row:
            vp.selected += 1
            return vp.frame()

        first_not_loaded = vp.anchor + len(vp.rows)
        new_lines = self.get_lines(first_not_loaded, first_not_loaded + 1)
        if not new_lines:
            # End of stream; no wraparound
            return vp.frame()

        vp.rows.append(new_lines[0])
        vp.rows.popleft()
        vp.anchor += 1
        return vp.frame()

    def scroll_backward(self) -> Frame:
        """
        Move the highlight one line up.

        Mirror image of scroll_forward. On the top row the preceding line is
        prepended and the bottom row dropped (or one filler row consumed,
        when the window is padded). At the very first line nothing happens.
        """
        vp = self.viewport
        if not vp.rows:
            return vp.frame()

        if vp.selected > 0:
            vp.selected -= 1
            return vp.frame()

        if vp.anchor == 0:
            return vp.frame()

        new_lines = self.get_lines(vp.anchor - 1, vp.anchor)
        vp.rows.appendleft(new_lines[0])
        if vp.filler:
            vp.filler -= 1
        else:
            vp.rows.pop()
        vp.anchor -= 1
        return vp.frame()

    # --- jumps ---

    def _jump(self, anchor: int) -> Frame:
        """Refill the window from anchor, keeping the highlighted row."""
        vp = self.viewport
        new_lines = self.get_lines(anchor, anchor + vp.height)
        if not new_lines:
            return vp.frame()
        vp.fill(anchor, new_lines, vp.selected)
        return vp.frame()

    def page_down(self) -> Frame:
        """Move the window half a screen down."""
        step = max(1, self.viewport.height // 2)
        return self._jump(min(len(self.records), self.viewport.anchor + step))

    def page_up(self) -> Frame:
        """Move the window half a screen up."""
        step = max(1, self.viewport.height // 2)
        return self._jump(max(0, self.viewport.anchor - step))

    def home(self) -> Frame:
        """Show the first lines with the highlight on the top row."""
        vp = self.viewport
        vp.fill(0, self.get_lines(0, vp.height), 0)
        return vp.frame()

    def end(self) -> Frame:
        """Show the last lines with the highlight on the last line."""
        vp = self.viewport
        total = len(self.records)
        anchor = max(0, total - vp.height)
        new_lines = self.get_lines(anchor, total)
        vp.fill(anchor, new_lines, len(new_lines) - 1)
        return vp.frame()

    def resize(self, height: int) -> Frame:
        """
        Adapt the window to a new terminal height.

        The highlighted line stays highlighted; if it would fall below the
        new window, the window is moved down just enough to keep it visible.
        """
        vp = self.viewport
        height = max(1, height)
        if height == vp.height:
            return vp.frame()

        cursor = vp.absolute_index
        anchor = vp.anchor
        if cursor >= anchor + height:
            anchor = cursor - height + 1

        vp.height = height
        vp.fill(anchor, self.get_lines(anchor, anchor + height), cursor - anchor)
        return vp.frame()
