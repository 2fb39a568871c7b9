"""
Application state for the interactive viewer.

The viewer is always in one of two states:

    FileSelection   the operator picks which files to merge
    TextView        the merged stream is loaded and being scrolled

App holds the active state and dispatches every command to it. Commands
that make no sense in the current state are no-ops, so the key handler
can call any of them at any time.

Transitions:
    FileSelection --load_selected--> TextView   (blocks until loaded;
                                                 stays put on failure)
    TextView      --back-----------> FileSelection (drops all loaded data)
"""

from pathlib import Path
from typing import List, Optional, Set, Union

from ..utils.applog import AppLogger
from .loader import LoadError, build_view
from .model import FileEntry, Frame
from .viewport import TextView


class FileSelection:
    """
    File picker state.

    Attributes:
        entries: Files available in the scanned directory.
        selected_paths: Paths marked for loading. Lives exactly as long as
                        this state does.
        cursor: Highlighted entry.
    """

    def __init__(self, entries: List[FileEntry]):
        self.entries = entries
        self.selected_paths: Set[Path] = set()
        self.cursor = 0

    def current(self) -> Optional[FileEntry]:
        if not self.entries:
            return None
        return self.entries[self.cursor]

    def is_selected(self, entry: FileEntry) -> bool:
        return entry.path in self.selected_paths

    def select_next(self) -> None:
        # The file list wraps around, unlike the log view
        if self.entries:
            self.cursor = (self.cursor + 1) % len(self.entries)

    def select_previous(self) -> None:
        if self.entries:
            self.cursor = (self.cursor - 1) % len(self.entries)

    def toggle_current(self) -> None:
        entry = self.current()
        if entry is None:
            return
        if entry.path in self.selected_paths:
            self.selected_paths.remove(entry.path)
        else:
            self.selected_paths.add(entry.path)

    def frame(self) -> Frame:
        rows = [entry.name for entry in self.entries]
        return Frame(rows=rows, selected=self.cursor if rows else None)


ViewState = Union[FileSelection, TextView]


class App:
    """
    The viewer's state machine.

    Attributes:
        entries: Files found in the directory, shown in FileSelection.
        state: The active FileSelection or TextView.
        height: Rows available for the list area.
        dialog: Text of the popup (an error or a line's full text), or None.
        logger: Diagnostic logger.

    Example:
        >>> app = App(scan_directory("logs"), height=40)
        >>> app.toggle_current()
        >>> app.load_selected()
        >>> app.mode
        'log'
    """

    def __init__(
        self,
        entries: List[FileEntry],
        height: int,
        logger: Optional[AppLogger] = None,
    ):
        self.entries = entries
        self.height = max(1, height)
        self.logger = logger or AppLogger.disabled()
        self.state: ViewState = FileSelection(entries)
        self.dialog: Optional[str] = None

    @property
    def mode(self) -> str:
        """Name of the active state, "files" or "log"."""
        return "log" if isinstance(self.state, TextView) else "files"

    def frame(self) -> Frame:
        return self.state.frame()

    # --- transitions ---

    def load_selected(self) -> Frame:
        """
        Load and merge the selected files and switch to the log view.

        Does nothing outside FileSelection or when nothing is selected. On
        failure the app stays in FileSelection and the error becomes the
        dialog text.
        """
        state = self.state
        if not isinstance(state, FileSelection) or not state.selected_paths:
            return self.frame()

        self.logger.info("app", f"loading {len(state.selected_paths)} selected files")
        try:
            view = build_view(state.selected_paths, self.height, self.logger)
        except LoadError as exc:
            if exc.is_io_error:
                self.dialog = (f"cannot load files, {exc.path.name} is not "
                               f"readable, error={exc}")
                self.logger.error("app", self.dialog)
            else:
                # The file is readable, its content just isn't a log
                self.dialog = (f"cannot load files, {exc.path.name} has a line "
                               f"without a timestamp, error={exc}")
                self.logger.warn("app", self.dialog)
            return self.frame()

        self.state = view
        self.logger.info("app", "switched to log view")
        return self.frame()

    def back(self) -> Frame:
        """Return to file selection, discarding the loaded files."""
        if isinstance(self.state, TextView):
            self.state = FileSelection(self.entries)
            self.logger.info("app", "switched to file selection")
        return self.frame()

    # --- popup ---

    def show_details(self) -> None:
        """Put the full text of the highlighted item into the dialog."""
        state = self.state
        if isinstance(state, TextView):
            line = state.current_line()
            if line is not None:
                source = state.paths[state.current_record().file_id]
                self.dialog = f"{source.name}:\n{line}"
        else:
            entry = state.current()
            if entry is not None:
                self.dialog = f"{entry.path}\n{entry.size} bytes"

    def clear_dialog(self) -> None:
        self.dialog = None

    # --- navigation ---

    def resize(self, height: int) -> Frame:
        self.height = max(1, height)
        if isinstance(self.state, TextView):
            return self.state.resize(self.height)
        return self.frame()

    def toggle_current(self) -> Frame:
        if isinstance(self.state, FileSelection):
            self.state.toggle_current()
        return self.frame()

    def scroll_forward(self) -> Frame:
        if isinstance(self.state, TextView):
            return self.state.scroll_forward()
        self.state.select_next()
        return self.frame()

    def scroll_backward(self) -> Frame:
        if isinstance(self.state, TextView):
            return self.state.scroll_backward()
        self.state.select_previous()
        return self.frame()

    def page_down(self) -> Frame:
        if isinstance(self.state, TextView):
            return self.state.page_down()
        return self.frame()

    def page_up(self) -> Frame:
        if isinstance(self.state, TextView):
            return self.state.page_up()
        return self.frame()

    def home(self) -> Frame:
        if isinstance(self.state, TextView):
            return self.state.home()
        return self.frame()

    def end(self) -> Frame:
        if isinstance(self.state, TextView):
            return self.state.end()
        return self.frame()
