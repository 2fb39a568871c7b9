"""
Tests for the FileSelection / TextView state machine.
"""
from logscope.tui.app import App, FileSelection
from logscope.tui.viewport import FILLER, TextView
from logscope.utils.applog import AppLogger
from logscope.utils.paths import scan_directory

from .conftest import stamp


class TestFileSelection:
    """Tests for the file picker state."""

    def make_app(self, tmp_path, height=10, logger=None):
        return App(scan_directory(tmp_path), height, logger)

    def test_starts_in_file_selection(self, tmp_path, two_logs):
        app = self.make_app(tmp_path)
        assert app.mode == "files"
        assert isinstance(app.state, FileSelection)
        assert app.frame().rows == ["a.log", "b.log"]
        assert app.frame().selected == 0

    def test_selection_wraps_around(self, tmp_path, two_logs):
        app = self.make_app(tmp_path)
        assert app.scroll_backward().selected == 1
        assert app.scroll_forward().selected == 0
        assert app.scroll_forward().selected == 1

    def test_toggle(self, tmp_path, two_logs):
        app = self.make_app(tmp_path)
        a, _b = two_logs
        app.toggle_current()
        assert app.state.selected_paths == {a.resolve()}
        app.toggle_current()
        assert app.state.selected_paths == set()

    def test_view_commands_are_noops(self, tmp_path, two_logs):
        app = self.make_app(tmp_path)
        before = app.frame()
        for move in (app.page_down, app.page_up, app.home, app.end, app.back):
            assert move() == before
        assert app.mode == "files"

    def test_load_with_nothing_selected(self, tmp_path, two_logs):
        app = self.make_app(tmp_path)
        app.load_selected()
        assert app.mode == "files"
        assert app.dialog is None

    def test_empty_directory(self, tmp_path):
        app = self.make_app(tmp_path)
        assert app.frame().rows == []
        assert app.frame().selected is None
        app.scroll_forward()
        app.toggle_current()
        app.show_details()
        assert app.dialog is None


class TestTransitions:
    """Tests for loading and going back."""

    def load_both(self, tmp_path, height=10, logger=None):
        app = App(scan_directory(tmp_path), height, logger)
        app.toggle_current()
        app.scroll_forward()
        app.toggle_current()
        app.load_selected()
        return app

    def test_load_switches_to_log_view(self, tmp_path, two_logs):
        app = self.load_both(tmp_path)
        assert app.mode == "log"
        assert isinstance(app.state, TextView)

        frame = app.frame()
        assert frame.rows[0] == f"{stamp(0)} INFO A-0 at 0s"
        assert frame.rows[1] == f"{stamp(7)} INFO B-0 at 7s"
        assert frame.rows[8:] == [FILLER, FILLER]
        assert frame.selected == 0

    def test_navigation_in_log_view(self, tmp_path, two_logs):
        app = self.load_both(tmp_path, height=4)
        assert app.scroll_forward().selected == 1
        assert app.end().selected == 3
        assert app.home().selected == 0
        assert app.page_down().rows[0] == f"{stamp(10)} INFO A-1 at 10s"
        assert app.page_up().rows[0] == f"{stamp(0)} INFO A-0 at 0s"

    def test_back_discards_view_and_selection(self, tmp_path, two_logs):
        app = self.load_both(tmp_path)
        app.back()
        assert app.mode == "files"
        assert app.state.selected_paths == set()
        assert app.frame().rows == ["a.log", "b.log"]

    def test_failed_load_stays_in_file_selection(self, tmp_path, two_logs):
        (tmp_path / "c.log").write_text("no timestamp here at all\n")
        app = App(scan_directory(tmp_path), 10)
        app.scroll_backward()
        app.toggle_current()
        app.load_selected()

        assert app.mode == "files"
        assert "cannot load files" in app.dialog
        assert "c.log" in app.dialog
        app.clear_dialog()
        assert app.dialog is None

    def test_line_without_timestamp_is_a_warning(self, tmp_path, two_logs):
        (tmp_path / "c.log").write_text("no timestamp here at all\n")
        logger = AppLogger(tmp_path / "diag" / "logscope.log")
        app = App(scan_directory(tmp_path), 10, logger)
        app.scroll_backward()
        app.toggle_current()
        app.load_selected()

        assert "c.log has a line without a timestamp" in app.dialog
        assert "[app] WARN cannot load files" in logger.path.read_text()

    def test_vanished_file_is_an_error(self, tmp_path, two_logs):
        a, _b = two_logs
        logger = AppLogger(tmp_path / "diag" / "logscope.log")
        app = App(scan_directory(tmp_path), 10, logger)
        app.toggle_current()
        a.unlink()
        app.load_selected()

        assert app.mode == "files"
        assert "a.log is not readable" in app.dialog
        assert "[app] ERROR cannot load files" in logger.path.read_text()

    def test_resize_reaches_view(self, tmp_path, two_logs):
        app = self.load_both(tmp_path, height=4)
        assert len(app.resize(6).rows) == 6

    def test_transitions_are_logged(self, tmp_path, two_logs):
        logger = AppLogger(tmp_path / "diag" / "logscope.log")
        app = self.load_both(tmp_path, logger=logger)
        app.back()

        text = logger.path.read_text()
        assert "[app] INFO switched to log view" in text
        assert "[app] INFO switched to file selection" in text


class TestDetails:
    """Tests for the popup text."""

    def test_line_details(self, tmp_path, two_logs):
        app = App(scan_directory(tmp_path), 10)
        app.toggle_current()
        app.load_selected()
        app.scroll_forward()
        app.show_details()
        assert app.dialog == f"a.log:\n{stamp(10)} INFO A-1 at 10s"

    def test_file_details(self, tmp_path, two_logs):
        a, _b = two_logs
        app = App(scan_directory(tmp_path), 10)
        app.show_details()
        assert app.dialog == f"{a.resolve()}\n{a.stat().st_size} bytes"
