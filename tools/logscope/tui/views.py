"""
Curses-based UI for the log viewer.

This module contains the main input/render loop. It owns no viewer
state of its own: every key is turned into a call on App, and every frame
is drawn from what App reports.

Loop:
    - Wait up to poll_ms for a key (curses timeout)
    - Dispatch the key, if any
    - Redraw the whole screen every iteration, key or not

    The loop is single-threaded. Loading files blocks inside the key
    dispatch until the merged view is ready.

Screen Layout:
    row 0         title and Files / Log tabs
    row 1         separator
    rows 2..h-2   list area (files or log lines)
    row h-1       key help
"""

import curses
import textwrap
from typing import Callable, Dict

from .app import App, FileSelection

HEADER_ROWS = 2
FOOTER_ROWS = 1

# Color pair ids
PAIR_ERROR = 1
PAIR_WARN = 2
PAIR_ACCENT = 3

FOOTER_FILES = "q quit  space select  enter load  d details  esc close"
FOOTER_LOG = "q quit  j/k move  pgup/pgdn page  home/end  d details  backspace files"

KEY_ESCAPE = 27

# Control characters (tab excepted) would be interpreted by the terminal,
# and addstr rejects NUL outright
CONTROL_CHARS = {code: "\ufffd" for code in (*range(32), 127) if code != ord("\t")}


def bindings(app: App) -> Dict[int, Callable]:
    """Map key codes to App commands."""
    return {
        ord("j"): app.scroll_forward,
        curses.KEY_DOWN: app.scroll_forward,
        ord("k"): app.scroll_backward,
        curses.KEY_UP: app.scroll_backward,
        ord(" "): app.toggle_current,
        ord("g"): app.load_selected,
        ord("\n"): app.load_selected,
        curses.KEY_ENTER: app.load_selected,
        curses.KEY_BACKSPACE: app.back,
        127: app.back,
        8: app.back,
        curses.KEY_NPAGE: app.page_down,
        curses.KEY_PPAGE: app.page_up,
        curses.KEY_HOME: app.home,
        curses.KEY_END: app.end,
        ord("d"): app.show_details,
        KEY_ESCAPE: app.clear_dialog,
    }


def handle_key(keymap: Dict[int, Callable], ch: int) -> bool:
    """
    Apply one key press to the app.

    Args:
        keymap: Key bindings built by bindings() for the running App.
        ch: Key code from getch(); -1 means no key arrived.

    Returns:
        bool: False when the viewer should exit, True otherwise.
    """
    if ch in (ord("q"), ord("Q")):
        return False

    command = keymap.get(ch)
    if command is not None:
        command()
    return True


def list_height(screen_height: int) -> int:
    """Rows available for the list area on a screen of the given height."""
    return max(1, screen_height - HEADER_ROWS - FOOTER_ROWS)


def printable(text: str) -> str:
    """Replace control characters so a raw log line is safe to draw."""
    return text.translate(CONTROL_CHARS)


def _put(stdscr, y: int, x: int, text: str, attr: int = 0) -> None:
    """addstr that ignores writes curses refuses (e.g. the last cell)."""
    try:
        stdscr.addstr(y, x, printable(text), attr)
    except curses.error:
        pass


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.use_default_colors()
    curses.init_pair(PAIR_ERROR, curses.COLOR_RED, -1)
    curses.init_pair(PAIR_WARN, curses.COLOR_YELLOW, -1)
    curses.init_pair(PAIR_ACCENT, curses.COLOR_YELLOW, curses.COLOR_BLUE)


def _row_attr(row: str) -> int:
    """Colorize log rows by severity keyword."""
    if not curses.has_colors():
        return 0
    if "ERROR" in row:
        return curses.color_pair(PAIR_ERROR)
    if "WARN" in row:
        return curses.color_pair(PAIR_WARN)
    return 0


def _draw_header(stdscr, app: App, width: int) -> None:
    _put(stdscr, 0, 0, "logscope")
    x = 12
    for tab, mode in (("Files", "files"), ("Log", "log")):
        attr = curses.A_REVERSE if app.mode == mode else curses.A_BOLD
        _put(stdscr, 0, x, f" {tab} ", attr)
        x += len(tab) + 3
    _put(stdscr, 1, 0, "-" * (width - 1))


def _draw_list(stdscr, app: App, width: int) -> None:
    frame = app.frame()
    state = app.state

    first = 0
    if isinstance(state, FileSelection) and frame.selected is not None:
        # The file list scrolls with its cursor
        first = max(0, frame.selected - app.height + 1)

    for i, row in enumerate(frame.rows[first:first + app.height], start=first):
        if isinstance(state, FileSelection):
            marker = "x" if state.is_selected(state.entries[i]) else " "
            text = f"[{marker}] {row}"
            attr = 0
        else:
            text = row
            attr = _row_attr(row)

        if i == frame.selected:
            attr = curses.A_REVERSE
        _put(stdscr, HEADER_ROWS + i - first, 0, text[: width - 1], attr)


def _draw_dialog(stdscr, text: str, height: int, width: int) -> None:
    """Draw the popup centered, 60% wide, tall enough for its text."""
    box_width = max(20, width * 60 // 100)
    inner = box_width - 4
    lines = []
    for paragraph in (text + "\n\nPress 'Esc' to close this popup").split("\n"):
        lines.extend(textwrap.wrap(paragraph, inner) or [""])

    box_height = min(height - 2, len(lines) + 2)
    top = max(0, (height - box_height) // 2)
    left = max(0, (width - box_width) // 2)

    try:
        win = curses.newwin(box_height, box_width, top, left)
    except curses.error:
        return
    if curses.has_colors():
        win.bkgd(" ", curses.color_pair(PAIR_ACCENT))
    win.erase()
    win.box()
    _put(win, 0, 2, " Popup ")
    for i, line in enumerate(lines[: box_height - 2]):
        _put(win, i + 1, 2, line)
    win.refresh()


def draw(stdscr, app: App) -> None:
    """Render one complete frame."""
    stdscr.erase()
    h, w = stdscr.getmaxyx()

    _draw_header(stdscr, app, w)
    _draw_list(stdscr, app, w)

    footer = FOOTER_LOG if app.mode == "log" else FOOTER_FILES
    _put(stdscr, h - 1, 0, footer[: w - 1])
    stdscr.refresh()

    if app.dialog is not None:
        _draw_dialog(stdscr, app.dialog, h, w)


def run_viewer(stdscr, app: App, poll_ms: int = 100) -> None:
    """
    Run the interactive viewer until the operator quits.

    Args:
        stdscr: The curses standard screen (provided by curses.wrapper).
        app: Viewer state, usually in FileSelection.
        poll_ms: How long each iteration waits for a key.

    Note:
        Call via curses.wrapper() so the terminal is restored on exit.
    """
    curses.curs_set(0)
    stdscr.keypad(True)
    stdscr.timeout(poll_ms)
    _init_colors()
    keymap = bindings(app)

    running = True
    while running:
        h, _w = stdscr.getmaxyx()
        app.resize(list_height(h))
        draw(stdscr, app)

        ch = stdscr.getch()
        if ch == -1:
            continue
        running = handle_key(keymap, ch)
