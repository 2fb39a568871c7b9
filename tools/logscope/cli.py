#!/usr/bin/env python3
"""
logscope - merged, time-ordered viewer for plain-text log files.

This module implements the command-line interface: it loads configuration,
parses arguments and dispatches to the interactive viewer or to one of
the non-interactive commands.

Commands:
    view [DIRECTORY]        interactive curses viewer (default: cwd)
    merge FILE [FILE ...]   print the merged stream of the files
    files [DIRECTORY]       list the files the viewer would offer

Configuration:
    Settings come from the environment, optionally seeded from a .env file
    in the working directory. Command-line flags win over the environment.

        LOGSCOPE_LOG_ROOT   directory of the diagnostic log (logscope.log)
        LOGSCOPE_POLL_MS    key poll timeout of the viewer, milliseconds

Examples:
    python -m logscope view /var/log/myapp
    python -m logscope merge api.log worker.log --prefix
    python -m logscope files .
"""

import argparse
import curses
import os
import sys
from pathlib import Path
from typing import List, Optional

from .tui.app import App
from .tui.loader import LoadError, build_view
from .tui.views import list_height, run_viewer
from .utils.applog import AppLogger, log_path
from .utils.paths import scan_directory

DEFAULT_POLL_MS = 100

# ============================================================
# Environment Configuration
# ============================================================


def load_dotenv(path: Optional[Path] = None) -> None:
    """
    Load a .env file into os.environ if present.

    Args:
        path: File to read; defaults to .env in the working directory.

    Side Effects:
        Adds variables from the file that aren't already set (existing
        environment variables win).
    """
    env_path = path or Path.cwd() / ".env"

    # The file is optional
    if not env_path.is_file():
        return

    with env_path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue
            # Skip malformed lines (no = sign)
            if "=" not in line:
                continue
            # Split on first = only (value might contain =)
            key, value = line.split("=", 1)
            os.environ.setdefault(key.strip(), value.strip())


def poll_ms_from_env() -> int:
    """Key poll timeout from LOGSCOPE_POLL_MS, falling back to the default."""
    raw = os.environ.get("LOGSCOPE_POLL_MS", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_POLL_MS
    return value if value > 0 else DEFAULT_POLL_MS


def make_logger(args) -> AppLogger:
    """Diagnostic logger for this run, per --log-root / LOGSCOPE_LOG_ROOT."""
    if args.no_log:
        return AppLogger.disabled()
    return AppLogger(log_path(args.log_root))


# ============================================================
# Commands
# ============================================================


def view_directory(args, logger: AppLogger) -> int:
    """Run the interactive viewer over a directory."""
    entries = scan_directory(args.directory)
    logger.info("cli", f"scanned {args.directory}: {len(entries)} files")

    poll_ms = args.poll_ms or poll_ms_from_env()
    # Keep Esc responsive; curses waits a full second by default
    os.environ.setdefault("ESCDELAY", "25")

    def _tui(stdscr):
        h, _w = stdscr.getmaxyx()
        app = App(entries, list_height(h), logger)
        run_viewer(stdscr, app, poll_ms)

    try:
        curses.wrapper(_tui)
    except KeyboardInterrupt:
        # Ctrl+C exits like q
        pass
    return 0


def merge_files(args, logger: AppLogger) -> int:
    """Print the merged stream of the given files to stdout."""
    view = build_view(args.files, height=1, logger=logger)

    for record in view.records:
        text = view.record_text(record)
        if args.prefix:
            text = f"{view.paths[record.file_id].name}: {text}"
        print(text)
    return 0


def list_files(args, logger: AppLogger) -> int:
    """Print name and size of every file the viewer would offer."""
    entries = scan_directory(args.directory)
    logger.info("cli", f"scanned {args.directory}: {len(entries)} files")

    for entry in entries:
        print(f"{entry.size:>12}  {entry.name}")
    return 0


# ============================================================
# Command-Line Argument Parsing
# ============================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="logscope",
        description="Merge timestamped log files and browse them in time order",
    )
    parser.add_argument(
        "--log-root",
        help="Directory for logscope's own diagnostic log "
             "(default: LOGSCOPE_LOG_ROOT or ~/.logscope)",
    )
    parser.add_argument("--no-log", action="store_true",
                        help="Do not write the diagnostic log")

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
    )

    # --- view: interactive TUI ---
    view_parser = subparsers.add_parser(
        "view",
        help="Pick log files in a directory and browse them merged (TUI)",
    )
    view_parser.add_argument("directory", nargs="?", default=".",
                             help="Directory to scan (default: current directory)")
    view_parser.add_argument("--poll-ms", type=int,
                             help="Key poll timeout in milliseconds "
                                  f"(default: LOGSCOPE_POLL_MS or {DEFAULT_POLL_MS})")

    # --- merge: non-interactive output ---
    merge_parser = subparsers.add_parser(
        "merge",
        help="Print the time-ordered merge of log files",
    )
    merge_parser.add_argument("files", nargs="+", help="Log files to merge")
    merge_parser.add_argument("--prefix", action="store_true",
                              help="Prefix each line with its file name")

    # --- files: directory listing ---
    files_parser = subparsers.add_parser(
        "files",
        help="List the log files the viewer would offer",
    )
    files_parser.add_argument("directory", nargs="?", default=".",
                              help="Directory to scan (default: current directory)")

    return parser


COMMANDS = {
    "view": view_directory,
    "merge": merge_files,
    "files": list_files,
}

# ============================================================
# Entry Point
# ============================================================


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the logscope CLI.

    Exit Codes:
        0: Success
        1: A file or directory could not be read, or a file has lines
           without a timestamp
    """
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    logger = make_logger(args)

    logger.info("cli", f"start command={args.command}")
    try:
        code = COMMANDS[args.command](args, logger)
    except (LoadError, OSError) as exc:
        logger.error("cli", str(exc))
        print(f"[logscope] error: {exc}", file=sys.stderr)
        if logger.enabled:
            print(f"[logscope] details in {logger.path}", file=sys.stderr)
        code = 1
    logger.info("cli", f"end command={args.command} code={code}")

    sys.exit(code)


if __name__ == "__main__":
    main()
