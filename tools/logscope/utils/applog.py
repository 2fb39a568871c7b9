"""
Diagnostic logging for the viewer itself.

This module provides a small append-only logger that records what the
viewer does (scans, loads, failures, state changes) in a plain-text file.
A curses application owns the terminal, so nothing can be printed while
it runs; the log file is where diagnostics go instead.

Log Line Format:
    <YYYY-MM-DD HH:MM:SS.ffffff> [<component>] <LEVEL> <message>

    2026-10-19 12:00:00.123456 [loader] INFO 2 files loaded

Design Decisions:
    - Append-only writes so earlier sessions are preserved
    - UTC timestamps in the same shape the timestamp extractor reads, so
      the viewer can open and merge its own log with any other log
    - A disabled logger is a normal object whose writes do nothing, so
      library code never has to check for None
"""

from __future__ import annotations

import datetime
import os
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "logscope.log"


def log_root(override: Optional[str] = None) -> Path:
    """
    Return the directory the diagnostic log is written to.

    Resolution order:
        1. The override argument (usually --log-root)
        2. LOGSCOPE_LOG_ROOT environment variable
        3. ~/.logscope

    Args:
        override: Directory to use instead of the environment setting.

    Returns:
        Path: The log directory (not created here).
    """
    root = override or os.environ.get("LOGSCOPE_LOG_ROOT")
    if root:
        return Path(root).expanduser()
    return Path.home() / ".logscope"


def log_path(override: Optional[str] = None) -> Path:
    """Return the full path of the diagnostic log file."""
    return log_root(override) / LOG_FILE_NAME


class AppLogger:
    """
    Minimal append-only logger.

    Attributes:
        path: File the log lines are appended to, or None when disabled.

    Example:
        >>> logger = AppLogger(Path("/tmp/logscope.log"))
        >>> logger.info("loader", "2 files loaded")
        # Writes: 2026-10-19 12:00:00.123456 [loader] INFO 2 files loaded
    """

    def __init__(self, path: Optional[Path]) -> None:
        """
        Initialize a logger writing to the given file.

        Creates the parent directory if needed so the first write cannot
        fail on a missing directory.

        Args:
            path: Log file path; None disables the logger.
        """
        self.path = path
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def disabled(cls) -> "AppLogger":
        """Return a logger that discards everything."""
        return cls(None)

    @property
    def enabled(self) -> bool:
        return self.path is not None

    def _ts(self) -> str:
        """Current UTC time as "YYYY-MM-DD HH:MM:SS.ffffff"."""
        now = datetime.datetime.now(datetime.timezone.utc)
        return now.strftime("%Y-%m-%d %H:%M:%S.%f")

    def log(self, component: str, level: str, message: str) -> None:
        """
        Append one log line.

        Args:
            component: Part of the viewer emitting the line (e.g. "loader").
            level: Severity ("INFO", "WARN", "ERROR").
            message: Human-readable text; newlines are flattened so one
                     event is always one line.
        """
        if self.path is None:
            return

        message = message.replace("\n", " ")
        line = f"{self._ts()} [{component}] {level.upper()} {message}\n"
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line)

    def info(self, component: str, message: str) -> None:
        """Log normal operation (scans, loads, transitions)."""
        self.log(component, "INFO", message)

    def warn(self, component: str, message: str) -> None:
        """Log unusual but non-fatal conditions."""
        self.log(component, "WARN", message)

    def error(self, component: str, message: str) -> None:
        """Log failures of an operation (e.g. a rejected load)."""
        self.log(component, "ERROR", message)
