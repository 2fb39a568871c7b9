"""
Log file discovery for the file selection screen.

This module scans a directory and returns the files an operator can
choose to merge.

Purpose:
    The viewer is pointed at a directory full of logs. Only some entries
    are worth listing: hidden files (dotfiles), subdirectories and empty
    files are skipped, and the remaining files are sorted by path so the
    list is stable between runs.
"""

from pathlib import Path
from typing import List, Union

from ..tui.model import FileEntry


def is_hidden(path: Path) -> bool:
    """Return True for dotfiles such as .gitignore or .env."""
    return path.name.startswith(".")


def scan_directory(directory: Union[str, Path]) -> List[FileEntry]:
    """
    List the log files in a directory.

    Args:
        directory: Directory to scan (not recursive).

    Returns:
        List[FileEntry]: Regular, non-hidden, non-empty files with absolute
                         paths, sorted by path.

    Raises:
        OSError: The directory does not exist or cannot be read.
                 Also raised when a file name is not valid text.

    Example:
        >>> scan_directory("/var/log/myapp")
        [FileEntry(path=PosixPath('/var/log/myapp/api.log'), size=5120), ...]
    """
    root = Path(directory).resolve()
    entries = []

    for path in root.iterdir():
        if is_hidden(path):
            continue
        # Surrogate-escaped names come from undecodable bytes on disk
        try:
            path.name.encode("utf-8")
        except UnicodeEncodeError:
            raise OSError(f"file name is not valid text: {path.name!r}") from None

        # Symlinks to regular files count; directories and devices do not
        if not path.is_file():
            continue

        size = path.stat().st_size
        if size == 0:
            continue

        entries.append(FileEntry(path=path.resolve(), size=size))

    entries.sort(key=lambda entry: str(entry.path))
    return entries
