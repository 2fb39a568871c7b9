"""
logscope - merged, time-ordered viewer for plain-text log files.

This package merges several timestamped log files into one stream ordered
by time and lets an operator scroll through it in the terminal, without
holding every line of every file as text.

Package Structure:
    - cli.py: Command-line interface and entry point
    - tui/: Line indexing, merging, the windowed view and the curses UI
    - utils/: Directory scanning and the diagnostic log

Usage:
    Run as a module: python -m logscope <command>

Example:
    python -m logscope view /var/log/myapp
"""

__version__ = "0.1.0"
