"""
Core and TUI components for logscope.

Modules:
    - timestamp: Pull and parse the timestamp at the start of a log line
    - line_index: O(1) random access to the lines of a raw file buffer
    - model: Records, file entries and frames shared by the modules below
    - merger: Annotate files with timestamps and merge them by time
    - loader: Concurrent loading of the selected files into a TextView
    - viewport: The windowed view over the merged stream and its navigation
    - app: FileSelection / TextView state machine driving the UI
    - views: Curses rendering loop and key dispatch

Architecture:
    1. loader reads each file in its own asyncio task and indexes it
    2. merger turns every file into Records and folds them into one order
    3. viewport materializes only the lines currently on screen
    4. views polls keys, calls into app and redraws every iteration
"""
