"""
Utility modules for logscope.

Modules:
    - paths: Directory scanning for the file selection screen
    - applog: Append-only diagnostic log of the viewer itself
"""
