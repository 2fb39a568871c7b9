"""
Entry point for running logscope as a Python module.

Enables:
    python -m logscope <command>
"""

from .cli import main

if __name__ == "__main__":
    main()
