"""
Main entry point for running ncol as a module.

Usage:
    python -m ncol [options]
"""

from .cli import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
