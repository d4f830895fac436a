"""
Entry point for running runtests as a module.

Usage:
    python -m runtests [tests...] [options]
"""

from runtests.cli import main

if __name__ == "__main__":
    main()
