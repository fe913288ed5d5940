"""
Main entry point for running scrambler as a module.

Usage:
    python -m scrambler <command> [options]
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
