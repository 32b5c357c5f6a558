"""
Main entry point for rendering a CSV file as a table.

Usage:
    python -m tabprinter data.csv --style round
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
