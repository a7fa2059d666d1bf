"""
Entry point for running the analyzer as a module.

Usage:
    python -m gocyclo -over 15 ./src
    python -m gocyclo --help
"""

import sys
from gocyclo.cli import main

if __name__ == "__main__":
    sys.exit(main())
