"""
Entry point for running els-finder as a module.

Usage:
    python -m elsfinder [options] file.pdf
"""

import sys

from elsfinder.cli import main

if __name__ == "__main__":
    sys.exit(main())
