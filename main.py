"""
Entry point for the WordPress image helpers command line.
"""

import sys

from wpimage.cli import main

if __name__ == "__main__":
    sys.exit(main())
