"""
Entry point for running the style checker as a module.

Usage:
    python -m flintpp -r ./src
    python -m flintpp --help
"""

import sys
from flintpp.cli import main

if __name__ == "__main__":
    sys.exit(main())
