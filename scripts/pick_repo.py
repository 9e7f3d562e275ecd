#!/usr/bin/env python3
"""Script to pick an organization repository, clone it if needed and print its path."""

import sys
import os

# Add the project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from orgclone.cli import main


if __name__ == "__main__":
    sys.exit(main())
