#!/usr/bin/env python
"""Wrapper script to run the relped CLI from the repo root."""
import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parent
sys.path.insert(0, str(repo_root))

from relped.cli import main

if __name__ == "__main__":
    sys.exit(main())
