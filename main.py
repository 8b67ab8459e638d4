#!/usr/bin/env python

"""
Service Tracker - Main Entry Point

Tracks service hours per worker, summarizes the trailing week against the
weekly goal and exports the records to Excel.

Usage:
    python main.py --help

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from service_tracker.cli import main


if __name__ == "__main__":
    sys.exit(main())
