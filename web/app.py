#!/usr/bin/env python3
"""
Job Portal Scoring API launcher.

Usage:
    python web/app.py

Equivalent to `python main.py serve`.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from web.backend.app import main


if __name__ == "__main__":
    main()
