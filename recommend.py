#!/usr/bin/env python3
"""Entry point: python recommend.py <job_posting_url> [--user-id ID | --linkedin URL]."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from brewai.cli import main

if __name__ == "__main__":
    sys.exit(main())
