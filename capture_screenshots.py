"""
Entry point for the docs screenshot pipeline: scans markdown for
SCREENSHOT / GIF markers, logs into the app once, captures each marker
and patches image references back into the docs.

Usage:
    python capture_screenshots.py [--file docs/quotes/new.md] [--strict]
"""

from __future__ import annotations

import sys

from docs_capture.core.orchestrator import main

if __name__ == "__main__":
    sys.exit(main())
