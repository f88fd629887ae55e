#!/usr/bin/env python

"""
Worklog Application - Main Entry Point

Records work sessions (date, from, to), totals hours and pay per month,
exports a month to Excel and mirrors everything to an optional remote
endpoint.

Usage:
    python main.py
"""

import logging
import sys
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))

from worklog.infra.config import get_settings
from worklog.ui import WorklogApp


def main():
    """Main entry point"""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = WorklogApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
