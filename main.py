#!/usr/bin/env python

"""
Tim Evaluator - Main Entry Point

Loads a Tim time-tracking export, shows idle gaps between records and lets
you assign them to a task before exporting an updated Tim file or a CSV
timesheet.

Usage:
    python main.py [EXPORT_FILE]

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
import logging
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))

from app.ui import EvaluatorApp


def main():
    """Main entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    initial_file = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    app = EvaluatorApp(initial_file)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
