"""
Noteboard TUI.

Terminal rendition of the notes home screen, talking to the notes API
configured in config/settings/application.yaml.

Usage:
    python tui.py
    python tui.py --debug
"""

import sys

from noteboard.core.config import validate_project_root
from noteboard.core.logging import setup_logging
from noteboard.tui.app import main as run_app


def main() -> None:
    validate_project_root()
    debug = "--debug" in sys.argv
    setup_logging(level="DEBUG" if debug else None, enable_console=False)
    run_app(debug=debug)


if __name__ == "__main__":
    main()
