#!/usr/bin/env python3
"""
Paint - Main Entry Point

An interactive 2D shape editor: draw circles, rectangles and closed
paths, then select, drag, rotate, scale, restyle and delete them, and
save the drawing as JSON.

Usage:
    python main.py
    python main.py drawing.json   # Open a drawing at startup
    python main.py --debug        # Enable debug logging
"""

import sys
import logging
import argparse
from pathlib import Path
from PyQt6.QtWidgets import QApplication

from views import MainWindow


def setup_logging(debug: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if debug else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at {'DEBUG' if debug else 'INFO'} level")


def setup_application() -> QApplication:
    """Configure the Qt application."""
    app = QApplication(sys.argv)
    app.setApplicationName("Paint")
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName("shape-paint")
    return app


def main():
    """Main entry point."""
    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Paint - 2D shape editor')
    parser.add_argument('file', nargs='?', help='Drawing (.json) to open')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    # Setup logging
    setup_logging(debug=args.debug)

    app = setup_application()

    # Create and show main window
    window = MainWindow()
    if args.file:
        window._open_path(Path(args.file))
    window.show()

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
