"""
Main entry point for the ledit application.

This module handles:
- Command line argument parsing
- Logging configuration
- Exception handling
- Headless span dumps
- Main window creation
"""

from __future__ import annotations

import argparse
import faulthandler
import logging
import os
import signal
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication, QMessageBox

from ledit import APP_NAME, APP_VERSION
from ledit.core.models import Language
from ledit.core.syntax import classify
from ledit.services.settings import SettingsManager
from ledit.ui.widgets.syntax_highlighter import get_available_themes, get_theme_by_name


# =============================================================================
# Constants
# =============================================================================

APP_DISPLAY_NAME = "Ledit"
APP_ORGANIZATION = "Ledit"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2

# Paths
if getattr(sys, 'frozen', False):
    # Running as compiled executable
    APP_DIR = Path(sys.executable).parent
else:
    # Running as script
    APP_DIR = Path(__file__).parent

LOGS_DIR = APP_DIR / "logs"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    path: Optional[str] = None
    language: Optional[Language] = None
    theme: Optional[str] = None
    font_size: Optional[int] = None
    dump: bool = False
    config_file: Optional[str] = None
    log_level: str = "INFO"
    reset_settings: bool = False
    debug: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream: Optional[TextIO] = None):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        stream = stream or sys.stdout
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level string
        log_file: Optional file path for logging
        stream: Console stream (defaults to stdout)

    Returns:
        Root logger instance
    """
    stream = stream or sys.stdout

    # Get numeric level
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Create root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True, stream=stream))
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """
    Global exception handler for unhandled exceptions.

    Logs the exception and shows an error dialog when the GUI is running.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._app: Optional[QApplication] = None

    def set_application(self, app: QApplication) -> None:
        """Set the application instance for error dialogs."""
        self._app = app

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        # Don't handle keyboard interrupt
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )

        if self._app and QApplication.instance():
            tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
            self._show_error_dialog(exc_type, exc_value, tb_text)

    def _show_error_dialog(
        self,
        exc_type: type,
        exc_value: BaseException,
        traceback_text: str
    ) -> None:
        """Show error dialog to user."""
        dialog = QMessageBox()
        dialog.setIcon(QMessageBox.Icon.Critical)
        dialog.setWindowTitle("Application Error")
        dialog.setText(f"An unexpected error occurred:\n\n{exc_type.__name__}: {exc_value}")
        dialog.setDetailedText(traceback_text)
        dialog.setStandardButtons(QMessageBox.StandardButton.Ok)

        copy_btn = dialog.addButton(
            "Copy to Clipboard",
            QMessageBox.ButtonRole.ActionRole
        )

        dialog.exec()

        if dialog.clickedButton() == copy_btn:
            QApplication.clipboard().setText(traceback_text)


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Code editor with regex-driven syntax highlighting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s main.swift                    Open a file in the editor
  %(prog)s --theme monokai notes.md      Open with the Monokai theme
  %(prog)s --dump app.py                 Print classified spans and exit
  %(prog)s --dump -l json data.txt       Dump spans using a given language
        """
    )

    # Positional arguments
    parser.add_argument(
        'path',
        nargs='?',
        help='File to open'
    )

    # Highlighting options
    parser.add_argument(
        '-l', '--language',
        help='Language override (swift, python, javascript, json, markdown, html, css, plain)'
    )
    parser.add_argument(
        '--theme',
        type=str.lower,
        choices=[name.lower() for name in get_available_themes()],
        default=None,
        help='Editor theme'
    )
    parser.add_argument(
        '--font-size',
        type=int,
        default=None,
        help='Editor font size in points'
    )
    parser.add_argument(
        '--dump',
        action='store_true',
        help='Print classified spans of PATH and exit'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Configuration file path'
    )
    parser.add_argument(
        '--reset-settings',
        action='store_true',
        help='Reset all settings to defaults'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode (also logs to a file)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='INFO',
        help='Log level'
    )

    # Version
    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    if parsed.dump and not parsed.path:
        parser.error("--dump requires a file path")

    if parsed.font_size is not None and parsed.font_size <= 0:
        parser.error("--font-size must be positive")

    result = CommandLineArgs()
    result.path = parsed.path
    result.theme = parsed.theme
    result.font_size = parsed.font_size
    result.dump = parsed.dump
    result.config_file = parsed.config
    result.reset_settings = parsed.reset_settings
    result.debug = parsed.debug

    if parsed.language:
        result.language = Language.from_string(parsed.language)

    # Log level
    if parsed.debug or parsed.verbose:
        result.log_level = 'DEBUG'
    else:
        result.log_level = parsed.log_level

    return result


# =============================================================================
# Headless Dump
# =============================================================================

def dump_spans(
    path: str,
    language: Optional[Language] = None,
    theme_name: Optional[str] = None,
    out: Optional[TextIO] = None
) -> int:
    """
    Print the classified spans of a file, one per line.

    Each line is ``start<TAB>length<TAB>role<TAB>#rrggbb<TAB>repr(text)``.

    Returns:
        Exit code
    """
    out = out or sys.stdout
    file_path = Path(path)

    if not file_path.is_file():
        logging.error(f"Dump - No such file: {file_path}")
        return EXIT_USAGE

    try:
        text = file_path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        logging.error(f"Dump - Failed to read {file_path}: {e}")
        return EXIT_ERROR

    if language is None:
        language = Language.detect(file_path.name)
    theme = get_theme_by_name(theme_name)

    logging.debug(f"Dump - Classifying {file_path} as {language.display_name}")

    for span in classify(text, language):
        color = theme.color_for(span.role).name()
        out.write(f"{span.start}\t{span.length}\t{span.role.value}\t{color}\t{span.text_in(text)!r}\n")

    return EXIT_OK


# =============================================================================
# Application Setup
# =============================================================================

def setup_application(args: CommandLineArgs) -> QApplication:
    """
    Create and configure the QApplication.

    Args:
        args: Parsed command line arguments

    Returns:
        Configured QApplication instance
    """
    app = QApplication(sys.argv)

    # Set application metadata
    app.setApplicationName(APP_NAME)
    app.setApplicationDisplayName(APP_DISPLAY_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_ORGANIZATION)

    app.setQuitOnLastWindowClosed(True)

    return app


def setup_settings(args: CommandLineArgs) -> SettingsManager:
    """
    Set up application settings.

    Args:
        args: Parsed command line arguments

    Returns:
        Settings manager instance
    """
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)

    # Reset if requested
    if args.reset_settings:
        logging.info(f"Resetting settings at {manager.settings_path}")
        manager.reset()

    return manager


def create_main_window(args: CommandLineArgs, settings_manager: SettingsManager):
    """
    Create and configure the main window.

    Command line overrides apply to this run only and are not saved.

    Args:
        args: Parsed command line arguments
        settings_manager: Settings to load the editor from

    Returns:
        MainWindow instance
    """
    from ledit.ui.main_window import MainWindow

    window = MainWindow(settings_manager)

    if args.theme:
        window.set_theme(args.theme, save=False)
    if args.font_size:
        window.set_font_size(args.font_size, save=False)

    if args.path:
        window.open_file(args.path, args.language)
    elif args.language:
        window.set_language(args.language)

    return window


# =============================================================================
# Signal Handlers
# =============================================================================

def setup_signal_handlers() -> Optional[QTimer]:
    """Set up Unix signal handlers."""
    if sys.platform == 'win32':
        return None

    # Handle SIGINT (Ctrl+C) gracefully
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    # Allow Python to process signals while Qt runs its loop
    timer = QTimer()
    timer.timeout.connect(lambda: None)
    timer.start(500)
    return timer


def _signal_handler(signum, frame) -> None:
    """Handle Unix signals."""
    logging.info(f"Received signal {signum}, shutting down...")
    QApplication.quit()


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Returns:
        Exit code (0 for success)
    """
    # Redirect stdout/stderr if None (common in frozen apps)
    if sys.stdout is None:
        sys.stdout = open(os.devnull, 'w')
    if sys.stderr is None:
        sys.stderr = open(os.devnull, 'w')

    faulthandler.enable()

    args = parse_arguments(argv)

    # Dump output owns stdout, so logs go to stderr
    log_file = LOGS_DIR / f"{APP_NAME}_{datetime.now():%Y%m%d}.log" if args.debug else None
    logger = setup_logging(args.log_level, log_file, sys.stderr if args.dump else sys.stdout)

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception

    if args.dump:
        return dump_spans(args.path, args.language, args.theme)

    if args.path and not Path(args.path).is_file():
        logger.error(f"No such file: {args.path}")
        return EXIT_USAGE

    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")

    try:
        app = setup_application(args)
        exception_handler.set_application(app)

        settings_manager = setup_settings(args)
        signal_timer = setup_signal_handlers()

        main_window = create_main_window(args, settings_manager)
        main_window.show()

        logger.info("Application started successfully")

        exit_code = app.exec()

        if signal_timer is not None:
            signal_timer.stop()

        logger.info(f"Application exiting with code {exit_code}")
        return exit_code

    except Exception as e:
        logger.critical(f"Fatal error during startup: {e}", exc_info=True)

        if QApplication.instance():
            QMessageBox.critical(
                None,
                "Fatal Error",
                f"The application failed to start:\n\n{e}\n\n"
                "Please check the logs for more information."
            )

        return EXIT_ERROR


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
