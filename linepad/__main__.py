"""linepad CLI entry point.

Allows running via `python -m linepad` and provides the console script
defined in `pyproject.toml`.

Usage:
    linepad [FILE]

Controls:
    Arrow keys: Move the cursor (each line remembers its column)
    Ctrl-I / Tab: Insert mode
    Esc: Back to navigate mode
    Backspace: Delete character (joins lines at column 0)
    Enter: Split line
    Ctrl-S: Save
    Ctrl-C / Ctrl-Q: Quit without saving
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .editor import Editor
from .settings import EditorSettings, get_log_dir, load_settings
from .version import get_version_string

logger = logging.getLogger(__name__)


def configure_logging(settings: EditorSettings, log_dir: Optional[Path] = None) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    log_dir = log_dir or get_log_dir()
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_dir / "linepad.log", encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    settings = load_settings()
    configure_logging(settings)
    filename = args[0] if args else settings.default_filename

    editor = Editor(settings=settings)
    try:
        editor.load_file(filename)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not load %s: %s", filename, e)
        print(f"Error loading file: {e}", file=sys.stderr)
        sys.exit(1)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
