"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed
from curtsies.events import PasteEvent

from .view import Display

logger = logging.getLogger(__name__)


class TerminalInterface(Display):
    """Handles terminal I/O using Blessed.

    Cells are collected in a back buffer; present() writes only the rows
    that differ from the previous frame.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._pending: dict[tuple[int, int], str] = {}
        self._cursor: tuple[int, int] = (0, 0)
        # Keys from a paste burst not handed out yet
        self._queued_keys: list[str] = []
        # Last frame written, for minimal updates
        self._last_rows: list[str] | None = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        self.invalidate_frame()
        if self._curtsies_input is None:
            from curtsies import Input
            # Entering the context switches the tty to cbreak mode
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except OSError as e:
                # Teardown should never crash the app
                logger.warning("Could not restore terminal input mode: %s", e)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next present() repaints everything."""
        self._last_rows = None

    # --- Display ---

    def size(self) -> tuple[int, int]:
        return self.term.width, self.term.height

    def clear(self) -> None:
        self._pending.clear()

    def set_cell(self, x: int, y: int, ch: str) -> None:
        width, height = self.size()
        if 0 <= x < width and 0 <= y < height:
            self._pending[(x, y)] = ch

    def set_cursor(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def present(self) -> None:
        width, height = self.size()
        rows = self._compose_rows(width, height)

        if self._last_rows is None or len(self._last_rows) != len(rows):
            print(self.term.home + self.term.clear, end='')
            self._last_rows = [''] * len(rows)

        for y, row in enumerate(rows):
            if row != self._last_rows[y]:
                print(self.term.move(y, 0) + row, end='')
                self._last_rows[y] = row

        x, y = self._cursor
        print(self.term.move(y, x) + self.term.normal_cursor, end='', flush=True)

    def _compose_rows(self, width: int, height: int) -> list[str]:
        grid = [[' '] * width for _ in range(height)]
        for (x, y), ch in self._pending.items():
            if x < width and y < height:
                grid[y][x] = ch
        return [''.join(row) for row in grid]

    # --- Input ---

    def has_queued_keys(self) -> bool:
        """True while keys from a paste are still waiting to be read."""
        return bool(self._queued_keys)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None if no key arrived.
        """
        if self._queued_keys:
            return self._queued_keys.pop(0)
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        evt = next(self._curtsies_input)
        if isinstance(evt, PasteEvent):
            # Fast input arrives as one event; replay it key by key
            self._queued_keys.extend(str(e) for e in evt.events)
            return self._queued_keys.pop(0) if self._queued_keys else None
        return str(evt)
