"""Display abstraction and the full-screen renderer."""

import unicodedata
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import Buffer


def cell_char(ch: str) -> str:
    """Character to draw for ch; control characters would move the terminal cursor."""
    if unicodedata.category(ch) == 'Cc':
        return EditorConstants.CONTROL_CHAR_PLACEHOLDER
    return ch


class Display(ABC):
    """A character grid the editor draws into.

    Cells written with set_cell only become visible after present().
    """

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return (width, height) in cells."""

    @abstractmethod
    def clear(self) -> None:
        """Blank every cell of the pending frame."""

    @abstractmethod
    def set_cell(self, x: int, y: int, ch: str) -> None:
        """Put one character at column x, row y of the pending frame."""

    @abstractmethod
    def set_cursor(self, x: int, y: int) -> None:
        """Place the visible cursor."""

    @abstractmethod
    def present(self) -> None:
        """Show the pending frame."""


class ScreenView:
    """Draws the buffer, the cursor and the status line onto a Display.

    The text area is every row except the last, which holds the status line.
    top_row is the first buffer row shown; it only moves when the cursor
    would otherwise leave the text area.
    """

    def __init__(self, display: Display):
        self.display = display
        self.top_row = 0

    @property
    def text_rows(self) -> int:
        _, height = self.display.size()
        return max(1, height - 1)

    def scroll_to(self, cursor_row: int) -> None:
        """Adjust top_row so cursor_row is inside the text area."""
        rows = self.text_rows
        if cursor_row < self.top_row:
            self.top_row = cursor_row
        elif cursor_row >= self.top_row + rows:
            self.top_row = cursor_row - rows + 1

    def render(self, buffer: "Buffer", cursor_x: int, cursor_y: int, status: str) -> None:
        """Redraw the whole grid from the buffer's current content."""
        display = self.display
        width, height = display.size()
        self.scroll_to(cursor_y)
        display.clear()

        last_row = min(len(buffer), self.top_row + self.text_rows)
        for row in range(self.top_row, last_row):
            y = row - self.top_row
            for x, ch in enumerate(buffer.lines[row][:width]):
                display.set_cell(x, y, cell_char(ch))

        self.draw_status(status, width, height)
        # Text past the right edge is clipped; keep the cursor on screen
        display.set_cursor(min(cursor_x, max(0, width - 1)), cursor_y - self.top_row)
        display.present()

    def draw_status(self, status: str, width: int, height: int) -> None:
        x0 = EditorConstants.STATUS_LINE_X
        for i, ch in enumerate(status[:max(0, width - x0)]):
            self.display.set_cell(x0 + i, height - 1, cell_char(ch))
