"""Line buffer holding the text being edited.

The buffer is an ordered list of lines, each line a mutable list of single
characters. It knows nothing about cursors or modes; callers pass explicit
row/column positions and are responsible for keeping them in range.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from typing import Iterable, TextIO

logger = logging.getLogger(__name__)


def _mode_for(path: str) -> int:
    """Permission bits a saved file should get: the target's own, if it exists."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class ContractViolation(IndexError):
    """Raised when a row or column outside the buffer is passed in."""


class Buffer:
    """Ordered collection of lines; the single source of truth for text."""

    lines: list[list[str]]

    def __init__(self, lines: Iterable[str] = ()):
        self.lines = [list(line) for line in lines]

    def __len__(self) -> int:
        return len(self.lines)

    def __repr__(self) -> str:
        return f"Buffer({self.text_lines()!r})"

    # --- Loading and saving ---

    @classmethod
    def load(cls, stream: TextIO) -> "Buffer":
        """Read newline-delimited text from a stream.

        Each input line becomes one buffer line with its line terminator
        removed. An empty stream gives an empty buffer (zero lines).
        """
        buffer = cls()
        for raw in stream:
            if raw.endswith('\n'):
                raw = raw[:-1]
            if raw.endswith('\r'):
                raw = raw[:-1]
            buffer.lines.append(list(raw))
        return buffer

    @classmethod
    def from_file(cls, path: str) -> "Buffer":
        """Load a buffer from a UTF-8 file.

        Raises:
            OSError: if the file cannot be opened or read.
            UnicodeDecodeError: if the file is not valid UTF-8.
        """
        # Only '\n' ends a line; load() drops a trailing '\r' itself
        with open(path, 'r', encoding='utf-8', newline='\n') as f:
            buffer = cls.load(f)
        logger.debug("Loaded %d lines from %s", len(buffer), path)
        return buffer

    def save(self, stream: TextIO) -> None:
        """Write every line followed by one newline, then flush."""
        for line in self.lines:
            stream.write(''.join(line))
            stream.write('\n')
        stream.flush()

    def save_to_file(self, path: str) -> None:
        """Save atomically: write a temp file beside ``path`` and rename it.

        The target is left untouched if anything fails. Errors propagate to
        the caller as ``OSError``.
        """
        dir_name = os.path.dirname(path) or '.'
        suffix = os.path.splitext(path)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name, suffix=suffix,
                                             newline='\n', delete=False) as temp_file:
                temp_filename = temp_file.name
                os.chmod(temp_filename, _mode_for(path))
                self.save(temp_file)
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except OSError:
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.debug("Could not remove temp file %s", temp_filename)
            raise
        logger.debug("Saved %d lines to %s", len(self), path)

    # --- Queries ---

    def is_empty(self) -> bool:
        return not self.lines

    def line_length(self, row: int) -> int:
        self._check_row(row)
        return len(self.lines[row])

    def line_text(self, row: int) -> str:
        self._check_row(row)
        return ''.join(self.lines[row])

    def text_lines(self) -> list[str]:
        return [''.join(line) for line in self.lines]

    # --- Mutations ---

    def insert_char(self, row: int, column: int, ch: str) -> None:
        """Insert ``ch`` at ``column`` on ``row``, shifting the rest right.

        Typing into an empty buffer is allowed at (0, 0): the first line is
        created before the character goes in.
        """
        if len(ch) != 1:
            raise ContractViolation(f"expected a single character, got {ch!r}")
        if not self.lines and row == 0:
            self.lines.append([])
        self._check_position(row, column)
        self.lines[row].insert(column, ch)

    def delete_char_before(self, row: int, column: int) -> bool:
        """Remove the character at ``column - 1`` on ``row``.

        At column 0 nothing is removed and False is returned; joining with
        the previous line is a separate operation.
        """
        self._check_position(row, column)
        if column == 0:
            return False
        del self.lines[row][column - 1]
        return True

    def join_with_previous(self, row: int) -> int:
        """Append ``row`` onto the line above it and remove ``row``.

        Returns the column in the previous line where the joined text starts.
        """
        self._check_row(row)
        if row == 0:
            raise ContractViolation("first line has no previous line")
        join_column = len(self.lines[row - 1])
        self.lines[row - 1].extend(self.lines.pop(row))
        return join_column

    def split_line_at(self, row: int, column: int) -> int:
        """Move everything from ``column`` on into a new line below ``row``.

        Returns the index of the new line.
        """
        self._check_position(row, column)
        line = self.lines[row]
        self.lines.insert(row + 1, line[column:])
        del line[column:]
        return row + 1

    def ensure_first_line(self) -> bool:
        """Create the first line of an empty buffer. Returns True if created."""
        if self.lines:
            return False
        self.lines.append([])
        return True

    # --- Contract checks ---

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self.lines):
            raise ContractViolation(f"row {row} out of range (buffer has {len(self.lines)} lines)")

    def _check_position(self, row: int, column: int) -> None:
        self._check_row(row)
        length = len(self.lines[row])
        if not 0 <= column <= length:
            raise ContractViolation(f"column {column} out of range on row {row} (length {length})")
