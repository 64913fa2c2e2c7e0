"""Main editor controller: cursor, mode and event dispatch."""

import errno
import logging
import os
import select
import signal
import sys
import termios
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .buffer import Buffer
from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import ScreenView

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Edit mode. Typed characters only change the buffer in INSERT."""
    NAVIGATE = "navigate"
    INSERT = "insert"


@dataclass
class Cursor:
    x: int = 0  # column; may equal the line length (append position)
    y: int = 0  # row


class Editor:
    """Owns the buffer, the cursor, the mode and per-row column memory.

    column_memory[row] is the column last used on that row, restored when
    the cursor moves onto the row vertically. It always has one entry per
    buffer row.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal if terminal is not None else TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = ScreenView(self.terminal)
        self.command_registry = CommandRegistry()
        self.buffer = Buffer()
        self.cursor = Cursor()
        self.mode = Mode.NAVIGATE
        self.column_memory: list[int] = []
        self.running = False
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self._interrupted = False
        self._wakeup_r: Optional[int] = None
        self._wakeup_w: Optional[int] = None

    # --- File handling ---

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty buffer that will be created on save.
        Any other failure propagates; there is no editor without content.

        Raises:
            OSError: the file exists but cannot be read.
            UnicodeDecodeError: the file is not UTF-8.
        """
        self.filename = filename
        try:
            buffer = Buffer.from_file(filename)
        except FileNotFoundError:
            logger.info("%s does not exist, starting a new file", filename)
            buffer = Buffer()
        self.set_buffer(buffer)

    def set_buffer(self, buffer: Buffer):
        """Replace the buffer and reset cursor and column memory."""
        self.buffer = buffer
        self.cursor = Cursor()
        self.column_memory = [0] * len(buffer)
        self.view.top_row = 0
        self.modified = False

    def save_file(self, filename: str) -> bool:
        """Save the buffer to ``filename``.

        Failures are reported on the status line; the buffer is kept as is
        so the save can be retried.

        Returns:
            True if save succeeded, False otherwise
        """
        try:
            self.buffer.save_to_file(filename)
        except PermissionError as e:
            logger.warning("Permission denied saving %s: %s", filename, e)
            self.status_message = EditorConstants.PERMISSION_DENIED_MESSAGE.format(filename)
            return False
        except OSError as e:
            logger.warning("Could not save %s: %s", filename, e)
            if e.errno == errno.ENOSPC:
                self.status_message = EditorConstants.NO_SPACE_MESSAGE
            else:
                self.status_message = EditorConstants.CANNOT_SAVE_MESSAGE.format(filename)
            return False

        logger.info("Saved %d lines to %s", len(self.buffer), filename)
        self.filename = filename
        self.modified = False
        return True

    def handle_save(self):
        """Handle Ctrl-S save command."""
        filename = self.filename or self.settings.default_filename
        if self.save_file(filename):
            self.status_message = EditorConstants.SAVED_MESSAGE.format(filename)

    # --- Modes ---

    def enter_insert_mode(self):
        if self.mode is not Mode.INSERT:
            logger.debug("Entering insert mode")
            self.mode = Mode.INSERT

    def leave_insert_mode(self):
        if self.mode is not Mode.NAVIGATE:
            logger.debug("Leaving insert mode")
            self.mode = Mode.NAVIGATE

    # --- Cursor movement ---

    def _current_line_length(self) -> int:
        if self.buffer.is_empty():
            return 0
        return self.buffer.line_length(self.cursor.y)

    def _move_to_row(self, row: int):
        self.column_memory[self.cursor.y] = self.cursor.x
        self.cursor.y = row
        # Clamp in case the row got shorter since its column was remembered
        self.cursor.x = min(self.column_memory[row], self.buffer.line_length(row))

    def move_up(self):
        if self.cursor.y > 0:
            self._move_to_row(self.cursor.y - 1)

    def move_down(self):
        if self.cursor.y < len(self.buffer) - 1:
            self._move_to_row(self.cursor.y + 1)

    def move_left(self):
        if self.cursor.x > 0:
            self.cursor.x -= 1

    def move_right(self):
        if self.cursor.x < self._current_line_length():
            self.cursor.x += 1

    # --- Editing ---

    def insert_char(self, ch: str) -> bool:
        """Type ``ch`` at the cursor. Ignored unless in insert mode."""
        if self.mode is not Mode.INSERT:
            return False
        creates_line = self.buffer.is_empty()
        self.buffer.insert_char(self.cursor.y, self.cursor.x, ch)
        if creates_line:
            self.column_memory.append(0)
        self.cursor.x += 1
        return True

    def delete_backward(self) -> bool:
        """Delete the character before the cursor.

        At the start of a line the line is joined onto the previous one.
        At the start of the first line nothing happens.
        """
        if self.buffer.is_empty():
            return False
        if self.buffer.delete_char_before(self.cursor.y, self.cursor.x):
            self.cursor.x -= 1
            return True
        if self.cursor.y == 0:
            return False
        join_column = self.buffer.join_with_previous(self.cursor.y)
        del self.column_memory[self.cursor.y]
        self.cursor.y -= 1
        self.cursor.x = join_column
        return True

    def insert_newline(self):
        """Split the current line at the cursor and move to the new line."""
        if self.buffer.ensure_first_line():
            self.column_memory.append(0)
        new_row = self.buffer.split_line_at(self.cursor.y, self.cursor.x)
        self.column_memory.insert(new_row, 0)
        self.cursor.y = new_row
        self.cursor.x = 0

    # --- Events and drawing ---

    def handle_key_event(self, key_event: KeyEvent):
        """Apply one key event, then redraw the screen.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Status messages last until the next key
        self.status_message = None

        if self.command_registry.execute(self, key_event):
            self.modified = True
        self.draw()

    def status_text(self) -> str:
        label = (EditorConstants.INSERT_MODE_LABEL if self.mode is Mode.INSERT
                 else EditorConstants.NAVIGATE_MODE_LABEL)
        parts = [f"{self.settings.app_name} - {label}"]
        if self.filename:
            parts.append(self.filename)
        if self.modified:
            parts.append(EditorConstants.MODIFIED_MARKER)
        if self.status_message:
            parts.append(self.status_message)
        return "  ".join(parts)

    def draw(self):
        """Draw the current editor state to the display."""
        self.view.render(self.buffer, self.cursor.x, self.cursor.y, self.status_text())

    # --- Main loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._wakeup_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) - treat as the quit key."""
        del signum, frame  # Unused
        self._interrupted = True
        os.write(self._wakeup_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach the editor. Returns the old settings."""
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, OSError) as e:
            logger.warning("Could not disable flow control: %s", e)
            return None

    def run(self):
        """Run the main editor loop until a quit event."""
        self.terminal.setup()
        self.running = True
        self._interrupted = False
        self._wakeup_r, self._wakeup_w = os.pipe()

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        old_settings = self._disable_flow_control()

        try:
            self.draw()
            while self.running:
                # Wait for input on stdin or a signal on the wakeup pipe
                ready, _, _ = select.select([0, self._wakeup_r], [], [])

                if self._wakeup_r in ready:
                    os.read(self._wakeup_r, 1024)
                    if self._interrupted:
                        self._interrupted = False
                        self.handle_key_event(KeyEvent(
                            key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True))
                    else:
                        self.terminal.invalidate_frame()
                        self.draw()
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    while key_event and self.running:
                        self.handle_key_event(key_event)
                        # A paste yields several keys from one read
                        key_event = (self.keyboard.get_key_event(timeout=0)
                                     if self.terminal.has_queued_keys() else None)
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.warning("Could not restore terminal settings: %s", e)
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._wakeup_r)
            os.close(self._wakeup_w)
            self._wakeup_r = self._wakeup_w = None
            self.terminal.cleanup()
