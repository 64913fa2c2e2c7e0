"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .constants import EditorConstants

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the buffer
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the buffer."""
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, editor):
        editor.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor):
        editor.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, editor):
        editor.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor):
        editor.move_down()


class EditCommand(EditorCommand):
    """Base class for editing commands.

    _edit returns whether the buffer actually changed, so boundary no-ops
    don't mark the file as modified.
    """

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.delete_backward()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline()
        return True


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters and multi-character tokens
        if len(char) != 1 or ord(char) < EditorConstants.FIRST_PRINTABLE:
            return False
        return editor.insert_char(char)


class SystemCommand(EditorCommand):
    """Base class for system commands like save, quit and mode changes."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify buffer content."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class EnterInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_insert_mode()


class LeaveInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.leave_insert_mode()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # Modes
        self.register((KeyType.CTRL, 'i'), EnterInsertModeCommand())
        self.register((KeyType.SPECIAL, 'escape'), LeaveInsertModeCommand())

        # System commands
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'c'), QuitCommand())
        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the buffer was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return self._insert_text.execute(editor, key_event)

        return False
