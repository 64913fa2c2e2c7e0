"""Constants and configuration defaults for the linepad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Application
    APP_NAME = "linepad"
    DEFAULT_FILENAME = "text_file.txt"  # Used when no path is given
    DEFAULT_LOG_LEVEL = "WARNING"

    # Status line
    STATUS_LINE_X = 1  # Column where the status text starts
    INSERT_MODE_LABEL = "Insert Mode"
    NAVIGATE_MODE_LABEL = "Navigate Mode"
    MODIFIED_MARKER = "[+]"
    CONTROL_CHAR_PLACEHOLDER = "?"  # Drawn instead of control characters

    # Keyboard
    FIRST_PRINTABLE = 32  # Code points below this are never inserted

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    INTERRUPT_PIPE_MARKER = b'C'  # Byte written to pipe on Ctrl-C

    # Status messages
    SAVED_MESSAGE = "Saved to {}"
    PERMISSION_DENIED_MESSAGE = "Error: Permission denied saving {}"
    NO_SPACE_MESSAGE = "Error: No space left on device"
    CANNOT_SAVE_MESSAGE = "Error: Cannot save to {}"
