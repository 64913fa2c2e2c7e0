"""linepad - A minimal modal terminal text editor."""

from .buffer import Buffer, ContractViolation
from .editor import Editor, Cursor, Mode

__all__ = [
    'Buffer',
    'ContractViolation',
    'Editor',
    'Cursor',
    'Mode',
]
