"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from .keyboard import KeyType
from .model import TextFormat
from .navigation import Direction

if TYPE_CHECKING:
    from .editor import TypingEditor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'TypingEditor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Returns:
            True if the command modified the document
        """


class ArrowCommand(EditorCommand):
    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor, key_event):
        editor.arrow(self.direction)
        return False


class ToggleFormatCommand(EditorCommand):
    """Toggle a format attribute on the pending caret format."""

    def __init__(self, fmt: TextFormat):
        self.fmt = fmt

    def execute(self, editor, key_event):
        editor.toggle_format(self.fmt)
        return False


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if not char or ord(char[0]) < 32:
            return False
        editor.insert_text(char)
        return True


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        return editor.delete_backward()


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.running = False
        return False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register((KeyType.SPECIAL, 'left'), ArrowCommand(Direction.LEFT))
        self.register((KeyType.SPECIAL, 'right'), ArrowCommand(Direction.RIGHT))
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())

        # Format toggles (Ctrl-I is indistinguishable from Tab, so italic is Ctrl-E)
        self.register((KeyType.CTRL, 'b'), ToggleFormatCommand(TextFormat.BOLD))
        self.register((KeyType.CTRL, 'e'), ToggleFormatCommand(TextFormat.ITALIC))
        self.register((KeyType.CTRL, 'u'), ToggleFormatCommand(TextFormat.UNDERLINE))
        self.register((KeyType.CTRL, 'k'), ToggleFormatCommand(TextFormat.CODE))
        self.register((KeyType.CTRL, 'r'), ToggleFormatCommand(TextFormat.HIGHLIGHT))

        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'TypingEditor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)
        return False
