"""Test key dispatch through the command registry."""

import unittest

from caretmark.commands import ArrowCommand, CommandRegistry, ToggleFormatCommand
from caretmark.editor import TypingEditor
from caretmark.keyboard import KeyEvent, KeyType
from caretmark.model import Paragraph, TextFormat, text_run
from caretmark.navigation import Direction
from caretmark.resolver import CaretType


class TestCommandRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = CommandRegistry()
        self.editor = TypingEditor(Paragraph([text_run("Hello", TextFormat.BOLD), text_run(" world")]))
        self.editor.set_caret(5)

    def press(self, key_type, value):
        return self.registry.execute(self.editor, KeyEvent(key_type, value, value))

    def test_default_bindings(self):
        left = self.registry.get_command(KeyType.SPECIAL, 'left')
        self.assertIsInstance(left, ArrowCommand)
        self.assertIs(left.direction, Direction.LEFT)
        bold = self.registry.get_command(KeyType.CTRL, 'b')
        self.assertIsInstance(bold, ToggleFormatCommand)
        self.assertIs(bold.fmt, TextFormat.BOLD)
        self.assertIs(self.registry.get_command(KeyType.CTRL, 'e').fmt, TextFormat.ITALIC)
        self.assertIs(self.registry.get_command(KeyType.CTRL, 'u').fmt, TextFormat.UNDERLINE)

    def test_arrow_does_not_modify_document(self):
        self.assertFalse(self.press(KeyType.SPECIAL, 'right'))
        self.assertIs(self.editor.caret_type, CaretType.RIGHT)

    def test_ctrl_b_toggles_pending_bold(self):
        self.assertFalse(self.press(KeyType.CTRL, 'b'))
        self.assertFalse(self.editor.selection.has_format(TextFormat.BOLD))
        self.assertIs(self.editor.caret_type, CaretType.RIGHT)

    def test_regular_key_inserts_text(self):
        self.assertTrue(self.press(KeyType.REGULAR, '!'))
        self.assertEqual(self.editor.paragraph.text, "Hello! world")

    def test_control_characters_are_not_inserted(self):
        self.assertFalse(self.press(KeyType.REGULAR, '\x07'))
        self.assertEqual(self.editor.paragraph.text, "Hello world")

    def test_backspace(self):
        self.assertTrue(self.press(KeyType.SPECIAL, 'backspace'))
        self.assertEqual(self.editor.paragraph.text, "Hell world")

    def test_unbound_key_is_ignored(self):
        self.assertFalse(self.press(KeyType.CTRL, 'z'))
        self.assertFalse(self.press(KeyType.SPECIAL, 'up'))
        self.assertEqual(self.editor.paragraph.text, "Hello world")

    def test_quit(self):
        self.press(KeyType.CTRL, 'q')
        self.assertFalse(self.editor.running)

    def test_register_overrides_binding(self):
        self.registry.register((KeyType.CTRL, 'b'), ToggleFormatCommand(TextFormat.STRIKETHROUGH))
        self.press(KeyType.CTRL, 'b')
        self.assertTrue(self.editor.selection.has_format(TextFormat.STRIKETHROUGH))
