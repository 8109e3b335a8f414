"""Test arrow-key adoption of neighbouring run formats."""

import unittest

from caretmark.model import Paragraph, Point, RangeSelection, TextFormat, embedded_run, text_run
from caretmark.navigation import Direction, NavigationResult, plan_format_adoption
from caretmark.resolver import CaretType, resolve_caret_type

B = TextFormat.BOLD
I = TextFormat.ITALIC
U = TextFormat.UNDERLINE


def apply_adoption(result, selection):
    """Apply a planned adoption the way the editor applies machine effects."""
    for fmt in result.toggles:
        selection.toggle_format(fmt)
    if result.style is not None:
        selection.set_style(result.style)


class TestFormatAdoption(unittest.TestCase):

    def setUp(self):
        self.hello = text_run("Hello", B, style="color: red")
        self.world = text_run(" world")
        self.paragraph = Paragraph([self.hello, self.world])

    def test_left_from_end_adopts_current_run(self):
        selection = RangeSelection.caret(Point(self.hello, 5), TextFormat.NONE, "")
        result = plan_format_adoption(selection, Direction.LEFT)
        self.assertEqual(result, NavigationResult(CaretType.LEFT, (B,), "color: red"))

        apply_adoption(result, selection)
        self.assertEqual(selection.format, B)
        self.assertEqual(selection.style, "color: red")

    def test_right_from_end_adopts_next_sibling(self):
        selection = RangeSelection.caret(Point(self.hello, 5))
        result = plan_format_adoption(selection, Direction.RIGHT)
        self.assertEqual(result, NavigationResult(CaretType.RIGHT, (B,), ""))

        apply_adoption(result, selection)
        self.assertEqual(selection.format, TextFormat.NONE)
        self.assertEqual(selection.style, "")

    def test_round_trip(self):
        selection = RangeSelection.caret(Point(self.hello, 5), TextFormat.NONE, "")
        self.assertIs(resolve_caret_type(selection, True), CaretType.RIGHT)

        apply_adoption(plan_format_adoption(selection, Direction.LEFT), selection)
        self.assertEqual(selection.format, self.hello.format)
        self.assertIs(resolve_caret_type(selection, True), CaretType.LEFT)

        apply_adoption(plan_format_adoption(selection, Direction.RIGHT), selection)
        self.assertEqual(selection.format, self.world.format)
        self.assertEqual(selection.style, self.world.style)
        self.assertIs(resolve_caret_type(selection, True), CaretType.RIGHT)

    def test_left_from_start_of_document_clears_pending_format(self):
        selection = RangeSelection.caret(Point(self.hello, 0), B | U, "color: red")
        result = plan_format_adoption(selection, Direction.LEFT)
        self.assertEqual(result.toggles, (B, U))
        self.assertEqual(result.style, "")

        apply_adoption(result, selection)
        self.assertEqual(selection.format, TextFormat.NONE)

    def test_left_from_start_of_later_run_uses_previous_sibling(self):
        selection = RangeSelection.caret(Point(self.world, 0))
        result = plan_format_adoption(selection, Direction.LEFT)
        apply_adoption(result, selection)
        self.assertEqual(selection.format, B)
        self.assertEqual(selection.style, "color: red")

    def test_right_from_start_uses_current_run(self):
        selection = RangeSelection.caret(Point(self.world, 0), I, "")
        result = plan_format_adoption(selection, Direction.RIGHT)
        self.assertEqual(result, NavigationResult(CaretType.RIGHT, (I,), ""))

    def test_right_at_end_of_document_clears_pending_format(self):
        selection = RangeSelection.caret(Point(self.world, 6), I, "color: blue")
        result = plan_format_adoption(selection, Direction.RIGHT)
        apply_adoption(result, selection)
        self.assertEqual(selection.format, TextFormat.NONE)
        self.assertEqual(selection.style, "")

    def test_toggles_follow_canonical_attribute_order(self):
        target = text_run("x", B, U)
        Paragraph([target])
        selection = RangeSelection.caret(Point(target, 1), I, "")
        result = plan_format_adoption(selection, Direction.LEFT)
        self.assertEqual(result.toggles, (B, U, I))

    def test_embedded_neighbour_keeps_pending_state(self):
        run, obj = text_run("Hi", B), embedded_run()
        Paragraph([run, obj])
        selection = RangeSelection.caret(Point(run, 2))
        result = plan_format_adoption(selection, Direction.RIGHT)
        self.assertEqual(result, NavigationResult(CaretType.RIGHT))

        apply_adoption(result, selection)
        self.assertEqual(selection.format, B)


def test_range_selection_is_not_adjusted():
    run = text_run("Hello")
    Paragraph([run])
    selection = RangeSelection(Point(run, 0), Point(run, 2))
    assert plan_format_adoption(selection, Direction.LEFT) is None
    assert plan_format_adoption(None, Direction.RIGHT) is None


def test_empty_document_resets_to_default():
    selection = RangeSelection.caret(Point(None, 0), B, "color: red")
    result = plan_format_adoption(selection, Direction.LEFT)
    assert result == NavigationResult(CaretType.LEFT, (B,), "")
