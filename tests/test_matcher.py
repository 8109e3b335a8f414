"""Test affinity matching between runs and pending formats."""

import pytest

from caretmark.matcher import NO_AFFINITY, Affinity, AffinityMatch, match_affinity, match_selection
from caretmark.model import Paragraph, Point, RangeSelection, TextFormat, embedded_run, text_run

B = TextFormat.BOLD
I = TextFormat.ITALIC
U = TextFormat.UNDERLINE


def test_equal_format_and_style():
    run = text_run("x", B, U)
    assert match_affinity(run, B | U, "") == Affinity(AffinityMatch.EQUALS, 2)


def test_equal_style_adds_a_level():
    run = text_run("x", B, style="color: red")
    assert match_affinity(run, B, "color: red") == Affinity(AffinityMatch.EQUALS, 2)


def test_plain_run_equals_with_level_zero():
    assert match_affinity(text_run("x"), TextFormat.NONE, "") == Affinity(AffinityMatch.EQUALS, 0)


def test_contains_when_pending_adds_attributes():
    run = text_run("x", B)
    assert match_affinity(run, B | I, "") == Affinity(AffinityMatch.CONTAINS, 1)


def test_plain_run_contains_any_pending_format():
    assert match_affinity(text_run("x"), I, "") == Affinity(AffinityMatch.CONTAINS, 0)


def test_not_matched_when_run_has_extra_attribute():
    run = text_run("x", B, I)
    assert match_affinity(run, B, "") is NO_AFFINITY


def test_style_mismatch_is_never_a_match():
    run = text_run("x", B, style="color: red")
    assert match_affinity(run, B, "") == NO_AFFINITY
    assert match_affinity(run, B | I, "color: blue") == NO_AFFINITY


def test_embedded_run_never_matches():
    assert match_affinity(embedded_run(), TextFormat.NONE, "") == Affinity(AffinityMatch.NOT_MATCHED, 0)


@pytest.mark.parametrize("fmt", [B, I, U, TextFormat.STRIKETHROUGH, TextFormat.CODE,
                                 TextFormat.SUBSCRIPT, TextFormat.SUPERSCRIPT, TextFormat.HIGHLIGHT])
def test_every_attribute_blocks_containment(fmt):
    run = text_run("x", fmt)
    assert match_affinity(run, TextFormat.NONE, "").match is AffinityMatch.NOT_MATCHED


def test_match_selection_reads_pending_state():
    run = text_run("Hello", B)
    Paragraph([run])
    selection = RangeSelection.caret(Point(run, 5), B | U, "")
    assert match_selection(run, selection) == Affinity(AffinityMatch.CONTAINS, 1)
