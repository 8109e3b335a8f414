"""Resolve which side of a run boundary the caret's typing format belongs to."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .classifier import CaretPosition, classify, is_collapsed_selection
from .matcher import Affinity, AffinityMatch, match_selection
from .model import RangeSelection, Selection, TextRun

logger = logging.getLogger(__name__)


class CaretType(Enum):
    MIDDLE = "middle"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ResolverOptions:
    # Read the right run's containment from the left run's affinity, as
    # older releases did
    sibling_contains_quirk: bool = False


DEFAULT_OPTIONS = ResolverOptions()


def _resolve_between(left: Affinity, right: Affinity, from_selection_change: bool,
                     options: ResolverOptions) -> Optional[CaretType]:
    """Caret sits after the last character of a run that has a next sibling."""
    if left == right:
        return CaretType.MIDDLE
    if left.match is AffinityMatch.EQUALS:
        return CaretType.LEFT
    if right.match is AffinityMatch.EQUALS:
        return CaretType.RIGHT
    if not from_selection_change:
        # Format toggles never relitigate the side on containment alone
        return None

    contains_left = left.match is AffinityMatch.CONTAINS
    if options.sibling_contains_quirk:
        contains_right = contains_left
    else:
        contains_right = right.match is AffinityMatch.CONTAINS

    if contains_left and contains_right:
        return CaretType.LEFT if left.level >= right.level else CaretType.RIGHT
    if not contains_left and not contains_right:
        return CaretType.LEFT
    return CaretType.LEFT if contains_left else CaretType.RIGHT


def _resolve_at_edge(run: TextRun, selection: RangeSelection, matched_side: CaretType,
                     other_side: CaretType) -> CaretType:
    affinity = match_selection(run, selection)
    if affinity.match is AffinityMatch.EQUALS:
        return CaretType.MIDDLE if affinity.level == 0 else matched_side
    return other_side


def resolve_caret_type(selection: Optional[Selection], from_selection_change: bool = False,
                       options: ResolverOptions = DEFAULT_OPTIONS) -> Optional[CaretType]:
    """Compute the caret type for a selection snapshot.

    Args:
        selection: Current selection, or None when the editor has none
        from_selection_change: True when triggered by the user moving the
            selection rather than by a format toggle
        options: Resolver behaviour switches

    Returns:
        The new caret type, or None to keep the current one
    """
    if not is_collapsed_selection(selection):
        return CaretType.MIDDLE
    assert isinstance(selection, RangeSelection)

    position, run = classify(selection)
    if position is CaretPosition.NODE_NOT_FOUND or run is None:
        return CaretType.MIDDLE

    if position is CaretPosition.NODE_END:
        sibling = run.next_sibling()
        if sibling is not None:
            left = match_selection(run, selection)
            right = match_selection(sibling, selection)
            result = _resolve_between(left, right, from_selection_change, options)
            logger.debug("Boundary affinity left=%s right=%s -> %s", left, right, result)
            return result
        return _resolve_at_edge(run, selection, CaretType.LEFT, CaretType.RIGHT)

    return _resolve_at_edge(run, selection, CaretType.RIGHT, CaretType.LEFT)
