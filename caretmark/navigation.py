"""Arrow-key adoption of a neighbouring run's formatting."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .classifier import CaretPosition, classify, is_collapsed_selection
from .model import TEXT_FORMATS, RangeSelection, Selection, TextFormat, TextRun
from .resolver import CaretType

logger = logging.getLogger(__name__)


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"


# Arrow direction that moves the caret away from its current side
OPPOSING_CARET = {
    Direction.LEFT: CaretType.RIGHT,
    Direction.RIGHT: CaretType.LEFT,
}


@dataclass(frozen=True)
class NavigationResult:
    """Pending-format changes produced by an intercepted arrow key.

    ``style`` is None when the pending style stays as it is.
    """
    caret_type: CaretType
    toggles: tuple[TextFormat, ...] = ()
    style: Optional[str] = None


def _toggles_to_match(selection: RangeSelection, target: TextFormat) -> tuple[TextFormat, ...]:
    return tuple(f for f in TEXT_FORMATS if bool(target & f) != selection.has_format(f))


def _neighbour(direction: Direction, position: CaretPosition,
               run: Optional[TextRun]) -> Optional[TextRun]:
    if run is None:
        return None
    if direction is Direction.LEFT:
        return run.previous_sibling() if position is CaretPosition.NODE_START else run
    return run if position is CaretPosition.NODE_START else run.next_sibling()


def plan_format_adoption(selection: Optional[Selection],
                         direction: Direction) -> Optional[NavigationResult]:
    """Plan how the pending format follows the caret across a boundary.

    The caller only asks when the caret type opposes ``direction``. The
    inspected run's format and style become the pending ones; with no run
    on that side the pending state is reset to the document default.

    Returns:
        The planned changes, or None for selections that are not a caret
    """
    if not is_collapsed_selection(selection):
        return None
    assert isinstance(selection, RangeSelection)

    position, run = classify(selection)
    neighbour = _neighbour(direction, position, run)
    caret_type = CaretType.LEFT if direction is Direction.LEFT else CaretType.RIGHT

    if neighbour is None:
        result = NavigationResult(caret_type, _toggles_to_match(selection, TextFormat.NONE), "")
    elif neighbour.is_text():
        result = NavigationResult(
            caret_type, _toggles_to_match(selection, neighbour.format), neighbour.style)
    else:
        result = NavigationResult(caret_type)

    logger.debug("Arrow %s at %s adopts %s", direction.value, position.value, result)
    return result
