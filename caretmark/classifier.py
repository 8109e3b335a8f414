"""Classify a collapsed caret relative to the run it sits in."""

from enum import Enum
from typing import NamedTuple, Optional

from .model import RangeSelection, Selection, TextRun


class CaretPosition(Enum):
    NODE_END = "node_end"
    NODE_START = "node_start"
    NODE_NOT_FOUND = "node_not_found"


class CollapsedSelectionPosition(NamedTuple):
    position: CaretPosition
    run: Optional[TextRun]


def is_collapsed_selection(selection: Optional[Selection]) -> bool:
    """True for a collapsed text caret; ranges and node selections are not."""
    return isinstance(selection, RangeSelection) and selection.is_collapsed()


def classify(selection: RangeSelection) -> CollapsedSelectionPosition:
    """Locate the caret at the end, the start, or strictly inside its run.

    Offsets strictly inside a run give NODE_NOT_FOUND: there is no
    boundary to attribute the caret to.
    """
    nodes = selection.get_nodes()
    if not nodes:
        return CollapsedSelectionPosition(CaretPosition.NODE_NOT_FOUND, None)
    if selection.anchor.is_at_node_end():
        return CollapsedSelectionPosition(CaretPosition.NODE_END, nodes[0])
    if selection.get_character_offsets()[0] == 0:
        return CollapsedSelectionPosition(CaretPosition.NODE_START, nodes[0])
    return CollapsedSelectionPosition(CaretPosition.NODE_NOT_FOUND, nodes[0])
