"""Caret-type state machine driven by editor events.

The host feeds events in and applies the returned effects. The machine
holds only the current caret type and whether a format toggle is waiting
for the host to commit its update.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .model import Selection, TextFormat
from .navigation import OPPOSING_CARET, Direction, plan_format_adoption
from .resolver import DEFAULT_OPTIONS, CaretType, ResolverOptions, resolve_caret_type

logger = logging.getLogger(__name__)


# --- Events ---

@dataclass(frozen=True)
class SelectionChanged:
    selection: Optional[Selection]


@dataclass(frozen=True)
class FormatToggled:
    format: TextFormat


@dataclass(frozen=True)
class UpdateCommitted:
    selection: Optional[Selection]


@dataclass(frozen=True)
class ArrowKey:
    direction: Direction
    selection: Optional[Selection]


Event = Union[SelectionChanged, FormatToggled, UpdateCommitted, ArrowKey]


# --- Effects ---

@dataclass(frozen=True)
class SetCaretType:
    caret_type: CaretType


@dataclass(frozen=True)
class TogglePendingFormat:
    format: TextFormat


@dataclass(frozen=True)
class SetPendingStyle:
    style: str


@dataclass(frozen=True)
class PreventDefault:
    """Suppress the host's own handling of the key."""


@dataclass(frozen=True)
class RepositionMarker:
    """Marker geometry must be recomputed."""


Effect = Union[SetCaretType, TogglePendingFormat, SetPendingStyle, PreventDefault, RepositionMarker]


class AffinityStateMachine:
    """Tracks the caret type across selection, format and arrow events."""

    def __init__(self, options: ResolverOptions = DEFAULT_OPTIONS):
        self.options = options
        self.caret_type = CaretType.MIDDLE
        self.format_toggle_pending = False

    def handle_event(self, event: Event) -> list[Effect]:
        if isinstance(event, SelectionChanged):
            return self._on_selection_changed(event)
        if isinstance(event, FormatToggled):
            # Recompute once the host has committed the toggle
            self.format_toggle_pending = True
            return []
        if isinstance(event, UpdateCommitted):
            return self._on_update_committed(event)
        if isinstance(event, ArrowKey):
            return self._on_arrow(event)
        raise TypeError(f"Unsupported event: {event!r}")

    def _set_caret_type(self, caret_type: CaretType) -> SetCaretType:
        if caret_type is not self.caret_type:
            logger.debug("Caret type %s -> %s", self.caret_type.value, caret_type.value)
        self.caret_type = caret_type
        return SetCaretType(caret_type)

    def _on_selection_changed(self, event: SelectionChanged) -> list[Effect]:
        effects: list[Effect] = []
        caret_type = resolve_caret_type(event.selection, True, self.options)
        if caret_type is not None:
            effects.append(self._set_caret_type(caret_type))
        effects.append(RepositionMarker())
        return effects

    def _on_update_committed(self, event: UpdateCommitted) -> list[Effect]:
        if not self.format_toggle_pending:
            return []
        self.format_toggle_pending = False
        caret_type = resolve_caret_type(event.selection, False, self.options)
        if caret_type is None:
            return []
        return [self._set_caret_type(caret_type), RepositionMarker()]

    def _on_arrow(self, event: ArrowKey) -> list[Effect]:
        if self.caret_type is not OPPOSING_CARET[event.direction]:
            return []
        result = plan_format_adoption(event.selection, event.direction)
        if result is None:
            return []
        effects: list[Effect] = [PreventDefault()]
        effects.extend(TogglePendingFormat(fmt) for fmt in result.toggles)
        if result.style is not None:
            effects.append(SetPendingStyle(result.style))
        effects.append(self._set_caret_type(result.caret_type))
        effects.append(RepositionMarker())
        return effects
