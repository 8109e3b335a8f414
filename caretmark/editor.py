"""Editor host: owns the document and selection and applies machine effects."""

import logging
from typing import Callable, Optional

from .constants import AffinityConstants
from .indicator import MarkerOffsets, MarkerPosition, Rect, present
from .machine import (
    AffinityStateMachine,
    ArrowKey,
    Effect,
    Event,
    FormatToggled,
    PreventDefault,
    RepositionMarker,
    SelectionChanged,
    SetPendingStyle,
    TogglePendingFormat,
    UpdateCommitted,
)
from .model import Paragraph, RangeSelection, TextFormat, TextRun
from .navigation import Direction
from .resolver import DEFAULT_OPTIONS, CaretType, ResolverOptions

logger = logging.getLogger(__name__)

# (selection rect, container rect) for the current caret, or None without a caret
GeometryProvider = Callable[["TypingEditor"], Optional[tuple[Rect, Optional[Rect]]]]


def cell_geometry(editor: "TypingEditor") -> Optional[tuple[Rect, Optional[Rect]]]:
    """Single-line cell layout: the caret is a zero-width rect one row tall."""
    if editor.selection is None:
        return None
    x = editor.caret_offset
    return Rect(x, 0, x, 1), None


class TypingEditor:
    """A one-paragraph rich-text editor with typing affinity."""

    def __init__(self, paragraph: Optional[Paragraph] = None,
                 options: ResolverOptions = DEFAULT_OPTIONS,
                 offsets: Optional[MarkerOffsets] = None,
                 geometry: GeometryProvider = cell_geometry):
        self.paragraph = paragraph if paragraph is not None else Paragraph()
        self.machine = AffinityStateMachine(options)
        self.offsets = offsets or MarkerOffsets(
            AffinityConstants.CELL_LEFT_OFFSET, AffinityConstants.CELL_BASELINE_OFFSET)
        self.geometry = geometry
        self.selection: Optional[RangeSelection] = None
        self.caret_offset = 0
        self.marker: Optional[MarkerPosition] = None
        self.running = True

    @property
    def caret_type(self) -> CaretType:
        return self.machine.caret_type

    def dispatch(self, event: Event) -> list[Effect]:
        """Feed an event to the state machine and apply its effects."""
        effects = self.machine.handle_event(event)
        if effects:
            logger.debug("%s -> %s", type(event).__name__, effects)
        for effect in effects:
            if isinstance(effect, TogglePendingFormat):
                assert self.selection is not None
                self.selection.toggle_format(effect.format)
            elif isinstance(effect, SetPendingStyle):
                assert self.selection is not None
                self.selection.set_style(effect.style)
            elif isinstance(effect, RepositionMarker):
                self.marker = self.marker_position()
        return effects

    def marker_position(self) -> Optional[MarkerPosition]:
        geometry = self.geometry(self)
        if geometry is None:
            return None
        selection_rect, container_rect = geometry
        return present(self.caret_type, selection_rect, container_rect, self.offsets)

    # --- Selection ---

    def set_caret(self, offset: int):
        """Collapse the selection at a paragraph-level offset."""
        point = self.paragraph.locate(offset)
        self.caret_offset = offset
        self.selection = RangeSelection.caret(point)
        self.dispatch(SelectionChanged(self.selection))

    def clear_selection(self):
        self.selection = None
        self.dispatch(SelectionChanged(None))

    def arrow(self, direction: Direction) -> bool:
        """Handle a left/right arrow.

        Returns:
            True if the caret moved; False when the key only changed the
            typing affinity or the caret was already at the edge.
        """
        effects = self.dispatch(ArrowKey(direction, self.selection))
        if any(isinstance(e, PreventDefault) for e in effects):
            return False
        if self.selection is None:
            return False
        step = -1 if direction is Direction.LEFT else 1
        target = self.caret_offset + step
        if not 0 <= target <= self.paragraph.text_size():
            return False
        self.set_caret(target)
        return True

    # --- Formatting ---

    def toggle_format(self, fmt: TextFormat):
        """Toggle an attribute on the pending format, then commit."""
        if self.selection is None:
            return
        self.selection.toggle_format(fmt)
        self.dispatch(FormatToggled(fmt))
        self.commit()

    def set_style(self, style: str):
        if self.selection is None:
            return
        self.selection.set_style(style)
        self.commit()

    def commit(self):
        """Post-transaction step; runs recomputes deferred by format toggles."""
        self.dispatch(UpdateCommitted(self.selection))

    # --- Editing ---

    def insert_text(self, text: str):
        """Type text at the caret using the pending format and style."""
        if not text or self.selection is None:
            return
        fmt, style = self.selection.format, self.selection.style
        point = self.selection.anchor
        run = point.run

        if run is None:
            self.paragraph.append(TextRun(text=text, format=fmt, style=style))
        elif run.is_text() and run.format == fmt and run.style == style:
            run.text = run.text[:point.offset] + text + run.text[point.offset:]
        else:
            index = self.paragraph.index_of(run)
            if run.is_text() and point.offset == 0:
                self.paragraph.insert(index, TextRun(text=text, format=fmt, style=style))
            else:
                tail = run.text[point.offset:] if run.is_text() else ""
                if tail:
                    run.text = run.text[:point.offset]
                    self.paragraph.insert(index + 1, TextRun(text=tail, format=run.format, style=run.style))
                self.paragraph.insert(index + 1, TextRun(text=text, format=fmt, style=style))
        self.paragraph.normalize()

        self.caret_offset += len(text)
        self.selection = RangeSelection.caret(self.paragraph.locate(self.caret_offset), fmt, style)
        self.dispatch(SelectionChanged(self.selection))

    def delete_backward(self) -> bool:
        """Delete the character before the caret."""
        if self.selection is None or self.caret_offset == 0:
            return False
        target = self.caret_offset - 1
        start = 0
        for run in self.paragraph.runs:
            size = run.text_size()
            if start <= target < start + size:
                i = target - start
                run.text = run.text[:i] + run.text[i + 1:]
                break
            start += size
        self.paragraph.normalize()
        self.set_caret(target)
        return True
