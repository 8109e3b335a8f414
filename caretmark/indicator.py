"""Place the affinity marker relative to the caret."""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .constants import AffinityConstants
from .resolver import CaretType


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


class MarkerPosition(NamedTuple):
    left: float
    top: float


@dataclass(frozen=True)
class MarkerOffsets:
    left_offset: float = AffinityConstants.MARKER_LEFT_OFFSET
    baseline_offset: float = AffinityConstants.MARKER_BASELINE_OFFSET


def present(caret_type: CaretType, selection_rect: Optional[Rect],
            container_rect: Optional[Rect] = None,
            offsets: MarkerOffsets = MarkerOffsets()) -> Optional[MarkerPosition]:
    """Marker position relative to the container, or None when hidden.

    A LEFT marker sits under the character before the caret, a RIGHT
    marker under the character after it.
    """
    if caret_type is CaretType.MIDDLE or selection_rect is None:
        return None
    origin_left = container_rect.left if container_rect is not None else 0
    origin_top = container_rect.top if container_rect is not None else 0
    top = selection_rect.bottom - offsets.baseline_offset - origin_top
    if caret_type is CaretType.LEFT:
        return MarkerPosition(selection_rect.left - offsets.left_offset - origin_left, top)
    return MarkerPosition(selection_rect.left - origin_left, top)
