"""caretmark - typing affinity for rich-text carets."""

from .classifier import CaretPosition, classify
from .editor import TypingEditor
from .indicator import MarkerPosition, Rect, present
from .machine import AffinityStateMachine
from .matcher import Affinity, AffinityMatch, match_affinity
from .model import Paragraph, RangeSelection, TextFormat, TextRun
from .navigation import Direction, plan_format_adoption
from .resolver import CaretType, ResolverOptions, resolve_caret_type

__all__ = [
    'Affinity',
    'AffinityMatch',
    'AffinityStateMachine',
    'CaretPosition',
    'CaretType',
    'Direction',
    'MarkerPosition',
    'Paragraph',
    'RangeSelection',
    'Rect',
    'ResolverOptions',
    'TextFormat',
    'TextRun',
    'TypingEditor',
    'classify',
    'match_affinity',
    'plan_format_adoption',
    'present',
    'resolve_caret_type',
]
