"""Compare a run's formatting with the pending selection formatting."""

from enum import Enum
from typing import NamedTuple

from .model import TEXT_FORMATS, RangeSelection, RunKind, TextFormat, TextRun, format_popcount


class AffinityMatch(Enum):
    EQUALS = "equals"
    CONTAINS = "contains"
    NOT_MATCHED = "not_matched"


class Affinity(NamedTuple):
    match: AffinityMatch
    level: int = 0


NO_AFFINITY = Affinity(AffinityMatch.NOT_MATCHED, 0)


def _imposes_extra_format(run: TextRun, fmt: TextFormat) -> bool:
    """True if the run carries an attribute the pending format lacks."""
    return any(run.has_format(f) and not (fmt & f) for f in TEXT_FORMATS)


def _match_text(run: TextRun, fmt: TextFormat, style: str) -> Affinity:
    if run.format == fmt and run.style == style:
        return Affinity(AffinityMatch.EQUALS, format_popcount(fmt) + (1 if style else 0))
    if not _imposes_extra_format(run, fmt) and run.style == style:
        return Affinity(AffinityMatch.CONTAINS, format_popcount(run.format))
    return NO_AFFINITY


def match_affinity(run: TextRun, fmt: TextFormat, style: str) -> Affinity:
    """Classify how closely a run matches a pending format and style.

    EQUALS wins over CONTAINS. The level counts active attributes and is
    only used to break ties between two neighbouring runs.
    """
    if run.kind is RunKind.TEXT:
        return _match_text(run, fmt, style)
    elif run.kind is RunKind.OTHER:
        return NO_AFFINITY
    raise ValueError(f"Unknown run kind: {run.kind!r}")


def match_selection(run: TextRun, selection: RangeSelection) -> Affinity:
    return match_affinity(run, selection.format, selection.style)
