"""Inline run model: formatted text runs, paragraphs and selections."""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Optional, Union


class TextFormat(IntFlag):
    """Toggleable character attributes, one bit each."""
    NONE = 0
    BOLD = 1
    ITALIC = 2
    STRIKETHROUGH = 4
    UNDERLINE = 8
    CODE = 16
    SUBSCRIPT = 32
    SUPERSCRIPT = 64
    HIGHLIGHT = 128


# Canonical iteration order for per-attribute comparisons
TEXT_FORMATS: tuple[TextFormat, ...] = (
    TextFormat.BOLD,
    TextFormat.UNDERLINE,
    TextFormat.STRIKETHROUGH,
    TextFormat.ITALIC,
    TextFormat.HIGHLIGHT,
    TextFormat.CODE,
    TextFormat.SUBSCRIPT,
    TextFormat.SUPERSCRIPT,
)

# Overstrike flags used by plain-text documents (1 = bold, 2 = underline)
OVERSTRIKE_BOLD = 1
OVERSTRIKE_UNDER = 2


def format_popcount(fmt: int) -> int:
    """Number of attributes set in a format bitset."""
    return bin(int(fmt)).count("1")


class RunKind(Enum):
    """Kinds of inline runs."""
    TEXT = "text"
    OTHER = "other"  # embedded objects, line breaks, etc.


@dataclass(eq=False)
class TextRun:
    """A contiguous inline unit sharing one format/style combination.

    Runs compare by identity: two runs with the same text are still
    different nodes of the document.
    """
    text: str = ""
    format: TextFormat = TextFormat.NONE
    style: str = ""
    kind: RunKind = RunKind.TEXT
    _parent: "Optional[Paragraph]" = field(default=None, repr=False)

    def is_text(self) -> bool:
        return self.kind is RunKind.TEXT

    def has_format(self, fmt: TextFormat) -> bool:
        return bool(self.format & fmt)

    def text_size(self) -> int:
        if self.kind is RunKind.TEXT:
            return len(self.text)
        return 0

    @property
    def parent(self) -> "Optional[Paragraph]":
        return self._parent

    def previous_sibling(self) -> "Optional[TextRun]":
        if self._parent is None:
            return None
        return self._parent.previous_of(self)

    def next_sibling(self) -> "Optional[TextRun]":
        if self._parent is None:
            return None
        return self._parent.next_of(self)


def text_run(text: str, *formats: TextFormat, style: str = "") -> TextRun:
    """Convenience constructor: text_run("Hi", TextFormat.BOLD)."""
    fmt = TextFormat.NONE
    for f in formats:
        fmt |= f
    return TextRun(text=text, format=fmt, style=style)


def embedded_run() -> TextRun:
    """A non-text run (embedded object) with no formatting semantics."""
    return TextRun(kind=RunKind.OTHER)


class Paragraph:
    """Ordered sequence of runs. Owns sibling relationships."""

    def __init__(self, runs: Optional[list[TextRun]] = None):
        self.runs: list[TextRun] = []
        for run in runs or []:
            self.append(run)

    def __len__(self):
        return len(self.runs)

    def __iter__(self):
        return iter(self.runs)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs if run.is_text())

    def text_size(self) -> int:
        return sum(run.text_size() for run in self.runs)

    def index_of(self, run: TextRun) -> int:
        for i, candidate in enumerate(self.runs):
            if candidate is run:
                return i
        raise ValueError("Run does not belong to this paragraph")

    def append(self, run: TextRun) -> TextRun:
        return self.insert(len(self.runs), run)

    def insert(self, index: int, run: TextRun) -> TextRun:
        if run._parent is not None and run._parent is not self:
            raise ValueError("Run already belongs to another paragraph")
        run._parent = self
        self.runs.insert(index, run)
        return run

    def remove(self, run: TextRun):
        del self.runs[self.index_of(run)]
        run._parent = None

    def previous_of(self, run: TextRun) -> Optional[TextRun]:
        i = self.index_of(run)
        return self.runs[i - 1] if i > 0 else None

    def next_of(self, run: TextRun) -> Optional[TextRun]:
        i = self.index_of(run)
        return self.runs[i + 1] if i + 1 < len(self.runs) else None

    def locate(self, offset: int) -> "Point":
        """Map a paragraph-level offset to a point inside a run.

        A boundary between two runs resolves to the end of the left run;
        offset 0 resolves to the start of the first run.
        """
        if not 0 <= offset <= self.text_size():
            raise ValueError(f"Offset {offset} outside paragraph of size {self.text_size()}")
        if not self.runs:
            return Point(None, 0)
        start = 0
        for run in self.runs:
            end = start + run.text_size()
            if offset <= end and (offset > start or start == 0):
                return Point(run, offset - start)
            start = end
        last = self.runs[-1]
        return Point(last, last.text_size())

    def normalize(self):
        """Merge adjacent text runs with identical format and style, drop empty ones."""
        kept = [run for run in self.runs if not run.is_text() or run.text]
        if not kept and self.runs:
            kept = self.runs[:1]
        for run in self.runs:
            if not any(run is k for k in kept):
                run._parent = None
        merged: list[TextRun] = []
        for run in kept:
            prev = merged[-1] if merged else None
            if (prev is not None and prev.is_text() and run.is_text()
                    and prev.format == run.format and prev.style == run.style):
                prev.text += run.text
                run._parent = None
                continue
            merged.append(run)
        self.runs = merged

    @staticmethod
    def _parse_overstrike(text: str) -> tuple[str, list[int]]:
        """Split overstrike text into plain characters and per-character flags."""
        i = 0
        chars: list[str] = []
        flags: list[int] = []
        while i < len(text):
            ch = text[i]
            # '_' '\b' X [ '\b' X ]
            if ch == '_' and i + 2 < len(text) and text[i + 1] == '\b':
                real = text[i + 2]
                flag = OVERSTRIKE_UNDER
                if i + 4 < len(text) and text[i + 3] == '\b' and text[i + 4] == real:
                    flag |= OVERSTRIKE_BOLD
                    i += 5
                else:
                    i += 3
                chars.append(real)
                flags.append(flag)
                continue
            # X '\b' X
            if i + 2 < len(text) and text[i + 1] == '\b' and text[i + 2] == ch:
                chars.append(ch)
                flags.append(OVERSTRIKE_BOLD)
                i += 3
                continue
            chars.append(ch)
            flags.append(0)
            i += 1
        return ''.join(chars), flags

    @classmethod
    def from_overstrike_text(cls, text: str) -> "Paragraph":
        """Build a paragraph from overstrike text, one run per style change."""
        plain, flags = cls._parse_overstrike(text)
        paragraph = cls()
        for ch, flag in zip(plain, flags):
            fmt = TextFormat.NONE
            if flag & OVERSTRIKE_BOLD:
                fmt |= TextFormat.BOLD
            if flag & OVERSTRIKE_UNDER:
                fmt |= TextFormat.UNDERLINE
            last = paragraph.runs[-1] if paragraph.runs else None
            if last is not None and last.format == fmt:
                last.text += ch
            else:
                paragraph.append(TextRun(text=ch, format=fmt))
        return paragraph


@dataclass(frozen=True)
class Point:
    """A caret location: a run plus a character offset inside it."""
    run: Optional[TextRun]
    offset: int = 0

    def __post_init__(self):
        if self.run is None:
            if self.offset != 0:
                raise ValueError("A point without a run must have offset 0")
        elif not 0 <= self.offset <= self.run.text_size():
            raise ValueError(
                f"Offset {self.offset} outside run of size {self.run.text_size()}")

    def is_at_node_end(self) -> bool:
        """True when the point sits after the last character of its run."""
        return self.run is not None and self.offset == self.run.text_size()


@dataclass
class RangeSelection:
    """Text selection with the pending format/style for the next typed character."""
    anchor: Point
    focus: Point
    format: TextFormat = TextFormat.NONE
    style: str = ""

    @classmethod
    def caret(cls, point: Point, format: Optional[TextFormat] = None,
              style: Optional[str] = None) -> "RangeSelection":
        """Collapsed selection at a point.

        Pending format/style default to the anchor run's own formatting.
        """
        run = point.run
        if format is None:
            format = run.format if run is not None and run.is_text() else TextFormat.NONE
        if style is None:
            style = run.style if run is not None and run.is_text() else ""
        return cls(anchor=point, focus=point, format=TextFormat(format), style=style)

    def is_collapsed(self) -> bool:
        return self.anchor == self.focus

    def has_format(self, fmt: TextFormat) -> bool:
        return bool(self.format & fmt)

    def toggle_format(self, fmt: TextFormat):
        self.format ^= fmt

    def set_style(self, style: str):
        self.style = style

    def get_character_offsets(self) -> tuple[int, int]:
        return (self.anchor.offset, self.focus.offset)

    def get_nodes(self) -> list[TextRun]:
        """Runs covered by the selection, in document order."""
        a, f = self.anchor.run, self.focus.run
        if a is None or f is None:
            return [r for r in (a, f) if r is not None]
        if a is f:
            return [a]
        parent = a.parent
        if parent is None or f.parent is not parent:
            return [a, f]
        i, j = sorted((parent.index_of(a), parent.index_of(f)))
        return parent.runs[i:j + 1]


@dataclass
class NodeSelection:
    """Selection of whole non-text objects. Has no caret."""
    runs: list[TextRun] = field(default_factory=list)

    def is_collapsed(self) -> bool:
        return False

    def get_nodes(self) -> list[TextRun]:
        return list(self.runs)


Selection = Union[RangeSelection, NodeSelection]
