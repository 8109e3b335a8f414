"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed

from .constants import AffinityConstants
from .indicator import MarkerPosition
from .model import Paragraph, TextFormat

# Terminal capability for each format; formats without one render plain
FORMAT_CAPABILITIES = (
    (TextFormat.BOLD, 'bold'),
    (TextFormat.ITALIC, 'italic'),
    (TextFormat.UNDERLINE, 'underline'),
    (TextFormat.HIGHLIGHT, 'reverse'),
    (TextFormat.CODE, 'dim'),
)

STYLE_COLORS = frozenset({
    'black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white',
})


def style_color(style: str) -> Optional[str]:
    """Extract a named color from a 'color: red; ...' style string."""
    for declaration in style.split(';'):
        key, sep, value = declaration.partition(':')
        if sep and key.strip().lower() == 'color':
            name = value.strip().lower()
            if name in STYLE_COLORS:
                return name
    return None


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self.scroll_x = 0

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Ctrl-Q must reach the editor instead of resuming tty output
            self._curtsies_input = Input(keynames='curtsies', disable_terminal_start_stop=True)
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Get a single keypress as a curtsies key name, or None on timeout."""
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    def scroll_to_caret(self, caret_x: int, view_width: int) -> int:
        """Adjust the horizontal scroll origin so the caret column is visible.

        The cell before the caret stays in view too, since a LEFT marker
        sits under it.
        """
        if caret_x < self.scroll_x + 1:
            self.scroll_x = max(0, caret_x - 1)
        elif caret_x >= self.scroll_x + view_width:
            self.scroll_x = caret_x - view_width + 1
        return self.scroll_x

    def compose_runs(self, paragraph: Paragraph, view_width: int, origin: int = 0) -> str:
        """Render the runs visible from ``origin`` with their attributes, padded to width."""
        out = []
        used = 0
        pos = 0
        for run in paragraph.runs:
            if not run.is_text():
                continue
            start = pos
            pos += len(run.text)
            lo = max(origin - start, 0)
            hi = min(len(run.text), origin + view_width - start)
            if hi <= lo:
                continue
            text = run.text[lo:hi]
            used += len(text)
            attrs = ''.join(getattr(self.term, cap) for fmt, cap in FORMAT_CAPABILITIES
                            if run.has_format(fmt))
            color = style_color(run.style)
            if color:
                attrs += getattr(self.term, color)
            if attrs:
                out.append(f"{attrs}{text}{self.term.normal}")
            else:
                out.append(text)
        out.append(' ' * (view_width - used))
        return ''.join(out)

    def compose_marker_row(self, marker: Optional[MarkerPosition], view_width: int,
                           glyph: str = AffinityConstants.MARKER_GLYPH, origin: int = 0) -> str:
        """Row under the text holding the affinity marker, if visible."""
        if marker is None:
            return ' ' * view_width
        col = int(marker.left) - origin
        if not 0 <= col < view_width:
            return ' ' * view_width
        return ' ' * col + glyph + ' ' * (view_width - col - 1)

    def draw_frame(self, paragraph: Paragraph, caret_x: int, marker: Optional[MarkerPosition],
                   left_margin: int = 0, view_width: int = AffinityConstants.DOCUMENT_WIDTH,
                   status: str = AffinityConstants.DEFAULT_STATUS,
                   glyph: str = AffinityConstants.MARKER_GLYPH):
        """Draw the text line, the marker row, the status line and the caret."""
        origin = self.scroll_to_caret(caret_x, view_width)
        print(self.term.home + self.term.clear, end='')
        print(self.term.move(0, left_margin) + self.compose_runs(paragraph, view_width, origin),
              end='')
        marker_row = int(marker.top) if marker is not None else 1
        print(self.term.move(marker_row, left_margin)
              + self.compose_marker_row(marker, view_width, glyph, origin), end='')
        print(self.term.move(self.term.height - 1, 0) + status[:self.term.width], end='')
        print(self.term.move(0, caret_x - origin + left_margin) + self.term.normal_cursor,
              end='', flush=True)

    @property
    def width(self):
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1
