"""caretmark CLI entry point.

Allows running via `python -m caretmark` and provides the console script
defined in `pyproject.toml`.

Usage:
    caretmark [--log FILE] [filename]
    caretmark --version
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def get_version_string() -> str:
    try:
        return importlib.metadata.version("caretmark")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def load_paragraph(filename: Optional[str]):
    """Load the first line of an overstrike text file as the document."""
    from .model import Paragraph

    if not filename:
        return Paragraph()
    lines = Path(filename).read_text(encoding='utf-8').split('\n')
    dropped = sum(1 for line in lines[1:] if line.strip())
    if dropped:
        logger.warning(f"Only the first line of {filename} is edited; ignoring {dropped} more")
    return Paragraph.from_overstrike_text(lines[0])


def run_editor(filename: Optional[str] = None) -> None:
    """Run the interactive editor until Ctrl-Q."""
    from .commands import CommandRegistry
    from .constants import AffinityConstants
    from .editor import TypingEditor
    from .keyboard import KeyboardHandler
    from .settings import get_persistence
    from .terminal import TerminalInterface

    settings = get_persistence().load_settings()
    editor = TypingEditor(
        load_paragraph(filename),
        options=settings.resolver_options(),
        offsets=settings.marker_offsets(),
    )
    editor.set_caret(editor.paragraph.text_size())

    terminal = TerminalInterface()
    keyboard = KeyboardHandler(terminal)
    registry = CommandRegistry()

    terminal.setup()
    try:
        while editor.running:
            view_width = min(AffinityConstants.DOCUMENT_WIDTH,
                             max(AffinityConstants.MIN_TERMINAL_WIDTH, terminal.width))
            left_margin = max(0, (terminal.width - view_width) // 2)
            status = f" {editor.caret_type.value:<6} {AffinityConstants.DEFAULT_STATUS}"
            terminal.draw_frame(editor.paragraph, editor.caret_offset, editor.marker,
                                left_margin=left_margin, view_width=view_width,
                                status=status, glyph=settings.marker_glyph)
            key_event = keyboard.get_key_event()
            if key_event is not None:
                registry.execute(editor, key_event)
    except KeyboardInterrupt:
        pass
    finally:
        terminal.cleanup()


def main() -> None:
    # Very small arg parsing: version, optional log file and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if len(args) >= 2 and args[0] == "--log":
        logging.basicConfig(filename=args[1], level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")
        args = args[2:]
    filename = args[0] if args else None
    logger.debug("Starting editor with %s", filename or "an empty document")
    run_editor(filename)


if __name__ == "__main__":  # pragma: no cover
    main()
