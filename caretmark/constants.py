"""Constants and configuration defaults for caretmark."""


class AffinityConstants:
    """Central configuration constants."""

    # Marker geometry (pixels, relative to the native selection rect)
    MARKER_LEFT_OFFSET = 6  # LEFT marker shifts one marker-width left of the caret
    MARKER_BASELINE_OFFSET = 1  # Raise the marker onto the text baseline

    # Marker geometry in terminal cells
    CELL_LEFT_OFFSET = 1
    CELL_BASELINE_OFFSET = 0
    MARKER_GLYPH = "▔"  # upper one-eighth block

    # Terminal layout
    DOCUMENT_WIDTH = 65
    MIN_TERMINAL_WIDTH = 20

    # Settings storage
    APP_NAME = "caretmark"
    SETTINGS_FILENAME = "settings.json"

    # Status messages
    DEFAULT_STATUS = "Ctrl-B bold  Ctrl-E italic  Ctrl-U underline  Ctrl-Q quit"
