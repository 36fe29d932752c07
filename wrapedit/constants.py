"""Constants and configuration for the wrapedit engine."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Line terminators recognized as hard breaks
    LINE_TERMINATORS = "\n\r"

    # Layout defaults
    DEFAULT_WIDTH = 65  # Available width in cells for the terminal host
    DEFAULT_PREF_ROWS = 0  # 0 means "size like a single-line field"
    MIN_WIDTH = 1
    MAX_WIDTH = 400

    # Fonts
    DEFAULT_FONT_NAME = "cell"  # Terminal cells, measured with wcwidth
    DEFAULT_FONT_SIZE = 12
    DEFAULT_LEADING = 1.2  # Line height as a multiple of the font size

    # Scratch layouts kept around between recomputes
    LAYOUT_POOL_SIZE = 4

    # Status messages
    SAVED_MESSAGE = "Saved {}"
    SAVE_FAILED_MESSAGE = "Could not save {}: {}"
    NO_SPACE_MESSAGE = "Could not save: no space left on device"
