"""Constants and configuration defaults for the redit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Input polling
    BLINK_INTERVAL = 0.5  # Poll timeout; expiry toggles the cursor blink flag (seconds)

    # Screen layout
    MODELINE_HEIGHT = 1  # Rows used by the modeline
    MINIBUFFER_HEIGHT = 1  # Rows used by the minibuffer / status line
    FRINGE_WIDTH = 2  # Columns used by the fringe when shown
    LINE_NUMBER_WIDTH = 4  # Columns used by line numbers when shown

    # Editing defaults
    DEFAULT_INDENT_WIDTH = 4
    DEFAULT_SCROLL_MARGIN = 3
    DEFAULT_PAIRS = {'(': ')', '[': ']', '{': '}', '"': '"', "'": "'"}
    DEFAULT_THEME = "nature"

    # Scripting
    INIT_SCRIPT_NAME = "init.py"  # Loaded from the user config directory at startup
    APP_NAME = "redit"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    NOT_FOUND_MESSAGE = "Search failed: {}"
    ONLY_OCCURRENCE_MESSAGE = "This is the only occurrence"
    WRAPPED_MESSAGE = "Search wrapped"
    OLDEST_CHANGE_MESSAGE = "Already at oldest change"
    NEWEST_CHANGE_MESSAGE = "Already at newest change"
