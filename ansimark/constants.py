"""Constants for the ansimark encoder and editor."""

class AnsiConstants:
    """Wire format shared with the chat renderer. Must stay bit-exact."""

    FENCE_OPEN = "```ansi\n"
    FENCE_CLOSE = "\n```"
    ESCAPE_INTRODUCER = "\u001b["
    CODE_SEPARATOR = ";"
    CODE_TERMINATOR = "m"
    RESET = "\u001b[0m"

    # Style flags are encoded in this order regardless of pick order
    STYLE_CODE_ORDER = ("1", "4")


class EditorConstants:
    """Configuration constants for the interactive editor."""

    PROMPT = "ansimark> "
    COPIED_INDICATOR_SECONDS = 2.0  # How long "copied" stays set after a copy
    NOTHING_PICKED_MESSAGE = "nothing selected yet!"
    EMPTY_OUTPUT_MESSAGE = "(type some text to see the output)"
    DEBUG_ENV_VAR = "ANSIMARK_DEBUG"
