"""
Terminal Protocol
=================

ANSI/VT control sequences used for frame redraw.

Each tick writes one combined buffer:

    HIDE_CURSOR + CURSOR_HOME + <frame text> + CLEAR_TO_END

Clearing from the cursor to the end of the screen removes trailing
glyphs when a frame is shorter than the one before it.
"""

ESC = "\x1b"

HIDE_CURSOR = f"{ESC}[?25l"
SHOW_CURSOR = f"{ESC}[?25h"
CURSOR_HOME = f"{ESC}[H"
CLEAR_TO_END = f"{ESC}[0J"


def compose_frame(text: str) -> str:
    """Build the single output buffer that draws one frame."""
    return f"{HIDE_CURSOR}{CURSOR_HOME}{text}{CLEAR_TO_END}"
