"""
Glyph Ramp
==========

Brightness-to-glyph mapping.

A ramp is an ordered palette of printable characters, densest first.
Brightness is quantized linearly onto the ramp:

    index = floor((brightness / 255) * (len(ramp) - 1))

so 0 always maps to the first glyph and 255 to the last.

Design Rules:
    - Ramps are immutable and never empty
    - Out-of-range brightness is clamped, never used as an index
"""

import math
from typing import Tuple

import numpy as np


DETAILED_RAMP = "@B%8&WM#*CJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
SIMPLE_RAMP = "@%#*+=-:. "

RAMP_PRESETS = {
    "detailed": DETAILED_RAMP,
    "simple": SIMPLE_RAMP,
}

MAX_BRIGHTNESS = 255


class GlyphRamp:
    """
    Immutable glyph palette with linear brightness quantization.

    Attributes:
        glyphs: Ramp characters, densest (darkest appearance) first

    Example:
        ramp = GlyphRamp(SIMPLE_RAMP)
        ramp.map(0)    # '@'
        ramp.map(255)  # ' '
    """

    __slots__ = ("_glyphs", "_table")

    def __init__(self, glyphs: str) -> None:
        if not glyphs:
            raise ValueError("glyph ramp must not be empty")
        self._glyphs: Tuple[str, ...] = tuple(glyphs)
        self._table: np.ndarray = np.array(
            [self._index_glyph(b) for b in range(MAX_BRIGHTNESS + 1)],
            dtype="<U1",
        )
        self._table.setflags(write=False)

    @classmethod
    def from_name(cls, name: str) -> "GlyphRamp":
        """Build a ramp from a preset name, or use the string literally."""
        return cls(RAMP_PRESETS.get(name, name))

    @property
    def glyphs(self) -> Tuple[str, ...]:
        return self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)

    def __repr__(self) -> str:
        return f"GlyphRamp({''.join(self._glyphs)!r})"

    def _index_glyph(self, brightness: int) -> str:
        index = math.floor((brightness / MAX_BRIGHTNESS) * (len(self._glyphs) - 1))
        return self._glyphs[index]

    def map(self, brightness: int) -> str:
        """
        Map one brightness value to its glyph.

        Args:
            brightness: Grayscale intensity, expected in [0, 255]

        Returns:
            Single-character glyph
        """
        clamped = min(max(int(brightness), 0), MAX_BRIGHTNESS)
        return self._index_glyph(clamped)

    def lookup_table(self) -> np.ndarray:
        """
        Read-only 256-entry table, table[b] == map(b).

        Used by the renderer to map whole rasters at once.
        """
        return self._table
