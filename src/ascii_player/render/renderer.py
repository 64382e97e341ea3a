"""
Frame Renderer
==============

Converts a grayscale raster into one text frame.

The raster arrives already scaled to (output_width, target_height) by the
image collaborator; the renderer never resamples. Each pixel is mapped
through the glyph ramp, rows are emitted top to bottom, and every row is
terminated by a newline.

Design Rules:
    - Pure: identical raster and ramp produce identical text
    - Output has exactly H lines of exactly W glyphs
"""

import logging
import math

import numpy as np

from ascii_player.render.glyphs import GlyphRamp


logger = logging.getLogger(__name__)


LINE_TERMINATOR = "\n"


def target_height(output_width: int, source_width: int, source_height: int) -> int:
    """
    Derive the grid height that preserves the source aspect ratio.

    Rounds half up, and never returns less than one row.

    Args:
        output_width: Grid width in columns
        source_width: Native width of the video/image in pixels
        source_height: Native height of the video/image in pixels

    Returns:
        Grid height in rows

    Raises:
        ValueError: If any dimension is not positive
    """
    if output_width <= 0 or source_width <= 0 or source_height <= 0:
        raise ValueError(
            f"dimensions must be positive: output_width={output_width}, "
            f"source={source_width}x{source_height}"
        )
    aspect_ratio = source_width / source_height
    return max(1, math.floor(output_width / aspect_ratio + 0.5))


class FrameRenderer:
    """
    Renders grayscale rasters into glyph grids.

    Attributes:
        ramp: Glyph ramp used for brightness mapping

    Example:
        renderer = FrameRenderer(GlyphRamp(SIMPLE_RAMP))
        text = renderer.render(np.zeros((2, 3), dtype=np.uint8))
        # '@@@\\n@@@\\n'
    """

    def __init__(self, ramp: GlyphRamp) -> None:
        self.ramp = ramp
        self._table = ramp.lookup_table()

    def render(self, raster: np.ndarray) -> str:
        """
        Render a single-channel raster of shape (H, W).

        Args:
            raster: Grayscale brightness values, dtype uint8

        Returns:
            Text frame with H newline-terminated rows of W glyphs

        Raises:
            ValueError: If the raster is not a non-empty 2-D array
        """
        if raster.ndim != 2:
            raise ValueError(f"expected a 2-D grayscale raster, got shape {raster.shape}")
        if raster.size == 0:
            raise ValueError(f"raster must not be empty, got shape {raster.shape}")

        if raster.dtype != np.uint8:
            logger.debug(f"Clamping {raster.dtype} raster to uint8")
            raster = np.clip(raster, 0, 255).astype(np.uint8)

        glyphs = self._table[raster]
        return "".join("".join(row) + LINE_TERMINATOR for row in glyphs)
