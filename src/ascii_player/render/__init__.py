"""
Render Module
=============

Brightness-to-glyph mapping and raster-to-text rendering.

Components:
    - GlyphRamp: Immutable palette with linear quantization
    - FrameRenderer: Raster (H, W) -> text frame
    - target_height: Aspect-preserving grid height

Example:
    from ascii_player.render import FrameRenderer, GlyphRamp

    renderer = FrameRenderer(GlyphRamp.from_name("detailed"))
    text = renderer.render(raster)
"""

from ascii_player.render.glyphs import (
    DETAILED_RAMP,
    SIMPLE_RAMP,
    RAMP_PRESETS,
    GlyphRamp,
)
from ascii_player.render.renderer import FrameRenderer, target_height


__all__ = [
    "DETAILED_RAMP",
    "SIMPLE_RAMP",
    "RAMP_PRESETS",
    "GlyphRamp",
    "FrameRenderer",
    "target_height",
]
