"""
Media Module
============

Adapters for the external media and image collaborators.

    - FFmpegTools: ffprobe frame-rate/size probing, ffmpeg still extraction
    - load_raster_size / resize_and_grayscale: OpenCV still decoding
"""

from ascii_player.media.ffmpeg import FFmpegTools, parse_frame_rate
from ascii_player.media.image import load_raster_size, resize_and_grayscale


__all__ = [
    "FFmpegTools",
    "parse_frame_rate",
    "load_raster_size",
    "resize_and_grayscale",
]
