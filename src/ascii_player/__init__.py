"""
ASCII Player
============

Terminal-native animated rendition of a video.

The player decodes a video into stills (ffmpeg), maps every pixel's
brightness onto a glyph ramp, persists one text frame per still, and
replays the frames in the terminal at the source frame rate.

Components:
    - render: Glyph ramp and raster -> text rendering
    - media: ffmpeg/ffprobe and OpenCV adapters
    - storage: Text frame files and numeric ordinal ordering
    - pipeline: Video -> persisted frame sequence
    - playback: Timed, flicker-free terminal redraw

Example:
    $ ascii-player clip.mp4 120
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
