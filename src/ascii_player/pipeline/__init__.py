"""
Pipeline Module
===============

Video -> persisted text frame generation.

Example:
    from ascii_player.pipeline import FramePipeline
"""

from ascii_player.pipeline.frame_pipeline import FramePipeline


__all__ = [
    "FramePipeline",
]
