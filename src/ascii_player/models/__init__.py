"""
Data Models
===========

Typed data models for the ASCII player.

Models:
    Probe:
        - ProbeOutput, ProbeStream: Schema for ffprobe JSON
        - VideoProbe: Frame rate and native dimensions of a source

    Sequence:
        - FrameSequence: Persisted, ordered text frames
        - PlaybackSession: Playback cursor (index, interval)
"""

from ascii_player.models.probe import ProbeOutput, ProbeStream, VideoProbe
from ascii_player.models.sequence import FrameSequence, PlaybackSession

__all__ = [
    # Probe
    "ProbeOutput",
    "ProbeStream",
    "VideoProbe",
    # Sequence
    "FrameSequence",
    "PlaybackSession",
]
