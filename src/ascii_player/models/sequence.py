"""
Frame Sequence Models
=====================

Typed containers passed between the pipeline and the playback engine.

    - FrameSequence: immutable result of frame generation
    - PlaybackSession: mutable per-run cursor over a frame sequence
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True, slots=True)
class FrameSequence:
    """
    Ordered text frames persisted by the pipeline.

    Attributes:
        directory: Directory holding the frame files
        paths: Frame files in temporal order (index == ordinal)
        frame_rate: Frames per second the sequence was generated at
        width: Glyph columns per row
        height: Rows per frame
    """

    directory: Path
    paths: Tuple[Path, ...]
    frame_rate: float
    width: int
    height: int

    def __len__(self) -> int:
        return len(self.paths)

    def __repr__(self) -> str:
        return (
            f"FrameSequence(frames={len(self.paths)}, "
            f"fps={self.frame_rate:.3f}, "
            f"grid={self.width}x{self.height})"
        )


@dataclass(slots=True)
class PlaybackSession:
    """
    Ephemeral playback state.

    Created when playback starts, advanced once per tick, discarded
    when playback stops.

    Attributes:
        frames: Frame files in temporal order
        interval: Seconds between ticks
        index: Frame drawn on the next tick
        ticks: Number of ticks completed
    """

    frames: Tuple[Path, ...]
    interval: float
    index: int = 0
    ticks: int = field(default=0)

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError("frames must not be empty")
        if self.interval <= 0:
            raise ValueError("interval must be positive")

    @property
    def current(self) -> Path:
        return self.frames[self.index]

    def advance(self) -> None:
        """Move to the next frame, wrapping to 0 after the last one."""
        self.ticks += 1
        self.index += 1
        if self.index >= len(self.frames):
            self.index = 0
