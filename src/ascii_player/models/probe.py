"""
Probe Schema
============

Pydantic models for the JSON emitted by ffprobe.

Input Contract (from `ffprobe -print_format json -show_streams`):
    {
        "streams": [
            {
                "codec_type": "video",
                "width": 1920,
                "height": 1080,
                "r_frame_rate": "30000/1001"
            },
            ...
        ]
    }

Only the first video stream is used. Frame rates are kept as exact
fractions; callers convert to float at the last moment.
"""

from fractions import Fraction
from typing import List, Optional

from pydantic import BaseModel, Field


class ProbeStream(BaseModel):
    """One stream entry from ffprobe output."""

    codec_type: str = Field(..., description="Stream kind: video, audio, ...")
    width: Optional[int] = Field(default=None, ge=1)
    height: Optional[int] = Field(default=None, ge=1)
    r_frame_rate: Optional[str] = Field(
        default=None,
        description="Rational frame rate, e.g. '30/1' or '24000/1001'",
    )


class ProbeOutput(BaseModel):
    """Top-level ffprobe document."""

    streams: List[ProbeStream] = Field(default_factory=list)

    def video_stream(self) -> Optional[ProbeStream]:
        for stream in self.streams:
            if stream.codec_type == "video":
                return stream
        return None


class VideoProbe(BaseModel):
    """
    Source video properties needed by the pipeline.

    Attributes:
        frame_rate: Exact frames per second
        width: Native width in pixels
        height: Native height in pixels
    """

    frame_rate: Fraction
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)

    model_config = {"arbitrary_types_allowed": True}
