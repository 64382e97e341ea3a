"""
FFmpeg Adapter
==============

Subprocess wrapper around the ffprobe and ffmpeg executables.

This is the ONLY place in the codebase that talks to the media tools:
    - probe_video / probe_frame_rate: read stream metadata via ffprobe
    - decode_to_stills: extract one still image per output frame interval

Design Rules:
    - Calls are synchronous; the pipeline continues only after ffmpeg exits
    - Frame rates stay exact (Fraction) until the caller converts them
    - Tool failures are surfaced as ProbeError / DecodeError
"""

import logging
import subprocess
from fractions import Fraction
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from ascii_player.errors import DecodeError, ProbeError
from ascii_player.models.probe import ProbeOutput, VideoProbe


logger = logging.getLogger(__name__)


def parse_frame_rate(value: str) -> Fraction:
    """
    Parse an ffprobe rational such as '30/1' or '24000/1001'.

    Raises:
        ProbeError: If the value is malformed or not positive
    """
    try:
        rate = Fraction(value)
    except (ValueError, ZeroDivisionError) as e:
        raise ProbeError(f"Invalid frame rate {value!r}: {e}") from e
    if rate <= 0:
        raise ProbeError(f"Frame rate must be positive, got {value!r}")
    return rate


class FFmpegTools:
    """
    Media collaborator backed by the ffmpeg command-line tools.

    Attributes:
        ffmpeg_binary: Executable used for decoding
        ffprobe_binary: Executable used for probing

    Example:
        tools = FFmpegTools()
        probe = tools.probe_video("clip.mp4")
        tools.decode_to_stills("clip.mp4", probe.frame_rate, scratch, "frame%d.png")
    """

    def __init__(
        self,
        ffmpeg_binary: str = "ffmpeg",
        ffprobe_binary: str = "ffprobe",
    ) -> None:
        self.ffmpeg_binary = ffmpeg_binary
        self.ffprobe_binary = ffprobe_binary

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        logger.debug(f"Running: {' '.join(cmd)}")
        return subprocess.run(cmd, capture_output=True, text=True, check=True)

    def probe_video(self, path: Union[str, Path]) -> VideoProbe:
        """
        Read frame rate and dimensions of the first video stream.

        Args:
            path: Video file to probe

        Returns:
            VideoProbe with exact frame rate and native size

        Raises:
            ProbeError: If ffprobe fails or reports no usable video stream
        """
        cmd = [
            self.ffprobe_binary,
            "-v", "quiet",
            "-print_format", "json",
            "-show_streams",
            str(path),
        ]

        try:
            result = self._run(cmd)
        except FileNotFoundError as e:
            raise ProbeError(f"{self.ffprobe_binary} not found: {e}") from e
        except subprocess.CalledProcessError as e:
            raise ProbeError(f"ffprobe failed for {path}: {e.stderr}") from e

        try:
            output = ProbeOutput.model_validate_json(result.stdout)
        except ValidationError as e:
            raise ProbeError(f"Failed to parse ffprobe output for {path}: {e}") from e

        stream = output.video_stream()
        if stream is None:
            raise ProbeError(f"No video stream found in {path}")
        if stream.r_frame_rate is None or stream.width is None or stream.height is None:
            raise ProbeError(f"Incomplete video stream metadata in {path}")

        probe = VideoProbe(
            frame_rate=parse_frame_rate(stream.r_frame_rate),
            width=stream.width,
            height=stream.height,
        )
        logger.info(
            f"Probed {path}: {float(probe.frame_rate):.3f} fps, "
            f"{probe.width}x{probe.height}"
        )
        return probe

    def probe_frame_rate(self, path: Union[str, Path]) -> Fraction:
        """Frame rate of the first video stream."""
        return self.probe_video(path).frame_rate

    def decode_to_stills(
        self,
        path: Union[str, Path],
        fps: Union[Fraction, float],
        output_dir: Path,
        pattern: str = "frame%d.png",
    ) -> None:
        """
        Decode the video into one still per frame interval.

        ffmpeg numbers its output from 1 (frame1.png, frame2.png, ...).
        Blocks until ffmpeg exits.

        Args:
            path: Source video
            fps: Output frame rate
            output_dir: Scratch directory for the stills
            pattern: ffmpeg output filename pattern

        Raises:
            DecodeError: If ffmpeg is missing or exits non-zero
        """
        cmd = [
            self.ffmpeg_binary,
            "-v", "error",
            "-nostats",
            "-i", str(path),
            "-vf", f"fps={fps}",
            "-y",
            str(output_dir / pattern),
        ]

        try:
            self._run(cmd)
        except FileNotFoundError as e:
            raise DecodeError(f"{self.ffmpeg_binary} not found: {e}") from e
        except subprocess.CalledProcessError as e:
            raise DecodeError(f"ffmpeg frame extraction failed for {path}: {e.stderr}") from e

        logger.info(f"Frames extracted to {output_dir}")
