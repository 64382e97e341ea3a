"""
Frame Pipeline
==============

Turns a video into an ordered, persisted sequence of text frames.

Steps:
    1. Probe the source frame rate (unless supplied)
    2. Decode the video into numbered stills in a scratch directory
    3. Enumerate the stills and sort them by numeric ordinal
    4. Scale, grayscale and render each still; persist ascii_frame_<i>.txt
    5. Remove the scratch directory

Design Rules:
    - Generation completes before anything is handed to playback
    - Any failed still aborts the whole run (no partial sequences)
    - Output height is derived once per video from its aspect ratio
    - Parallel conversion never changes persisted ordinal order
"""

import logging
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from ascii_player.errors import EmptySequenceError
from ascii_player.media.ffmpeg import FFmpegTools
from ascii_player.media import image
from ascii_player.models.sequence import FrameSequence
from ascii_player.render.renderer import FrameRenderer, target_height
from ascii_player.storage.frame_store import FrameStore
from ascii_player.storage.ordering import sort_by_ordinal


logger = logging.getLogger(__name__)


RasterLoader = Callable[[Path, int, int], np.ndarray]
SizeReader = Callable[[Path], Tuple[int, int]]


class FramePipeline:
    """
    Video -> text frame generator.

    Attributes:
        media: Media collaborator (probe + still extraction)
        renderer: Raster -> text renderer
        store: Destination frame storage
        workers: Threads used for still conversion (1 = sequential)

    Example:
        with transient_frame_store("textFrames") as store:
            pipeline = FramePipeline(FFmpegTools(), renderer, store)
            sequence = pipeline.produce("clip.mp4", output_width=100)
    """

    def __init__(
        self,
        media: FFmpegTools,
        renderer: FrameRenderer,
        store: FrameStore,
        workers: int = 1,
        still_pattern: str = "frame%d.png",
        load_raster: RasterLoader = image.resize_and_grayscale,
        read_size: SizeReader = image.load_raster_size,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")

        self.media = media
        self.renderer = renderer
        self.store = store
        self.workers = workers
        self.still_pattern = still_pattern
        self._load_raster = load_raster
        self._read_size = read_size

        # frame%d.png -> ("frame", ".png")
        head, _, tail = still_pattern.partition("%d")
        self._still_prefix = head
        self._still_suffix = tail

    def produce(
        self,
        video_path: Union[str, Path],
        output_width: int,
        frame_rate: Optional[Union[Fraction, float]] = None,
    ) -> FrameSequence:
        """
        Generate and persist the full frame sequence for a video.

        Args:
            video_path: Source video
            output_width: Grid width in columns
            frame_rate: Output frame rate; probed from the source if None

        Returns:
            FrameSequence describing the persisted frames

        Raises:
            ProbeError: If the frame rate cannot be determined
            DecodeError: If extraction or any still conversion fails
            EmptySequenceError: If no stills were produced
        """
        if output_width < 1:
            raise ValueError("output_width must be >= 1")

        if frame_rate is None:
            frame_rate = self.media.probe_frame_rate(video_path)
        logger.info(f"Frame rate: {float(frame_rate):.3f}")

        with tempfile.TemporaryDirectory(prefix="ascii_player_stills_") as scratch:
            scratch_dir = Path(scratch)
            self.media.decode_to_stills(video_path, frame_rate, scratch_dir, self.still_pattern)

            stills = self.enumerate_stills(scratch_dir)
            if not stills:
                raise EmptySequenceError(f"No stills decoded from {video_path}")

            source_width, source_height = self._read_size(stills[0])
            height = target_height(output_width, source_width, source_height)
            logger.info(
                f"Converting {len(stills)} stills "
                f"({source_width}x{source_height} -> {output_width}x{height} glyphs)"
            )

            paths = self._convert(stills, output_width, height)

        return FrameSequence(
            directory=self.store.directory,
            paths=tuple(paths),
            frame_rate=float(frame_rate),
            width=output_width,
            height=height,
        )

    def enumerate_stills(self, scratch_dir: Path) -> List[Path]:
        """Scratch stills in increasing numeric ordinal order."""
        return sort_by_ordinal(
            scratch_dir.iterdir(),
            prefix=self._still_prefix,
            suffix=self._still_suffix,
        )

    def _render_still(self, still: Path, width: int, height: int) -> str:
        raster = self._load_raster(still, width, height)
        return self.renderer.render(raster)

    def _convert(self, stills: List[Path], width: int, height: int) -> List[Path]:
        start = time.perf_counter()
        paths: List[Path] = []

        if self.workers == 1:
            for ordinal, still in enumerate(stills):
                text = self._render_still(still, width, height)
                paths.append(self.store.write(ordinal, text))
        else:
            # map() yields in submission order regardless of completion order
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                frames = executor.map(
                    lambda still: self._render_still(still, width, height),
                    stills,
                )
                try:
                    for ordinal, text in enumerate(frames):
                        paths.append(self.store.write(ordinal, text))
                except BaseException:
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise

        elapsed = time.perf_counter() - start
        logger.info(f"Persisted {len(paths)} frames to {self.store.directory} in {elapsed:.2f}s")
        return paths
