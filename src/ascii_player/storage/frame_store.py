"""
Frame Store
===========

Directory-backed storage for text frames.

Layout:
    <directory>/ascii_frame_0.txt
    <directory>/ascii_frame_1.txt
    ...

The directory is transient. `transient_frame_store` acquires it and
guarantees removal on every exit path (normal return, error, interrupt).

Design Rules:
    - Written only by the frame pipeline, read only by playback
    - Ordinals are zero-based and contiguous
    - Missing or unreadable frames are fatal (FrameStorageError)
"""

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

from ascii_player.errors import FrameStorageError
from ascii_player.storage.ordering import parse_ordinal, sort_by_ordinal


logger = logging.getLogger(__name__)


FRAME_PREFIX = "ascii_frame_"
FRAME_SUFFIX = ".txt"


def frame_filename(ordinal: int) -> str:
    """Filename for the frame at a zero-based ordinal."""
    if ordinal < 0:
        raise ValueError("ordinal must be >= 0")
    return f"{FRAME_PREFIX}{ordinal}{FRAME_SUFFIX}"


class FrameStore:
    """
    Text frames stored one file per frame.

    Attributes:
        directory: Directory holding the frame files

    Example:
        store = FrameStore(Path("textFrames"))
        store.write(0, text)
        for path in store.list_frames():
            print(store.read(path))
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def write(self, ordinal: int, text: str) -> Path:
        """Persist one frame under its ordinal. Returns the file path."""
        path = self.directory / frame_filename(ordinal)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise FrameStorageError(f"Failed to write frame {path}: {e}") from e
        return path

    def list_frames(self) -> List[Path]:
        """
        Frame files in increasing ordinal order.

        Raises:
            FrameStorageError: If the directory is missing or ordinals collide
        """
        if not self.directory.is_dir():
            raise FrameStorageError(f"Frame directory not found: {self.directory}")

        try:
            return sort_by_ordinal(
                self.directory.iterdir(),
                prefix=FRAME_PREFIX,
                suffix=FRAME_SUFFIX,
            )
        except ValueError as e:
            raise FrameStorageError(f"Corrupt frame directory {self.directory}: {e}") from e

    def read(self, path: Path) -> str:
        """
        Read one frame.

        Raises:
            FrameStorageError: If the file is missing, unreadable or empty
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FrameStorageError(f"Failed to read frame {path}: {e}") from e
        if not text:
            raise FrameStorageError(f"Frame {path} is empty")
        return text

    def clear(self) -> int:
        """
        Delete stored frame files, leaving any other files alone.

        Unlike list_frames(), duplicate ordinals are not an error here.

        Returns:
            Number of frames removed.
        """
        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in list(self.directory.glob(f"{FRAME_PREFIX}*{FRAME_SUFFIX}")):
            if parse_ordinal(path, FRAME_PREFIX, FRAME_SUFFIX) is None:
                continue
            path.unlink(missing_ok=True)
            removed += 1
        return removed


@contextmanager
def transient_frame_store(directory: Union[str, Path]) -> Iterator[FrameStore]:
    """
    Acquire a frame directory and remove it on exit.

    A directory created here is deleted recursively. A directory that
    already existed is kept, but stale and generated frame files in it
    are removed both on entry and on exit.

    Args:
        directory: Frame directory path

    Yields:
        FrameStore over the directory
    """
    path = Path(directory)
    created = not path.exists()
    path.mkdir(parents=True, exist_ok=True)
    store = FrameStore(path)

    if not created:
        stale = store.clear()
        if stale:
            logger.warning(f"Removed {stale} stale frames from {path}")

    try:
        yield store
    finally:
        if created:
            shutil.rmtree(path, ignore_errors=True)
            logger.info(f"Deleted folder: {path}")
        else:
            store.clear()
            logger.info(f"Deleted frames in: {path}")
