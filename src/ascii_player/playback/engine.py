"""
Playback Engine
===============

Timed terminal replay of persisted text frames.

State machine:
    IDLE -> WAITING_FOR_START -> PLAYING -> STOPPED

    IDLE:              nothing loaded
    WAITING_FOR_START: frames enumerated; waits for one line on stdin
    PLAYING:           one frame drawn per tick, index wraps forever
    STOPPED:           stop() was called (normally from SIGINT/SIGTERM)

Timing:
    Ticks fire on a fixed schedule of 1 / frame_rate seconds measured
    from the first tick, so slow ticks do not accumulate drift. A tick
    that falls behind schedule resets the schedule instead of bursting.

Design Rules:
    - Exactly one write per tick (see playback.terminal)
    - Missing or unreadable frames are fatal, never drawn blank
    - stop() is the only way out of PLAYING
"""

import asyncio
import logging
import signal
import sys
from enum import Enum
from typing import Optional, TextIO

from ascii_player.errors import FrameStorageError
from ascii_player.models.sequence import PlaybackSession
from ascii_player.playback.terminal import SHOW_CURSOR, compose_frame
from ascii_player.storage.frame_store import FrameStore


logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    """Lifecycle states of the playback engine."""

    IDLE = "IDLE"
    WAITING_FOR_START = "WAITING_FOR_START"
    PLAYING = "PLAYING"
    STOPPED = "STOPPED"


class PlaybackEngine:
    """
    Replays a frame store in the terminal at a fixed frame rate.

    Attributes:
        store: Frame storage to read from
        frame_rate: Frames per second
        output: Stream frames are written to
        session: Playback cursor, available after load()

    Example:
        engine = PlaybackEngine(store, frame_rate=24.0)
        engine.load()
        engine.wait_for_start(sys.stdin)

        task = asyncio.create_task(engine.run())
        ...
        engine.stop()
        await task
    """

    def __init__(
        self,
        store: FrameStore,
        frame_rate: float,
        output: Optional[TextIO] = None,
    ) -> None:
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive")

        self.store = store
        self.frame_rate = float(frame_rate)
        self.output = output if output is not None else sys.stdout
        self.session: Optional[PlaybackSession] = None

        self._state = PlaybackState.IDLE
        self._stop_event: asyncio.Event = asyncio.Event()
        self._interrupted: bool = False

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.frame_rate

    @property
    def interrupted(self) -> bool:
        """Whether playback was ended by a signal."""
        return self._interrupted

    def load(self) -> int:
        """
        Enumerate frames in ordinal order.

        Returns:
            Number of frames loaded

        Raises:
            FrameStorageError: If the store is missing or holds no frames
        """
        frames = self.store.list_frames()
        if not frames:
            raise FrameStorageError(f"No ASCII frames found in {self.store.directory}")

        self.session = PlaybackSession(frames=tuple(frames), interval=self.interval)
        self._state = PlaybackState.WAITING_FOR_START
        logger.info(f"Loaded {len(frames)} frames from {self.store.directory}")
        return len(frames)

    def wait_for_start(self, input_stream: TextIO) -> None:
        """Block until the operator presses Enter."""
        self._require(PlaybackState.WAITING_FOR_START)

        self.output.write(f"Original video frame rate: {self.frame_rate:g} fps\n")
        self.output.write(f"Delay between frames: {self.interval * 1000:.2f} milliseconds\n")
        self.output.write("Press Enter to start the animation...\n")
        self.output.flush()

        input_stream.readline()

    def tick(self) -> None:
        """Draw the current frame in one write and advance the index."""
        self._require(PlaybackState.PLAYING)

        text = self.store.read(self.session.current)
        self.output.write(compose_frame(text))
        self.output.flush()
        self.session.advance()

    def stop(self) -> None:
        """Request playback to end; no further ticks are scheduled."""
        self._stop_event.set()

    async def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Draw frames until stop() is called.

        Args:
            max_ticks: Stop on its own after this many ticks (None = forever)
        """
        self._require(PlaybackState.WAITING_FOR_START)
        self._state = PlaybackState.PLAYING

        loop = asyncio.get_running_loop()
        next_deadline = loop.time()
        logger.debug(f"Playback started, interval={self.interval * 1000:.2f}ms")

        try:
            while not self._stop_event.is_set():
                self.tick()

                if max_ticks is not None and self.session.ticks >= max_ticks:
                    break

                next_deadline += self.interval
                delay = next_deadline - loop.time()
                if delay < 0:
                    logger.debug(f"Tick {self.session.ticks} behind schedule by {-delay:.3f}s")
                    next_deadline = loop.time()
                    delay = 0

                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
                    break
                except asyncio.TimeoutError:
                    pass
        finally:
            self.output.write(SHOW_CURSOR)
            self.output.flush()
            self._state = PlaybackState.STOPPED
            ticks = self.session.ticks if self.session else 0
            logger.info(f"Playback stopped after {ticks} ticks")

    async def run_until_interrupted(self) -> None:
        """Run with SIGINT/SIGTERM wired to stop()."""
        loop = asyncio.get_running_loop()
        installed = {}

        for signum in (signal.SIGINT, signal.SIGTERM):
            previous = signal.getsignal(signum)
            try:
                loop.add_signal_handler(signum, self._handle_signal, signum)
                installed[signum] = previous
            except (NotImplementedError, RuntimeError):
                # No loop signal support here; Ctrl+C surfaces as KeyboardInterrupt
                logger.debug(f"Signal handler for {signum} not installed")

        try:
            await self.run()
        finally:
            for signum, previous in installed.items():
                loop.remove_signal_handler(signum)
                # Restore the handler active before playback
                if previous is not None:
                    signal.signal(signum, previous)

    def _handle_signal(self, signum: int) -> None:
        logger.info(f"Caught signal {signal.Signals(signum).name}, stopping playback")
        self._interrupted = True
        self.stop()

    def _require(self, state: PlaybackState) -> None:
        if self._state != state:
            raise RuntimeError(f"Playback engine is {self._state.value}, expected {state.value}")


def play(
    store: FrameStore,
    frame_rate: float,
    wait_for_start: bool = True,
    input_stream: Optional[TextIO] = None,
    output: Optional[TextIO] = None,
) -> PlaybackEngine:
    """
    Load, gate on stdin, and replay frames until interrupted.

    Args:
        store: Frame storage produced by the pipeline
        frame_rate: Frames per second
        wait_for_start: Block on one line of input before the first frame
        input_stream: Start-gate stream (default: stdin)
        output: Terminal stream (default: stdout)

    Returns:
        The stopped engine

    Raises:
        FrameStorageError: If frames are missing or unreadable
    """
    engine = PlaybackEngine(store, frame_rate, output=output)
    engine.load()

    if wait_for_start:
        engine.wait_for_start(input_stream if input_stream is not None else sys.stdin)

    asyncio.run(engine.run_until_interrupted())
    return engine
