"""
Playback Tests
==============

Terminal redraw loop, start gate, and interrupt teardown.
"""

import asyncio
import io
import os
import signal
import sys
import threading
import time

import pytest

from ascii_player.errors import FrameStorageError
from ascii_player.playback.engine import PlaybackEngine, PlaybackState, play
from ascii_player.playback.terminal import (
    CLEAR_TO_END,
    CURSOR_HOME,
    HIDE_CURSOR,
    SHOW_CURSOR,
    compose_frame,
)
from ascii_player.storage.frame_store import transient_frame_store


FRAME_0 = "AAAA\nAAAA\n"
FRAME_1 = "BBBB\n"


def _ticks(output: str) -> list:
    """Split captured output into per-tick frame texts."""
    frames = []
    for chunk in output.split(HIDE_CURSOR)[1:]:
        assert chunk.startswith(CURSOR_HOME)
        body, clear, _ = chunk[len(CURSOR_HOME):].partition(CLEAR_TO_END)
        assert clear == CLEAR_TO_END
        frames.append(body)
    return frames


class TestTerminal:
    """Tests for the single-buffer frame write."""

    def test_compose_frame(self):
        assert compose_frame("ab\n") == "\x1b[?25l\x1b[H" + "ab\n" + "\x1b[0J"


class TestPlaybackEngine:
    """Tests for the playback state machine."""

    def test_load(self, two_frame_store):
        engine = PlaybackEngine(two_frame_store, frame_rate=10, output=io.StringIO())
        assert engine.state == PlaybackState.IDLE

        assert engine.load() == 2
        assert engine.state == PlaybackState.WAITING_FOR_START
        assert engine.session.interval == pytest.approx(0.1)

    def test_load_empty_store(self, frame_store):
        engine = PlaybackEngine(frame_store, frame_rate=10, output=io.StringIO())
        with pytest.raises(FrameStorageError):
            engine.load()
        assert engine.state == PlaybackState.IDLE

    def test_rejects_bad_frame_rate(self, frame_store):
        with pytest.raises(ValueError):
            PlaybackEngine(frame_store, frame_rate=0)

    def test_wait_for_start_reads_one_line(self, two_frame_store):
        output = io.StringIO()
        stdin = io.StringIO("\nleftover\n")
        engine = PlaybackEngine(two_frame_store, frame_rate=25, output=output)
        engine.load()

        engine.wait_for_start(stdin)

        assert "Press Enter to start the animation" in output.getvalue()
        assert "40.00 milliseconds" in output.getvalue()
        assert stdin.readline() == "leftover\n"

    def test_run_requires_load(self, two_frame_store):
        engine = PlaybackEngine(two_frame_store, frame_rate=10, output=io.StringIO())
        with pytest.raises(RuntimeError):
            asyncio.run(engine.run(max_ticks=1))

    def test_frames_wrap(self, two_frame_store):
        output = io.StringIO()
        engine = PlaybackEngine(two_frame_store, frame_rate=1000, output=output)
        engine.load()

        asyncio.run(engine.run(max_ticks=5))

        assert _ticks(output.getvalue()) == [FRAME_0, FRAME_1, FRAME_0, FRAME_1, FRAME_0]
        assert output.getvalue().endswith(SHOW_CURSOR)
        assert engine.state == PlaybackState.STOPPED
        assert engine.session.index == 1

    def test_two_frames_at_10fps_for_250ms(self, two_frame_store):
        """Two frames at 10 fps over 250ms draw frame0, frame1, frame0 ..."""
        output = io.StringIO()
        engine = PlaybackEngine(two_frame_store, frame_rate=10, output=output)
        engine.load()

        async def scenario():
            task = asyncio.create_task(engine.run())
            await asyncio.sleep(0.25)
            engine.stop()
            await task

        asyncio.run(scenario())

        ticks = _ticks(output.getvalue())
        assert len(ticks) >= 2
        expected = [FRAME_0, FRAME_1] * len(ticks)
        assert ticks == expected[:len(ticks)]

    def test_stop_prevents_further_ticks(self, two_frame_store):
        output = io.StringIO()
        engine = PlaybackEngine(two_frame_store, frame_rate=20, output=output)
        engine.load()

        async def scenario():
            task = asyncio.create_task(engine.run())
            await asyncio.sleep(0.12)
            engine.stop()
            await task
            drawn = engine.session.ticks
            await asyncio.sleep(0.15)
            return drawn

        drawn = asyncio.run(scenario())

        assert drawn >= 1
        assert engine.session.ticks == drawn
        assert len(_ticks(output.getvalue())) == drawn

    def test_missing_frame_is_fatal(self, two_frame_store):
        output = io.StringIO()
        engine = PlaybackEngine(two_frame_store, frame_rate=1000, output=output)
        engine.load()
        engine.session.frames[1].unlink()

        with pytest.raises(FrameStorageError):
            asyncio.run(engine.run())

        assert _ticks(output.getvalue()) == [FRAME_0]
        assert engine.state == PlaybackState.STOPPED

    def test_signal_handler_stops(self, two_frame_store):
        engine = PlaybackEngine(two_frame_store, frame_rate=50, output=io.StringIO())
        engine.load()

        async def scenario():
            task = asyncio.create_task(engine.run())
            await asyncio.sleep(0.05)
            engine._handle_signal(signal.SIGINT)
            await task

        asyncio.run(scenario())

        assert engine.interrupted
        assert engine.state == PlaybackState.STOPPED


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
class TestInterruptTeardown:
    """End-to-end interrupt: playback stops and frame storage is removed."""

    def test_sigint_removes_frames(self, tmp_path):
        directory = tmp_path / "textFrames"
        output = io.StringIO()

        timer = threading.Timer(0.3, os.kill, args=(os.getpid(), signal.SIGINT))
        with transient_frame_store(directory) as store:
            store.write(0, FRAME_0)
            store.write(1, FRAME_1)

            timer.start()
            try:
                engine = play(store, frame_rate=20, wait_for_start=False, output=output)
            finally:
                timer.cancel()

        assert engine.interrupted
        assert engine.state == PlaybackState.STOPPED
        assert not directory.exists()

        drawn = output.getvalue()
        assert len(_ticks(drawn)) == engine.session.ticks >= 2
        time.sleep(0.1)
        assert output.getvalue() == drawn

    def test_play_waits_for_enter(self, two_frame_store):
        output = io.StringIO()
        timer = threading.Timer(0.15, os.kill, args=(os.getpid(), signal.SIGINT))
        timer.start()
        try:
            engine = play(
                two_frame_store,
                frame_rate=20,
                input_stream=io.StringIO("\n"),
                output=output,
            )
        finally:
            timer.cancel()

        before_first_frame = output.getvalue().split(HIDE_CURSOR)[0]
        assert "Press Enter to start the animation" in before_first_frame
        assert engine.interrupted
