"""
Playback Module
===============

Terminal replay of persisted text frames.

    - PlaybackEngine: fixed-interval, cancellable redraw loop
    - PlaybackState: IDLE / WAITING_FOR_START / PLAYING / STOPPED
    - play: load + start gate + run until interrupted
    - compose_frame: single-buffer ANSI frame write

Example:
    from ascii_player.playback import play

    play(store, frame_rate=24.0)
"""

from ascii_player.playback.engine import PlaybackEngine, PlaybackState, play
from ascii_player.playback.terminal import (
    CLEAR_TO_END,
    CURSOR_HOME,
    HIDE_CURSOR,
    SHOW_CURSOR,
    compose_frame,
)


__all__ = [
    "PlaybackEngine",
    "PlaybackState",
    "play",
    "CLEAR_TO_END",
    "CURSOR_HOME",
    "HIDE_CURSOR",
    "SHOW_CURSOR",
    "compose_frame",
]
