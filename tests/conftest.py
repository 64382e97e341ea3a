"""
Test Configuration
==================

Pytest fixtures and test configuration for the ASCII player.
"""

from fractions import Fraction
from pathlib import Path

import cv2
import numpy as np
import pytest


def write_still(path: Path, brightness: int, width: int = 40, height: int = 20) -> None:
    """Write a uniform BGR still with the given brightness."""
    image = np.full((height, width, 3), brightness, dtype=np.uint8)
    assert cv2.imwrite(str(path), image)


class FakeMedia:
    """
    Stand-in media collaborator.

    Writes one uniform PNG still per brightness value, numbered from 1
    like ffmpeg does.
    """

    def __init__(self, brightness_values, frame_rate=Fraction(10), size=(40, 20)):
        self.brightness_values = list(brightness_values)
        self.frame_rate = frame_rate
        self.size = size
        self.probe_calls = 0
        self.decode_calls = []

    def probe_frame_rate(self, path):
        self.probe_calls += 1
        return self.frame_rate

    def decode_to_stills(self, path, fps, output_dir, pattern="frame%d.png"):
        self.decode_calls.append((path, fps, output_dir, pattern))
        width, height = self.size
        for ordinal, value in enumerate(self.brightness_values, start=1):
            write_still(output_dir / (pattern % ordinal), value, width, height)


@pytest.fixture
def fake_media_factory():
    """Build FakeMedia instances."""
    return FakeMedia


@pytest.fixture
def simple_ramp():
    """Provide the 10-glyph ramp."""
    from ascii_player.render.glyphs import GlyphRamp, SIMPLE_RAMP

    return GlyphRamp(SIMPLE_RAMP)


@pytest.fixture
def detailed_ramp():
    """Provide the default detailed ramp."""
    from ascii_player.render.glyphs import GlyphRamp, DETAILED_RAMP

    return GlyphRamp(DETAILED_RAMP)


@pytest.fixture
def frame_store(tmp_path):
    """Provide an empty FrameStore in a temp directory."""
    from ascii_player.storage.frame_store import FrameStore

    directory = tmp_path / "textFrames"
    directory.mkdir()
    return FrameStore(directory)


@pytest.fixture
def two_frame_store(frame_store):
    """Provide a store holding two distinguishable frames."""
    frame_store.write(0, "AAAA\nAAAA\n")
    frame_store.write(1, "BBBB\n")
    return frame_store


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run in a clean directory with no ASCII_PLAYER_* variables set."""
    import os

    for key in list(os.environ):
        if key.startswith("ASCII_PLAYER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
