"""
ASCII Player Command Line
=========================

Entry point: generate text frames from a video, then replay them.

Usage:
    ascii-player VIDEO [WIDTH]
    ascii-player clip.mp4 120 --ramp simple --workers 4
    python -m ascii_player clip.mp4 --fps 12 --no-wait

Exit Status:
    1   an error was reported (probe, decode, empty sequence, storage)
    2   usage error (missing VIDEO, bad option)
    130 playback ended by interrupt
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

import yaml
from pydantic import ValidationError

from ascii_player import __version__
from ascii_player.config import Settings, load_config, setup_logging
from ascii_player.errors import AsciiPlayerError
from ascii_player.media.ffmpeg import FFmpegTools, parse_frame_rate
from ascii_player.pipeline.frame_pipeline import FramePipeline
from ascii_player.playback.engine import play
from ascii_player.render.glyphs import GlyphRamp
from ascii_player.render.renderer import FrameRenderer
from ascii_player.storage.frame_store import transient_frame_store


logger = logging.getLogger(__name__)


EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _handle_sigterm(signum, frame):
    """Turn SIGTERM into KeyboardInterrupt so scoped cleanup runs."""
    logger.info("Received SIGTERM, shutting down...")
    raise KeyboardInterrupt


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-player",
        description="Play a video in the terminal as brightness-mapped ASCII frames",
    )
    parser.add_argument("video", help="Path to the source video")
    parser.add_argument(
        "width",
        nargs="?",
        type=_positive_int,
        default=None,
        help="Output width in columns (default: 100)",
    )
    parser.add_argument("--fps", default=None, help="Frame rate override, e.g. 12 or 24000/1001")
    parser.add_argument("--ramp", default=None, help="Ramp preset (detailed, simple) or literal glyphs")
    parser.add_argument("--workers", type=_positive_int, default=None, help="Still conversion threads")
    parser.add_argument("--frames-dir", default=None, help="Transient text frame directory")
    parser.add_argument("--no-wait", action="store_true", help="Start playback without waiting for Enter")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command-line flags applied on top."""
    data = settings.model_dump()

    if args.width is not None:
        data["render"]["width"] = args.width
    if args.ramp is not None:
        data["render"]["ramp"] = args.ramp
    if args.workers is not None:
        data["pipeline"]["workers"] = args.workers
    if args.frames_dir is not None:
        data["storage"]["frames_dir"] = args.frames_dir
    if args.no_wait:
        data["playback"]["wait_for_start"] = False
    if args.log_level is not None:
        data["logging"]["level"] = args.log_level

    return Settings.model_validate(data)


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Generate frames and play them. Returns the exit status."""
    media = FFmpegTools(
        ffmpeg_binary=settings.media.ffmpeg_binary,
        ffprobe_binary=settings.media.ffprobe_binary,
    )
    renderer = FrameRenderer(GlyphRamp.from_name(settings.render.ramp))
    frame_rate = parse_frame_rate(args.fps) if args.fps is not None else None

    with transient_frame_store(settings.storage.frames_dir) as store:
        pipeline = FramePipeline(
            media,
            renderer,
            store,
            workers=settings.pipeline.workers,
            still_pattern=settings.pipeline.still_pattern,
        )
        sequence = pipeline.produce(args.video, settings.render.width, frame_rate)
        logger.info(f"Generated {sequence!r}")

        engine = play(
            store,
            sequence.frame_rate,
            wait_for_start=settings.playback.wait_for_start,
        )

    return EXIT_INTERRUPTED if engine.interrupted else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = apply_cli_overrides(load_config(args.config), args)
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        parser.error(f"invalid configuration: {e}")
    setup_logging(settings)

    # Covers the pipeline and the start gate; playback installs its own handlers
    previous_sigterm = signal.signal(signal.SIGTERM, _handle_sigterm)

    try:
        return run(args, settings)
    except KeyboardInterrupt:
        print("\nCaught interrupt signal", file=sys.stderr)
        return EXIT_INTERRUPTED
    except AsciiPlayerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return EXIT_ERROR
    finally:
        if previous_sigterm is not None:
            signal.signal(signal.SIGTERM, previous_sigterm)


if __name__ == "__main__":
    sys.exit(main())
