"""
Storage Module
==============

Persistence of text frames and numeric ordering of frame/still files.

    - FrameStore: one-file-per-frame directory storage
    - transient_frame_store: scoped acquisition with guaranteed removal
    - parse_ordinal / sort_by_ordinal: typed ordinal extraction
"""

from ascii_player.storage.ordering import parse_ordinal, sort_by_ordinal
from ascii_player.storage.frame_store import (
    FRAME_PREFIX,
    FRAME_SUFFIX,
    FrameStore,
    frame_filename,
    transient_frame_store,
)


__all__ = [
    "parse_ordinal",
    "sort_by_ordinal",
    "FRAME_PREFIX",
    "FRAME_SUFFIX",
    "FrameStore",
    "frame_filename",
    "transient_frame_store",
]
