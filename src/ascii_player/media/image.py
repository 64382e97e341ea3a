"""
Image Loader
============

Dedicated module for turning still images into grayscale rasters.

Design Rules:
    - This is the ONLY place in the codebase that decodes images
    - Validates shape and dtype
    - Fails fast on corrupt stills
    - Returns single-channel uint8 rasters at the requested size
"""

import logging
from pathlib import Path
from typing import Tuple, Union

import cv2
import numpy as np

from ascii_player.errors import DecodeError


logger = logging.getLogger(__name__)


def _read_bgr(path: Union[str, Path]) -> np.ndarray:
    bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)

    if bgr is None:
        raise DecodeError(f"Failed to decode still {path}: cv2.imread returned None")

    if len(bgr.shape) != 3 or bgr.shape[2] != 3:
        raise DecodeError(f"Invalid image shape for still {path}: {bgr.shape}")

    return bgr


def load_raster_size(path: Union[str, Path]) -> Tuple[int, int]:
    """
    Get native dimensions of a still.

    Args:
        path: Image file

    Returns:
        Tuple of (width, height)

    Raises:
        DecodeError: If the image cannot be decoded
    """
    height, width = _read_bgr(path).shape[:2]
    return width, height


def resize_and_grayscale(path: Union[str, Path], width: int, height: int) -> np.ndarray:
    """
    Decode a still, scale it to exactly (width, height) and convert to grayscale.

    Args:
        path: Image file
        width: Target width in pixels (grid columns)
        height: Target height in pixels (grid rows)

    Returns:
        Grayscale image as np.ndarray (height, width), dtype=uint8

    Raises:
        DecodeError: If decoding fails or the result is invalid
    """
    bgr = _read_bgr(path)

    try:
        resized = cv2.resize(bgr, (width, height), interpolation=cv2.INTER_AREA)
        gray = cv2.cvtColor(resized, cv2.COLOR_BGR2GRAY)
    except cv2.error as e:
        raise DecodeError(f"Failed to resize still {path}: {e}") from e

    if gray.dtype != np.uint8:
        raise DecodeError(f"Invalid dtype for still {path}: {gray.dtype}")
    if gray.shape != (height, width):
        raise DecodeError(
            f"Unexpected raster shape for still {path}: {gray.shape}, "
            f"expected {(height, width)}"
        )

    return gray
