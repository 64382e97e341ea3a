"""
Ordinal Ordering
================

Typed extraction of the ordinal embedded in a frame or still filename.

Filenames are never compared as strings: 'frame10.png' sorts after
'frame9.png' because 10 > 9, not because of character order.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union


_DIGITS = re.compile(r"(\d+)")


def parse_ordinal(name: Union[str, Path], prefix: str = "", suffix: str = "") -> Optional[int]:
    """
    Extract the ordinal from a filename.

    The ordinal is the last run of digits in the part of the name between
    `prefix` and `suffix`.

    Args:
        name: Filename or path (only the final component is inspected)
        prefix: Required filename prefix
        suffix: Required filename suffix

    Returns:
        The ordinal, or None if the name does not match or has no digits
    """
    filename = Path(name).name
    if not filename.startswith(prefix) or not filename.endswith(suffix):
        return None

    core = filename[len(prefix):len(filename) - len(suffix)]
    matches = _DIGITS.findall(core)
    if not matches:
        return None
    return int(matches[-1])


def sort_by_ordinal(
    paths: Iterable[Path],
    prefix: str = "",
    suffix: str = "",
) -> List[Path]:
    """
    Filter to names carrying an ordinal and sort them numerically.

    Args:
        paths: Candidate files
        prefix: Required filename prefix
        suffix: Required filename suffix

    Returns:
        Matching paths in increasing ordinal order

    Raises:
        ValueError: If two files carry the same ordinal
    """
    keyed = []
    for path in paths:
        ordinal = parse_ordinal(path, prefix, suffix)
        if ordinal is not None:
            keyed.append((ordinal, path))

    keyed.sort(key=lambda item: item[0])

    for (first, a), (second, b) in zip(keyed, keyed[1:]):
        if first == second:
            raise ValueError(f"Duplicate ordinal {first}: {a.name}, {b.name}")

    return [path for _, path in keyed]
