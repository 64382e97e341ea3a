"""
Error Types
===========

Exceptions raised by the ASCII player.

Every failure is unrecoverable at the point it is detected and bubbles up
to the CLI, which reports it and exits non-zero. Usage errors are reported
by argparse before any of these can occur.
"""


class AsciiPlayerError(Exception):
    """Base class for all player errors."""
    pass


class ProbeError(AsciiPlayerError):
    """Raised when the source frame rate or dimensions cannot be determined."""
    pass


class DecodeError(AsciiPlayerError):
    """Raised when the media or image collaborator fails on any still."""
    pass


class EmptySequenceError(AsciiPlayerError):
    """Raised when decoding produced zero stills."""
    pass


class FrameStorageError(AsciiPlayerError):
    """Raised when text frame storage is missing, empty or unreadable."""
    pass
