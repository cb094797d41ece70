"""
Error kinds raised by the codec.

Each kind also derives from the builtin exception callers would expect for it, so
generic `except ValueError` / `except OSError` handlers keep working.
"""


class CodecError(Exception):
    """Base class for every failure reported by symhuff."""


class InvalidArgumentError(CodecError, ValueError):
    """Bad symbol width, buffer size or path."""


class EmptyInputError(CodecError, ValueError):
    """The input produced zero symbols."""


class IOFailureError(CodecError, OSError):
    """Open/read/write failure on the underlying storage."""


class CorruptStreamError(CodecError, ValueError):
    """Container is truncated, malformed or inconsistent with its tree."""
