"""
Symbol extraction: slice a byte source into fixed-width symbols.

A source is either a filesystem path, re-opened on every pass, or an in-memory
`bytes` object. The compressor walks the source twice (frequency pass, then
encode pass) and relies on both passes yielding the same sequence.
"""

import io
import os
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from symhuff.errors import IOFailureError, InvalidArgumentError

DEFAULT_BUFFER_SIZE = int(os.environ.get("HUFF_BUFFER_SIZE", "4096"))

SymbolSource = Union[str, os.PathLike, bytes, bytearray, memoryview]


def validate_symbol_width(symbol_width: int) -> int:
    if isinstance(symbol_width, bool) or not isinstance(symbol_width, int):
        raise InvalidArgumentError(f"symbol width must be an integer, got {symbol_width!r}")
    if symbol_width <= 0:
        raise InvalidArgumentError(f"symbol width must be positive, got {symbol_width}")
    return symbol_width


def _read_full(fh: BinaryIO, size: int) -> bytes:
    """Read up to `size` bytes, looping over short reads until EOF."""
    parts = []
    remaining = size
    while remaining > 0:
        chunk = fh.read(remaining)
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def iter_symbols(
    fh: BinaryIO,
    symbol_width: int,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Iterator[bytes]:
    """
    Yield consecutive `symbol_width`-byte symbols from an open binary stream.

    The last symbol holds the remaining 1..symbol_width bytes when the stream
    length is not a multiple of the width.
    """
    validate_symbol_width(symbol_width)
    # Whole number of symbols per read so none straddles a buffer edge.
    chunk_size = max(buffer_size // symbol_width, 1) * symbol_width
    while True:
        chunk = _read_full(fh, chunk_size)
        if not chunk:
            return
        for i in range(0, len(chunk), symbol_width):
            yield chunk[i:i + symbol_width]
        if len(chunk) < chunk_size:
            return


class SymbolReader:
    """
    Restartable symbol sequence over a path or an in-memory buffer.
    """

    def __init__(
        self,
        source: SymbolSource,
        symbol_width: int,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ):
        self.symbol_width = validate_symbol_width(symbol_width)
        if buffer_size <= 0:
            raise InvalidArgumentError(f"buffer_size must be positive, got {buffer_size}")
        self.buffer_size = buffer_size
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._data = bytes(source)
            self.path = None
        else:
            self._data = None
            self.path = Path(source)

    def _open(self) -> BinaryIO:
        if self._data is not None:
            return io.BytesIO(self._data)
        try:
            return self.path.open("rb")
        except OSError as exc:
            raise IOFailureError(f"Error reading {self.path}: {exc}") from exc

    def size(self) -> int:
        """Length of the source in bytes."""
        if self._data is not None:
            return len(self._data)
        try:
            return self.path.stat().st_size
        except OSError as exc:
            raise IOFailureError(f"Error reading {self.path}: {exc}") from exc

    def __iter__(self) -> Iterator[bytes]:
        with self._open() as fh:
            try:
                yield from iter_symbols(fh, self.symbol_width, self.buffer_size)
            except OSError as exc:
                raise IOFailureError(f"Error reading {self.path}: {exc}") from exc
