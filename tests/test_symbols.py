import io
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from symhuff.encoding_schemes.symbols import SymbolReader, iter_symbols
from symhuff.errors import IOFailureError, InvalidArgumentError


class _TrickleReader(io.RawIOBase):
    """Stream returning at most two bytes per read call."""

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(data)

    def readable(self):
        return True

    def read(self, size=-1):
        return self._buf.read(min(size, 2) if size >= 0 else 2)


def test_slices_with_short_tail():
    symbols = list(SymbolReader(b"abcdefg", 3))
    assert symbols == [b"abc", b"def", b"g"]


def test_exact_multiple_has_full_tail():
    symbols = list(SymbolReader(b"abcdef", 3))
    assert symbols == [b"abc", b"def"]


@pytest.mark.parametrize("width", [0, -1, True, 1.5])
def test_rejects_bad_width(width):
    with pytest.raises(InvalidArgumentError):
        SymbolReader(b"abc", width)


def test_restartable_over_path(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(bytes(range(50)))
    reader = SymbolReader(path, 4, buffer_size=7)

    first = list(reader)
    second = list(reader)

    assert first == second
    assert b"".join(first) == bytes(range(50))
    assert [len(s) for s in first] == [4] * 12 + [2]


def test_symbols_never_straddle_buffer(tmp_path):
    data = bytes(range(20))
    path = tmp_path / "data.bin"
    path.write_bytes(data)

    symbols = list(SymbolReader(path, 3, buffer_size=5))

    assert symbols == [data[i:i + 3] for i in range(0, 20, 3)]


def test_short_reads_are_joined():
    data = b"0123456789"
    symbols = list(iter_symbols(_TrickleReader(data), 4, buffer_size=8))
    assert symbols == [b"0123", b"4567", b"89"]


def test_missing_file(tmp_path):
    reader = SymbolReader(tmp_path / "missing.bin", 1)
    with pytest.raises(IOFailureError):
        list(reader)
    with pytest.raises(IOFailureError):
        reader.size()
