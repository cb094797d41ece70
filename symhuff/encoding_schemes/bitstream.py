"""
Bit-level encode/decode passes.

Code words are packed MSB-first into consecutive bytes; the last partial byte is
zero padded on its low-order end. The number of meaningful bits is carried out of
band (container header), so padding is never decoded.
"""

import os
import sys
from typing import BinaryIO, Iterable, Mapping

from bitarray import bitarray

from symhuff.encoding_schemes.symbols import DEFAULT_BUFFER_SIZE
from symhuff.encoding_schemes.tree import HuffmanNode
from symhuff.errors import CorruptStreamError, IOFailureError

_DEBUG = os.environ.get("HUFF_DEBUG", "").lower() in {"1", "true", "yes"}


def _dbg(msg: str) -> None:
    if _DEBUG:
        print(f"[bitstream] {msg}", file=sys.stderr)


def _write(sink: BinaryIO, data: bytes) -> None:
    try:
        sink.write(data)
    except OSError as exc:
        raise IOFailureError(f"Error writing output: {exc}") from exc


def _read(source: BinaryIO, size: int) -> bytes:
    try:
        return source.read(size)
    except OSError as exc:
        raise IOFailureError(f"Error reading input: {exc}") from exc


def encode_symbols(
    symbols: Iterable[bytes],
    codes: Mapping[bytes, bitarray],
    sink: BinaryIO,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """
    Write the code word of every symbol to `sink`, in order.

    Returns the number of meaningful bits written; exactly
    ceil(bits / 8) bytes reach the sink.
    """
    flush_at = buffer_size * 8
    buf = bitarray(endian="big")
    total_bits = 0

    for symbol in symbols:
        try:
            buf += codes[symbol]
        except KeyError:
            raise CorruptStreamError(
                f"Symbol {symbol!r} has no code word; the source changed between passes"
            ) from None
        if len(buf) >= flush_at:
            whole = len(buf) - len(buf) % 8
            _write(sink, buf[:whole].tobytes())
            del buf[:whole]
            total_bits += whole

    if buf:
        total_bits += len(buf)
        # tobytes() pads the final byte with zeros
        _write(sink, buf.tobytes())

    _dbg(f"encoded {total_bits} bits")
    return total_bits


def decode_bits(
    source: BinaryIO,
    total_bits: int,
    root: HuffmanNode,
    sink: BinaryIO,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """
    Walk `root` one bit at a time (0 = left, 1 = right) and emit the symbol of
    every leaf reached, stopping after exactly `total_bits` bits.

    Returns the number of bytes written to `sink`.
    """
    if total_bits < 0:
        raise CorruptStreamError(f"Negative bit count: {total_bits}")

    single_leaf = root.is_leaf()
    remaining = total_bits
    node = root
    out = bytearray()
    written = 0

    while remaining > 0:
        wanted = min(buffer_size, (remaining + 7) // 8)
        chunk = _read(source, wanted)
        if not chunk:
            raise CorruptStreamError(
                f"Bitstream ended after {total_bits - remaining} of {total_bits} bits"
            )
        bits = bitarray(endian="big")
        bits.frombytes(chunk)
        if len(bits) > remaining:
            # padding in the final byte
            del bits[remaining:]
        remaining -= len(bits)

        if single_leaf:
            # A lone leaf is coded as one '0' bit per occurrence.
            if bits.any():
                raise CorruptStreamError("Unexpected '1' bit in a single-symbol stream")
            out += root.symbol * len(bits)
        else:
            for bit in bits:
                node = node.right if bit else node.left
                if node is None:
                    raise CorruptStreamError("Bit leads to a missing child in the Huffman tree")
                if node.symbol is not None:
                    out += node.symbol
                    node = root

        if len(out) >= buffer_size:
            _write(sink, bytes(out))
            written += len(out)
            out.clear()

    if node is not root:
        raise CorruptStreamError("Bitstream ends in the middle of a code word")

    if out:
        _write(sink, bytes(out))
        written += len(out)

    _dbg(f"decoded {total_bits} bits into {written} bytes")
    return written
