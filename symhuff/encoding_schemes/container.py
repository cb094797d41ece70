"""
Container header: total bit count followed by the literal Huffman tree.

Layout (big-endian):

    >Q      total_bits
    tree    pre-order; per node a tag byte
              0x00 internal -> left subtree, right subtree
              0x01 leaf     -> >I symbol length, symbol bytes, >Q frequency
    ...     packed bitstream, ceil(total_bits / 8) bytes

The tree is shipped as-is because rebuilding it from frequencies is not
guaranteed to reproduce the encoder's tie-breaks.
"""

import struct
from typing import BinaryIO, Tuple

from symhuff.encoding_schemes.codes import generate_codes
from symhuff.encoding_schemes.tree import HuffmanNode
from symhuff.errors import CorruptStreamError, IOFailureError

TAG_INTERNAL = 0x00
TAG_LEAF = 0x01

MAX_TREE_DEPTH = 512

_TOTAL_BITS = struct.Struct(">Q")
_SYMBOL_LEN = struct.Struct(">I")
_FREQUENCY = struct.Struct(">Q")


def serialize_tree(root: HuffmanNode) -> bytes:
    out = bytearray()

    def _write_node(node: HuffmanNode) -> None:
        if node.is_leaf():
            out.append(TAG_LEAF)
            out.extend(_SYMBOL_LEN.pack(len(node.symbol)))
            out.extend(node.symbol)
            out.extend(_FREQUENCY.pack(node.frequency))
            return
        if node.left is None or node.right is None:
            raise ValueError("Malformed Huffman tree: internal node with a single child")
        out.append(TAG_INTERNAL)
        _write_node(node.left)
        _write_node(node.right)

    _write_node(root)
    return bytes(out)


def _read_exact(source: BinaryIO, size: int, what: str) -> bytes:
    try:
        data = source.read(size)
    except OSError as exc:
        raise IOFailureError(f"Error reading container: {exc}") from exc
    if len(data) != size:
        raise CorruptStreamError(f"Container truncated while reading {what}")
    return data


def deserialize_tree(source: BinaryIO) -> HuffmanNode:
    """Read one tree written by `serialize_tree` from the current position."""

    def _read_node(depth: int) -> HuffmanNode:
        if depth > MAX_TREE_DEPTH:
            raise CorruptStreamError(f"Huffman tree deeper than {MAX_TREE_DEPTH} levels")
        tag = _read_exact(source, 1, "node tag")[0]
        if tag == TAG_LEAF:
            (length,) = _SYMBOL_LEN.unpack(_read_exact(source, _SYMBOL_LEN.size, "symbol length"))
            if length == 0:
                raise CorruptStreamError("Leaf with an empty symbol")
            symbol = _read_exact(source, length, "symbol bytes")
            (frequency,) = _FREQUENCY.unpack(_read_exact(source, _FREQUENCY.size, "frequency"))
            return HuffmanNode(frequency, symbol=symbol)
        if tag == TAG_INTERNAL:
            left = _read_node(depth + 1)
            right = _read_node(depth + 1)
            return HuffmanNode(left.frequency + right.frequency, left=left, right=right)
        raise CorruptStreamError(f"Unknown node tag 0x{tag:02x}")

    return _read_node(0)


def write_header(sink: BinaryIO, total_bits: int, root: HuffmanNode) -> int:
    """Write bit count and tree; returns the header size in bytes."""
    header = _TOTAL_BITS.pack(total_bits) + serialize_tree(root)
    try:
        sink.write(header)
    except OSError as exc:
        raise IOFailureError(f"Error writing the compressed file: {exc}") from exc
    return len(header)


def read_header(source: BinaryIO) -> Tuple[int, HuffmanNode]:
    """
    Read bit count and tree, leaving `source` at the first bitstream byte.

    The recorded bit count must match the tree's own frequency x code length sum.
    """
    (total_bits,) = _TOTAL_BITS.unpack(_read_exact(source, _TOTAL_BITS.size, "bit count"))
    root = deserialize_tree(source)
    expected = generate_codes(root).total_bits
    if expected != total_bits:
        raise CorruptStreamError(
            f"Header records {total_bits} bits but the tree accounts for {expected}"
        )
    return total_bits, root
