import io
from dataclasses import dataclass
from typing import Optional

from symhuff.encoding_schemes.bitstream import decode_bits, encode_symbols
from symhuff.encoding_schemes.codes import generate_codes
from symhuff.encoding_schemes.container import read_header, write_header
from symhuff.encoding_schemes.frequency import count_frequencies
from symhuff.encoding_schemes.symbols import SymbolReader
from symhuff.encoding_schemes.tree import HuffmanNode, build_huffman_tree
from symhuff.errors import CorruptStreamError
from symhuff.utils.bits_bytes_utils import bitstring_to_bytes, bytes_to_bitstring


@dataclass
class HuffmanEncoded:
    """
    Container for Huffman-encoded data.

    - payload: packed bitstream, MSB first, zero padded to a whole byte
    - total_bits: number of meaningful bits in `payload`
    - tree: the exact tree the payload was encoded with
    - symbol_width: bytes per symbol (None when parsed back from a container)
    """
    payload: bytes
    total_bits: int
    tree: HuffmanNode
    symbol_width: Optional[int] = None

    @property
    def bits(self) -> str:
        """Meaningful bits as a '0'/'1' string, padding excluded."""
        return bytes_to_bitstring(self.payload, self.total_bits)

    @bits.setter
    def bits(self, bits: str) -> None:
        self.payload = bitstring_to_bytes(bits)
        self.total_bits = len(bits)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        write_header(buf, self.total_bits, self.tree)
        buf.write(self.payload)
        return buf.getvalue()

    @classmethod
    def from_bytes(cls, blob: bytes) -> "HuffmanEncoded":
        buf = io.BytesIO(blob)
        total_bits, tree = read_header(buf)
        payload_len = (total_bits + 7) // 8
        payload = buf.read(payload_len)
        if len(payload) < payload_len:
            raise CorruptStreamError(
                f"Bitstream holds {len(payload) * 8} bits, header records {total_bits}"
            )
        return cls(payload=payload, total_bits=total_bits, tree=tree)


def huffman_encode(data: bytes, symbol_width: int = 1) -> HuffmanEncoded:
    """
    Encode raw bytes, treating every `symbol_width` bytes as one symbol.
    """
    symbols = SymbolReader(data, symbol_width)
    tree = build_huffman_tree(count_frequencies(symbols))
    table = generate_codes(tree)
    sink = io.BytesIO()
    total_bits = encode_symbols(symbols, table.codes, sink)
    return HuffmanEncoded(
        payload=sink.getvalue(),
        total_bits=total_bits,
        tree=tree,
        symbol_width=symbol_width,
    )


def huffman_decode(encoded: HuffmanEncoded) -> bytes:
    """
    Decode HuffmanEncoded back to the original bytes.

    Only the first `total_bits` bits of the payload are read.
    """
    sink = io.BytesIO()
    decode_bits(io.BytesIO(encoded.payload), encoded.total_bits, encoded.tree, sink)
    return sink.getvalue()
