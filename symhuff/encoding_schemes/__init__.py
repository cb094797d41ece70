from symhuff.encoding_schemes.symbols import SymbolReader, iter_symbols, validate_symbol_width
from symhuff.encoding_schemes.frequency import count_frequencies
from symhuff.encoding_schemes.tree import HuffmanNode, build_huffman_tree
from symhuff.encoding_schemes.codes import CodeTable, generate_codes
from symhuff.encoding_schemes.bitstream import decode_bits, encode_symbols
from symhuff.encoding_schemes.container import read_header, write_header
from symhuff.encoding_schemes.huffman import HuffmanEncoded, huffman_decode, huffman_encode

__all__ = [
    "SymbolReader",
    "iter_symbols",
    "validate_symbol_width",
    "count_frequencies",
    "HuffmanNode",
    "build_huffman_tree",
    "CodeTable",
    "generate_codes",
    "decode_bits",
    "encode_symbols",
    "read_header",
    "write_header",
    "HuffmanEncoded",
    "huffman_decode",
    "huffman_encode",
]
