"""Fixed-width symbol Huffman compressor with a self-describing container."""

from symhuff.encoding_schemes.huffman import HuffmanEncoded, huffman_decode, huffman_encode
from symhuff.errors import (
    CodecError,
    CorruptStreamError,
    EmptyInputError,
    InvalidArgumentError,
    IOFailureError,
)
from symhuff.pipeline import CodecConfig, compress_file, decompress_file

__version__ = "0.1.0"

__all__ = [
    "HuffmanEncoded",
    "huffman_decode",
    "huffman_encode",
    "CodecError",
    "CorruptStreamError",
    "EmptyInputError",
    "InvalidArgumentError",
    "IOFailureError",
    "CodecConfig",
    "compress_file",
    "decompress_file",
]
