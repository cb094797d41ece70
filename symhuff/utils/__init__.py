"""Utility helpers shared across pipeline components."""

from symhuff.utils.file_utils import compressed_path, decompressed_path, suffix_filename
from symhuff.utils.bits_bytes_utils import bitstring_to_bytes, bits_to_bitstring, bytes_to_bitstring
from symhuff.utils.timing import PhaseHook, PhaseTimer

__all__ = [
    "compressed_path",
    "decompressed_path",
    "suffix_filename",
    "bitstring_to_bytes",
    "bits_to_bitstring",
    "bytes_to_bitstring",
    "PhaseHook",
    "PhaseTimer",
]
