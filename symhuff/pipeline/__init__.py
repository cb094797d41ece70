from symhuff.pipeline.config import CodecConfig
from symhuff.pipeline.runner import (
    CompressionResult,
    DecompressionResult,
    compress_file,
    decompress_file,
)

__all__ = [
    "CodecConfig",
    "CompressionResult",
    "DecompressionResult",
    "compress_file",
    "decompress_file",
]
