from dataclasses import dataclass
from typing import Optional

from symhuff.encoding_schemes.symbols import DEFAULT_BUFFER_SIZE
from symhuff.errors import InvalidArgumentError
from symhuff.utils.timing import PhaseHook


@dataclass
class CodecConfig:
    """
    Configuration for the file compressor.
    """
    symbol_width: int = 1
    buffer_size: int = DEFAULT_BUFFER_SIZE
    compressed_suffix: str = ".hc"
    decoded_marker: str = "_uncompressed"
    # Decompress the new container right after compressing.
    verify_roundtrip: bool = False
    # Print size ratio, phase times and output paths.
    report: bool = True
    # Called with (phase, seconds) after each of read/tree/encode/decode.
    phase_hook: Optional[PhaseHook] = None

    def __post_init__(self) -> None:
        if self.buffer_size <= 0:
            raise InvalidArgumentError(f"buffer_size must be positive, got {self.buffer_size}")
        if not self.compressed_suffix:
            raise InvalidArgumentError("compressed_suffix must not be empty")
