"""
File-level compress / decompress.

compress_file:   symbols -> frequencies -> tree -> code table -> container
decompress_file: container header (bit count + tree) -> bit walk -> bytes
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from symhuff.encoding_schemes.bitstream import decode_bits, encode_symbols
from symhuff.encoding_schemes.codes import generate_codes
from symhuff.encoding_schemes.container import read_header, write_header
from symhuff.encoding_schemes.frequency import count_frequencies
from symhuff.encoding_schemes.symbols import SymbolReader, validate_symbol_width
from symhuff.encoding_schemes.tree import build_huffman_tree
from symhuff.errors import CorruptStreamError, IOFailureError, InvalidArgumentError
from symhuff.pipeline.config import CodecConfig
from symhuff.utils.file_utils import compressed_path, decompressed_path, suffix_filename
from symhuff.utils.timing import PhaseTimer

PathLike = Union[str, os.PathLike]

_DEBUG = os.environ.get("HUFF_DEBUG", "").lower() in {"1", "true", "yes"}


def _dbg(msg: str) -> None:
    if _DEBUG:
        print(f"[runner] {msg}", file=sys.stderr)


@dataclass
class CompressionResult:
    input_path: Path
    output_path: Path
    symbol_width: int
    original_size: int
    compressed_size: int
    header_size: int
    total_bits: int
    distinct_symbols: int
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def ratio(self) -> float:
        """Compressed size over original size."""
        return self.compressed_size / self.original_size if self.original_size else 0.0


@dataclass
class DecompressionResult:
    input_path: Path
    output_path: Path
    total_bits: int
    decoded_size: int
    timings: Dict[str, float] = field(default_factory=dict)


def _check_distinct(input_path: Path, out_path: Path) -> None:
    if out_path.resolve() == input_path.resolve():
        raise InvalidArgumentError(f"Output path {out_path} would overwrite the input")


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError as exc:
        raise IOFailureError(f"Error reading {path}: {exc}") from exc


def compress_file(
    input_path: PathLike,
    symbol_width: Optional[int] = None,
    cfg: Optional[CodecConfig] = None,
    output_path: Optional[PathLike] = None,
) -> CompressionResult:
    """
    Compress `input_path` into a self-describing container.

    Width and empty-input checks run before the output file is created.
    """
    if cfg is None:
        cfg = CodecConfig()
    if symbol_width is None:
        symbol_width = cfg.symbol_width
    validate_symbol_width(symbol_width)

    input_path = Path(input_path)
    out_path = Path(output_path) if output_path else compressed_path(input_path, cfg.compressed_suffix)
    _check_distinct(input_path, out_path)
    timer = PhaseTimer(hook=cfg.phase_hook, report=cfg.report)
    symbols = SymbolReader(input_path, symbol_width, buffer_size=cfg.buffer_size)

    with timer.phase("read"):
        frequencies = count_frequencies(symbols)

    with timer.phase("tree"):
        tree = build_huffman_tree(frequencies)
        table = generate_codes(tree)
    _dbg(f"{len(frequencies)} distinct symbols, {table.total_bits} bits expected")

    with timer.phase("encode"):
        try:
            with out_path.open("wb") as sink:
                header_size = write_header(sink, table.total_bits, tree)
                written_bits = encode_symbols(symbols, table.codes, sink, buffer_size=cfg.buffer_size)
        except IOFailureError:
            raise
        except OSError as exc:
            # open, or a buffered write surfacing on close
            raise IOFailureError(f"Error writing the compressed file {out_path}: {exc}") from exc
        if written_bits != table.total_bits:
            raise CorruptStreamError(
                f"Encoded {written_bits} bits but the code table predicts {table.total_bits}; "
                f"{input_path} changed during compression"
            )

    result = CompressionResult(
        input_path=input_path,
        output_path=out_path,
        symbol_width=symbol_width,
        original_size=symbols.size(),
        compressed_size=_file_size(out_path),
        header_size=header_size,
        total_bits=table.total_bits,
        distinct_symbols=len(frequencies),
        timings=dict(timer.timings),
    )
    if cfg.report:
        print(f"Compressed {input_path} -> {out_path}")
        print(f"Compression ratio {result.ratio:.4f} ({result.compressed_size}/{result.original_size} bytes)")
        print(f"Compression completed in {timer.total:.3f} seconds")

    if cfg.verify_roundtrip:
        decompress_file(
            out_path,
            cfg=cfg,
            output_path=suffix_filename(input_path, cfg.decoded_marker),
        )

    return result


def decompress_file(
    container_path: PathLike,
    cfg: Optional[CodecConfig] = None,
    output_path: Optional[PathLike] = None,
) -> DecompressionResult:
    """
    Rebuild the original bytes from a container written by `compress_file`.

    A failure after the output file is opened leaves a partial file behind;
    callers must treat it as invalid.
    """
    if cfg is None:
        cfg = CodecConfig()

    container_path = Path(container_path)
    if output_path:
        out_path = Path(output_path)
    else:
        out_path = decompressed_path(container_path, cfg.compressed_suffix, cfg.decoded_marker)
    _check_distinct(container_path, out_path)
    timer = PhaseTimer(hook=cfg.phase_hook, report=cfg.report)

    try:
        source = container_path.open("rb")
    except OSError as exc:
        raise IOFailureError(f"Error reading {container_path}: {exc}") from exc

    with source:
        with timer.phase("read"):
            total_bits, tree = read_header(source)
        _dbg(f"header: {total_bits} bits")

        with timer.phase("decode"):
            try:
                with out_path.open("wb") as sink:
                    decoded_size = decode_bits(source, total_bits, tree, sink, buffer_size=cfg.buffer_size)
            except IOFailureError:
                raise
            except OSError as exc:
                raise IOFailureError(f"Error writing {out_path}: {exc}") from exc

    if cfg.report:
        print(f"Decompressed {container_path} -> {out_path}")
        print(f"Decompression completed in {timer.total:.3f} seconds")

    return DecompressionResult(
        input_path=container_path,
        output_path=out_path,
        total_bits=total_bits,
        decoded_size=decoded_size,
        timings=dict(timer.timings),
    )
