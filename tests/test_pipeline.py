import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from symhuff.errors import (
    CorruptStreamError,
    EmptyInputError,
    IOFailureError,
    InvalidArgumentError,
)
from symhuff.pipeline import CodecConfig, compress_file, decompress_file


def _quiet(**kwargs) -> CodecConfig:
    return CodecConfig(report=False, **kwargs)


def _sample_bytes(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    alphabet = b"aaaaabbbccdefghij\n\x00\xff"
    return bytes(rng.choice(alphabet) for _ in range(size))


@pytest.mark.parametrize("symbol_width", [1, 2, 3, 5, 8, 16])
def test_file_roundtrip(tmp_path, symbol_width):
    src = tmp_path / "sample.bin"
    data = _sample_bytes(3001, seed=symbol_width)
    src.write_bytes(data)
    cfg = _quiet(buffer_size=64)

    comp = compress_file(src, symbol_width, cfg=cfg)
    decomp = decompress_file(comp.output_path, cfg=cfg)

    assert decomp.output_path.read_bytes() == data
    assert decomp.total_bits == comp.total_bits
    assert decomp.decoded_size == len(data)
    assert comp.compressed_size == comp.header_size + (comp.total_bits + 7) // 8


def test_default_paths(tmp_path):
    src = tmp_path / "notes.txt"
    src.write_bytes(b"some notes, some notes, some more notes")

    comp = compress_file(src, 1, cfg=_quiet())
    decomp = decompress_file(comp.output_path, cfg=_quiet())

    assert comp.output_path == tmp_path / "notes.txt.hc"
    assert decomp.output_path == tmp_path / "notes_uncompressed.txt"
    assert decomp.output_path.read_bytes() == src.read_bytes()


def test_explicit_output_paths(tmp_path):
    src = tmp_path / "in.dat"
    src.write_bytes(b"abcabcabcabc")

    comp = compress_file(src, 3, cfg=_quiet(), output_path=tmp_path / "packed")
    decomp = decompress_file(comp.output_path, cfg=_quiet(), output_path=tmp_path / "restored")

    assert comp.output_path.exists()
    assert (tmp_path / "restored").read_bytes() == b"abcabcabcabc"
    assert decomp.output_path == tmp_path / "restored"


def test_single_symbol_file(tmp_path):
    src = tmp_path / "zeros.bin"
    src.write_bytes(b"\x00" * 1000)

    comp = compress_file(src, 4, cfg=_quiet())
    decompress_file(comp.output_path, cfg=_quiet())

    assert comp.distinct_symbols == 1
    assert comp.total_bits == 250
    assert (tmp_path / "zeros_uncompressed.bin").read_bytes() == b"\x00" * 1000


def test_empty_file_creates_no_container(tmp_path):
    src = tmp_path / "empty.txt"
    src.write_bytes(b"")

    with pytest.raises(EmptyInputError):
        compress_file(src, 1, cfg=_quiet())
    assert not (tmp_path / "empty.txt.hc").exists()


@pytest.mark.parametrize("width", [0, -3])
def test_bad_width_creates_no_container(tmp_path, width):
    src = tmp_path / "a.txt"
    src.write_bytes(b"abc")

    with pytest.raises(InvalidArgumentError):
        compress_file(src, width, cfg=_quiet())
    assert not (tmp_path / "a.txt.hc").exists()


def test_width_from_config(tmp_path):
    src = tmp_path / "a.txt"
    src.write_bytes(b"abcdabcdab")

    comp = compress_file(src, cfg=_quiet(symbol_width=4))

    assert comp.symbol_width == 4
    assert comp.distinct_symbols == 2


def test_missing_input(tmp_path):
    with pytest.raises(IOFailureError):
        compress_file(tmp_path / "nope.txt", 1, cfg=_quiet())


def test_container_without_suffix(tmp_path):
    bogus = tmp_path / "archive.zip"
    bogus.write_bytes(b"\x00" * 16)

    with pytest.raises(InvalidArgumentError):
        decompress_file(bogus, cfg=_quiet())
    assert list(tmp_path.iterdir()) == [bogus]


def test_truncated_container(tmp_path):
    src = tmp_path / "text.txt"
    src.write_bytes(b"Hello World" * 50)
    comp = compress_file(src, 1, cfg=_quiet())
    blob = comp.output_path.read_bytes()
    comp.output_path.write_bytes(blob[:-3])

    with pytest.raises(CorruptStreamError):
        decompress_file(comp.output_path, cfg=_quiet())


def test_corrupted_header(tmp_path):
    src = tmp_path / "text.txt"
    src.write_bytes(b"Hello World" * 50)
    comp = compress_file(src, 1, cfg=_quiet())
    blob = bytearray(comp.output_path.read_bytes())
    blob[0] ^= 0xFF
    comp.output_path.write_bytes(bytes(blob))

    with pytest.raises(CorruptStreamError):
        decompress_file(comp.output_path, cfg=_quiet())
    # header is rejected before the output file is opened
    assert not (tmp_path / "text_uncompressed.txt").exists()


def test_phase_hook(tmp_path):
    src = tmp_path / "a.txt"
    src.write_bytes(b"hook me " * 20)
    seen = []
    cfg = _quiet(phase_hook=lambda phase, seconds: seen.append((phase, seconds >= 0)))

    comp = compress_file(src, 2, cfg=cfg)
    decompress_file(comp.output_path, cfg=cfg)

    assert seen == [
        ("read", True),
        ("tree", True),
        ("encode", True),
        ("read", True),
        ("decode", True),
    ]
    assert set(comp.timings) == {"read", "tree", "encode"}


def test_verify_roundtrip_writes_reconstruction(tmp_path):
    src = tmp_path / "b.log"
    src.write_bytes(b"line one\nline two\n" * 10)

    compress_file(src, 3, cfg=_quiet(verify_roundtrip=True))

    assert (tmp_path / "b_uncompressed.log").read_bytes() == src.read_bytes()


def test_report_prints_ratio(tmp_path, capsys):
    src = tmp_path / "c.txt"
    src.write_bytes(b"aaaaaaaaaaaaaaaaaaaaaaaaaaaaab" * 100)

    comp = compress_file(src, 1, cfg=CodecConfig(report=True))
    out = capsys.readouterr().out

    assert "Compression ratio" in out
    assert "Read time" in out
    assert comp.ratio < 1.0


def test_bad_buffer_size():
    with pytest.raises(InvalidArgumentError):
        CodecConfig(buffer_size=0)


def test_verify_roundtrip_with_explicit_container_name(tmp_path):
    src = tmp_path / "d.txt"
    src.write_bytes(b"explicit container name " * 8)

    comp = compress_file(src, 2, cfg=_quiet(verify_roundtrip=True), output_path=tmp_path / "packed.bin")

    assert comp.output_path == tmp_path / "packed.bin"
    assert (tmp_path / "d_uncompressed.txt").read_bytes() == src.read_bytes()


def test_compress_refuses_to_overwrite_input(tmp_path):
    src = tmp_path / "keep.txt"
    data = b"do not clobber me " * 10
    src.write_bytes(data)

    with pytest.raises(InvalidArgumentError):
        compress_file(src, 1, cfg=_quiet(), output_path=src)
    assert src.read_bytes() == data


def test_decompress_refuses_to_overwrite_container(tmp_path):
    src = tmp_path / "keep.txt"
    src.write_bytes(b"container stays intact " * 10)
    comp = compress_file(src, 1, cfg=_quiet())
    blob = comp.output_path.read_bytes()

    with pytest.raises(InvalidArgumentError):
        decompress_file(comp.output_path, cfg=_quiet(), output_path=comp.output_path)
    assert comp.output_path.read_bytes() == blob


@pytest.mark.skipif(not Path("/dev/full").exists(), reason="needs /dev/full")
def test_full_disk_reported_as_io_failure(tmp_path):
    src = tmp_path / "e.txt"
    src.write_bytes(b"no space left " * 10)

    with pytest.raises(IOFailureError):
        compress_file(src, 1, cfg=_quiet(), output_path="/dev/full")

    comp = compress_file(src, 1, cfg=_quiet())
    with pytest.raises(IOFailureError):
        decompress_file(comp.output_path, cfg=_quiet(), output_path="/dev/full")
