"""
Command line entry point.

    python -m symhuff c <file> <n> [--verify]
    python -m symhuff d <file.hc> [-o OUTPUT]
    python -m symhuff verify <original> <reconstructed>
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from symhuff.errors import CodecError
from symhuff.pipeline import CodecConfig, compress_file, decompress_file
from symhuff.reporting.report import compare_files


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symhuff",
        description="Huffman compressor over fixed-width byte symbols.",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output.")
    sub = parser.add_subparsers(dest="command", required=True)

    comp = sub.add_parser("c", help="Compress a file.")
    comp.add_argument("path", help="File to compress.")
    comp.add_argument("n", type=int, help="Symbol width in bytes.")
    comp.add_argument("-o", "--output", default="", help="Container path (default: <path>.hc).")
    comp.add_argument("--verify", action="store_true", help="Decompress right after compressing.")

    decomp = sub.add_parser("d", help="Decompress a container.")
    decomp.add_argument("path", help="Container to decompress.")
    decomp.add_argument(
        "-o",
        "--output",
        default="",
        help="Output path (default: <name>_uncompressed<ext>).",
    )

    verify = sub.add_parser("verify", help="Compare SHA-256 digests of two files.")
    verify.add_argument("original")
    verify.add_argument("reconstructed")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = CodecConfig(report=not args.quiet)

    try:
        if args.command == "c":
            cfg.verify_roundtrip = args.verify
            compress_file(args.path, args.n, cfg=cfg, output_path=args.output or None)
        elif args.command == "d":
            decompress_file(args.path, cfg=cfg, output_path=args.output or None)
        else:
            row = compare_files(args.original, args.reconstructed)
            if not args.quiet:
                print("Files are identical." if row["match"] else "Files differ.")
            return 0 if row["match"] else 1
    except CodecError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
