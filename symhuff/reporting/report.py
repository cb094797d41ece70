from __future__ import annotations

import argparse
import csv
import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

from symhuff.errors import IOFailureError

REPORT_COLUMNS = [
    "original_path",
    "reconstructed_path",
    "algorithm",
    "original_digest",
    "reconstructed_digest",
    "match",
    "original_size_bytes",
    "reconstructed_size_bytes",
    "size_delta_bytes",
    "byte_errors",
    "bit_errors",
    "bit_error_rate",
]

_CHUNK_SIZE = 8192


def file_digest(path: Path, algorithm: str = "sha256") -> str:
    """Hex digest of a file, read in chunks."""
    digest = hashlib.new(algorithm)
    try:
        with Path(path).open("rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise IOFailureError(f"Error reading {path}: {exc}") from exc
    return digest.hexdigest()


def _byte_error_count(a: bytes, b: bytes) -> int:
    min_len = min(len(a), len(b))
    errors = sum(1 for i in range(min_len) if a[i] != b[i])
    errors += abs(len(a) - len(b))
    return errors


def _bit_error_count(a: bytes, b: bytes) -> int:
    min_len = min(len(a), len(b))
    errors = 0
    for i in range(min_len):
        if a[i] != b[i]:
            errors += bin(a[i] ^ b[i]).count("1")
    errors += abs(len(a) - len(b)) * 8
    return errors


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise IOFailureError(f"Error reading {path}: {exc}") from exc


def compare_files(original: Path, reconstructed: Path, algorithm: str = "sha256") -> Dict[str, object]:
    """
    Compare an original file with its reconstruction.

    Equality is decided on digests; byte/bit error counts are only computed
    when the digests differ.
    """
    original = Path(original)
    reconstructed = Path(reconstructed)
    original_digest = file_digest(original, algorithm)
    reconstructed_digest = file_digest(reconstructed, algorithm)
    match = original_digest == reconstructed_digest

    row: Dict[str, object] = {
        "original_path": str(original),
        "reconstructed_path": str(reconstructed),
        "algorithm": algorithm,
        "original_digest": original_digest,
        "reconstructed_digest": reconstructed_digest,
        "match": match,
    }

    original_size = original.stat().st_size
    reconstructed_size = reconstructed.stat().st_size
    row["original_size_bytes"] = original_size
    row["reconstructed_size_bytes"] = reconstructed_size
    row["size_delta_bytes"] = reconstructed_size - original_size

    if match:
        byte_errors = bit_errors = 0
    else:
        original_bytes = _read_bytes(original)
        reconstructed_bytes = _read_bytes(reconstructed)
        byte_errors = _byte_error_count(original_bytes, reconstructed_bytes)
        bit_errors = _bit_error_count(original_bytes, reconstructed_bytes)
    row["byte_errors"] = byte_errors
    row["bit_errors"] = bit_errors
    if original_size:
        row["bit_error_rate"] = bit_errors / (original_size * 8)
    else:
        row["bit_error_rate"] = 0.0 if bit_errors == 0 else None
    return row


def _format_csv_value(value: object) -> object:
    if value is None:
        return ""
    return value


def generate_report(
    original: Path,
    reconstructed: Path,
    report_dir: Path,
    formats: Sequence[str] = ("csv", "json"),
    algorithm: str = "sha256",
) -> Dict[str, object]:
    row = compare_files(original, reconstructed, algorithm)

    report_dir = Path(report_dir).resolve()
    report_dir.mkdir(parents=True, exist_ok=True)
    formats = [fmt.lower() for fmt in formats]

    meta = {
        "report_dir": str(report_dir),
        "generated_at_utc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }

    if "csv" in formats:
        csv_path = report_dir / "report.csv"
        with csv_path.open("w", newline="", encoding="utf-8") as csv_file:
            writer = csv.DictWriter(csv_file, fieldnames=REPORT_COLUMNS)
            writer.writeheader()
            writer.writerow({k: _format_csv_value(row.get(k)) for k in REPORT_COLUMNS})

    if "json" in formats:
        json_path = report_dir / "report.json"
        report_payload = {"meta": meta, "file": row}
        json_path.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")

    return {"meta": meta, "file": row}


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check that a decompressed file matches its original.",
    )
    parser.add_argument("--original", required=True, help="Path to the original file.")
    parser.add_argument("--reconstructed", required=True, help="Path to the decompressed file.")
    parser.add_argument(
        "--report-dir",
        default="",
        help="Output directory for reports (default: print only).",
    )
    parser.add_argument(
        "--formats",
        default="csv,json",
        help="Comma-separated list of formats: csv,json (default: csv,json).",
    )
    parser.add_argument("--algorithm", default="sha256", help="hashlib algorithm (default: sha256).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    original = Path(args.original)
    reconstructed = Path(args.reconstructed)
    if args.report_dir:
        formats = [fmt.strip() for fmt in args.formats.split(",") if fmt.strip()]
        row = generate_report(
            original=original,
            reconstructed=reconstructed,
            report_dir=Path(args.report_dir),
            formats=formats,
            algorithm=args.algorithm,
        )["file"]
        print(f"Report written to {args.report_dir}")
    else:
        row = compare_files(original, reconstructed, args.algorithm)
    print(f"{row['algorithm']} {row['original_digest']}  {original}")
    print(f"{row['algorithm']} {row['reconstructed_digest']}  {reconstructed}")
    print("Files are identical." if row["match"] else "Files differ.")
    return 0 if row["match"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
