from symhuff.reporting.report import compare_files, file_digest, generate_report

__all__ = [
    "compare_files",
    "file_digest",
    "generate_report",
]
