from pathlib import Path

from symhuff.errors import InvalidArgumentError


def suffix_filename(path: Path, suffix: str) -> Path:
    """
    Add a suffix before the file extension.

    Example:
        file1.txt + '_uncompressed' -> file1_uncompressed.txt
        README   + '_uncompressed'  -> README_uncompressed
    """
    if path.suffix:
        return path.with_name(path.stem + suffix + path.suffix)
    return path.with_name(path.name + suffix)


def compressed_path(path: Path, container_suffix: str = ".hc") -> Path:
    """
    Container path for an input file.

    Example:
        notes.txt -> notes.txt.hc
    """
    return path.with_name(path.name + container_suffix)


def decompressed_path(
    path: Path,
    container_suffix: str = ".hc",
    marker: str = "_uncompressed",
) -> Path:
    """
    Output path for a container: strip the container suffix, then mark the name.

    Example:
        notes.txt.hc -> notes_uncompressed.txt
        README.hc    -> README_uncompressed
    """
    name = path.name
    if not name.endswith(container_suffix) or len(name) == len(container_suffix):
        raise InvalidArgumentError(
            f"{path} does not look like a container (expected a '{container_suffix}' suffix)"
        )
    original = path.with_name(name[: -len(container_suffix)])
    return suffix_filename(original, marker)
