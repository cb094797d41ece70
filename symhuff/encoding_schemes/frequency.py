from collections import Counter
from typing import Dict, Iterable

from symhuff.errors import EmptyInputError


def count_frequencies(symbols: Iterable[bytes]) -> Dict[bytes, int]:
    """
    Count occurrences of each distinct symbol.

    Keys keep first-occurrence order. Raises EmptyInputError when no symbol
    was produced.
    """
    freqs = Counter(symbols)
    if not freqs:
        raise EmptyInputError("File is empty or could not be read")
    return dict(freqs)
