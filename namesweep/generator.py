"""
Combination generator.

Produces every fixed-length string over the lowercase Latin alphabet, in
lexicographic order: position 0 is fixed to each symbol in turn and the
remaining positions cycle through the alphabet before it advances. Built on
``itertools.product`` so very long lengths neither recurse nor materialize.
"""

from __future__ import annotations

import itertools
import string
from typing import Iterator, Sequence

ALPHABET: str = string.ascii_lowercase


def generate_combinations(length: int, alphabet: Sequence[str] = ALPHABET) -> Iterator[str]:
    """
    Yield all strings of exactly ``length`` symbols drawn from ``alphabet``.

    Parameters
    ----------
    length : int
        Number of symbols per string. Zero yields a single empty string.
    alphabet : Sequence[str]
        Symbols in the order they should vary.

    Yields
    ------
    str
        ``len(alphabet) ** length`` distinct strings, lexicographic when
        ``alphabet`` is sorted.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return ("".join(symbols) for symbols in itertools.product(alphabet, repeat=length))


def count_combinations(length: int, alphabet: Sequence[str] = ALPHABET) -> int:
    """Number of strings generate_combinations yields for ``length``."""
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return len(alphabet) ** length


__all__ = ["ALPHABET", "count_combinations", "generate_combinations"]
