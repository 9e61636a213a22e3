"""
Residue alphabet used for per-position count tables.

Letters fold case onto 26 canonical bins; gap, stop and anything else get
one dedicated bin each, for a fixed 29-bin alphabet.
"""

from typing import Union

import numpy as np

N_LETTERS = ord("Z") - ord("A") + 1
ALPHABET_SIZE = N_LETTERS + 3
GAP_BIN = ALPHABET_SIZE - 3
STOP_BIN = ALPHABET_SIZE - 2
OTHER_BIN = ALPHABET_SIZE - 1

GAP_SYMBOL = "-"
STOP_SYMBOL = "*"
OTHER_SYMBOL = "?"

_SPECIAL_SYMBOLS = {
    GAP_BIN: GAP_SYMBOL,
    STOP_BIN: STOP_SYMBOL,
    OTHER_BIN: OTHER_SYMBOL,
}


def _build_lookup() -> np.ndarray:
    """Byte -> bin lookup table covering all 256 byte values."""
    lookup = np.full(256, OTHER_BIN, dtype=np.intp)
    for offset in range(N_LETTERS):
        lookup[ord("A") + offset] = offset
        lookup[ord("a") + offset] = offset
    lookup[ord(GAP_SYMBOL)] = GAP_BIN
    lookup[ord(STOP_SYMBOL)] = STOP_BIN
    return lookup


_BYTE_TO_BIN = _build_lookup()


def symbol_to_bin(symbol: Union[int, str]) -> int:
    """
    Map a residue symbol to its count-table bin.

    Args:
        symbol: Byte value (0-255) or one-character string

    Returns:
        Bin index in ``range(ALPHABET_SIZE)``

    Raises:
        ValueError: If a string symbol is not exactly one character
    """
    if isinstance(symbol, str):
        if len(symbol) != 1:
            raise ValueError(f"Expected a single residue symbol, got {symbol!r}")
        code = ord(symbol)
        if code > 255:
            return OTHER_BIN
        return int(_BYTE_TO_BIN[code])
    return int(_BYTE_TO_BIN[symbol])


def bin_to_symbol(index: int) -> str:
    """
    Map a bin back to its canonical (uppercase) symbol.

    Raises:
        ValueError: If index is outside the alphabet
    """
    if not 0 <= index < ALPHABET_SIZE:
        raise ValueError(f"Bin index {index} outside alphabet of size {ALPHABET_SIZE}")
    if index in _SPECIAL_SYMBOLS:
        return _SPECIAL_SYMBOLS[index]
    return chr(ord("A") + index)


def encode(sequence: bytes) -> np.ndarray:
    """Vectorised ``symbol_to_bin`` over a whole sequence."""
    return _BYTE_TO_BIN[np.frombuffer(sequence, dtype=np.uint8)]
