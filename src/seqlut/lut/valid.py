"""
Validity tables for sequence alphabets.

``VALID_NUCLEOTIDE[b]`` and ``VALID_PEPTIDE[b]`` are ``True`` exactly when byte ``b`` is a symbol of the nucleotide or
peptide alphabet, in either case. Membership is by explicit symbol set only; there is no locale or case folding at
lookup time.
"""
from typing import Final, Union

import numpy as np

from seqlut.utils import as_bytes_array


# Constants ------------------------------------------------------------------------------------------------------------
TABLE_SIZE: Final = 256
DTYPE: Final = np.bool_

NUCLEOTIDE_BASES: Final = b'ACGTUN'
IUPAC_AMBIGUITY_CODES: Final = b'RYSWKMBDHV'  # puRine, pYrimidine, Strong, Weak, Keto, aMino, not-A, not-C, not-G, not-T
STANDARD_AMINO_ACIDS: Final = b'ACDEFGHIKLMNPQRSTVWY'
SPECIAL_AMINO_ACIDS: Final = b'BZXUOJ'  # Asx, Glx, any, selenocysteine, pyrrolysine, Xle
STOP_SYMBOL: Final = b'*'


# Functions ------------------------------------------------------------------------------------------------------------
def _fill_valid_table(symbols: bytes) -> np.ndarray:
    table = np.zeros(TABLE_SIZE, dtype=DTYPE)
    table[np.frombuffer(symbols, dtype=np.uint8)] = True
    table[np.frombuffer(symbols.lower(), dtype=np.uint8)] = True
    table.setflags(write=False)
    return table


def create_valid_nucleotide_table() -> np.ndarray:
    """
    Builds the nucleotide validity table: ``ACGTUN`` plus the IUPAC ambiguity codes, upper and lower case.

    Returns:
        A read-only boolean array of 256 entries with 32 ``True`` values.
    """
    return _fill_valid_table(NUCLEOTIDE_BASES + IUPAC_AMBIGUITY_CODES)


def create_valid_peptide_table() -> np.ndarray:
    """
    Builds the peptide validity table: the 20 standard amino acids, ``BZXUOJ`` (both cases) and the stop symbol.

    Returns:
        A read-only boolean array of 256 entries with 53 ``True`` values.
    """
    return _fill_valid_table(STANDARD_AMINO_ACIDS + SPECIAL_AMINO_ACIDS + STOP_SYMBOL)


def is_valid(seq: Union[str, bytes, np.ndarray], table: np.ndarray) -> bool:
    """
    Checks that every symbol of a sequence is valid in a validity table.

    Args:
        seq: The sequence as text, bytes or a byte array.
        table: ``VALID_NUCLEOTIDE`` or ``VALID_PEPTIDE``.

    Returns:
        ``True`` if all symbols are valid (including the empty sequence).

    Examples:
        >>> is_valid(b'ACGTN', VALID_NUCLEOTIDE)
        True
        >>> is_valid('ACGT-', VALID_NUCLEOTIDE)
        False
    """
    return bool(table[as_bytes_array(seq)].all())


def find_invalid(seq: Union[str, bytes, np.ndarray], table: np.ndarray) -> np.ndarray:
    """
    Returns the positions of symbols that are not valid in a validity table.

    Args:
        seq: The sequence as text, bytes or a byte array.
        table: ``VALID_NUCLEOTIDE`` or ``VALID_PEPTIDE``.

    Returns:
        An ``int64`` array of positions, empty when the whole sequence is valid.
    """
    return np.flatnonzero(~table[as_bytes_array(seq)]).astype(np.int64, copy=False)


def detect_alphabet(seq: Union[str, bytes, np.ndarray]) -> np.ndarray:
    """
    Picks the validity table a sequence most likely belongs to.

    The nucleotide alphabet is narrower, so it wins whenever it accepts the whole sequence (``b'ACGT'`` is also a
    valid peptide).

    Args:
        seq: The sequence as text, bytes or a byte array.

    Returns:
        ``VALID_NUCLEOTIDE`` or ``VALID_PEPTIDE`` (the module singletons).
    """
    return VALID_NUCLEOTIDE if VALID_NUCLEOTIDE[as_bytes_array(seq)].all() else VALID_PEPTIDE


# Tables ---------------------------------------------------------------------------------------------------------------
VALID_NUCLEOTIDE: Final[np.ndarray] = create_valid_nucleotide_table()
VALID_PEPTIDE: Final[np.ndarray] = create_valid_peptide_table()
