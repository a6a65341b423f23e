"""
Phred quality decode tables.

Each table maps every byte value to the probability that the base call encoded by that quality character is wrong,
``P = 10 ^ (-Q / 10)`` with ``Q = byte - offset``. Bytes outside the printable range of an encoding carry no
information and decode to the worst-case probability of ``1.0``.

Always index with an unsigned byte (see :func:`seqlut.utils.to_byte`):

    >>> from seqlut.lut.phred import PHRED33
    >>> float(PHRED33[ord('+')])
    0.1
"""
from typing import Final

import numpy as np


# Constants ------------------------------------------------------------------------------------------------------------
TABLE_SIZE: Final = 256
DTYPE: Final = np.float64
DEFAULT: Final = 1.0
PHRED33_OFFSET: Final = 33  # '!'
PHRED64_OFFSET: Final = 64  # '@'
MAX_SYMBOL: Final = 126  # '~'


# Functions ------------------------------------------------------------------------------------------------------------
def _fill_phred_table(table: np.ndarray, offset: int) -> np.ndarray:
    symbols = np.arange(offset, MAX_SYMBOL + 1)
    q_scores = symbols - offset
    table[symbols] = np.power(10.0, -q_scores / 10.0)
    table.setflags(write=False)
    return table


def create_phred33_table() -> np.ndarray:
    """
    Builds the Phred+33 (Sanger / Illumina 1.8+) decode table.

    Returns:
        A read-only ``float64`` array of 256 error probabilities; ``'!'`` (33) to ``'~'`` (126) decode to
        ``Q = 0 .. 93``, everything else to ``1.0``.
    """
    return _fill_phred_table(np.full(TABLE_SIZE, DEFAULT, dtype=DTYPE), PHRED33_OFFSET)


def create_phred64_table() -> np.ndarray:
    """
    Builds the legacy Phred+64 (Illumina 1.3 to 1.7) decode table.

    Returns:
        A read-only ``float64`` array of 256 error probabilities; ``'@'`` (64) to ``'~'`` (126) decode to
        ``Q = 0 .. 62``, everything else to ``1.0``.
    """
    return _fill_phred_table(np.full(TABLE_SIZE, DEFAULT, dtype=DTYPE), PHRED64_OFFSET)


# Tables ---------------------------------------------------------------------------------------------------------------
PHRED33: Final[np.ndarray] = create_phred33_table()
PHRED64: Final[np.ndarray] = create_phred64_table()
