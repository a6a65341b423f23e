"""
Module for decoding FASTQ quality strings.

The quality encoding is a property of a file, so it is chosen once per stream and every character of that stream is
then decoded through the same table:

    >>> encoding = QualityEncoding.detect(b'IIIIHHGG#')
    >>> encoding is QualityEncoding.PHRED33
    True
    >>> encoding.error_probability('+')
    0.1
"""
from typing import Union, Final, ClassVar
from warnings import warn

import numpy as np

from seqlut import SeqlutWarning
from seqlut.lut.phred import PHRED33, PHRED64, PHRED33_OFFSET, PHRED64_OFFSET, MAX_SYMBOL
from seqlut.utils import RESOURCES, jit, to_byte, as_bytes_array

if RESOURCES.has_numba:
    from numba import prange
else:
    prange = range


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class QualityEncodingError(ValueError):
    """Raised when a quality encoding name is not recognised."""


class QualityEncodingWarning(SeqlutWarning):
    """Warning category for quality strings that do not clearly belong to one encoding."""


# Constants ------------------------------------------------------------------------------------------------------------
PHRED33_ONLY_BELOW: Final = 59  # ';' is the lowest symbol any +64 variant (Solexa) ever emitted
_VALIDATION_TOKEN: Final = object()


# Classes --------------------------------------------------------------------------------------------------------------
class QualityEncoding:
    """
    A Phred quality encoding bound to its decode table.

    Only the two singletons ``QualityEncoding.PHRED33`` and ``QualityEncoding.PHRED64`` exist; use
    :meth:`from_name` or :meth:`detect` to select one for a stream. Direct construction raises ``PermissionError``.

    Args:
        _validation_token: Internal token to prevent direct construction.
    """
    __slots__ = ('_name', '_offset', '_table')
    PHRED33: ClassVar['QualityEncoding']
    PHRED64: ClassVar['QualityEncoding']
    _ALIASES: ClassVar[dict[str, str]] = {
        'phred33': 'phred33', 'phred+33': 'phred33', 'sanger': 'phred33', 'illumina-1.8': 'phred33',
        'phred64': 'phred64', 'phred+64': 'phred64', 'illumina-1.3': 'phred64', 'illumina-1.5': 'phred64',
    }

    def __init__(self, name: str, offset: int, table: np.ndarray, _validation_token: object = None):
        if _validation_token is not _VALIDATION_TOKEN:
            raise PermissionError("QualityEncoding objects must be obtained via from_name or detect")
        self._name = name
        self._offset = offset
        self._table = table

    def __repr__(self):
        return f'QualityEncoding({self._name!r})'

    def __reduce__(self):
        # Unpickle to the singleton so identity checks survive process boundaries
        return QualityEncoding.from_name, (self._name,)

    @property
    def name(self) -> str: return self._name

    @property
    def offset(self) -> int: return self._offset

    @property
    def table(self) -> np.ndarray:
        """The read-only 256-entry decode table."""
        return self._table

    @classmethod
    def from_name(cls, name: str) -> 'QualityEncoding':
        """
        Looks up an encoding by name.

        Args:
            name: Case-insensitive encoding name, e.g. ``'phred33'``, ``'Sanger'`` or ``'illumina-1.5'``.

        Returns:
            The matching singleton.

        Raises:
            QualityEncodingError: If the name is not recognised.
        """
        if (key := cls._ALIASES.get(name.strip().lower())) is None:
            raise QualityEncodingError(f'Unknown quality encoding "{name}"')
        return cls.PHRED33 if key == 'phred33' else cls.PHRED64

    @classmethod
    def detect(cls, quality: Union[str, bytes, np.ndarray]) -> 'QualityEncoding':
        """
        Guesses the encoding of a stream from a sample of its quality characters.

        Any symbol below ``';'`` can only come from Phred+33. A sample whose lowest symbol is ``'@'`` or above is taken
        as Phred+64. Anything in between is ambiguous and falls back to Phred+33 with a warning.

        Args:
            quality: Quality characters, typically the concatenated quality lines of the first few records.

        Returns:
            ``QualityEncoding.PHRED33`` or ``QualityEncoding.PHRED64``.

        Warns:
            QualityEncodingWarning: If the sample is empty, ambiguous or contains non-printable symbols.
        """
        data = as_bytes_array(quality)
        if data.size == 0:
            warn('Cannot detect quality encoding from an empty sample, assuming phred33', QualityEncodingWarning)
            return cls.PHRED33
        lowest, highest = int(data.min()), int(data.max())
        if lowest < PHRED33_OFFSET or highest > MAX_SYMBOL:
            warn(f'Quality sample contains symbols outside [{PHRED33_OFFSET}, {MAX_SYMBOL}]', QualityEncodingWarning)
        if lowest < PHRED33_ONLY_BELOW: return cls.PHRED33
        if lowest >= PHRED64_OFFSET: return cls.PHRED64
        warn(f'Quality sample with lowest symbol {chr(lowest)!r} is ambiguous, assuming phred33',
             QualityEncodingWarning)
        return cls.PHRED33

    def error_probability(self, symbol: Union[str, bytes, int]) -> float:
        """Returns the error probability of a single quality symbol."""
        return float(self._table[to_byte(symbol)])

    def decode(self, quality: Union[str, bytes, np.ndarray]) -> np.ndarray:
        """
        Decodes a quality string to per-base error probabilities.

        Args:
            quality: Quality characters as text, bytes or a byte array.

        Returns:
            A ``float64`` array with one probability per symbol.
        """
        return self._table[as_bytes_array(quality)]

    def expected_errors(self, quality: Union[str, bytes, np.ndarray]) -> float:
        """Returns the expected number of erroneous base calls (the sum of error probabilities)."""
        return float(self.decode(quality).sum())

    def mean_error(self, quality: Union[str, bytes, np.ndarray]) -> float:
        """Returns the mean error probability, or NaN for an empty quality string."""
        probs = self.decode(quality)
        if probs.size == 0: return np.nan
        return float(probs.mean())

    def expected_errors_batch(self, data: Union[bytes, np.ndarray], starts: np.ndarray,
                              lengths: np.ndarray) -> np.ndarray:
        """
        Computes expected errors for many reads stored back to back in one buffer.

        Args:
            data: Concatenated quality characters of all reads.
            starts: Offset of each read in ``data``.
            lengths: Length of each read.

        Returns:
            A ``float64`` array with one expected-error value per read (``0.0`` for empty reads).

        Raises:
            ValueError: If ``starts`` and ``lengths`` differ in length, hold negative values or address bytes past
                the end of ``data``.
        """
        data = as_bytes_array(data)
        starts = np.asarray(starts, dtype=np.int64).ravel()
        lengths = np.asarray(lengths, dtype=np.int64).ravel()
        if len(starts) != len(lengths):
            raise ValueError(f'Got {len(starts)} starts but {len(lengths)} lengths')
        if starts.size:
            if starts.min() < 0 or lengths.min() < 0: raise ValueError('Read starts and lengths must be non-negative')
            if (end := int((starts + lengths).max())) > data.size:
                raise ValueError(f'Reads extend to offset {end} but the quality buffer holds {data.size} bytes')
        # The kernel does no bounds checking under numba
        return _batch_expected_errors_kernel(data, starts, lengths, self._table)


# Initialize Standard Encodings
QualityEncoding.PHRED33 = QualityEncoding('phred33', PHRED33_OFFSET, PHRED33, _validation_token=_VALIDATION_TOKEN)
QualityEncoding.PHRED64 = QualityEncoding('phred64', PHRED64_OFFSET, PHRED64, _validation_token=_VALIDATION_TOKEN)


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True, parallel=True)
def _batch_expected_errors_kernel(data, starts, lengths, table):
    n = len(starts)
    out = np.zeros(n, dtype=np.float64)
    for i in prange(n):
        s = starts[i]
        total = 0.0
        for j in range(lengths[i]):
            total += table[data[s + j]]
        out[i] = total
    return out
