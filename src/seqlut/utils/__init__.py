"""
Module containing the byte indexing helpers shared by every lookup table.

Every table in :mod:`seqlut.lut` is indexed by an *unsigned* byte. These helpers perform the conversion from the
usual Python representations of characters (``str``, ``bytes``, signed integers and numpy arrays) so that call sites
never hand a negative index to a table.
"""
from typing import Union

import numpy as np

from .resources import RESOURCES, jit


# Constants ------------------------------------------------------------------------------------------------------------
BYTE_MASK = 0xFF
NON_LATIN1 = 0xFF  # Code points above U+00FF collapse onto the last byte, which is a default entry in every table


# Functions ------------------------------------------------------------------------------------------------------------
def to_byte(symbol: Union[str, bytes, bytearray, int, np.integer]) -> int:
    """
    Converts a single symbol to the unsigned byte used to index a lookup table.

    Integers are reduced modulo 256 the way a signed ``char`` is reinterpreted as ``uint8``, so ``-1`` becomes ``255``
    and ``np.int8(-128)`` becomes ``128``.

    Args:
        symbol: A one-character string, a length-1 bytes-like object or an integer.

    Returns:
        The byte value in ``[0, 255]``.

    Raises:
        TypeError: If ``symbol`` is not a supported type.
        ValueError: If a string or bytes-like ``symbol`` is not exactly one character long.

    Examples:
        >>> to_byte('!')
        33
        >>> to_byte(-1)
        255
    """
    if isinstance(symbol, (int, np.integer)): return int(symbol) & BYTE_MASK
    if isinstance(symbol, str):
        if len(symbol) != 1: raise ValueError(f'Expected a single character, got {len(symbol)}')
        code = ord(symbol)
        return code if code <= BYTE_MASK else NON_LATIN1
    if isinstance(symbol, (bytes, bytearray)):
        if len(symbol) != 1: raise ValueError(f'Expected a single byte, got {len(symbol)}')
        return symbol[0]
    raise TypeError(f'Cannot convert {type(symbol).__name__} to a byte')


def as_bytes_array(data: Union[str, bytes, bytearray, memoryview, np.ndarray]) -> np.ndarray:
    """
    Returns a ``uint8`` array view of ``data`` suitable for fancy-indexing a lookup table.

    Bytes-like objects are viewed without copying. ASCII strings are encoded directly; other strings are mapped code
    point by code point with anything above U+00FF collapsed to ``0xFF``. Integer arrays are wrapped modulo 256.

    Args:
        data: The symbols to convert.

    Returns:
        A one-dimensional ``uint8`` numpy array.

    Raises:
        TypeError: If ``data`` is not a supported type.
    """
    if isinstance(data, np.ndarray):
        if data.dtype == np.uint8: return data.ravel()
        if data.dtype.kind not in 'iu': raise TypeError(f'Cannot index a lookup table with {data.dtype} data')
        return data.astype(np.uint8).ravel()  # Unsafe cast wraps modulo 256
    if isinstance(data, str):
        if data.isascii(): return np.frombuffer(data.encode('ascii'), dtype=np.uint8)
        # Lone surrogates (e.g. from surrogateescape decoding) collapse like any other non-Latin-1 code point
        codes = np.frombuffer(data.encode('utf-32-le', 'surrogatepass'), dtype=np.uint32)
        return np.minimum(codes, NON_LATIN1).astype(np.uint8)
    if isinstance(data, (bytes, bytearray, memoryview)): return np.frombuffer(data, dtype=np.uint8)
    raise TypeError(f'Cannot convert {type(data).__name__} to a byte array')
