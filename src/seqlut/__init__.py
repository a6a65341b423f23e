"""
Top-level module: byte lookup tables for decoding and validating sequencing data.

Examples:
    >>> from seqlut import PHRED33, VALID_NUCLEOTIDE, to_byte
    >>> float(PHRED33[to_byte('!')])
    1.0
    >>> bool(VALID_NUCLEOTIDE[to_byte('n')])
    True
"""


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SeqlutWarning(Warning): pass


# Public API -----------------------------------------------------------------------------------------------------------
from seqlut.utils import RESOURCES, jit, to_byte, as_bytes_array
from seqlut.lut import (PHRED33, PHRED64, VALID_NUCLEOTIDE, VALID_PEPTIDE, create_phred33_table,
                        create_phred64_table, create_valid_nucleotide_table, create_valid_peptide_table,
                        is_valid, find_invalid, detect_alphabet)
from seqlut.quality import QualityEncoding, QualityEncodingError, QualityEncodingWarning
