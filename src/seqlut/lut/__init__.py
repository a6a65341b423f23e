"""
Constant-time lookup tables indexed by unsigned byte value.
"""
from seqlut.lut.phred import PHRED33, PHRED64, create_phred33_table, create_phred64_table
from seqlut.lut.valid import (VALID_NUCLEOTIDE, VALID_PEPTIDE, create_valid_nucleotide_table,
                              create_valid_peptide_table, is_valid, find_invalid, detect_alphabet)

__all__ = [
    'PHRED33', 'PHRED64', 'create_phred33_table', 'create_phred64_table',
    'VALID_NUCLEOTIDE', 'VALID_PEPTIDE', 'create_valid_nucleotide_table', 'create_valid_peptide_table',
    'is_valid', 'find_invalid', 'detect_alphabet',
]
