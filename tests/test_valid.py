import numpy as np
import pytest
from seqlut.lut.valid import (VALID_NUCLEOTIDE, VALID_PEPTIDE, create_valid_nucleotide_table,
                              create_valid_peptide_table, is_valid, find_invalid, detect_alphabet)
from concurrent.futures import ThreadPoolExecutor


class TestValidNucleotide:
    def test_size_and_dtype(self):
        assert VALID_NUCLEOTIDE.shape == (256,)
        assert VALID_NUCLEOTIDE.dtype == np.bool_

    @pytest.mark.parametrize('symbol', list("ACGTUNRYSWKMBDHVacgtunryswkmbdhv"))
    def test_valid(self, symbol):
        assert VALID_NUCLEOTIDE[ord(symbol)]

    @pytest.mark.parametrize('symbol', list("0123456789 \t\n!@#EFIJLOPQXZefijlopqxz"))
    def test_invalid(self, symbol):
        assert not VALID_NUCLEOTIDE[ord(symbol)]

    def test_exact_membership(self):
        valid = set(np.flatnonzero(VALID_NUCLEOTIDE).tolist())
        assert valid == set(b"ACGTUNRYSWKMBDHVacgtunryswkmbdhv")
        assert VALID_NUCLEOTIDE.sum() == 32

    def test_non_ascii_invalid(self):
        assert not VALID_NUCLEOTIDE[128:].any()
        assert not VALID_NUCLEOTIDE[0]


class TestValidPeptide:
    def test_size_and_dtype(self):
        assert VALID_PEPTIDE.shape == (256,)
        assert VALID_PEPTIDE.dtype == np.bool_

    @pytest.mark.parametrize('symbol', list("ACDEFGHIKLMNPQRSTVWYBZXUOJ*acdefghiklmnpqrstvwybzxuoj"))
    def test_valid(self, symbol):
        assert VALID_PEPTIDE[ord(symbol)]

    @pytest.mark.parametrize('symbol', list("0123456789 \t\n\r\x00\x07\x1b-.@"))
    def test_invalid(self, symbol):
        assert not VALID_PEPTIDE[ord(symbol)]

    def test_all_letters_valid(self):
        for c in b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz':
            assert VALID_PEPTIDE[c]

    def test_stop_has_no_case_variant(self):
        valid = set(np.flatnonzero(VALID_PEPTIDE).tolist())
        assert valid - set(b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz') == {ord('*')}

    def test_exact_count(self):
        assert VALID_PEPTIDE.sum() == 53


class TestTableLifecycle:
    @pytest.mark.parametrize('table', [VALID_NUCLEOTIDE, VALID_PEPTIDE])
    def test_read_only(self, table):
        with pytest.raises(ValueError):
            table[ord('A')] = False

    @pytest.mark.parametrize('table, factory', [
        (VALID_NUCLEOTIDE, create_valid_nucleotide_table), (VALID_PEPTIDE, create_valid_peptide_table)
    ])
    def test_rebuild_is_identical(self, table, factory):
        np.testing.assert_array_equal(factory(), table)
        with ThreadPoolExecutor(max_workers=4) as pool:
            builds = list(pool.map(lambda _: factory(), range(8)))
        assert all(b.tobytes() == table.tobytes() for b in builds)

    def test_tables_independent(self):
        # Overlapping symbols are valid in both, exclusive ones in only one
        assert VALID_NUCLEOTIDE[ord('A')] and VALID_PEPTIDE[ord('A')]
        assert VALID_PEPTIDE[ord('E')] and not VALID_NUCLEOTIDE[ord('E')]
        assert VALID_PEPTIDE[ord('*')] and not VALID_NUCLEOTIDE[ord('*')]


class TestValidation:
    def test_is_valid(self):
        assert is_valid(b'ACGTNacgtn', VALID_NUCLEOTIDE)
        assert is_valid('RYKM', VALID_NUCLEOTIDE)
        assert not is_valid(b'ACGT\n', VALID_NUCLEOTIDE)
        assert is_valid(b'MKV*', VALID_PEPTIDE)

    def test_is_valid_empty(self):
        assert is_valid(b'', VALID_NUCLEOTIDE)
        assert is_valid('', VALID_PEPTIDE)

    def test_find_invalid(self):
        np.testing.assert_array_equal(find_invalid(b'AC-GT.', VALID_NUCLEOTIDE), [2, 5])
        assert find_invalid(b'ACGT', VALID_NUCLEOTIDE).size == 0

    def test_array_input(self):
        seq = np.frombuffer(b'ACGE', dtype=np.uint8)
        np.testing.assert_array_equal(find_invalid(seq, VALID_NUCLEOTIDE), [3])

    def test_non_latin1_text_is_invalid(self):
        assert not is_valid('ACΔT', VALID_PEPTIDE)
        np.testing.assert_array_equal(find_invalid('ACΔT', VALID_NUCLEOTIDE), [2])

    def test_detect_alphabet(self):
        assert detect_alphabet(b'ACGTN') is VALID_NUCLEOTIDE
        assert detect_alphabet(b'MKVLE') is VALID_PEPTIDE
        assert detect_alphabet(b'') is VALID_NUCLEOTIDE

    def test_surrogate_escaped_text_is_invalid(self):
        seq = b'AC\xffT'.decode('ascii', errors='surrogateescape')
        assert not is_valid(seq, VALID_NUCLEOTIDE)
        np.testing.assert_array_equal(find_invalid(seq, VALID_NUCLEOTIDE), [2])
        assert detect_alphabet(seq) is VALID_PEPTIDE
