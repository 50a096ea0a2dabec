"""Tests for direct Padovan term computation and length validation."""

import pytest

from primitives.field import FF
from protocol.errors import InvalidArgumentError
from padovan.utils import are_equal, compute_pado_term, validate_sequence_length

# P(1..15) of the Padovan sequence
PADOVAN = [1, 1, 1, 2, 2, 3, 4, 5, 7, 9, 12, 16, 21, 28, 37]


class TestComputePadoTerm:

    @pytest.mark.parametrize("n", range(3, len(PADOVAN) + 1))
    def test_known_terms(self, n: int) -> None:
        assert compute_pado_term(n) == FF(PADOVAN[n - 1])

    def test_ninth_term(self) -> None:
        assert compute_pado_term(9) == FF(7)

    def test_large_term_wraps_modulo_prime(self) -> None:
        """Terms are field elements; the recurrence holds past the modulus."""
        a, b, c = compute_pado_term(998), compute_pado_term(999), compute_pado_term(1001)
        assert c == a + b

    @pytest.mark.parametrize("n", [0, 1, 2, -3])
    def test_too_small(self, n: int) -> None:
        with pytest.raises(InvalidArgumentError):
            compute_pado_term(n)

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            compute_pado_term(2)


class TestValidateSequenceLength:

    @pytest.mark.parametrize("length,rows", [(3, 1), (6, 2), (12, 4), (48, 16), (1536, 512)])
    def test_valid(self, length: int, rows: int) -> None:
        assert validate_sequence_length(length) == rows

    @pytest.mark.parametrize("length", [47, 4, 1, 0, 9, 18, 30])
    def test_invalid(self, length: int) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_sequence_length(length)


def test_are_equal_vanishes_only_on_equal_values() -> None:
    assert are_equal(FF(5), FF(5)) == FF(0)
    assert are_equal(FF(6), FF(5)) != FF(0)
