"""Tests for the Fiat-Shamir transcript."""

import pytest

from primitives.field import FF, GOLDILOCKS_PRIME, get_extension_field, to_coeffs
from primitives.hashing import Blake3_256, Sha3_256
from primitives.transcript import Transcript


class TestTranscript:

    def test_deterministic(self) -> None:
        a, b = Transcript(Blake3_256(), b"seed"), Transcript(Blake3_256(), b"seed")
        for t in (a, b):
            t.put(b"root")
            t.put_elements([1, 2, 3])
        assert a.get_field(FF) == b.get_field(FF)
        assert a.get_permutations(8, 6) == b.get_permutations(8, 6)

    def test_absorption_changes_challenges(self) -> None:
        a, b = Transcript(Sha3_256()), Transcript(Sha3_256())
        a.put_elements([1])
        b.put_elements([2])
        assert a.get_state() != b.get_state()
        assert a.get_field(FF) != b.get_field(FF)

    def test_successive_draws_differ(self) -> None:
        t = Transcript(Blake3_256())
        assert t.get_field(FF) != t.get_field(FF)

    def test_draw_does_not_change_state(self) -> None:
        t = Transcript(Blake3_256())
        state = t.get_state()
        t.get_field(FF)
        assert t.get_state() == state

    @pytest.mark.parametrize("degree", [2, 3])
    def test_extension_draw(self, degree: int) -> None:
        field = get_extension_field(degree)
        value = Transcript(Blake3_256()).get_field(field)
        coeffs = to_coeffs(value)
        assert len(coeffs) == degree
        assert all(0 <= c < GOLDILOCKS_PRIME for c in coeffs)


class TestPermutations:

    def test_sorted_unique_in_range(self) -> None:
        positions = Transcript(Blake3_256()).get_permutations(28, 7)
        assert positions == sorted(set(positions))
        assert len(positions) == 28
        assert all(0 <= p < 128 for p in positions)

    def test_capped_at_domain_size(self) -> None:
        positions = Transcript(Blake3_256()).get_permutations(28, 3)
        assert positions == list(range(8))
