"""Tests for hash strategies and grinding."""

import hashlib

import pytest
from blake3 import blake3

from primitives.field import GOLDILOCKS_PRIME
from primitives.hashing import (
    Blake3_192,
    Blake3_256,
    HashFunction,
    Sha3_256,
    get_hasher,
    grinding,
    grinding_bits,
    reduce_to_field,
    verify_grinding,
)


class TestHashers:

    @pytest.mark.parametrize("hasher,size", [(Blake3_192(), 24), (Blake3_256(), 32), (Sha3_256(), 32)])
    def test_digest_size(self, hasher, size: int) -> None:
        assert len(hasher.hash(b"padovan")) == size
        assert hasher.digest_size == size

    def test_blake3_192_is_truncated_blake3_256(self) -> None:
        data = b"three terms per step"
        assert Blake3_192().hash(data) == Blake3_256().hash(data)[:24]

    def test_matches_reference_implementations(self) -> None:
        assert Blake3_256().hash(b"abc") == blake3(b"abc").digest()
        assert Sha3_256().hash(b"abc") == hashlib.sha3_256(b"abc").digest()

    def test_hash_elements_encoding(self) -> None:
        """Elements are hashed as 8-byte little-endian words."""
        hasher = Blake3_256()
        expected = hasher.hash((1).to_bytes(8, "little") + (2).to_bytes(8, "little"))
        assert hasher.hash_elements([1, 2]) == expected

    def test_merge_is_ordered(self) -> None:
        hasher = Sha3_256()
        a, b = hasher.hash(b"a"), hasher.hash(b"b")
        assert hasher.merge(a, b) != hasher.merge(b, a)


class TestHasherSelection:

    @pytest.mark.parametrize("hash_fn,cls", [
        (HashFunction.BLAKE3_192, Blake3_192),
        (HashFunction.BLAKE3_256, Blake3_256),
        (HashFunction.SHA3_256, Sha3_256),
    ])
    def test_supported(self, hash_fn: HashFunction, cls) -> None:
        assert isinstance(get_hasher(hash_fn), cls)

    @pytest.mark.parametrize("hash_fn", [HashFunction.RP64_256, HashFunction.RP_JIVE64_256])
    def test_algebraic_hashes_unavailable(self, hash_fn: HashFunction) -> None:
        with pytest.raises(KeyError):
            get_hasher(hash_fn)


class TestGrinding:

    @pytest.mark.parametrize("pow_bits", [0, 1, 4, 8])
    def test_nonce_meets_target(self, pow_bits: int) -> None:
        hasher = Blake3_256()
        challenge = hasher.hash(b"challenge")
        nonce = grinding(hasher, challenge, pow_bits)
        assert grinding_bits(hasher, challenge, nonce) >= pow_bits or pow_bits == 0
        assert verify_grinding(hasher, challenge, nonce, pow_bits)

    def test_nonce_is_smallest(self) -> None:
        hasher = Blake3_256()
        challenge = hasher.hash(b"challenge")
        nonce = grinding(hasher, challenge, 6)
        assert all(grinding_bits(hasher, challenge, n) < 6 for n in range(nonce))

    def test_wrong_nonce_rejected(self) -> None:
        hasher = Blake3_256()
        challenge = hasher.hash(b"challenge")
        nonce = grinding(hasher, challenge, 8)
        bad = next(n for n in range(nonce + 1, nonce + 10000) if grinding_bits(hasher, challenge, n) < 8)
        assert not verify_grinding(hasher, challenge, bad, 8)


class TestReduceToField:

    def test_below_prime(self) -> None:
        assert reduce_to_field((5).to_bytes(8, "little")) == 5

    def test_at_or_above_prime_rejected(self) -> None:
        assert reduce_to_field(GOLDILOCKS_PRIME.to_bytes(8, "little")) == -1
        assert reduce_to_field(b"\xff" * 8) == -1
