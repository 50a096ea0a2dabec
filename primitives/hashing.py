"""Hash functions used for commitments and the Fiat-Shamir transcript.

A hasher is selected once by HashFunction and passed around as a value; the
prover, verifier, Merkle trees and transcript all take the same instance.
"""

import hashlib
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List

from blake3 import blake3

from primitives.field import ELEMENT_BYTES, GOLDILOCKS_PRIME

# --- Hash Selection ---

class HashFunction(Enum):
    """Hash functions a proof can be generated with."""
    BLAKE3_192 = "blake3_192"
    BLAKE3_256 = "blake3_256"
    SHA3_256 = "sha3_256"
    RP64_256 = "rp64_256"
    RP_JIVE64_256 = "rp_jive64_256"


# --- Hashers ---

class ElementHasher(ABC):
    """Byte-oriented hash with helpers for field elements."""

    name: str = ""
    digest_size: int = 32

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        """Hash arbitrary bytes to a digest of digest_size bytes."""

    def merge(self, left: bytes, right: bytes) -> bytes:
        """Hash two digests into one (Merkle node, transcript reseed)."""
        return self.hash(left + right)

    def merge_with_int(self, seed: bytes, value: int) -> bytes:
        return self.hash(seed + value.to_bytes(8, "little"))

    def hash_elements(self, values: List[int]) -> bytes:
        """Hash field elements given as ints, each encoded as 8 little-endian bytes."""
        return self.hash(b"".join(int(v).to_bytes(ELEMENT_BYTES, "little") for v in values))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Blake3_192(ElementHasher):
    """BLAKE3 truncated to 192 bits."""
    name = "blake3_192"
    digest_size = 24

    def hash(self, data: bytes) -> bytes:
        return blake3(data).digest(length=self.digest_size)


class Blake3_256(ElementHasher):
    name = "blake3_256"
    digest_size = 32

    def hash(self, data: bytes) -> bytes:
        return blake3(data).digest()


class Sha3_256(ElementHasher):
    name = "sha3_256"
    digest_size = 32

    def hash(self, data: bytes) -> bytes:
        return hashlib.sha3_256(data).digest()


HASHERS: Dict[HashFunction, type] = {
    HashFunction.BLAKE3_192: Blake3_192,
    HashFunction.BLAKE3_256: Blake3_256,
    HashFunction.SHA3_256: Sha3_256,
}


def get_hasher(hash_fn: HashFunction) -> ElementHasher:
    """Instantiate the hasher for hash_fn.

    Raises:
        KeyError: If hash_fn has no byte-oriented implementation
    """
    if hash_fn not in HASHERS:
        raise KeyError(
            f"No hasher for '{hash_fn.value}'. "
            f"Available: {[h.value for h in HASHERS]}"
        )
    return HASHERS[hash_fn]()


# --- Grinding (proof-of-work) ---

def grinding_bits(hasher: ElementHasher, challenge: bytes, nonce: int) -> int:
    """Number of trailing zero bits of the first 8 bytes of H(challenge || nonce)."""
    value = int.from_bytes(hasher.merge_with_int(challenge, nonce)[:8], "little")
    if value == 0:
        return 64
    return (value & -value).bit_length() - 1


def grinding(hasher: ElementHasher, challenge: bytes, pow_bits: int) -> int:
    """Find the smallest nonce whose hash with challenge has pow_bits trailing zeros."""
    if pow_bits == 0:
        return 0
    nonce = 0
    while grinding_bits(hasher, challenge, nonce) < pow_bits:
        nonce += 1
    return nonce


def verify_grinding(hasher: ElementHasher, challenge: bytes, nonce: int, pow_bits: int) -> bool:
    if pow_bits == 0:
        return True
    return grinding_bits(hasher, challenge, nonce) >= pow_bits


def reduce_to_field(data: bytes) -> int:
    """Interpret the first 8 bytes as a little-endian u64; -1 if not below p."""
    value = int.from_bytes(data[:8], "little")
    return value if value < GOLDILOCKS_PRIME else -1
