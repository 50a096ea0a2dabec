"""
Fiat-Shamir transcript implementation using a hash chain.

The transcript absorbs commitments and produces random challenges in a
deterministic, pseudorandom manner. The state is a single digest; every
absorption replaces it with H(state || H(data)) and resets the draw counter,
every draw hashes the state with the incremented counter.
"""

from typing import List

from primitives.field import from_coeffs
from primitives.hashing import ElementHasher, reduce_to_field

# Draws rejected because the sampled u64 is not below p are retried this many times
MAX_DRAW_ATTEMPTS = 1000


class Transcript:
    """
    Fiat-Shamir transcript over an ElementHasher.

    Attributes:
        hasher: Hash strategy shared with the commitments
        state: Current digest
        counter: Number of draws since the last absorption
    """

    def __init__(self, hasher: ElementHasher, seed: bytes = b""):
        self.hasher = hasher
        self.state = hasher.hash(seed)
        self.counter = 0

    def put(self, data: bytes) -> None:
        """Absorb raw bytes (a digest or serialized values)."""
        self.state = self.hasher.merge(self.state, self.hasher.hash(data))
        self.counter = 0

    def put_elements(self, values: List[int]) -> None:
        """Absorb field elements given as coefficient ints."""
        self.state = self.hasher.merge(self.state, self.hasher.hash_elements(values))
        self.counter = 0

    def put_int(self, value: int) -> None:
        """Absorb a u64 (grinding nonce)."""
        self.state = self.hasher.merge_with_int(self.state, value)
        self.counter = 0

    def get_state(self) -> bytes:
        """Get current state digest (grinding challenge)."""
        return self.state

    def _next_digest(self) -> bytes:
        self.counter += 1
        return self.hasher.merge_with_int(self.state, self.counter)

    def _get_fields1(self) -> int:
        """Squeeze one base field element, rejecting u64 samples >= p."""
        for _ in range(MAX_DRAW_ATTEMPTS):
            value = reduce_to_field(self._next_digest())
            if value >= 0:
                return value
        raise RuntimeError("failed to draw a field element from the transcript")

    def get_field(self, field):
        """Draw one element of field (base field or an extension)."""
        return from_coeffs(field, [self._get_fields1() for _ in range(field.degree)])

    def get_permutations(self, n: int, n_bits: int) -> List[int]:
        """
        Draw up to n distinct values in [0, 2^n_bits), returned sorted.

        Fewer than n values come back only when the range is smaller than n.
        """
        domain_size = 1 << n_bits
        target = min(n, domain_size)
        mask = domain_size - 1

        result = set()
        for _ in range(MAX_DRAW_ATTEMPTS * max(n, 1)):
            if len(result) >= target:
                break
            value = int.from_bytes(self._next_digest()[:8], "little")
            result.add(value & mask)

        if len(result) < target:
            raise RuntimeError(f"failed to draw {target} distinct query positions")
        return sorted(result)
