"""Binary Merkle tree commitment over field-element leaves."""

from dataclasses import dataclass, field
from typing import List, Optional

from primitives.field import GOLDILOCKS_PRIME, is_power_of_two
from primitives.hashing import ElementHasher

# --- Type Aliases ---

MerkleRoot = bytes
LeafData = List[int]


# --- Data Classes ---

@dataclass
class QueryProof:
    """Query proof containing leaf values and Merkle authentication path.

    Attributes:
        idx: Leaf index the proof opens
        v: Leaf values - flattened coefficient ints of every element in the leaf
        mp: Merkle path - sibling digests from leaf to root
    """
    idx: int = 0
    v: LeafData = field(default_factory=list)
    mp: List[bytes] = field(default_factory=list)


# --- Merkle Tree ---

class MerkleTree:
    """Binary Merkle tree; nodes are stored heap-style with the root at index 1."""

    def __init__(self, hasher: ElementHasher):
        self.hasher = hasher
        self.height = 0
        self.nodes: List[bytes] = []
        self.source_data: Optional[List[LeafData]] = None

    # --- Core Operations ---

    def merkelize(self, leaves: List[LeafData]) -> None:
        """Build Merkle tree from leaf rows (count must be a power of two)."""
        height = len(leaves)
        if not is_power_of_two(height):
            raise ValueError(f"number of leaves must be a power of two, got {height}")

        self.height = height
        self.source_data = [list(leaf) for leaf in leaves]
        self.nodes = [b""] * (2 * height)

        for i, leaf in enumerate(self.source_data):
            self.nodes[height + i] = self.hasher.hash_elements(leaf)
        for i in range(height - 1, 0, -1):
            self.nodes[i] = self.hasher.merge(self.nodes[2 * i], self.nodes[2 * i + 1])

    def get_root(self) -> MerkleRoot:
        """Return the Merkle root commitment."""
        if self.height == 0:
            raise ValueError("tree has not been merkelized")
        # A single leaf sits at index 1 and is its own root
        return self.nodes[1]

    def get_query_proof(self, idx: int) -> QueryProof:
        """Extract leaf values and authentication path for leaf idx.

        Raises:
            ValueError: If idx out of range
        """
        if idx < 0 or idx >= self.height:
            raise ValueError(f"Query index {idx} out of range [0, {self.height})")

        path = []
        node = self.height + idx
        while node > 1:
            path.append(self.nodes[node ^ 1])
            node >>= 1
        return QueryProof(idx=idx, v=list(self.source_data[idx]), mp=path)


def verify_query_proof(
    hasher: ElementHasher,
    root: MerkleRoot,
    proof: QueryProof,
    height: int,
) -> bool:
    """Check that proof opens leaf proof.idx of a tree with the given root and height."""
    if proof.idx < 0 or proof.idx >= height:
        return False
    if (1 << len(proof.mp)) != height:
        return False
    if any(not 0 <= v < GOLDILOCKS_PRIME for v in proof.v):
        return False

    digest = hasher.hash_elements(proof.v)
    node = height + proof.idx
    for sibling in proof.mp:
        if node & 1:
            digest = hasher.merge(sibling, digest)
        else:
            digest = hasher.merge(digest, sibling)
        node >>= 1
    return digest == root
