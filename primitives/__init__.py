"""Primitives - Low-level cryptographic and mathematical building blocks."""

from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    SHIFT,
    W,
    elements_to_ints,
    from_coeffs,
    get_extension_field,
    get_omega,
    ints_to_elements,
    lift,
    to_coeffs,
)
from primitives.hashing import (
    HASHERS,
    Blake3_192,
    Blake3_256,
    ElementHasher,
    HashFunction,
    Sha3_256,
    get_hasher,
    grinding,
    verify_grinding,
)
from primitives.merkle_tree import (
    LeafData,
    MerkleRoot,
    MerkleTree,
    QueryProof,
    verify_query_proof,
)
from primitives.ntt import NTT
from primitives.transcript import Transcript

__all__ = [
    # Field
    "FF",
    "GOLDILOCKS_PRIME",
    "SHIFT",
    "W",
    "get_omega",
    "get_extension_field",
    "lift",
    "to_coeffs",
    "from_coeffs",
    "elements_to_ints",
    "ints_to_elements",
    # NTT
    "NTT",
    # Hashing
    "HashFunction",
    "ElementHasher",
    "Blake3_192",
    "Blake3_256",
    "Sha3_256",
    "HASHERS",
    "get_hasher",
    "grinding",
    "verify_grinding",
    # Merkle Tree
    "MerkleTree",
    "MerkleRoot",
    "QueryProof",
    "LeafData",
    "verify_query_proof",
    # Transcript
    "Transcript",
]
