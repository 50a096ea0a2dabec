"""Tests for the Merkle tree commitment."""

import pytest

from primitives.hashing import Blake3_192, Sha3_256
from primitives.merkle_tree import MerkleTree, QueryProof, verify_query_proof


def _leaves(n: int):
    return [[i, 2 * i + 1, 3 * i + 2] for i in range(n)]


class TestMerkleTree:

    @pytest.mark.parametrize("n_leaves", [1, 2, 8, 32])
    def test_every_leaf_verifies(self, n_leaves: int) -> None:
        hasher = Blake3_192()
        tree = MerkleTree(hasher)
        tree.merkelize(_leaves(n_leaves))
        root = tree.get_root()
        assert len(root) == hasher.digest_size
        for idx in range(n_leaves):
            proof = tree.get_query_proof(idx)
            assert proof.v == _leaves(n_leaves)[idx]
            assert len(proof.mp) == n_leaves.bit_length() - 1
            assert verify_query_proof(hasher, root, proof, n_leaves)

    def test_single_leaf_root_is_leaf_hash(self) -> None:
        hasher = Sha3_256()
        tree = MerkleTree(hasher)
        tree.merkelize([[4, 5]])
        assert tree.get_root() == hasher.hash_elements([4, 5])

    def test_non_power_of_two_rejected(self) -> None:
        with pytest.raises(ValueError):
            MerkleTree(Sha3_256()).merkelize(_leaves(3))

    def test_root_before_merkelize(self) -> None:
        with pytest.raises(ValueError):
            MerkleTree(Sha3_256()).get_root()

    def test_query_out_of_range(self) -> None:
        tree = MerkleTree(Sha3_256())
        tree.merkelize(_leaves(4))
        with pytest.raises(ValueError):
            tree.get_query_proof(4)


class TestVerifyQueryProof:

    @pytest.fixture
    def committed(self):
        hasher = Sha3_256()
        tree = MerkleTree(hasher)
        tree.merkelize(_leaves(8))
        return hasher, tree

    def test_tampered_value(self, committed) -> None:
        hasher, tree = committed
        proof = tree.get_query_proof(3)
        proof.v[1] += 1
        assert not verify_query_proof(hasher, tree.get_root(), proof, 8)

    def test_wrong_index(self, committed) -> None:
        hasher, tree = committed
        proof = tree.get_query_proof(3)
        moved = QueryProof(idx=2, v=proof.v, mp=proof.mp)
        assert not verify_query_proof(hasher, tree.get_root(), moved, 8)

    def test_wrong_path_length(self, committed) -> None:
        hasher, tree = committed
        proof = tree.get_query_proof(3)
        assert not verify_query_proof(hasher, tree.get_root(), proof, 16)

    def test_unreduced_value(self, committed) -> None:
        hasher, tree = committed
        proof = tree.get_query_proof(0)
        proof.v[0] = -1
        assert not verify_query_proof(hasher, tree.get_root(), proof, 8)
