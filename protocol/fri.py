"""FRI low-degree test: folding, commitment, and verification.

A layer of size M over the coset s*<w_M> is committed in M/k leaves; leaf g
holds the k values at s*w_M^(g + j*M/k), j < k, which are the k points sharing
the image (s*w_M^g)^k in the next layer. Folding with challenge alpha maps

    f(x) = sum_m x^m f_m(x^k)   to   f'(y) = sum_m alpha^m f_m(y)

so a query position p of layer i becomes position p mod (M/k) of layer i+1.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from primitives.field import SHIFT, elements_to_ints, get_omega, ints_to_elements, log2
from primitives.hashing import ElementHasher
from primitives.merkle_tree import MerkleRoot, MerkleTree, QueryProof, verify_query_proof
from primitives.polynomial import coset_to_coefficients, evaluate
from primitives.transcript import Transcript
from protocol.errors import VerifierError
from protocol.options import ProofOptions

logger = logging.getLogger(__name__)


# --- Proof Data ---

@dataclass
class FriProof:
    """FRI proof: layer roots, per-layer query openings, remainder coefficients."""
    roots: List[MerkleRoot] = field(default_factory=list)
    queries: List[List[QueryProof]] = field(default_factory=list)
    remainder: List[int] = field(default_factory=list)


# --- Layer Schedule ---

def fri_layer_sizes(
    domain_size: int,
    degree_bound: int,
    options: ProofOptions,
) -> Tuple[List[Tuple[int, int]], Tuple[int, int]]:
    """Return (domain_size, degree_bound) of every folded layer and of the remainder."""
    k = options.fri_folding_factor
    layers = []
    while degree_bound > options.fri_remainder_max_degree + 1 and domain_size > k:
        layers.append((domain_size, degree_bound))
        domain_size //= k
        degree_bound = max(1, -(-degree_bound // k))
    return layers, (domain_size, degree_bound)


# --- Folding ---

def fold_groups(groups: List, alpha, x_inv, field, folding_factor: int):
    """Fold k sibling values into one value of the next layer.

    groups[j] holds f(x0 * zeta^j) (arrays or scalars), x_inv = x0^-1.
    """
    zeta_inv = field(get_omega(log2(folding_factor))) ** -1
    k_inv = field(folding_factor) ** -1

    # INTT of size k: a_m = x0^m * f_m(x0^k)
    coeffs = []
    for m in range(folding_factor):
        acc = groups[0] * field(0)
        for j in range(folding_factor):
            acc = acc + groups[j] * zeta_inv ** ((j * m) % folding_factor)
        coeffs.append(acc * k_inv)

    # f'(x0^k) = sum_m a_m * (alpha / x0)^m
    point = alpha * x_inv
    result = coeffs[-1]
    for m in range(folding_factor - 2, -1, -1):
        result = result * point + coeffs[m]
    return result


def _layer_leaves(values, folding_factor: int) -> List[List[int]]:
    """Group a layer into leaves of k sibling values, flattened to ints."""
    rows = len(values) // folding_factor
    degree = type(values).degree
    flat = elements_to_ints(values)
    elems = [flat[i * degree:(i + 1) * degree] for i in range(len(values))]
    leaves = []
    for g in range(rows):
        leaf: List[int] = []
        for j in range(folding_factor):
            leaf.extend(elems[j * rows + g])
        leaves.append(leaf)
    return leaves


# --- Prover ---

class FriProver:
    """Commit-fold loop and query openings for one polynomial."""

    def __init__(self, options: ProofOptions, hasher: ElementHasher, field):
        self.options = options
        self.hasher = hasher
        self.field = field
        self.trees: List[MerkleTree] = []
        self.layer_sizes: List[int] = []
        self.remainder = None

    def build_layers(self, evaluations, degree_bound: int, transcript: Transcript) -> None:
        """Commit every layer, draw its folding challenge, and absorb the remainder."""
        k = self.options.fri_folding_factor
        layers, (_, final_bound) = fri_layer_sizes(len(evaluations), degree_bound, self.options)

        shift = self.field(int(SHIFT))
        current = evaluations
        for size, _bound in layers:
            tree = MerkleTree(self.hasher)
            tree.merkelize(_layer_leaves(current, k))
            transcript.put(tree.get_root())
            alpha = transcript.get_field(self.field)

            rows = size // k
            omega = self.field(get_omega(log2(size)))
            x_inv = (shift * omega ** np.arange(rows)) ** -1
            groups = [current[j * rows:(j + 1) * rows] for j in range(k)]
            current = fold_groups(groups, alpha, x_inv, self.field, k)

            self.trees.append(tree)
            self.layer_sizes.append(size)
            shift = shift ** k

        self.remainder = coset_to_coefficients(current, shift, self.field)[:final_bound]
        transcript.put_elements(elements_to_ints(self.remainder))
        logger.debug(
            "Computed %d FRI layers; remainder of degree < %d", len(self.trees), final_bound
        )

    def build_proof(self, positions: List[int]) -> FriProof:
        """Open every layer at the images of positions."""
        k = self.options.fri_folding_factor
        queries = []
        for tree, size in zip(self.trees, self.layer_sizes):
            rows = size // k
            groups = sorted({p % rows for p in positions})
            queries.append([tree.get_query_proof(g) for g in groups])
            positions = groups

        return FriProof(
            roots=[tree.get_root() for tree in self.trees],
            queries=queries,
            remainder=elements_to_ints(self.remainder),
        )


# --- Verifier ---

class FriVerifier:
    """Replays FRI commitments on the transcript, then checks query openings."""

    def __init__(
        self,
        proof: FriProof,
        lde_domain_size: int,
        degree_bound: int,
        options: ProofOptions,
        hasher: ElementHasher,
        field,
        transcript: Transcript,
    ):
        self.proof = proof
        self.lde_domain_size = lde_domain_size
        self.options = options
        self.hasher = hasher
        self.field = field

        layers, (_, final_bound) = fri_layer_sizes(lde_domain_size, degree_bound, options)
        if len(proof.roots) != len(layers):
            raise VerifierError(
                f"FRI proof has {len(proof.roots)} layers, expected {len(layers)}"
            )
        if len(proof.queries) != len(layers):
            raise VerifierError("FRI proof is missing layer openings")

        self.alphas = []
        for root in proof.roots:
            transcript.put(root)
            self.alphas.append(transcript.get_field(field))

        if not proof.remainder:
            raise VerifierError("FRI remainder is empty")
        try:
            self.remainder = ints_to_elements(field, proof.remainder)
        except ValueError as e:
            raise VerifierError(f"malformed FRI remainder: {e}") from e
        if len(self.remainder) > final_bound:
            raise VerifierError(
                f"FRI remainder has {len(self.remainder)} coefficients, bound is {final_bound}"
            )
        transcript.put_elements(proof.remainder)

    def verify(self, positions: List[int], evaluations: List) -> None:
        """Check the committed layers are consistent with evaluations at positions.

        Raises:
            VerifierError: On any Merkle, folding, or remainder mismatch
        """
        k = self.options.fri_folding_factor
        size = self.lde_domain_size
        shift = self.field(int(SHIFT))
        expected: Dict[int, object] = dict(zip(positions, evaluations))

        for layer, (root, alpha) in enumerate(zip(self.proof.roots, self.alphas)):
            rows = size // k
            omega = self.field(get_omega(log2(size)))
            openings = {q.idx: q for q in self.proof.queries[layer]}
            folded_values: Dict[int, object] = {}

            for position, value in sorted(expected.items()):
                g, j = position % rows, position // rows
                opening = openings.get(g)
                if opening is None:
                    raise VerifierError(f"FRI layer {layer} has no opening for position {g}")
                if not verify_query_proof(self.hasher, root, opening, rows):
                    raise VerifierError(f"FRI layer {layer} opening does not match commitment")
                siblings = self._decode(opening, layer)
                if siblings[j] != value:
                    raise VerifierError(f"FRI layer {layer} value mismatch at position {position}")

                x_inv = (shift * omega ** g) ** -1
                folded = fold_groups([siblings[i] for i in range(k)], alpha, x_inv, self.field, k)
                folded_values[g] = folded

            expected = folded_values
            size = rows
            shift = shift ** k

        omega = self.field(get_omega(log2(size)))
        for position, value in sorted(expected.items()):
            x = shift * omega ** position
            if evaluate(self.remainder, x) != value:
                raise VerifierError(f"FRI remainder mismatch at position {position}")

    def _decode(self, opening: QueryProof, layer: int):
        k = self.options.fri_folding_factor
        try:
            siblings = ints_to_elements(self.field, opening.v)
        except ValueError as e:
            raise VerifierError(f"malformed FRI layer {layer} opening: {e}") from e
        if len(siblings) != k:
            raise VerifierError(f"FRI layer {layer} opening holds {len(siblings)} values, expected {k}")
        return siblings
