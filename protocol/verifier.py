"""STARK proof verification.

The verifier checks that a proof correctly demonstrates knowledge of a valid
execution trace satisfying the AIR constraints. Verification consists of:

1. Fiat-Shamir transcript reconstruction - re-derive every challenge from the proof commitments
2. Out-of-domain check - the composition segments opened at z agree with the
   constraints evaluated on the trace opened at z and g*z
3. Proof-of-work verification - the nonce meets the grinding requirement
4. Merkle verification - queried trace and composition rows match their commitments
5. FRI verification - the DEEP composition evaluated at the queried rows is of low degree

Any failed check raises VerifierError; a proof is accepted when verify() returns.
"""

import logging
from typing import Any, List, Type

import numpy as np

from primitives.field import FF, SHIFT, get_omega, ints_to_elements, lift, log2
from primitives.hashing import ElementHasher, verify_grinding
from primitives.merkle_tree import MerkleRoot, QueryProof, verify_query_proof
from primitives.transcript import Transcript
from protocol.air import Air, EvaluationFrame
from protocol.composition import (
    ConstraintCoefficients,
    DeepCoefficients,
    OodFrame,
    combine_segments,
    draw_ood_point,
    evaluate_constraints,
    evaluate_deep,
)
from protocol.errors import VerifierError
from protocol.fri import FriVerifier
from protocol.proof import StarkProof

logger = logging.getLogger(__name__)

# Nonces are absorbed as u64
MAX_NONCE = 1 << 64


# --- Main Entry Point ---

def verify(air_class: Type[Air], proof: StarkProof, pub_inputs: Any, hasher: ElementHasher) -> None:
    """Verify a STARK proof against public inputs.

    Args:
        air_class: AIR the proof claims to satisfy
        proof: Proof produced by Prover.prove
        pub_inputs: Public inputs the proof must be bound to
        hasher: Hash strategy the proof was generated with

    Raises:
        VerifierError: If the proof is rejected
    """
    options = proof.options
    try:
        air = air_class(proof.trace_info, pub_inputs, options)
    except ValueError as e:
        raise VerifierError(f"proof parameters are not supported: {e}") from e
    context = air.context
    field = options.challenge_field

    n = air.trace_length
    width = air.trace_info.width
    lde_size = context.lde_domain_size
    num_segments = context.num_composition_segments

    transcript = Transcript(hasher, hasher.hash_elements(air.seed_elements()))

    # --- Replay commitments and challenges ---
    transcript.put(proof.trace_root)
    constraint_coeffs = ConstraintCoefficients.draw(transcript, air, field)
    transcript.put(proof.composition_root)
    z = draw_ood_point(transcript, field, n, lde_size)
    gz = field(int(air.trace_domain_generator)) * z

    # --- Out-of-domain consistency ---
    ood_current = _decode(field, proof.ood_current, width, "out-of-domain trace frame")
    ood_next = _decode(field, proof.ood_next, width, "out-of-domain trace frame")
    ood_composition = _decode(field, proof.ood_composition, num_segments, "out-of-domain composition")

    frame = EvaluationFrame(
        current=[ood_current[i] for i in range(width)],
        next=[ood_next[i] for i in range(width)],
    )
    expected = evaluate_constraints(air, constraint_coeffs, frame, z, field)
    segments_at_z = [ood_composition[s] for s in range(num_segments)]
    if expected != combine_segments(segments_at_z, z, n):
        raise VerifierError("constraint evaluations at the out-of-domain point are inconsistent")
    transcript.put_elements(proof.ood_current + proof.ood_next + proof.ood_composition)

    deep_coeffs = DeepCoefficients.draw(transcript, width, num_segments, field)
    fri_verifier = FriVerifier(proof.fri, lde_size, n, options, hasher, field, transcript)

    # --- Proof of work and query positions ---
    if not 0 <= proof.pow_nonce < MAX_NONCE:
        raise VerifierError("invalid proof-of-work nonce")
    if not verify_grinding(hasher, transcript.get_state(), proof.pow_nonce, options.grinding_factor):
        raise VerifierError("query seed proof-of-work verification failed")
    transcript.put_int(proof.pow_nonce)
    positions = transcript.get_permutations(options.num_queries, log2(lde_size))

    # --- Queried rows ---
    trace_rows = _verify_rows(
        hasher, proof.trace_root, proof.trace_queries, positions, lde_size, width, FF, "trace"
    )
    composition_rows = _verify_rows(
        hasher, proof.composition_root, proof.composition_queries, positions, lde_size,
        num_segments, field, "composition",
    )
    trace_rows = lift(trace_rows, field)

    # --- DEEP composition at the queried positions, then FRI ---
    x = field(int(SHIFT)) * field(get_omega(log2(lde_size))) ** np.array(positions)
    ood_frame = OodFrame(current=frame.current, next=frame.next, composition=segments_at_z)
    deep = evaluate_deep(
        deep_coeffs,
        [trace_rows[:, i] for i in range(width)],
        [composition_rows[:, s] for s in range(num_segments)],
        ood_frame,
        x,
        z,
        gz,
    )
    fri_verifier.verify(positions, [deep[i] for i in range(len(positions))])
    logger.debug("Verified proof of %d trace rows at %d positions", n, len(positions))


# --- Helpers ---

def _decode(field, data: List[int], count: int, what: str):
    try:
        values = ints_to_elements(field, data)
    except ValueError as e:
        raise VerifierError(f"malformed {what}: {e}") from e
    if len(values) != count:
        raise VerifierError(f"{what} holds {len(values)} values, expected {count}")
    return values


def _verify_rows(
    hasher: ElementHasher,
    root: MerkleRoot,
    queries: List[QueryProof],
    positions: List[int],
    height: int,
    n_cols: int,
    field,
    what: str,
):
    """Check row openings against a commitment; return them as a (len(positions), n_cols) array."""
    if len(queries) != len(positions):
        raise VerifierError(f"expected {len(positions)} {what} queries, got {len(queries)}")

    data: List[int] = []
    for position, query in zip(positions, queries):
        if query.idx != position:
            raise VerifierError(f"{what} query opens row {query.idx}, expected {position}")
        if not verify_query_proof(hasher, root, query, height):
            raise VerifierError(f"{what} query at position {position} does not match commitment")
        data.extend(query.v)

    values = _decode(field, data, len(positions) * n_cols, f"{what} queries")
    return values.reshape((len(positions), n_cols))
