"""Top-level STARK proof generation."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, List, Type

import numpy as np

from primitives.field import SHIFT, elements_to_ints, get_omega, lift, log2, to_coeffs
from primitives.hashing import ElementHasher, grinding
from primitives.merkle_tree import MerkleTree
from primitives.polynomial import coset_to_coefficients, evaluate, extend_to_coset, to_coefficients
from primitives.transcript import Transcript
from protocol.air import Air, EvaluationFrame, TraceInfo
from protocol.composition import (
    ConstraintCoefficients,
    DeepCoefficients,
    OodFrame,
    draw_ood_point,
    evaluate_constraints,
    evaluate_deep,
)
from protocol.errors import ProverError
from protocol.fri import FriProver
from protocol.options import ProofOptions
from protocol.proof import StarkProof
from protocol.trace import TraceTable

logger = logging.getLogger(__name__)


class Prover(ABC):
    """Generic STARK prover bound to one AIR type.

    Subclasses set `air_class`, build traces for their computation and say
    how public inputs are read off a finished trace; `prove` does the rest.
    The hasher is chosen once at construction and used for every commitment
    and for the transcript.
    """

    air_class: Type[Air]

    def __init__(self, options: ProofOptions, hasher: ElementHasher):
        self._options = options
        self.hasher = hasher

    @property
    def options(self) -> ProofOptions:
        return self._options

    @abstractmethod
    def get_pub_inputs(self, trace: TraceTable) -> Any:
        """Public inputs the verifier will be given out-of-band."""

    def prove(self, trace: TraceTable) -> StarkProof:
        """Generate a proof that `trace` satisfies `air_class`.

        Raises:
            ProverError: If the trace shape or options cannot be proven
        """
        try:
            trace_info = TraceInfo(trace.width, trace.length)
        except ValueError as e:
            raise ProverError(str(e)) from e
        air = self.air_class(trace_info, self.get_pub_inputs(trace), self._options)
        return generate_proof(air, trace, self.hasher)


def _rows_to_leaves(rows: np.ndarray) -> List[List[int]]:
    """Split a (height, n_cols) field array into per-row coefficient ints."""
    flat = elements_to_ints(rows)
    row_len = len(flat) // rows.shape[0]
    return [flat[i * row_len:(i + 1) * row_len] for i in range(rows.shape[0])]


def generate_proof(air: Air, trace: TraceTable, hasher: ElementHasher) -> StarkProof:
    """Commit to the trace, prove the constraints hold, and open the commitments."""
    options = air.options
    context = air.context
    field = options.challenge_field

    n = trace.length
    width = trace.width
    lde_size = context.lde_domain_size
    blowup = options.blowup_factor
    num_segments = context.num_composition_segments
    if num_segments > blowup:
        raise ProverError(
            f"blowup factor {blowup} is too small for {num_segments} composition segments"
        )

    transcript = Transcript(hasher, hasher.hash_elements(air.seed_elements()))

    # === STAGE 1: Commit to the trace low-degree extension ===
    now = time.perf_counter()
    trace_coeffs = to_coefficients(trace.data)
    trace_lde = extend_to_coset(trace_coeffs, lde_size)
    trace_tree = MerkleTree(hasher)
    trace_tree.merkelize(_rows_to_leaves(trace_lde))
    transcript.put(trace_tree.get_root())
    logger.debug(
        "Extended execution trace of %d registers from 2^%d to 2^%d steps (%dx blowup) "
        "and committed in %d ms",
        width, log2(n), log2(lde_size), blowup, (time.perf_counter() - now) * 1000,
    )

    # === STAGE 2: Constraint composition ===
    now = time.perf_counter()
    constraint_coeffs = ConstraintCoefficients.draw(transcript, air, field)

    lde = lift(trace_lde, field)
    x = field(int(SHIFT)) * field(get_omega(log2(lde_size))) ** np.arange(lde_size)
    next_rows = (np.arange(lde_size) + blowup) % lde_size
    frame = EvaluationFrame(
        current=[lde[:, i] for i in range(width)],
        next=[lde[next_rows, i] for i in range(width)],
    )
    composition = evaluate_constraints(air, constraint_coeffs, frame, x, field)

    composition_coeffs = coset_to_coefficients(composition, None, field)
    segment_coeffs = [composition_coeffs[s * n:(s + 1) * n] for s in range(num_segments)]
    segments = [extend_to_coset(c, lde_size, None, field) for c in segment_coeffs]

    segment_rows = field.Zeros((lde_size, num_segments))
    for s, segment in enumerate(segments):
        segment_rows[:, s] = segment
    composition_tree = MerkleTree(hasher)
    composition_tree.merkelize(_rows_to_leaves(segment_rows))
    transcript.put(composition_tree.get_root())
    logger.debug(
        "Evaluated %d transition constraints and %d assertions into %d composition "
        "segment(s) in %d ms",
        context.num_transition_constraints, context.num_assertions, num_segments,
        (time.perf_counter() - now) * 1000,
    )

    # === STAGE 3: Out-of-domain openings ===
    z = draw_ood_point(transcript, field, n, lde_size)
    gz = field(int(air.trace_domain_generator)) * z
    lifted_coeffs = lift(trace_coeffs, field)
    ood_current = evaluate(lifted_coeffs, z)
    ood_next = evaluate(lifted_coeffs, gz)
    ood_composition = [evaluate(c, z) for c in segment_coeffs]

    ood_composition_ints: List[int] = []
    for value in ood_composition:
        ood_composition_ints.extend(to_coeffs(value))
    ood_current_ints = elements_to_ints(ood_current)
    ood_next_ints = elements_to_ints(ood_next)
    transcript.put_elements(ood_current_ints + ood_next_ints + ood_composition_ints)

    # === STAGE 4: DEEP composition and FRI ===
    now = time.perf_counter()
    deep_coeffs = DeepCoefficients.draw(transcript, width, num_segments, field)
    ood_frame = OodFrame(
        current=[ood_current[i] for i in range(width)],
        next=[ood_next[i] for i in range(width)],
        composition=ood_composition,
    )
    deep = evaluate_deep(deep_coeffs, frame.current, segments, ood_frame, x, z, gz)

    fri_prover = FriProver(options, hasher, field)
    fri_prover.build_layers(deep, n, transcript)
    logger.debug("Computed DEEP composition and FRI layers in %d ms", (time.perf_counter() - now) * 1000)

    # === STAGE 5: Grinding and queries ===
    now = time.perf_counter()
    nonce = grinding(hasher, transcript.get_state(), options.grinding_factor)
    transcript.put_int(nonce)
    positions = transcript.get_permutations(options.num_queries, log2(lde_size))

    proof = StarkProof(
        trace_info=air.trace_info,
        options=options,
        trace_root=trace_tree.get_root(),
        composition_root=composition_tree.get_root(),
        ood_current=ood_current_ints,
        ood_next=ood_next_ints,
        ood_composition=ood_composition_ints,
        trace_queries=[trace_tree.get_query_proof(p) for p in positions],
        composition_queries=[composition_tree.get_query_proof(p) for p in positions],
        fri=fri_prover.build_proof(positions),
        pow_nonce=nonce,
    )
    logger.debug(
        "Opened %d query positions (nonce %d) in %d ms",
        len(positions), nonce, (time.perf_counter() - now) * 1000,
    )
    return proof
