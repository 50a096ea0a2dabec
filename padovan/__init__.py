"""Padovan sequence STARK: prove the n-th term of P(n) = P(n-2) + P(n-3)."""

import logging
import time

from primitives.field import FF, log2
from primitives.hashing import ElementHasher, HashFunction, get_hasher
from protocol.errors import InvalidArgumentError
from protocol.options import ProofOptions
from protocol.proof import StarkProof
from protocol.verifier import verify
from padovan.air import TRACE_WIDTH, PadoAir
from padovan.example import Example, ExampleOptions
from padovan.prover import PadoProver, apply_step, init_state
from padovan.utils import compute_pado_term, validate_sequence_length

logger = logging.getLogger(__name__)

DEFAULT_NUM_QUERIES = 28
DEFAULT_BLOWUP_FACTOR = 8


class PadoExample(Example):
    """Proves and verifies the Padovan sequence up to sequence_length terms."""

    def __init__(self, sequence_length: int, options: ProofOptions, hasher: ElementHasher):
        validate_sequence_length(sequence_length)

        now = time.perf_counter()
        self.result = compute_pado_term(sequence_length)
        logger.debug(
            "Computed Padovan sequence up to %dth term in %d ms",
            sequence_length, (time.perf_counter() - now) * 1000,
        )

        self.options = options
        self.sequence_length = sequence_length
        self.hasher = hasher

    def prove(self) -> StarkProof:
        logger.debug(
            "Generating proof for computing Padovan sequence (3 terms per step) up to %dth term",
            self.sequence_length,
        )
        prover = PadoProver(self.options, self.hasher)

        now = time.perf_counter()
        trace = prover.build_trace(self.sequence_length)
        logger.debug(
            "Generated execution trace of %d registers and 2^%d steps in %d ms",
            trace.width, log2(trace.length), (time.perf_counter() - now) * 1000,
        )
        return prover.prove(trace)

    def verify(self, proof: StarkProof) -> None:
        verify(PadoAir, proof, self.result, self.hasher)

    def verify_with_wrong_inputs(self, proof: StarkProof) -> None:
        verify(PadoAir, proof, self.result + FF(1), self.hasher)


def create(sequence_length: int, options: ProofOptions, hash_fn: HashFunction) -> PadoExample:
    """Build a PadoExample using hash_fn for commitments and the transcript.

    Raises:
        InvalidArgumentError: If hash_fn is not usable with this example or
            sequence_length is invalid
    """
    try:
        hasher = get_hasher(hash_fn)
    except KeyError:
        raise InvalidArgumentError("The specified hash function cannot be used with this example.") from None
    return PadoExample(sequence_length, options, hasher)


def get_example(options: ExampleOptions, sequence_length: int) -> PadoExample:
    proof_options, hash_fn = options.to_proof_options(DEFAULT_NUM_QUERIES, DEFAULT_BLOWUP_FACTOR)
    return create(sequence_length, proof_options, hash_fn)


__all__ = [
    "TRACE_WIDTH",
    "PadoAir",
    "PadoProver",
    "PadoExample",
    "Example",
    "ExampleOptions",
    "apply_step",
    "compute_pado_term",
    "create",
    "get_example",
    "init_state",
]
