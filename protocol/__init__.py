"""Protocol - STARK prover and verifier for arbitrary AIRs."""

from protocol.air import (
    Air,
    AirContext,
    Assertion,
    EvaluationFrame,
    TraceInfo,
    TransitionConstraintDegree,
)
from protocol.errors import InvalidArgumentError, ProverError, VerifierError
from protocol.options import FieldExtension, ProofOptions
from protocol.proof import StarkProof, proof_from_json, proof_to_json
from protocol.prover import Prover, generate_proof
from protocol.trace import TraceTable
from protocol.verifier import verify

__all__ = [
    # AIR
    "Air",
    "AirContext",
    "Assertion",
    "EvaluationFrame",
    "TraceInfo",
    "TransitionConstraintDegree",
    # Errors
    "InvalidArgumentError",
    "ProverError",
    "VerifierError",
    # Options
    "FieldExtension",
    "ProofOptions",
    # Proof
    "StarkProof",
    "proof_to_json",
    "proof_from_json",
    # Prover / Verifier
    "Prover",
    "generate_proof",
    "TraceTable",
    "verify",
]
