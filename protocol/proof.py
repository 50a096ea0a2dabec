"""STARK proof data structures and serialization."""

import json
from dataclasses import dataclass, field
from typing import Any, List

from primitives.merkle_tree import MerkleRoot, QueryProof
from protocol.air import TraceInfo
from protocol.fri import FriProof
from protocol.options import ProofOptions


# --- Proof Data Structures ---

@dataclass
class StarkProof:
    """Complete STARK proof for a single AIR.

    Contains all components needed to verify that a prover knows a valid
    execution trace satisfying the AIR constraints.

    Attributes:
        trace_info: Shape of the proven trace
        options: Protocol parameters the proof was generated with
        trace_root: Merkle root of the trace LDE rows
        composition_root: Merkle root of the composition segment LDE rows
        ood_current: Trace columns at the out-of-domain point z, as coefficient ints
        ood_next: Trace columns at g*z
        ood_composition: Composition segments at z
        trace_queries: Trace LDE row openings, one per query position
        composition_queries: Composition LDE row openings, one per query position
        fri: FRI layer roots, openings and remainder
        pow_nonce: Proof-of-work nonce satisfying the grinding constraint
    """
    trace_info: TraceInfo
    options: ProofOptions
    trace_root: MerkleRoot = b""
    composition_root: MerkleRoot = b""
    ood_current: List[int] = field(default_factory=list)
    ood_next: List[int] = field(default_factory=list)
    ood_composition: List[int] = field(default_factory=list)
    trace_queries: List[QueryProof] = field(default_factory=list)
    composition_queries: List[QueryProof] = field(default_factory=list)
    fri: FriProof = field(default_factory=FriProof)
    pow_nonce: int = 0

    # --- Byte Serialization ---

    def to_bytes(self) -> bytes:
        """Opaque byte encoding of the proof."""
        return json.dumps(proof_to_json(self), separators=(",", ":")).encode()

    @classmethod
    def from_bytes(cls, data: bytes) -> "StarkProof":
        """Decode a proof produced by to_bytes.

        Raises:
            ValueError: If data is not a well-formed proof encoding
        """
        try:
            return proof_from_json(json.loads(data.decode()))
        except (KeyError, TypeError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"malformed proof: {e}") from e

    def __len__(self) -> int:
        return len(self.to_bytes())


# --- JSON Serialization ---

def _query_to_json(q: QueryProof) -> dict[str, Any]:
    return {"idx": q.idx, "v": [str(v) for v in q.v], "mp": [h.hex() for h in q.mp]}


def _query_from_json(j: dict[str, Any]) -> QueryProof:
    return QueryProof(idx=int(j["idx"]), v=[int(v) for v in j["v"]], mp=[bytes.fromhex(h) for h in j["mp"]])


def proof_to_json(proof: StarkProof) -> dict[str, Any]:
    """Convert STARK proof to JSON-serializable dictionary."""
    return {
        "trace_info": {"width": proof.trace_info.width, "length": proof.trace_info.length},
        "options": proof.options.to_json(),
        "trace_root": proof.trace_root.hex(),
        "composition_root": proof.composition_root.hex(),
        "ood": {
            "current": [str(v) for v in proof.ood_current],
            "next": [str(v) for v in proof.ood_next],
            "composition": [str(v) for v in proof.ood_composition],
        },
        "trace_queries": [_query_to_json(q) for q in proof.trace_queries],
        "composition_queries": [_query_to_json(q) for q in proof.composition_queries],
        "fri": {
            "roots": [r.hex() for r in proof.fri.roots],
            "queries": [[_query_to_json(q) for q in layer] for layer in proof.fri.queries],
            "remainder": [str(v) for v in proof.fri.remainder],
        },
        "nonce": str(proof.pow_nonce),
    }


def proof_from_json(j: dict[str, Any]) -> StarkProof:
    """Rebuild a StarkProof from proof_to_json output."""
    ood = j["ood"]
    fri = j["fri"]
    return StarkProof(
        trace_info=TraceInfo(**j["trace_info"]),
        options=ProofOptions.from_json(j["options"]),
        trace_root=bytes.fromhex(j["trace_root"]),
        composition_root=bytes.fromhex(j["composition_root"]),
        ood_current=[int(v) for v in ood["current"]],
        ood_next=[int(v) for v in ood["next"]],
        ood_composition=[int(v) for v in ood["composition"]],
        trace_queries=[_query_from_json(q) for q in j["trace_queries"]],
        composition_queries=[_query_from_json(q) for q in j["composition_queries"]],
        fri=FriProof(
            roots=[bytes.fromhex(r) for r in fri["roots"]],
            queries=[[_query_from_json(q) for q in layer] for layer in fri["queries"]],
            remainder=[int(v) for v in fri["remainder"]],
        ),
        pow_nonce=int(j["nonce"]),
    )
