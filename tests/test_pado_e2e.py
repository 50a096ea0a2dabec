"""
Padovan End-to-End Tests
========================

Proves the Padovan sequence with the full STARK engine and verifies the proof,
for every supported hash function and field extension, and checks that
proofs over bad traces, with tampered contents, or against wrong public
inputs are rejected.
"""

import dataclasses
import json

import pytest

from primitives.field import FF
from primitives.hashing import Blake3_256, HashFunction, Sha3_256
from protocol.air import TraceInfo
from protocol.errors import InvalidArgumentError, VerifierError
from protocol.options import FieldExtension, ProofOptions
from protocol.proof import StarkProof
from protocol.verifier import verify
from padovan import ExampleOptions, PadoAir, PadoProver, compute_pado_term, create, get_example
from tests.conftest import build_proof_options


@pytest.fixture(scope="module")
def example():
    return create(48, build_proof_options(False), HashFunction.BLAKE3_256)


@pytest.fixture(scope="module")
def proof(example) -> StarkProof:
    return example.prove()


# =============================================================================
# Valid proofs
# =============================================================================

class TestBasicProofVerification:

    def test_sequence_of_48(self, example, proof: StarkProof) -> None:
        assert proof.trace_info.length == 16
        assert example.result == compute_pado_term(48)
        example.verify(proof)

    def test_wrong_inputs_rejected(self, example, proof: StarkProof) -> None:
        with pytest.raises(VerifierError):
            example.verify_with_wrong_inputs(proof)

    def test_quadratic_extension(self) -> None:
        pado = create(48, build_proof_options(True), HashFunction.BLAKE3_256)
        proof = pado.prove()
        pado.verify(proof)
        with pytest.raises(VerifierError):
            pado.verify_with_wrong_inputs(proof)

    def test_cubic_extension(self) -> None:
        options = ProofOptions(28, 8, 0, FieldExtension.CUBIC, 4, 7)
        pado = create(24, options, HashFunction.SHA3_256)
        pado.verify(pado.prove())

    @pytest.mark.parametrize("hash_fn", [HashFunction.BLAKE3_192, HashFunction.BLAKE3_256, HashFunction.SHA3_256])
    def test_every_supported_hash(self, hash_fn: HashFunction) -> None:
        pado = create(48, build_proof_options(False), hash_fn)
        proof = pado.prove()
        pado.verify(proof)
        with pytest.raises(VerifierError):
            pado.verify_with_wrong_inputs(proof)

    @pytest.mark.parametrize("length", [3, 6, 12, 384])
    def test_other_lengths(self, length: int) -> None:
        pado = create(length, build_proof_options(False), HashFunction.BLAKE3_256)
        proof = pado.prove()
        pado.verify(proof)
        with pytest.raises(VerifierError):
            pado.verify_with_wrong_inputs(proof)

    @pytest.mark.parametrize("folding_factor", [2, 8])
    def test_folding_factors(self, folding_factor: int) -> None:
        options = ProofOptions(20, 4, 0, FieldExtension.NONE, folding_factor, 3)
        pado = create(192, options, HashFunction.BLAKE3_256)
        pado.verify(pado.prove())

    def test_grinding(self) -> None:
        options = ProofOptions(28, 8, 6, FieldExtension.NONE, 4, 7)
        pado = create(48, options, HashFunction.BLAKE3_256)
        proof = pado.prove()
        pado.verify(proof)

    def test_proving_is_deterministic(self, example, proof: StarkProof) -> None:
        assert example.prove().to_bytes() == proof.to_bytes()

    def test_serialized_proof_verifies(self, example, proof: StarkProof) -> None:
        example.verify(StarkProof.from_bytes(proof.to_bytes()))

    def test_get_example_defaults(self) -> None:
        pado = get_example(ExampleOptions(grinding_factor=0, folding_factor=4), 48)
        assert pado.options.num_queries == 28
        assert pado.options.blowup_factor == 8
        pado.verify(pado.prove())


# =============================================================================
# Invalid inputs
# =============================================================================

class TestInvalidInputs:

    def test_length_not_multiple_of_three(self) -> None:
        with pytest.raises(InvalidArgumentError):
            create(47, build_proof_options(False), HashFunction.BLAKE3_256)

    def test_row_count_not_power_of_two(self) -> None:
        with pytest.raises(InvalidArgumentError):
            create(9, build_proof_options(False), HashFunction.BLAKE3_256)

    @pytest.mark.parametrize("hash_fn", [HashFunction.RP64_256, HashFunction.RP_JIVE64_256])
    def test_unsupported_hash(self, hash_fn: HashFunction) -> None:
        with pytest.raises(InvalidArgumentError, match="cannot be used with this example"):
            create(48, build_proof_options(False), hash_fn)


# =============================================================================
# Rejected proofs
# =============================================================================

class TestBasicProofVerificationFail:

    def test_invalid_trace_rejected(self) -> None:
        """A trace breaking one transition cannot be proven valid."""
        prover = PadoProver(build_proof_options(False), Blake3_256())
        trace = prover.build_trace(48)
        trace.data[5, 1] = trace.get(1, 5) + FF(1)

        proof = prover.prove(trace)
        with pytest.raises(VerifierError):
            verify(PadoAir, proof, prover.get_pub_inputs(trace), Blake3_256())

    def test_wrong_result_in_last_row_rejected(self) -> None:
        """Proving a trace whose last row disagrees with the true term."""
        prover = PadoProver(build_proof_options(False), Blake3_256())
        trace = prover.build_trace(48)
        trace.data[15, 2] = trace.get(2, 15) + FF(1)

        proof = prover.prove(trace)
        with pytest.raises(VerifierError):
            verify(PadoAir, proof, prover.get_pub_inputs(trace), Blake3_256())

    def test_wrong_hasher_rejected(self, example, proof: StarkProof) -> None:
        with pytest.raises(VerifierError):
            verify(PadoAir, proof, example.result, Sha3_256())

    def test_tampered_ood_frame(self, example, proof: StarkProof) -> None:
        ood = list(proof.ood_current)
        ood[0] = (ood[0] + 1) % FF.order
        with pytest.raises(VerifierError):
            example.verify(dataclasses.replace(proof, ood_current=ood))

    def test_tampered_trace_opening(self, example, proof: StarkProof) -> None:
        queries = [dataclasses.replace(q, v=list(q.v)) for q in proof.trace_queries]
        queries[0].v[0] = (queries[0].v[0] + 1) % FF.order
        with pytest.raises(VerifierError, match="does not match commitment"):
            example.verify(dataclasses.replace(proof, trace_queries=queries))

    def test_missing_composition_openings(self, example, proof: StarkProof) -> None:
        tampered = dataclasses.replace(proof, composition_queries=proof.composition_queries[:-1])
        with pytest.raises(VerifierError):
            example.verify(tampered)

    def test_tampered_nonce(self, example, proof: StarkProof) -> None:
        with pytest.raises(VerifierError):
            example.verify(dataclasses.replace(proof, pow_nonce=proof.pow_nonce + 1))

    @pytest.mark.parametrize("nonce", [2 ** 64, -1])
    def test_nonce_out_of_u64_range(self, example, proof: StarkProof, nonce: int) -> None:
        data = json.loads(proof.to_bytes())
        data["nonce"] = str(nonce)
        decoded = StarkProof.from_bytes(json.dumps(data).encode())
        with pytest.raises(VerifierError, match="invalid proof-of-work nonce"):
            example.verify(decoded)

    def test_lde_domain_beyond_two_adicity(self, example, proof: StarkProof) -> None:
        tampered = dataclasses.replace(proof, trace_info=TraceInfo(3, 1 << 30))
        with pytest.raises(VerifierError, match="not supported"):
            example.verify(tampered)

    def test_unreduced_ood_value(self, example, proof: StarkProof) -> None:
        ood = list(proof.ood_next)
        ood[1] = FF.order + 5
        with pytest.raises(VerifierError):
            example.verify(dataclasses.replace(proof, ood_next=ood))
