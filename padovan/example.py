"""Example capability and the options examples are configured from."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from primitives.hashing import HashFunction
from protocol.options import FieldExtension, ProofOptions
from protocol.proof import StarkProof

FRI_REMAINDER_MAX_DEGREE = 31


@dataclass(frozen=True)
class ExampleOptions:
    """User-facing proof parameters; unset query count and blowup fall back
    to per-example defaults."""
    hash_fn: HashFunction = HashFunction.BLAKE3_256
    num_queries: Optional[int] = None
    blowup_factor: Optional[int] = None
    grinding_factor: int = 16
    field_extension: int = 1
    folding_factor: int = 8

    def to_proof_options(self, q: int, b: int) -> Tuple[ProofOptions, HashFunction]:
        """Resolve into engine options, using q queries and blowup b unless overridden.

        Raises:
            ValueError: If field_extension is not 1, 2 or 3, or the options are rejected
        """
        try:
            extension = FieldExtension(self.field_extension)
        except ValueError:
            raise ValueError(
                f"field extension degree must be 1, 2 or 3, got {self.field_extension}"
            ) from None

        options = ProofOptions(
            num_queries=q if self.num_queries is None else self.num_queries,
            blowup_factor=b if self.blowup_factor is None else self.blowup_factor,
            grinding_factor=self.grinding_factor,
            field_extension=extension,
            fri_folding_factor=self.folding_factor,
            fri_remainder_max_degree=FRI_REMAINDER_MAX_DEGREE,
        )
        return options, self.hash_fn


class Example(ABC):
    """A computation that can be proven and verified end to end."""

    @abstractmethod
    def prove(self) -> StarkProof:
        pass

    @abstractmethod
    def verify(self, proof: StarkProof) -> None:
        """Raise VerifierError unless proof is valid for the true public inputs."""

    @abstractmethod
    def verify_with_wrong_inputs(self, proof: StarkProof) -> None:
        """Verify against perturbed public inputs; a sound proof is always rejected."""
