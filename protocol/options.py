"""Proof generation parameters."""

from dataclasses import dataclass
from enum import IntEnum
from typing import List

from primitives.field import get_extension_field, is_power_of_two

MAX_BLOWUP_FACTOR = 128
MAX_GRINDING_FACTOR = 32
MAX_QUERIES = 128
FRI_FOLDING_FACTORS = (2, 4, 8, 16)
MAX_FRI_REMAINDER_DEGREE = 255


class FieldExtension(IntEnum):
    """Field the composition, out-of-domain and FRI challenges are drawn from."""
    NONE = 1
    QUADRATIC = 2
    CUBIC = 3


@dataclass(frozen=True)
class ProofOptions:
    """STARK protocol parameters.

    Attributes:
        num_queries: Number of FRI query positions
        blowup_factor: LDE domain size / trace length
        grinding_factor: Proof-of-work bits required on the query seed
        field_extension: Extension degree of the challenge field
        fri_folding_factor: Domain reduction per FRI layer
        fri_remainder_max_degree: Degree at which FRI stops folding (2^k - 1)
    """
    num_queries: int
    blowup_factor: int
    grinding_factor: int = 0
    field_extension: FieldExtension = FieldExtension.NONE
    fri_folding_factor: int = 4
    fri_remainder_max_degree: int = 7

    def __post_init__(self):
        if not 0 < self.num_queries <= MAX_QUERIES:
            raise ValueError(f"num_queries must be in [1, {MAX_QUERIES}], got {self.num_queries}")
        if not is_power_of_two(self.blowup_factor) or not 2 <= self.blowup_factor <= MAX_BLOWUP_FACTOR:
            raise ValueError(
                f"blowup_factor must be a power of two in [2, {MAX_BLOWUP_FACTOR}], "
                f"got {self.blowup_factor}"
            )
        if not 0 <= self.grinding_factor <= MAX_GRINDING_FACTOR:
            raise ValueError(
                f"grinding_factor must be in [0, {MAX_GRINDING_FACTOR}], got {self.grinding_factor}"
            )
        if self.fri_folding_factor not in FRI_FOLDING_FACTORS:
            raise ValueError(
                f"fri_folding_factor must be one of {FRI_FOLDING_FACTORS}, "
                f"got {self.fri_folding_factor}"
            )
        if (not is_power_of_two(self.fri_remainder_max_degree + 1)
                or self.fri_remainder_max_degree > MAX_FRI_REMAINDER_DEGREE):
            raise ValueError(
                f"fri_remainder_max_degree must be one less than a power of two and at most "
                f"{MAX_FRI_REMAINDER_DEGREE}, got {self.fri_remainder_max_degree}"
            )
        # Accept plain ints for the extension
        object.__setattr__(self, "field_extension", FieldExtension(self.field_extension))

    @property
    def challenge_field(self):
        """galois field type challenges are drawn from."""
        return get_extension_field(int(self.field_extension))

    def to_elements(self) -> List[int]:
        """Options as ints, absorbed into the transcript seed."""
        return [
            self.num_queries,
            self.blowup_factor,
            self.grinding_factor,
            int(self.field_extension),
            self.fri_folding_factor,
            self.fri_remainder_max_degree,
        ]

    def to_json(self) -> dict:
        return {
            "num_queries": self.num_queries,
            "blowup_factor": self.blowup_factor,
            "grinding_factor": self.grinding_factor,
            "field_extension": int(self.field_extension),
            "fri_folding_factor": self.fri_folding_factor,
            "fri_remainder_max_degree": self.fri_remainder_max_degree,
        }

    @classmethod
    def from_json(cls, data: dict) -> "ProofOptions":
        return cls(**data)
