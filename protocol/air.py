"""Base classes for Algebraic Intermediate Representations.

An Air declares the transition constraints relating consecutive trace rows and
the boundary assertions pinning individual cells. The same constraint code is
used by the prover and the verifier thanks to galois broadcasting:

    def evaluate_transition(self, frame):
        current, nxt = frame.current, frame.next
        return [nxt[0] - (current[0] + current[1])]

    # Prover: frame columns are arrays over the whole LDE domain
    # Verifier: frame columns are scalars at the out-of-domain point
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Sequence

from primitives.field import FF, get_omega, is_power_of_two, log2
from protocol.options import ProofOptions


# --- Shape and Constraint Declarations ---

@dataclass(frozen=True)
class TraceInfo:
    """Shape of an execution trace."""
    width: int
    length: int

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"trace width must be positive, got {self.width}")
        if not is_power_of_two(self.length):
            raise ValueError(f"trace length must be a power of two, got {self.length}")


@dataclass(frozen=True)
class TransitionConstraintDegree:
    """Declared degree of one transition constraint in the trace registers."""
    degree: int

    def __post_init__(self):
        if self.degree < 1:
            raise ValueError(f"transition constraint degree must be at least 1, got {self.degree}")


@dataclass(frozen=True)
class Assertion:
    """Boundary constraint: register `column` holds `value` at row `step`."""
    column: int
    step: int
    value: Any

    @classmethod
    def single(cls, column: int, step: int, value) -> "Assertion":
        return cls(column, step, value)


@dataclass
class EvaluationFrame:
    """Two consecutive rows; each entry is a column value (scalar or array)."""
    current: Sequence
    next: Sequence


class AirContext:
    """Everything about an AIR the engine needs besides the constraint code."""

    def __init__(
        self,
        trace_info: TraceInfo,
        transition_degrees: List[TransitionConstraintDegree],
        num_assertions: int,
        options: ProofOptions,
    ):
        if not transition_degrees:
            raise ValueError("at least one transition constraint must be declared")
        if num_assertions <= 0:
            raise ValueError("at least one assertion must be declared")
        if trace_info.length * options.blowup_factor > (1 << 32):
            raise ValueError("LDE domain exceeds the two-adicity of the field")

        self.trace_info = trace_info
        self.transition_degrees = list(transition_degrees)
        self.num_assertions = num_assertions
        self.options = options

    @property
    def num_transition_constraints(self) -> int:
        return len(self.transition_degrees)

    @property
    def num_composition_segments(self) -> int:
        """Composition polynomial degree bound in units of trace length.

        A degree-d transition residual divided by the (n - 1)-degree transition
        divisor has degree (d - 1)(n - 1); boundary quotients stay below n.
        """
        max_degree = max(d.degree for d in self.transition_degrees)
        return max(1, max_degree - 1)

    @property
    def lde_domain_size(self) -> int:
        return self.trace_info.length * self.options.blowup_factor


# --- AIR ---

class Air(ABC):
    """Per-computation constraint system. Used by both prover and verifier.

    Subclasses build an AirContext in __init__ and implement
    evaluate_transition, get_assertions and public_inputs_to_elements.
    """

    @abstractmethod
    def __init__(self, trace_info: TraceInfo, pub_inputs: Any, options: ProofOptions):
        pass

    @property
    @abstractmethod
    def context(self) -> AirContext:
        pass

    @abstractmethod
    def evaluate_transition(self, frame: EvaluationFrame) -> List:
        """Evaluate transition residuals; all must vanish on valid row pairs.

        Returns:
            One residual per declared transition constraint
        """

    @abstractmethod
    def get_assertions(self) -> List[Assertion]:
        pass

    @abstractmethod
    def public_inputs_to_elements(self) -> List[int]:
        """Public inputs as ints, absorbed into the transcript seed."""

    # --- Derived ---

    @property
    def trace_info(self) -> TraceInfo:
        return self.context.trace_info

    @property
    def trace_length(self) -> int:
        return self.context.trace_info.length

    @property
    def options(self) -> ProofOptions:
        return self.context.options

    def seed_elements(self) -> List[int]:
        """Trace shape, options and public inputs; seeds the transcript."""
        info = self.trace_info
        return [info.width, info.length, *self.options.to_elements(), *self.public_inputs_to_elements()]

    @property
    def trace_domain_generator(self):
        """Generator g of the trace domain; row i lives at g^i."""
        return FF(get_omega(log2(self.trace_length)))
