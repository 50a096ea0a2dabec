"""Constraint composition and DEEP composition.

Both functions take column values that are either arrays (prover: the whole
LDE domain, or verifier: the queried positions) or scalars (verifier: the
out-of-domain point), so prover and verifier run the same arithmetic.
"""

from dataclasses import dataclass
from typing import List, Tuple

from primitives.field import SHIFT
from primitives.transcript import MAX_DRAW_ATTEMPTS, Transcript
from protocol.air import Air, EvaluationFrame


# --- Random Coefficients ---

@dataclass
class ConstraintCoefficients:
    """Random weights for the linear combination of constraint quotients."""
    transition: List
    boundary: List

    @classmethod
    def draw(cls, transcript: Transcript, air: Air, field) -> "ConstraintCoefficients":
        transition = [transcript.get_field(field) for _ in range(air.context.num_transition_constraints)]
        boundary = [transcript.get_field(field) for _ in range(air.context.num_assertions)]
        return cls(transition, boundary)


@dataclass
class DeepCoefficients:
    """Random weights for the DEEP composition polynomial.

    trace[i] weights column i opened at z and at g*z; composition[s] weights
    composition segment s opened at z.
    """
    trace: List[Tuple]
    composition: List

    @classmethod
    def draw(cls, transcript: Transcript, trace_width: int, num_segments: int, field) -> "DeepCoefficients":
        trace = [(transcript.get_field(field), transcript.get_field(field)) for _ in range(trace_width)]
        composition = [transcript.get_field(field) for _ in range(num_segments)]
        return cls(trace, composition)


@dataclass
class OodFrame:
    """Out-of-domain openings: trace at z and g*z, composition segments at z."""
    current: List
    next: List
    composition: List


# --- Constraint Composition ---

def evaluate_constraints(air: Air, coefficients: ConstraintCoefficients, frame: EvaluationFrame, x, field):
    """Evaluate the composition polynomial H at x.

    H = sum_j alpha_j * r_j / Z_T  +  sum_k beta_k * (T_col(x) - v_k) / (x - g^step)

    where Z_T = (x^n - 1) / (x - g^(n-1)) vanishes on every row but the last.
    A one-row trace has no row pairs, so only boundary terms apply.
    """
    n = air.trace_length
    g = field(int(air.trace_domain_generator))
    zero = x * field(0)
    result = zero

    if n > 1:
        residuals = air.evaluate_transition(frame)
        if len(residuals) != air.context.num_transition_constraints:
            raise ValueError(
                f"AIR returned {len(residuals)} transition residuals, "
                f"declared {air.context.num_transition_constraints}"
            )
        numerator = zero
        for alpha, residual in zip(coefficients.transition, residuals):
            numerator = numerator + alpha * residual
        divisor = (x ** n - field(1)) / (x - g ** (n - 1))
        result = result + numerator / divisor

    for beta, assertion in zip(coefficients.boundary, air.get_assertions()):
        value = field(int(assertion.value))
        result = result + beta * (frame.current[assertion.column] - value) / (x - g ** assertion.step)

    return result


def draw_ood_point(transcript: Transcript, field, trace_length: int, lde_domain_size: int):
    """Draw z outside the trace domain and the LDE coset, so no divisor vanishes."""
    one = field(1)
    coset_power = field(int(SHIFT)) ** lde_domain_size
    for _ in range(MAX_DRAW_ATTEMPTS):
        z = transcript.get_field(field)
        if z ** trace_length != one and z ** lde_domain_size != coset_power:
            return z
    raise RuntimeError("failed to draw an out-of-domain point")


def combine_segments(segment_values: List, x, trace_length: int):
    """Reassemble H(x) = sum_s x^(s*n) * H_s(x) from its segments."""
    result = segment_values[0]
    for s in range(1, len(segment_values)):
        result = result + x ** (s * trace_length) * segment_values[s]
    return result


# --- DEEP Composition ---

def evaluate_deep(
    coefficients: DeepCoefficients,
    trace_columns: List,
    composition_columns: List,
    ood: OodFrame,
    x,
    z,
    gz,
):
    """Evaluate the DEEP composition polynomial at x.

    D = sum_i a_i (T_i - T_i(z)) / (x - z) + b_i (T_i - T_i(gz)) / (x - gz)
      + sum_s c_s (H_s - H_s(z)) / (x - z)
    """
    x_minus_z = x - z
    x_minus_gz = x - gz
    result = x_minus_z * (z - z)

    for i, column in enumerate(trace_columns):
        a, b = coefficients.trace[i]
        result = result + a * (column - ood.current[i]) / x_minus_z
        result = result + b * (column - ood.next[i]) / x_minus_gz

    for s, column in enumerate(composition_columns):
        result = result + coefficients.composition[s] * (column - ood.composition[s]) / x_minus_z

    return result
