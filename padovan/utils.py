"""Direct computation of Padovan terms and sequence-length checks."""

from primitives.field import FF, is_power_of_two
from protocol.errors import InvalidArgumentError


def compute_pado_term(n: int):
    """Return the n-th Padovan term P(n) = P(n-2) + P(n-3), with P(1..3) = 1.

    Runs the recurrence one term at a time and never touches a trace, so it
    serves as an independent check of the value proven by PadoProver.

    Raises:
        InvalidArgumentError: If n < 3
    """
    if n < 3:
        raise InvalidArgumentError(f"Padovan term index must be at least 3, got {n}")

    t0, t1, t2 = FF(1), FF(1), FF(1)
    for _ in range(n - 3):
        t0, t1, t2 = t1, t2, t0 + t1
    return t2


def validate_sequence_length(sequence_length: int) -> int:
    """Check that sequence_length fills a power-of-two number of 3-term rows.

    Returns:
        Number of trace rows, sequence_length // 3

    Raises:
        InvalidArgumentError: If the length is not a multiple of 3, or
            sequence_length / 3 is not a power of two
    """
    if sequence_length % 3 != 0:
        raise InvalidArgumentError(
            f"sequence length must be a multiple of 3, got {sequence_length}"
        )
    if not is_power_of_two(sequence_length // 3):
        raise InvalidArgumentError(
            f"sequence length / 3 must be a power of 2, got {sequence_length // 3}"
        )
    return sequence_length // 3


def are_equal(a, b):
    """Residual that vanishes exactly when a == b."""
    return a - b
