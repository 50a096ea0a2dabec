"""Abstract polynomial operations.

This module provides protocol-level polynomial operations without exposing
implementation details like NTT/INTT. The protocol layer should use these
abstractions rather than directly invoking NTT primitives.
"""

import numpy as np

from primitives.field import FF
from primitives.ntt import NTT


def to_coefficients(evaluations: np.ndarray, field=FF) -> np.ndarray:
    """Interpolate values given over the subgroup of size len(evaluations)."""
    return NTT(evaluations.shape[0], field).intt(evaluations)


def coset_to_coefficients(evaluations: np.ndarray, shift=None, field=FF) -> np.ndarray:
    """Interpolate values given over the coset shift * <omega>."""
    return NTT(evaluations.shape[0], field).coset_intt(evaluations, shift)


def extend_to_coset(coefficients: np.ndarray, domain_size: int, shift=None, field=FF) -> np.ndarray:
    """Low-degree extension: evaluate coefficients over the coset of size domain_size."""
    return NTT(domain_size, field).coset_ntt(coefficients, shift)


def evaluate(coefficients: np.ndarray, x):
    """Horner evaluation along axis 0.

    For (n, n_cols) coefficients and a scalar x the result holds one value per
    column; for 1-D coefficients x may also be an array of points.
    """
    acc = coefficients[-1] * (x ** 0)
    for i in range(coefficients.shape[0] - 2, -1, -1):
        acc = acc * x + coefficients[i]
    return acc
