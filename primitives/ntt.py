"""Number Theoretic Transform over the Goldilocks field and its extensions."""

import numpy as np

from primitives.field import FF, SHIFT, get_omega, log2

# --- NTT Engine ---

class NTT:
    """NTT engine for polynomial operations over a galois field.

    All transforms work along axis 0, so a (domain_size, n_cols) array is
    transformed column by column in one call. The roots of unity are the
    Goldilocks ones embedded into `field`, which keeps evaluation domains
    identical across the base field and its extensions.
    """

    def __init__(self, domain_size: int, field=FF) -> None:
        """Initialize NTT engine for given domain size."""
        assert domain_size > 0, "Domain size must be positive"
        assert (domain_size & (domain_size - 1)) == 0, "Domain size must be power of 2"

        self.n = domain_size
        self.n_bits = log2(domain_size)
        self.field = field

        self.omega = field(get_omega(self.n_bits))
        self.omega_inv = self.omega ** -1
        self.n_inv = field(domain_size) ** -1

    def ntt(self, coeffs: np.ndarray) -> np.ndarray:
        """Forward NTT: coefficients -> evaluations over <omega>.

        Inputs shorter than the domain are zero-padded.
        """
        return _fft(self._pad(coeffs), self.omega)

    def intt(self, evals: np.ndarray) -> np.ndarray:
        """Inverse NTT: evaluations over <omega> -> coefficients."""
        return _fft(evals, self.omega_inv) * self.n_inv

    def coset_ntt(self, coeffs: np.ndarray, shift=None) -> np.ndarray:
        """Evaluate over the coset shift * <omega>."""
        shift = self._shift(shift)
        return self.ntt(_scale(self._pad(coeffs), shift))

    def coset_intt(self, evals: np.ndarray, shift=None) -> np.ndarray:
        """Interpolate values given over the coset shift * <omega>."""
        shift = self._shift(shift)
        return _scale(self.intt(evals), shift ** -1)

    # --- Internal ---

    def _shift(self, shift):
        if shift is None:
            return self.field(int(SHIFT))
        return shift

    def _pad(self, coeffs: np.ndarray) -> np.ndarray:
        length = coeffs.shape[0]
        if length == self.n:
            return coeffs
        if length > self.n:
            raise ValueError(f"{length} coefficients do not fit a domain of size {self.n}")
        padded = self.field.Zeros((self.n,) + coeffs.shape[1:])
        padded[:length] = coeffs
        return padded


def _scale(values: np.ndarray, factor) -> np.ndarray:
    """Multiply row i by factor^i."""
    powers = factor ** np.arange(values.shape[0])
    return values * _column(powers, values.ndim)


def _column(vector: np.ndarray, ndim: int) -> np.ndarray:
    """Reshape a 1-D array so it broadcasts along axis 0 of an ndim array."""
    return vector.reshape((-1,) + (1,) * (ndim - 1))


def _fft(values: np.ndarray, omega) -> np.ndarray:
    """Recursive radix-2 Cooley-Tukey transform along axis 0."""
    n = values.shape[0]
    if n == 1:
        return values.copy()

    omega_sq = omega * omega
    even = _fft(values[0::2], omega_sq)
    odd = _fft(values[1::2], omega_sq)

    half = n // 2
    odd = odd * _column(omega ** np.arange(half), values.ndim)

    result = type(values).Zeros(values.shape)
    result[:half] = even + odd
    result[half:] = even - odd
    return result
