"""Goldilocks field GF(p) and its quadratic/cubic extensions.

Uses galois library for all field arithmetic. FF is the base field type;
extension fields are built on first use by get_extension_field() because
galois.GF() for an extension field takes several seconds to initialize.

Values cross serialization boundaries as plain ints: a base element is one int,
an extension element is its coefficient list in ascending order [a0, a1, ...].
"""

from functools import lru_cache
from typing import List

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

# Irreducible polynomials in galois (descending) coefficient order
QUADRATIC_IRREDUCIBLE = [1, GOLDILOCKS_PRIME - 1, 2]  # x^2 - x + 2
CUBIC_IRREDUCIBLE = [1, 0, GOLDILOCKS_PRIME - 1, GOLDILOCKS_PRIME - 1]  # x^3 - x - 1

# Domain shift for coset LDE (7 generates the multiplicative group)
SHIFT = FF(7)

# Bytes per serialized base field element
ELEMENT_BYTES = 8

# Precomputed roots of unity: W[n] is a primitive 2^n-th root of unity
W: List[int] = [
    1,
    18446744069414584320,
    281474976710656,
    16777216,
    4096,
    64,
    8,
    2198989700608,
    4404853092538523347,
    6434636298004421797,
    4255134452441852017,
    9113133275150391358,
    4355325209153869931,
    4308460244895131701,
    7126024226993609386,
    1873558160482552414,
    8167150655112846419,
    5718075921287398682,
    3411401055030829696,
    8982441859486529725,
    1971462654193939361,
    6553637399136210105,
    8124823329697072476,
    5936499541590631774,
    2709866199236980323,
    8877499657461974390,
    3757607247483852735,
    4969973714567017225,
    2147253751702802259,
    2530564950562219707,
    1905180297017055339,
    3524815499551269279,
    7277203076849721926,
]

MAX_TWO_ADICITY = len(W) - 1


def get_omega(n_bits: int) -> int:
    """Return primitive 2^n_bits-th root of unity."""
    if n_bits > MAX_TWO_ADICITY:
        raise ValueError(f"no 2^{n_bits}-th root of unity in the Goldilocks field")
    return W[n_bits]


def log2(size: int) -> int:
    """Compute log2 of size (must be power of 2)."""
    assert is_power_of_two(size), f"{size} is not a power of two"
    return size.bit_length() - 1


def is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


# --- Extension Fields ---

@lru_cache(maxsize=None)
def get_extension_field(degree: int):
    """Return the field type of the given extension degree over FF.

    Degree 1 is FF itself. Degrees 2 and 3 use x^2 - x + 2 and x^3 - x - 1.
    """
    if degree == 1:
        return FF
    if degree == 2:
        irreducible = galois.Poly(QUADRATIC_IRREDUCIBLE, field=FF)
    elif degree == 3:
        irreducible = galois.Poly(CUBIC_IRREDUCIBLE, field=FF)
    else:
        raise ValueError(f"unsupported field extension degree {degree}")
    return galois.GF(GOLDILOCKS_PRIME**degree, irreducible_poly=irreducible)


def lift(values, field):
    """Embed base field values (array or scalar) into field.

    Integer representations below p are the constant polynomials of an
    extension, so lifting is a change of array type.
    """
    if field is FF:
        return values
    raw = np.asarray(values.view(np.ndarray) if isinstance(values, FF) else values, dtype=object)
    return field(raw)


# --- Coefficient Order Conversion ---
# Galois uses descending order [a2, a1, a0], we use ascending [a0, a1, a2].

def to_coeffs(elem) -> List[int]:
    """Extract ascending-order coefficients of a single field element."""
    if type(elem).degree == 1:
        return [int(elem)]
    return [int(c) for c in elem.vector()[::-1]]


def from_coeffs(field, coeffs: List[int]):
    """Construct a field element from ascending-order coefficients."""
    if field.degree == 1:
        return field(int(coeffs[0]))
    return field.Vector([int(c) for c in coeffs[::-1]])


def elements_to_ints(values) -> List[int]:
    """Flatten an array of field elements to its coefficient ints."""
    flat = np.atleast_1d(values).flatten()
    if type(flat).degree == 1:
        return [int(v) for v in flat]
    return [int(c) for row in flat.vector() for c in row[::-1]]


def ints_to_elements(field, data: List[int]):
    """Inverse of elements_to_ints: regroup coefficient ints into an array."""
    degree = field.degree
    if len(data) % degree != 0:
        raise ValueError(f"{len(data)} ints do not divide into degree-{degree} elements")
    if degree == 1:
        return field([int(v) for v in data])
    rows = [[int(c) for c in data[i:i + degree][::-1]] for i in range(0, len(data), degree)]
    return field.Vector(rows)
