"""
Tolerance tiers and algorithm thresholds.

Defines the closeness tolerances used by are_close() and by the test
suite, and the fixed thresholds the decompositions use to guard against
overflow and to decide when a value is negligible.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Defaults for are_close() and is_orthogonal()
DEFAULT = ToleranceTier(
    rtol=1e-9,
    atol=1e-9,
    name='default',
    description='Double precision comparison of well-scaled values',
)

# Reconstruction checks (P L U, U D V) on well-conditioned inputs
DECOMPOSITION = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='decomposition',
    description='Reconstruction of a decomposed well-conditioned matrix',
)

# Squared norm above which a Householder input is normalized first
HOUSEHOLDER_RESCALE_THRESHOLD = 1e200

# |f/g| beyond which a Givens rotation is a pure 0/180 or ±90 degree turn
GIVENS_RATIO_LIMIT = 1e100

# Superdiagonal entries below this many eps times their neighbours are zeroed
SVD_NEGLIGIBLE_FACTOR = 5

# The SVD gives up after this many sweeps per squared column count
SVD_MAX_SWEEPS_FACTOR = 6

# Lower bound on the SVD sweep cap
SVD_MIN_SWEEPS = 100

