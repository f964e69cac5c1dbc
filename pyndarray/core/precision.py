"""
Numerical precision constants.

Provides the machine epsilon used by the decompositions when deciding
which values are negligible. All decomposition arithmetic runs in
float64 (create_result() promotes every dtype to it).
"""

import numpy as np


# Machine epsilon for float64 (2**-52): 1 + EPSILON_64 is the smallest
# representable number greater than one
EPSILON_64: float = float(np.finfo(np.float64).eps)
