"""
Dense numerical linear algebra.

Public API:
    dot(), norm(), is_orthogonal()             — products and norms
    lu_decomposition(), solve_linear_system()  — LU with scaled partial pivoting
    det(), inverse()
    householder_transform(), givens_rotation() — elementary orthogonal transforms
    bidiagonalization(), singular_value_decomposition()
    pseudoinverse(), rank(), nullity(), range_space(), nullspace(),
    condition_number()                         — derived from the SVD
"""

from pyndarray.linalg._common import (
    BidiagonalResult,
    HouseholderResult,
    LUResult,
    SVDResult,
)
from pyndarray.linalg.products import dot, is_orthogonal, norm
from pyndarray.linalg.lu import (
    PermutationMatrix,
    det,
    inverse,
    lu_decomposition,
    solve_linear_system,
)
from pyndarray.linalg.transforms import givens_rotation, householder_transform
from pyndarray.linalg.svd import bidiagonalization, singular_value_decomposition
from pyndarray.linalg.subspaces import (
    condition_number,
    nullity,
    nullspace,
    pseudoinverse,
    range_space,
    rank,
)

__all__ = [
    "LUResult",
    "SVDResult",
    "HouseholderResult",
    "BidiagonalResult",
    "PermutationMatrix",
    "dot",
    "norm",
    "is_orthogonal",
    "lu_decomposition",
    "solve_linear_system",
    "det",
    "inverse",
    "householder_transform",
    "givens_rotation",
    "bidiagonalization",
    "singular_value_decomposition",
    "pseudoinverse",
    "rank",
    "nullity",
    "range_space",
    "nullspace",
    "condition_number",
]
