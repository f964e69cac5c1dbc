"""
Tests for bidiagonalization and singular value decomposition.

scipy.linalg.svdvals serves as an independent reference for singular values.
"""

import numpy as np
import pytest
import scipy.linalg

import pyndarray.linalg.svd as svd_module
from pyndarray import as_ndarray
from pyndarray.core.exceptions import ArrayTypeError, ConvergenceError, ReadOnlyArrayError
from pyndarray.core.tolerances import DECOMPOSITION
from pyndarray.linalg import (
    BidiagonalResult,
    SVDResult,
    bidiagonalization,
    dot,
    singular_value_decomposition,
)


def _reconstruct(U, M, V):
    return dot(U, dot(M, V)).to_numpy()


# ═══════════════════════════════════════════════════════════════════════
# Bidiagonalization
# ═══════════════════════════════════════════════════════════════════════


class TestBidiagonalization:
    """bidiagonalization yields orthogonal U, V and upper bidiagonal B."""

    @pytest.mark.parametrize("shape", [(3, 3), (5, 3), (3, 5), (4, 4)])
    def test_reconstructs(self, rng, shape):
        values = rng.standard_normal(shape)
        result = bidiagonalization(as_ndarray(values))
        assert isinstance(result, BidiagonalResult)
        np.testing.assert_allclose(
            _reconstruct(result.U, result.B, result.V), values, rtol=DECOMPOSITION.rtol, atol=DECOMPOSITION.atol
        )

    @pytest.mark.parametrize("shape", [(3, 3), (5, 3), (3, 5)])
    def test_upper_bidiagonal(self, rng, shape):
        B = bidiagonalization(as_ndarray(rng.standard_normal(shape))).B.to_numpy()
        mask = np.triu(np.tril(np.ones(shape), 1))
        np.testing.assert_array_equal(B[mask == 0], 0)

    def test_factors_orthogonal(self, tall_matrix):
        _, A = tall_matrix
        result = A.bidiagonalization()
        assert result.U.is_orthogonal()
        assert result.V.is_orthogonal()

    def test_rejects_vector(self):
        with pytest.raises(ArrayTypeError):
            bidiagonalization(as_ndarray([1, 2, 3]))


# ═══════════════════════════════════════════════════════════════════════
# Singular value decomposition
# ═══════════════════════════════════════════════════════════════════════


class TestSingularValueDecomposition:
    """U D V reconstructs A with sorted non-negative singular values."""

    @pytest.mark.parametrize("shape", [(1, 1), (2, 2), (3, 3), (5, 3), (3, 5), (5, 5), (4, 1)])
    def test_reconstructs(self, rng, shape):
        values = rng.standard_normal(shape)
        svd = singular_value_decomposition(as_ndarray(values))
        assert isinstance(svd, SVDResult)
        np.testing.assert_allclose(
            _reconstruct(svd.U, svd.D, svd.V), values, rtol=DECOMPOSITION.rtol, atol=DECOMPOSITION.atol
        )

    @pytest.mark.parametrize("shape", [(3, 3), (5, 3), (3, 5)])
    def test_orthogonal_factors(self, rng, shape):
        svd = singular_value_decomposition(as_ndarray(rng.standard_normal(shape)))
        assert svd.U.is_orthogonal()
        assert svd.V.is_orthogonal()

    @pytest.mark.parametrize("shape", [(3, 3), (5, 3), (3, 5)])
    def test_singular_values_match_scipy(self, rng, shape):
        values = rng.standard_normal(shape)
        svd = singular_value_decomposition(as_ndarray(values))
        np.testing.assert_allclose(
            svd.singular_values, scipy.linalg.svdvals(values), rtol=1e-9, atol=1e-12
        )

    def test_diagonal_descending_non_negative(self, rng):
        svd = singular_value_decomposition(as_ndarray(rng.standard_normal((5, 4))))
        D = svd.D.to_numpy()
        np.testing.assert_array_equal(D[~np.eye(*D.shape, dtype=bool)], 0)
        diagonal = np.diag(D)
        assert np.all(diagonal >= 0)
        assert np.all(np.diff(diagonal) <= 0)
        assert tuple(diagonal) == svd.singular_values

    def test_diagonal_input_with_negative_entries(self):
        A = as_ndarray([[1, 0, 0], [0, -3, 0], [0, 0, 2]])
        svd = A.singular_value_decomposition()
        assert svd.singular_values == pytest.approx((3, 2, 1))
        np.testing.assert_allclose(_reconstruct(svd.U, svd.D, svd.V), A.to_numpy(), atol=1e-15)

    def test_zero_matrix(self):
        svd = singular_value_decomposition(as_ndarray([[0, 0], [0, 0]]))
        assert svd.singular_values == (0, 0)

    def test_shift_matrix(self):
        # zeros on the diagonal are chased out before any shift is applied
        A = as_ndarray([[0, 1, 0], [0, 0, 1], [0, 0, 0]])
        svd = singular_value_decomposition(A)
        assert svd.singular_values == pytest.approx((1, 1, 0), abs=1e-12)
        np.testing.assert_allclose(_reconstruct(svd.U, svd.D, svd.V), A.to_numpy(), atol=1e-12)
        assert svd.U.is_orthogonal()
        assert svd.V.is_orthogonal()

    @pytest.mark.parametrize("values", [
        [[0, 2, 0, 0], [0, 0, 3, 0], [0, 0, 0, 4], [0, 0, 0, 0], [0, 0, 0, 0]],
        [[0, 1], [0, 1]],
    ])
    def test_zero_diagonal_entries(self, values):
        svd = singular_value_decomposition(as_ndarray(values))
        np.testing.assert_allclose(_reconstruct(svd.U, svd.D, svd.V), values, atol=1e-12)
        np.testing.assert_allclose(
            svd.singular_values, scipy.linalg.svdvals(values), rtol=1e-9, atol=1e-12
        )

    def test_sweep_cap(self, rng, monkeypatch):
        monkeypatch.setattr(svd_module, "SVD_MAX_SWEEPS_FACTOR", 0)
        monkeypatch.setattr(svd_module, "SVD_MIN_SWEEPS", 0)
        with pytest.raises(ConvergenceError, match="did not converge") as exc_info:
            singular_value_decomposition(as_ndarray(rng.standard_normal((3, 3))))
        assert exc_info.value.iterations == 0
        assert exc_info.value.active_block == (0, 3)

    def test_rank_deficient(self, rank_deficient_matrix):
        svd = singular_value_decomposition(rank_deficient_matrix)
        expected = scipy.linalg.svdvals(rank_deficient_matrix.to_numpy())
        np.testing.assert_allclose(svd.singular_values, expected, rtol=1e-9, atol=1e-12)
        np.testing.assert_allclose(
            _reconstruct(svd.U, svd.D, svd.V), rank_deficient_matrix.to_numpy(), atol=1e-12
        )

    def test_wide_matrix_shapes(self):
        svd = singular_value_decomposition(as_ndarray([[1, 2, 3], [4, 5, 6]]))
        assert svd.U.shape == (2, 2)
        assert svd.D.shape == (2, 3)
        assert svd.V.shape == (3, 3)

    def test_results_read_only(self, square_matrix):
        svd = singular_value_decomposition(square_matrix)
        for M in (svd.U, svd.D, svd.V):
            with pytest.raises(ReadOnlyArrayError):
                M.set_element((0, 0), 1)

    def test_input_untouched(self, square_matrix):
        before = square_matrix.to_list()
        singular_value_decomposition(square_matrix)
        assert square_matrix.to_list() == before

    def test_rejects_vector(self):
        with pytest.raises(ArrayTypeError):
            singular_value_decomposition(as_ndarray([1, 2, 3]))
