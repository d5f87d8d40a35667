"""
Descriptive Statistics for Dense Matrices.

Column-wise summaries used by the feature scorers and the imputers.

Mathematical Background:
    For a matrix X with shape (n, p), the column functions return a vector
    of length p, one value per feature. Missing values (NaN) are not
    skipped by ``col_means`` / ``col_sds``: a NaN in a column propagates to
    that column's statistic, following IEEE floating point semantics.

Supported Input Formats:
    - numpy.ndarray
    - scipy.sparse matrices (densified)
    - nested Python sequences
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from featkit._config import config
from featkit._typing import MatrixInput, ensure_dense_matrix
from featkit.error import InvalidParameterError


def _as_2d(mat: MatrixInput) -> "np.ndarray":
    # Group subsets may legitimately be empty, so the non-empty check of
    # ensure_dense_matrix does not apply here.
    if isinstance(mat, np.ndarray) and mat.ndim == 2:
        return mat.astype(np.float64, copy=False)
    return ensure_dense_matrix(mat)


# =============================================================================
# Mean / Standard Deviation
# =============================================================================

def col_means(mat: MatrixInput) -> "np.ndarray":
    """Compute the mean of each column.

    Args:
        mat: Input matrix (rows x features).

    Returns:
        float64 array of length p. A matrix with no rows yields NaN for
        every column.

    Examples:
        >>> col_means([[1.0, 2.0], [3.0, 6.0]])
        array([2., 4.])
    """
    x = _as_2d(mat)
    n = x.shape[0]
    if n == 0:
        return np.full(x.shape[1], np.nan)
    return x.sum(axis=0) / n


def col_sds(mat: MatrixInput, ddof: Optional[int] = None) -> "np.ndarray":
    """Compute the standard deviation of each column.

    Algorithm:
        sd_j = sqrt(sum_i (x_ij - mean_j)^2 / (n - ddof))

    Args:
        mat: Input matrix (rows x features).
        ddof: Delta degrees of freedom. ``None`` uses
            ``config.compute.ddof`` (1, the sample standard deviation,
            unless reconfigured).

    Returns:
        float64 array of length p. Columns with ``n <= ddof`` rows yield
        NaN.

    Raises:
        InvalidParameterError: If ddof is negative.

    See Also:
        col_means: Column means.
    """
    if ddof is None:
        ddof = config.compute.ddof
    if ddof < 0:
        raise InvalidParameterError(f"ddof must be non-negative, got {ddof}")

    x = _as_2d(mat)
    n = x.shape[0]
    if n <= ddof:
        return np.full(x.shape[1], np.nan)

    centered = x - col_means(x)
    return np.sqrt((centered * centered).sum(axis=0) / (n - ddof))


# =============================================================================
# Missing Value Counts
# =============================================================================

def row_missing_counts(mat: MatrixInput) -> "np.ndarray":
    """Number of NaN entries in each row (int64, length n)."""
    return np.isnan(_as_2d(mat)).sum(axis=1)


def col_missing_counts(mat: MatrixInput) -> "np.ndarray":
    """Number of NaN entries in each column (int64, length p)."""
    return np.isnan(_as_2d(mat)).sum(axis=0)


__all__ = [
    "col_means",
    "col_sds",
    "row_missing_counts",
    "col_missing_counts",
]
