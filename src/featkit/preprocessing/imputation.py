"""
Missing Value Imputation.

This module fills missing values (NaN) of a data matrix in place.

Implemented Methods:
    - k-nearest neighbor imputation (KNNImputation)

The KNN-based method selects rows similar to the row of interest to impute
its missing values. For a row A with a missing value in column j, it finds
the k rows closest to A (squared Euclidean distance over the columns both
rows observe) that have a value present in column j, and uses the average
of their values at j as the estimate for A[j].

Execution Modes:
    Sequential (default): rows are imputed in original order, in place, so
    the distances of a later row already see the imputed values of earlier
    rows.

    Parallel (``config.parallel``): the matrix is snapshotted first; every
    row reads only the snapshot and writes only its own cells. Results do
    not depend on thread scheduling, but may differ from sequential mode.
"""

from __future__ import annotations

import logging
import numbers
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

import numpy as np

from featkit._config import config
from featkit._typing import (
    MatrixInput,
    ensure_dense_matrix,
    get_format,
    writeable_float_view,
)
from featkit.error import (
    AllValuesMissingInColumnError,
    AllValuesMissingInRowError,
    InvalidParameterError,
)
from featkit.statistics.descriptive import col_missing_counts, row_missing_counts
from featkit.statistics.distance import corrected_distances

logger = logging.getLogger("featkit.imputation")


# =============================================================================
# Imputation Interface
# =============================================================================

class MissingValueImputation(ABC):
    """Interface of missing value imputation algorithms."""

    @abstractmethod
    def impute(self, data: MatrixInput) -> Any:
        """Fill the missing values (NaN) of ``data`` in place.

        Returns:
            ``data`` itself, for chaining.
        """


# =============================================================================
# KNN Imputation
# =============================================================================

class KNNImputation(MissingValueImputation):
    """Missing value imputation by k-nearest neighbors.

    Args:
        k: Number of neighbors averaged for each missing value.

    Raises:
        InvalidParameterError: If k is not a positive integer.

    Examples:
        >>> import numpy as np
        >>> data = np.array([[1.0, 2.0], [2.0, np.nan], [10.0, 20.0]])
        >>> KNNImputation(k=1).impute(data)
        array([[ 1.,  2.],
               [ 2.,  2.],
               [10., 20.]])
    """

    def __init__(self, k: int):
        if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
            raise InvalidParameterError(
                f"Invalid number of nearest neighbors for imputation: {k}"
            )
        self.k = int(k)

    def __repr__(self) -> str:
        return f"KNNImputation(k={self.k})"

    def impute(self, data: MatrixInput) -> Any:
        """Impute the missing values of ``data`` in place.

        Algorithm (per row x with at least one NaN):
            1. Corrected partial distance from x to every row, x included
               (see ``featkit.statistics.corrected_distances``)
            2. Stable sort of the row indices by distance, ties broken by
               row position
            3. For each NaN column j of x, average the first k values
               present at column j along the sorted rows

        Time Complexity:
            O(n^2 * p) for distances plus O(n^2 log n) for sorting, where
            n is the number of rows and p the number of columns.

        Args:
            data: Matrix to fill. A writeable floating point ndarray is
                filled directly; a list of rows gets its missing cells
                overwritten, where each row is a list or a writeable 1-D
                floating point ndarray. Integer/bool arrays hold no missing
                values and are returned unchanged after validation.

        Returns:
            ``data`` itself.

        Raises:
            InvalidParameterError: If ``data`` cannot be filled in place
                (read-only array, tuple rows, ragged or non-2-D input).
            AllValuesMissingInRowError: If a row is entirely NaN.
            AllValuesMissingInColumnError: If a column is entirely NaN.

        Notes:
            - All preconditions are checked before the first write, so a
              failed call leaves ``data`` untouched.
            - Rows without missing values are never modified.
            - If no candidate row has a value at a missing column the cell
              is set to NaN and a warning is logged. The column check above
              makes this unreachable for finite input.
        """
        fmt = get_format(data)
        target = writeable_float_view(data)

        if target is not None:
            work = target
        elif fmt == "numpy" and data.dtype.kind in "iub":
            _check_imputable(ensure_dense_matrix(data))
            return data
        elif fmt == "numpy":
            raise InvalidParameterError(
                "Cannot impute in place: array must be a writeable 2-D floating point array"
            )
        elif fmt == "row_list":
            work = ensure_dense_matrix(data, copy=True)
        else:
            raise InvalidParameterError(
                f"Cannot impute in place: unsupported matrix type {type(data).__name__}"
            )

        _check_shape_2d(work)
        missing = _check_imputable(work)

        incomplete = np.flatnonzero(missing > 0)
        parallel = config.parallel.use_parallel(work.shape[0]) and incomplete.size > 1
        logger.debug(
            "KNN imputation (k=%d) on %d x %d matrix: %d incomplete rows, %s",
            self.k, work.shape[0], work.shape[1], incomplete.size,
            "parallel" if parallel else "sequential",
        )

        if incomplete.size == 0:
            return data

        holes = np.isnan(work) if fmt == "row_list" else None

        if parallel:
            self._impute_parallel(work, incomplete)
        else:
            for i in incomplete:
                _impute_row(work[i], work, self.k, i)

        if holes is not None:
            _write_back(data, work, holes)

        return data

    def _impute_parallel(self, work: "np.ndarray", incomplete: "np.ndarray") -> None:
        snapshot = work.copy()
        workers = config.parallel.resolve_workers()
        k = self.k

        def task(i: int) -> "np.ndarray":
            row = snapshot[i].copy()
            _impute_row(row, snapshot, k, i)
            return row

        with ThreadPoolExecutor(max_workers=workers) as pool:
            rows = list(pool.map(task, incomplete.tolist()))

        for i, row in zip(incomplete.tolist(), rows):
            work[i] = row


def knn_impute(data: MatrixInput, k: int, *, copy: bool = False) -> Any:
    """Impute missing values by k-nearest neighbors.

    Functional form of ``KNNImputation(k).impute(data)``.

    Args:
        data: Matrix with missing values (NaN).
        k: Number of neighbors averaged for each missing value.
        copy: If True, impute a float64 copy and return it, leaving
            ``data`` unchanged. Any matrix input (sequences, scipy sparse,
            read-only arrays) is accepted in this mode.

    Returns:
        The imputed matrix: ``data`` itself, or the new copy.

    See Also:
        KNNImputation: Class form and algorithm description.
    """
    imputer = KNNImputation(k)
    if copy:
        return imputer.impute(ensure_dense_matrix(data, copy=True))
    return imputer.impute(data)


# =============================================================================
# Helpers
# =============================================================================

def _check_shape_2d(work: "np.ndarray") -> None:
    if work.ndim != 2 or work.shape[0] == 0 or work.shape[1] == 0:
        raise InvalidParameterError(
            f"Matrix must have at least one row and one column, got shape {work.shape}"
        )


def _check_imputable(work: "np.ndarray") -> "np.ndarray":
    """Validate that every row and column has an observed value.

    Returns:
        Number of missing values per row.
    """
    n, p = work.shape
    row_missing = row_missing_counts(work)
    full_rows = np.flatnonzero(row_missing == p)
    if full_rows.size:
        raise AllValuesMissingInRowError(int(full_rows[0]))

    col_missing = col_missing_counts(work)
    full_cols = np.flatnonzero(col_missing == n)
    if full_cols.size:
        raise AllValuesMissingInColumnError(int(full_cols[0]))

    return row_missing


def _impute_row(x: "np.ndarray", data: "np.ndarray", k: int, index: int) -> None:
    """Fill the NaN entries of row ``x`` from the rows of ``data``."""
    dist = corrected_distances(x, data)
    # Stable argsort keeps equal distances in row order.
    order = np.argsort(dist, kind='stable')

    for j in np.flatnonzero(np.isnan(x)):
        values = data[order, j]
        values = values[~np.isnan(values)][:k]
        if values.size == 0:
            logger.warning(
                "No neighbor of row %d has a value in column %d; leaving NaN", index, j
            )
        else:
            x[j] = values.sum() / values.size


def _write_back(rows: Sequence[list], work: "np.ndarray", holes: "np.ndarray") -> None:
    for i, j in zip(*np.nonzero(holes)):
        rows[i][j] = float(work[i, j])


__all__ = [
    "MissingValueImputation",
    "KNNImputation",
    "knn_impute",
]
