"""Distance metrics for rows with missing values.

Squared Euclidean distances computed only over the coordinates observed in
both rows, with an overlap correction that keeps distances comparable
between candidate rows that share different numbers of coordinates.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


__all__ = ['MAX_DISTANCE', 'partial_sqeuclidean', 'corrected_distances']


# Distance assigned to candidates with too little overlap. They stay in the
# ranking, after every usable candidate.
MAX_DISTANCE = float(np.finfo(np.float64).max)


def partial_sqeuclidean(x, y) -> Tuple[float, int]:
    """Squared Euclidean distance over the coordinates present in both rows.

    Args:
        x: First row (1-D, NaN marks a missing value).
        y: Second row, same length as ``x``.

    Returns:
        ``(raw, n)`` where ``raw`` is the sum of squared differences over
        the shared present coordinates and ``n`` is their count. Rows with
        no shared coordinate give ``(0.0, 0)``.

    Raises:
        ValueError: If the rows differ in length.

    Example:
        >>> partial_sqeuclidean([1.0, nan, 3.0], [2.0, 5.0, nan])
        (1.0, 1)
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.shape != y.shape:
        raise ValueError(f"Row lengths must match: {x.shape[0]} != {y.shape[0]}")

    shared = ~(np.isnan(x) | np.isnan(y))
    d = x[shared] - y[shared]
    return float(np.dot(d, d)), int(shared.sum())


def corrected_distances(x, data) -> "np.ndarray":
    """Corrected partial distances from one row to every row of a matrix.

    Algorithm:
        For each candidate row y_j with n_j coordinates shared with x and
        raw partial distance r_j, where m is the number of missing values
        in x and p the number of columns:

            d_j = r_j * p / n_j      if n_j > (p - m) / 2
            d_j = MAX_DISTANCE       otherwise

        A candidate is usable only when it overlaps a strict majority of
        the coordinates observed in x. The scaling by p / n_j estimates the
        distance over all p coordinates.

    Time Complexity:
        O(rows * columns).

    Args:
        x: Target row (1-D, length p).
        data: Candidate matrix (rows x p). ``x`` may be one of its rows.

    Returns:
        float64 array of corrected distances, one per candidate row.
    """
    x = np.asarray(x, dtype=np.float64)
    data = np.asarray(data, dtype=np.float64)

    p = x.shape[0]
    x_present = ~np.isnan(x)
    m = p - int(x_present.sum())

    shared = x_present & ~np.isnan(data)
    diff = np.where(shared, data - x, 0.0)
    raw = np.einsum('ij,ij->i', diff, diff)
    n = shared.sum(axis=1)

    usable = 2 * n > (p - m)
    dist = np.full(data.shape[0], MAX_DISTANCE)
    dist[usable] = raw[usable] * p / n[usable]
    return dist
