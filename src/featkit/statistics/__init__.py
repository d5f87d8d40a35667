"""
featkit Statistics Module.

This module provides the numeric building blocks shared by the feature
scorers and the imputers:

    - Descriptive statistics (column means, standard deviations,
      missing value counts)
    - Partial squared Euclidean distances between rows with missing values

Example:
    >>> import featkit.statistics as stats
    >>>
    >>> stats.col_means([[1.0, 2.0], [3.0, 4.0]])
    array([2., 3.])
    >>> stats.partial_sqeuclidean([1.0, float('nan')], [3.0, 4.0])
    (4.0, 1)
"""

from featkit.statistics.descriptive import (
    col_means,
    col_sds,
    row_missing_counts,
    col_missing_counts,
)

from featkit.statistics.distance import (
    MAX_DISTANCE,
    partial_sqeuclidean,
    corrected_distances,
)

__all__ = [
    # Descriptive
    "col_means",
    "col_sds",
    "row_missing_counts",
    "col_missing_counts",
    # Distance
    "MAX_DISTANCE",
    "partial_sqeuclidean",
    "corrected_distances",
]
