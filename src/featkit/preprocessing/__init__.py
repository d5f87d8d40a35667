"""
featkit Preprocessing Module.

This module provides data preparation operations applied before feature
scoring or model fitting.

Submodules:
    - imputation: k-nearest neighbor missing value imputation

Example:
    >>> import numpy as np
    >>> import featkit.preprocessing as pp
    >>>
    >>> data = np.array([[1.0, 2.0], [2.0, np.nan], [10.0, 20.0]])
    >>> pp.KNNImputation(k=1).impute(data)   # fills data in place
    >>> pp.knn_impute(raw, k=5, copy=True)   # leaves raw untouched
"""

from featkit.preprocessing.imputation import (
    MissingValueImputation,
    KNNImputation,
    knn_impute,
)

__all__ = [
    "MissingValueImputation",
    "KNNImputation",
    "knn_impute",
]
