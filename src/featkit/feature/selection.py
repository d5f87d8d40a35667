"""
Univariate Feature Ranking for Binary Classification.

This module scores each feature (column) of a data matrix by how well it
separates two classes on its own.

Implemented Methods:
    - Signal-to-noise ratio (S2N)

Scores are returned unranked, index-aligned with the input columns.
``rank_features`` turns a score vector into a column ordering for callers
that want to select the top features.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from featkit._typing import LabelInput, MatrixInput, ensure_dense_matrix
from featkit.error import InvalidLabelError, InvalidParameterError, NotBinaryError
from featkit.feature.labels import ClassLabels
from featkit.statistics.descriptive import col_means, col_sds

logger = logging.getLogger("featkit.feature")


# =============================================================================
# Ranking Interface
# =============================================================================

class FeatureRanking(ABC):
    """Univariate feature ranking metric.

    Implementations return one score per feature; larger scores mean a
    more informative feature.
    """

    @abstractmethod
    def rank(self, x: MatrixInput, y: LabelInput) -> "np.ndarray":
        """Score every feature of ``x`` against class labels ``y``."""


# =============================================================================
# Signal-to-Noise Ratio
# =============================================================================

class SignalNoiseRatio(FeatureRanking):
    """Signal-to-noise ratio feature ranking for binary classification.

    S2N is defined as |mu_0 - mu_1| / (sigma_0 + sigma_1), where mu_c and
    sigma_c are the mean and standard deviation of the feature in class c.
    Features with larger S2N ratios are better for classification.

    References:
        M. Shipp, et al. Diffuse large B-cell lymphoma outcome prediction
        by gene-expression profiling and supervised machine learning.
        Nature Medicine, 2002.
    """

    def rank(self, x: MatrixInput, y: LabelInput) -> "np.ndarray":
        return self.of(x, y)

    @staticmethod
    def of(x: MatrixInput, y: LabelInput) -> "np.ndarray":
        """Compute the signal-to-noise ratio of each feature.

        Note that this method does NOT rank the features. It returns the
        metric value of each feature; use ``rank_features`` to order them.

        Algorithm:
            1. Encode labels to canonical codes {0, 1}
            2. Split rows into class 0 and class 1, keeping row order
            3. Compute column means and standard deviations per class
            4. s2n[j] = |mu0[j] - mu1[j]| / (sd0[j] + sd1[j])

        Args:
            x: n-by-p data matrix of n instances with p features.
                scipy sparse input is densified.
            y: Class labels, exactly two distinct integer values.

        Returns:
            float64 array of length p. A column whose standard deviations
            sum to zero yields inf (or NaN when the means are also equal).
            NaN in ``x`` propagates to the affected columns.

        Raises:
            SizeMismatchError: If ``len(y)`` differs from the row count.
            NotBinaryError: If ``y`` does not hold exactly two classes.
            InvalidLabelError: If a label is not a valid binary code.

        Examples:
            >>> x = [[-1.0], [0.0], [1.0], [3.0], [4.0], [5.0]]
            >>> SignalNoiseRatio.of(x, [0, 0, 0, 1, 1, 1])
            array([2.])
        """
        x = ensure_dense_matrix(x)
        n = x.shape[0]

        codec = ClassLabels.fit(y, size=n)
        if codec.k != 2:
            raise NotBinaryError(
                f"SignalNoiseRatio is applicable only to binary class, got {codec.k} classes"
            )

        codes = codec.y
        invalid = (codes != 0) & (codes != 1)
        if np.any(invalid):
            raise InvalidLabelError(f"Invalid class label: {codes[np.argmax(invalid)]}")

        x0 = x[codes == 0]
        x1 = x[codes == 1]
        logger.debug("S2N on %d x %d matrix, class sizes %d/%d",
                     n, x.shape[1], x0.shape[0], x1.shape[0])

        mu0 = col_means(x0)
        mu1 = col_means(x1)
        sd0 = col_sds(x0)
        sd1 = col_sds(x1)

        with np.errstate(divide='ignore', invalid='ignore'):
            return np.abs(mu0 - mu1) / (sd0 + sd1)


def signal_noise_ratio(x: MatrixInput, y: LabelInput) -> "np.ndarray":
    """Signal-to-noise ratio of each feature. See ``SignalNoiseRatio.of``."""
    return SignalNoiseRatio.of(x, y)


# =============================================================================
# Ranking Helper
# =============================================================================

def rank_features(scores, n_top: Optional[int] = None) -> "np.ndarray":
    """Order feature indices by descending score.

    Ties keep the original column order; NaN scores sort last.

    Args:
        scores: 1-D feature scores, e.g. from ``signal_noise_ratio``.
        n_top: Return only the first ``n_top`` indices. None returns all.

    Returns:
        int64 array of column indices, most informative first.

    Raises:
        InvalidParameterError: If n_top is negative or scores is not 1-D.
    """
    s = np.asarray(scores, dtype=np.float64)
    if s.ndim != 1:
        raise InvalidParameterError(f"Scores must be 1-D, got {s.ndim} dimension(s)")
    if n_top is not None and n_top < 0:
        raise InvalidParameterError(f"n_top must be non-negative, got {n_top}")

    key = np.where(np.isnan(s), np.inf, -s)
    order = np.argsort(key, kind='stable')
    if n_top is not None:
        order = order[:n_top]
    return order.astype(np.int64)


__all__ = [
    "FeatureRanking",
    "SignalNoiseRatio",
    "signal_noise_ratio",
    "rank_features",
]
