"""
featkit Feature Module.

This module provides univariate feature scoring for supervised feature
selection.

Submodules:
    - selection: Signal-to-noise ratio and feature ranking helpers
    - labels: Class label encoding

Example:
    >>> import featkit.feature as feat
    >>>
    >>> scores = feat.signal_noise_ratio(x, y)
    >>> top10 = feat.rank_features(scores, n_top=10)
"""

from featkit.feature.labels import (
    ClassLabels,
)

from featkit.feature.selection import (
    FeatureRanking,
    SignalNoiseRatio,
    signal_noise_ratio,
    rank_features,
)

__all__ = [
    # Labels
    "ClassLabels",
    # Selection
    "FeatureRanking",
    "SignalNoiseRatio",
    "signal_noise_ratio",
    "rank_features",
]
