"""
featkit - Feature diagnostics for tabular data with missing values

Numeric diagnostics over real-valued matrices:
- k-nearest neighbor imputation of missing values (NaN), in place
- Signal-to-noise ratio feature scoring for binary classification

Modules:
- preprocessing: Missing value imputation
- feature: Feature scoring, ranking and class label encoding
- statistics: Column statistics and partial row distances

Example:
    >>> import numpy as np
    >>> import featkit
    >>>
    >>> data = np.array([[1.0, 2.0], [2.0, np.nan], [10.0, 20.0]])
    >>> featkit.knn_impute(data, k=1)
    array([[ 1.,  2.],
           [ 2.,  2.],
           [10., 20.]])
    >>>
    >>> x = [[-1.0], [0.0], [1.0], [3.0], [4.0], [5.0]]
    >>> featkit.signal_noise_ratio(x, [0, 0, 0, 1, 1, 1])
    array([2.])
"""

import logging

__version__ = '0.1.0'

from . import error
from . import statistics
from . import feature
from . import preprocessing

from ._config import (
    ParallelStrategy,
    ParallelConfig,
    ComputeConfig,
    FeatkitConfig,
    config,
    get_config,
    set_parallel,
    set_ddof,
)

from .error import (
    FeatkitError,
    InvalidParameterError,
    SizeMismatchError,
    LabelError,
    NotBinaryError,
    InvalidLabelError,
    MissingValueImputationError,
    AllValuesMissingInRowError,
    AllValuesMissingInColumnError,
)

from .statistics import (
    col_means,
    col_sds,
    partial_sqeuclidean,
    corrected_distances,
)

from .feature import (
    ClassLabels,
    FeatureRanking,
    SignalNoiseRatio,
    signal_noise_ratio,
    rank_features,
)

from .preprocessing import (
    MissingValueImputation,
    KNNImputation,
    knn_impute,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    '__version__',

    # Modules
    'error',
    'statistics',
    'feature',
    'preprocessing',

    # Configuration
    'ParallelStrategy',
    'ParallelConfig',
    'ComputeConfig',
    'FeatkitConfig',
    'config',
    'get_config',
    'set_parallel',
    'set_ddof',

    # Errors
    'FeatkitError',
    'InvalidParameterError',
    'SizeMismatchError',
    'LabelError',
    'NotBinaryError',
    'InvalidLabelError',
    'MissingValueImputationError',
    'AllValuesMissingInRowError',
    'AllValuesMissingInColumnError',

    # Statistics
    'col_means',
    'col_sds',
    'partial_sqeuclidean',
    'corrected_distances',

    # Feature scoring
    'ClassLabels',
    'FeatureRanking',
    'SignalNoiseRatio',
    'signal_noise_ratio',
    'rank_features',

    # Imputation
    'MissingValueImputation',
    'KNNImputation',
    'knn_impute',
]
