"""
Tests for column statistics and partial row distances.
"""

import numpy as np
import pytest
import scipy.sparse as sp

import featkit
from featkit import ComputeConfig, InvalidParameterError
from featkit.statistics import (
    MAX_DISTANCE,
    col_means,
    col_missing_counts,
    col_sds,
    corrected_distances,
    partial_sqeuclidean,
    row_missing_counts,
)


nan = np.nan


class TestColumnStats:
    """Test col_means and col_sds."""

    def test_means(self):
        """Column means of a small matrix."""
        np.testing.assert_allclose(col_means([[1.0, 2.0], [3.0, 6.0]]), [2.0, 4.0])

    def test_sample_sd_default(self):
        """The default divisor is n - 1."""
        sds = col_sds([[1.0, 0.0], [3.0, 0.0]])
        np.testing.assert_allclose(sds, [np.sqrt(2.0), 0.0])

    def test_population_sd(self):
        """ddof=0 divides by n."""
        np.testing.assert_allclose(col_sds([[1.0], [3.0]], ddof=0), [1.0])

    def test_ddof_from_config(self):
        """ddof=None reads the compute configuration."""
        with featkit.config.local(compute=ComputeConfig(ddof=0)):
            sds = col_sds([[1.0], [3.0]])
        np.testing.assert_allclose(sds, [1.0])

    def test_matches_numpy(self, default_dataset):
        """Agrees with numpy's mean and std."""
        x = default_dataset.x
        np.testing.assert_allclose(col_means(x), x.mean(axis=0))
        np.testing.assert_allclose(col_sds(x), x.std(axis=0, ddof=1))

    def test_too_few_rows(self):
        """A single row has no sample standard deviation."""
        assert np.all(np.isnan(col_sds([[4.0, 5.0]])))

    def test_empty_group(self):
        """A group with no rows yields NaN."""
        empty = np.empty((0, 3))
        assert np.all(np.isnan(col_means(empty)))
        assert np.all(np.isnan(col_sds(empty)))

    def test_nan_propagates(self):
        """NaN is not skipped."""
        means = col_means([[1.0, nan], [3.0, 2.0]])
        assert means[0] == pytest.approx(2.0)
        assert np.isnan(means[1])

    def test_sparse_input(self):
        """Sparse matrices are densified."""
        mat = sp.csr_matrix(np.array([[0.0, 2.0], [4.0, 0.0]]))
        np.testing.assert_allclose(col_means(mat), [2.0, 1.0])

    def test_negative_ddof(self):
        """Negative ddof is rejected."""
        with pytest.raises(InvalidParameterError):
            col_sds([[1.0], [2.0]], ddof=-1)


class TestMissingCounts:
    """Test NaN counting per row and column."""

    def test_counts(self):
        """Counts along both axes."""
        mat = [[nan, 1.0, nan], [2.0, 3.0, nan]]
        np.testing.assert_array_equal(row_missing_counts(mat), [2, 1])
        np.testing.assert_array_equal(col_missing_counts(mat), [1, 0, 2])


class TestPartialDistance:
    """Test partial_sqeuclidean."""

    def test_shared_coordinates_only(self):
        """Only coordinates present in both rows count."""
        raw, n = partial_sqeuclidean([1.0, nan, 3.0], [2.0, 5.0, nan])
        assert raw == pytest.approx(1.0)
        assert n == 1

    def test_complete_rows(self):
        """Complete rows give the full squared Euclidean distance."""
        raw, n = partial_sqeuclidean([0.0, 0.0], [3.0, 4.0])
        assert raw == pytest.approx(25.0)
        assert n == 2

    def test_no_overlap(self):
        """Disjoint rows share nothing."""
        assert partial_sqeuclidean([1.0, nan], [nan, 2.0]) == (0.0, 0)

    def test_length_mismatch(self):
        """Rows of different length are rejected."""
        with pytest.raises(ValueError):
            partial_sqeuclidean([1.0, 2.0], [1.0])


class TestCorrectedDistances:
    """Test the overlap correction and the usability threshold."""

    def test_scaled_by_overlap(self):
        """Usable candidates are scaled by p / n."""
        # x observes 2 of 3 coordinates; the candidate shares both.
        x = [0.0, 0.0, nan]
        data = [[1.0, 1.0, 5.0]]
        dist = corrected_distances(x, data)
        assert dist[0] == pytest.approx(2.0 * 3 / 2)

    def test_insufficient_overlap(self):
        """A candidate sharing half or less of x's observed coordinates is not usable."""
        x = [0.0, 0.0, 0.0, 0.0]
        data = [
            [1.0, 1.0, nan, nan],  # n = 2, needs > 2
            [1.0, 1.0, 1.0, nan],  # n = 3
        ]
        dist = corrected_distances(x, data)
        assert dist[0] == MAX_DISTANCE
        assert dist[1] == pytest.approx(3.0 * 4 / 3)

    def test_threshold_uses_observed_count(self):
        """With 5 columns and 2 missing, one shared coordinate is not enough."""
        x = [0.0, 0.0, 0.0, nan, nan]
        data = [
            [2.0, nan, nan, 1.0, 1.0],  # n = 1, 2 > 3 fails
            [2.0, 2.0, nan, 1.0, 1.0],  # n = 2, 4 > 3 holds
        ]
        dist = corrected_distances(x, data)
        assert dist[0] == MAX_DISTANCE
        assert dist[1] == pytest.approx(8.0 * 5 / 2)

    def test_self_distance_is_zero(self):
        """A row is at distance zero from itself."""
        data = np.array([[1.0, nan, 3.0], [2.0, 2.0, 2.0]])
        dist = corrected_distances(data[0], data)
        assert dist[0] == 0.0

    def test_agrees_with_partial_distance(self, default_dataset):
        """Vectorized distances match the pairwise definition."""
        data = default_dataset.x_missing[:20]
        x = data[3]
        p = x.shape[0]
        m = int(np.isnan(x).sum())

        expected = []
        for row in data:
            raw, n = partial_sqeuclidean(x, row)
            expected.append(raw * p / n if 2 * n > p - m else MAX_DISTANCE)

        np.testing.assert_allclose(corrected_distances(x, data), expected)
