"""
Tests for the featkit configuration system.
"""

import threading

import pytest

import featkit
from featkit import (
    ComputeConfig,
    InvalidParameterError,
    ParallelConfig,
    ParallelStrategy,
    col_sds,
)


class TestDefaults:
    """Test default configuration values."""

    def test_parallel_defaults(self, monkeypatch):
        """Sequential by default, thread count auto-detected."""
        monkeypatch.delenv("FEATKIT_NUM_THREADS", raising=False)
        cfg = ParallelConfig()

        assert cfg.strategy == ParallelStrategy.SEQUENTIAL
        assert cfg.num_threads == 0
        assert cfg.min_rows_per_thread == 256

    def test_compute_defaults(self):
        """Sample standard deviation by default."""
        assert ComputeConfig().ddof == 1
        assert featkit.config.compute.ddof == 1

    def test_get_config(self):
        """get_config returns the global instance."""
        assert featkit.get_config() is featkit.config

    def test_num_threads_from_environment(self, monkeypatch):
        """FEATKIT_NUM_THREADS seeds the default thread count."""
        monkeypatch.setenv("FEATKIT_NUM_THREADS", "3")
        assert ParallelConfig().num_threads == 3

    def test_invalid_environment_value(self, monkeypatch):
        """Unparsable values fall back to auto-detection."""
        monkeypatch.setenv("FEATKIT_NUM_THREADS", "many")
        assert ParallelConfig().num_threads == 0

    def test_negative_ddof_rejected(self):
        """A compute section cannot hold a negative ddof."""
        with pytest.raises(InvalidParameterError):
            ComputeConfig(ddof=-1)


class TestParallelDecision:
    """Test ParallelConfig.use_parallel and resolve_workers."""

    def test_forced_strategies(self):
        """SEQUENTIAL and PARALLEL ignore the matrix size."""
        assert not ParallelConfig(strategy=ParallelStrategy.SEQUENTIAL).use_parallel(10**6)
        assert ParallelConfig(strategy=ParallelStrategy.PARALLEL).use_parallel(1)

    def test_auto_threshold(self):
        """AUTO needs enough rows for two threads."""
        cfg = ParallelConfig(strategy=ParallelStrategy.AUTO, num_threads=4,
                             min_rows_per_thread=100)
        assert not cfg.use_parallel(199)
        assert cfg.use_parallel(200)

    def test_auto_single_thread(self):
        """AUTO with one worker stays sequential."""
        cfg = ParallelConfig(strategy=ParallelStrategy.AUTO, num_threads=1,
                             min_rows_per_thread=1)
        assert not cfg.use_parallel(1000)

    def test_resolve_workers(self):
        """Explicit thread counts win over auto-detection."""
        assert ParallelConfig(num_threads=5).resolve_workers() == 5
        assert ParallelConfig(num_threads=0).resolve_workers() >= 1


class TestLocalContext:
    """Test thread-local configuration overrides."""

    def test_override_and_restore(self):
        """local() overrides inside the block only."""
        with featkit.config.local(compute=ComputeConfig(ddof=0)) as cfg:
            assert cfg.compute.ddof == 0
        assert featkit.config.compute.ddof == 1

    def test_nested_same_section(self):
        """Leaving an inner block restores the outer override."""
        with featkit.config.local(compute=ComputeConfig(ddof=0)):
            with featkit.config.local(compute=ComputeConfig(ddof=1)):
                assert featkit.config.compute.ddof == 1
            assert featkit.config.compute.ddof == 0
            # Population SD of [0, 2] is 1.
            assert col_sds([[0.0], [2.0]])[0] == pytest.approx(1.0)
        assert featkit.config.compute.ddof == 1

    def test_nested_different_sections(self):
        """An inner block leaves other sections of the outer block alone."""
        outer = ParallelConfig(strategy=ParallelStrategy.PARALLEL, num_threads=2)
        with featkit.config.local(parallel=outer):
            with featkit.config.local(compute=ComputeConfig(ddof=0)):
                assert featkit.config.parallel is outer
            assert featkit.config.parallel is outer
            assert featkit.config.compute.ddof == 1

    def test_restore_on_exception(self):
        """Overrides are restored even when the block raises."""
        with featkit.config.local(compute=ComputeConfig(ddof=0)):
            with pytest.raises(RuntimeError):
                with featkit.config.local(compute=ComputeConfig(ddof=2)):
                    raise RuntimeError("boom")
            assert featkit.config.compute.ddof == 0
        assert featkit.config.compute.ddof == 1

    def test_unknown_section(self):
        """Unknown sections are rejected."""
        with pytest.raises(TypeError):
            featkit.config.local(memory=object())

    def test_other_threads_unaffected(self):
        """Overrides are not visible from other threads."""
        seen = []

        def read():
            seen.append(featkit.config.compute.ddof)

        with featkit.config.local(compute=ComputeConfig(ddof=0)):
            t = threading.Thread(target=read)
            t.start()
            t.join()

        assert seen == [1]


class TestGlobalSetters:
    """Test set_parallel, set_ddof and reset."""

    def test_set_parallel(self):
        """set_parallel replaces the parallel section."""
        featkit.set_parallel(num_threads=2, strategy=ParallelStrategy.PARALLEL)

        assert featkit.config.parallel.num_threads == 2
        assert featkit.config.parallel.strategy == ParallelStrategy.PARALLEL

    def test_set_ddof(self):
        """set_ddof changes the global divisor."""
        featkit.set_ddof(0)
        assert featkit.config.compute.ddof == 0

    def test_set_ddof_negative(self):
        """Negative ddof is rejected and the previous value kept."""
        with pytest.raises(InvalidParameterError):
            featkit.set_ddof(-1)
        assert featkit.config.compute.ddof == 1

    def test_reset(self):
        """reset restores the defaults."""
        featkit.set_ddof(0)
        featkit.config.reset()
        assert featkit.config.compute.ddof == 1

    def test_reset_drops_local_overrides(self):
        """reset inside a local block clears the override for this thread."""
        with featkit.config.local(compute=ComputeConfig(ddof=0)):
            featkit.config.reset()
            assert featkit.config.compute.ddof == 1
        assert featkit.config.compute.ddof == 1
