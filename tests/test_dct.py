"""
Unit tests for the cosine table and DCT engine.
"""

import math
import threading

import numpy as np
import pytest

from dupescan.dct import CosineTable, DCTEngine, get_default_engine, reset_default_engine


def naive_dct(values, axis):
    """Direct evaluation of out[k] = 2 * sum_n x[n] * cos(pi*k*(2n+1)/(2N))."""
    values = np.asarray(values, dtype=np.float64)
    if axis == 1:
        return naive_dct(values.T, 0).T
    rows, cols = values.shape
    out = np.zeros_like(values)
    for col in range(cols):
        for k in range(rows):
            total = 0.0
            for n in range(rows):
                total += values[n, col] * math.cos(math.pi * k * (2 * n + 1) / (2 * rows))
            out[k, col] = 2 * total
    return out


class TestCosineTable:
    """Test CosineTable."""

    def test_values_match_formula(self):
        table = CosineTable()
        for n in range(8):
            for k in range(8):
                expected = math.cos(math.pi * k * (2 * n + 1) / 16)
                assert table.cos(n, 8, k) == pytest.approx(expected, abs=1e-12)

    def test_built_lazily(self):
        table = CosineTable()
        assert table.size is None
        assert table.build_count == 0
        table.cos(0, 4, 0)
        assert table.size == 4
        assert table.build_count == 1

    def test_reused_for_same_size(self):
        table = CosineTable()
        first = table.matrix(32)
        second = table.matrix(32)
        assert first is second
        assert table.build_count == 1

    def test_rebuilds_when_size_changes(self):
        """A new N must not return values left over from the previous N."""
        table = CosineTable()
        assert table.cos(1, 4, 1) == pytest.approx(math.cos(3 * math.pi / 8))
        assert table.cos(1, 8, 1) == pytest.approx(math.cos(3 * math.pi / 16))
        assert table.size == 8
        assert table.cos(1, 4, 1) == pytest.approx(math.cos(3 * math.pi / 8))
        assert table.build_count == 3

    def test_matrix_is_read_only(self):
        table = CosineTable()
        with pytest.raises(ValueError):
            table.matrix(4)[0, 0] = 5.0

    def test_index_out_of_range(self):
        table = CosineTable()
        with pytest.raises(IndexError):
            table.cos(4, 4, 0)
        with pytest.raises(IndexError):
            table.cos(0, 4, -1)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            CosineTable().matrix(0)

    def test_concurrent_first_access_builds_once(self):
        table = CosineTable()
        barrier = threading.Barrier(8)
        seen = []

        def reader():
            barrier.wait()
            seen.append(table.matrix(32))

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert table.build_count == 1
        assert all(m is seen[0] for m in seen)
        assert seen[0].shape == (32, 32)


class TestDCTEngine:
    """Test DCTEngine.transform."""

    @pytest.mark.parametrize("axis", [0, 1])
    def test_matches_direct_sum(self, axis):
        rng = np.random.default_rng(7)
        grid = rng.random((6, 5))
        result = DCTEngine().transform(grid, axis)
        np.testing.assert_allclose(result, naive_dct(grid, axis), atol=1e-10)

    def test_shape_preserved(self):
        grid = np.ones((3, 7))
        engine = DCTEngine()
        assert engine.transform(grid, 0).shape == (3, 7)
        assert engine.transform(grid, 1).shape == (3, 7)

    def test_returns_new_grid(self):
        grid = np.arange(16, dtype=np.float64).reshape(4, 4)
        before = grid.copy()
        DCTEngine().transform(grid, 0)
        np.testing.assert_array_equal(grid, before)

    @pytest.mark.parametrize("size", [4, 8, 32])
    def test_separable_order_independent(self, size):
        rng = np.random.default_rng(size)
        base = rng.random((size, size))
        symmetric = (base + base.T) / 2
        engine = DCTEngine()
        cols_then_rows = engine.transform(engine.transform(symmetric, 0), 1)
        rows_then_cols = engine.transform(engine.transform(symmetric, 1), 0)
        np.testing.assert_allclose(cols_then_rows, rows_then_cols, atol=1e-9)

    def test_constant_grid_only_dc_term(self):
        size = 32
        grid = np.full((size, size), 0.5)
        freqs = DCTEngine().transform_2d(grid)
        assert freqs[0, 0] == pytest.approx(4 * size * size * 0.5)
        rest = freqs.copy()
        rest[0, 0] = 0.0
        assert np.max(np.abs(rest)) < 1e-9

    def test_accepts_nested_lists(self):
        result = DCTEngine().transform([[1.0, 2.0], [3.0, 4.0]], 1)
        np.testing.assert_allclose(result, naive_dct([[1.0, 2.0], [3.0, 4.0]], 1))

    @pytest.mark.parametrize("axis", [-1, 2, 5])
    def test_invalid_axis(self, axis):
        with pytest.raises(ValueError, match="Invalid axis"):
            DCTEngine().transform(np.zeros((4, 4)), axis)

    def test_rejects_non_2d(self):
        with pytest.raises(ValueError):
            DCTEngine().transform(np.zeros(4), 0)

    def test_engines_do_not_share_tables(self):
        a, b = DCTEngine(), DCTEngine()
        a.transform(np.zeros((8, 8)), 0)
        assert a.table.size == 8
        assert b.table.size is None


class TestDefaultEngine:
    """Test the shared engine accessor."""

    def test_singleton(self):
        reset_default_engine()
        assert get_default_engine() is get_default_engine()

    def test_reset(self):
        first = get_default_engine()
        reset_default_engine()
        assert get_default_engine() is not first
