"""
Discrete cosine transform (DCT-II) for the perceptual hash.

The cosine basis depends only on the transform size N, so it is computed once
and reused. A table holds one N at a time; asking for another N rebuilds it.

Public API:
- CosineTable: lazily built, lock-guarded table of cosine values
- DCTEngine: separable DCT-II along rows or columns of a 2-D grid
- get_default_engine(): shared engine instance
"""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple, Optional

import numpy as np

_logger = logging.getLogger(__name__)


class _TableState(NamedTuple):
    size: int
    values: np.ndarray


class CosineTable:
    """
    Table of ``cos(pi * k * (2n + 1) / (2N))`` for one fixed N.

    Reads take no lock. A (re)build happens under a lock with a second check,
    and the finished table is published with a single assignment, so readers
    see either the complete old table or the complete new one.
    """

    def __init__(self):
        self._state: Optional[_TableState] = None
        self._lock = threading.Lock()
        self.build_count = 0

    @property
    def size(self) -> Optional[int]:
        state = self._state
        return state.size if state is not None else None

    def _build(self, size: int) -> _TableState:
        n = np.arange(size, dtype=np.float64)[:, None]
        k = np.arange(size, dtype=np.float64)[None, :]
        values = np.cos(np.pi * k * (2 * n + 1) / (2 * size))
        values.setflags(write=False)
        return _TableState(size, values)

    def _state_for(self, size: int) -> _TableState:
        state = self._state
        if state is not None and state.size == size:
            return state
        if size < 1:
            raise ValueError(f"Transform size must be positive, got {size}")
        with self._lock:
            # Double-check after acquiring lock
            state = self._state
            if state is None or state.size != size:
                if state is not None:
                    _logger.debug(f"Rebuilding cosine table: N={state.size} -> N={size}")
                state = self._build(size)
                self._state = state
                self.build_count += 1
        return state

    def matrix(self, size: int) -> np.ndarray:
        """
        Return the read-only N x N table, indexed ``[n, k]``.

        Args:
            size: Transform size N

        Returns:
            Array of cosine values for this N
        """
        return self._state_for(size).values

    def cos(self, n: int, size: int, k: int) -> float:
        if not (0 <= n < size and 0 <= k < size):
            raise IndexError(f"Cosine index out of range: n={n}, k={k}, N={size}")
        return float(self._state_for(size).values[n, k])


class DCTEngine:
    """Separable 2-D DCT-II backed by its own CosineTable."""

    def __init__(self, table: Optional[CosineTable] = None):
        self.table = table if table is not None else CosineTable()

    def transform(self, grid, axis: int) -> np.ndarray:
        """
        Apply a DCT-II along one axis of a 2-D grid.

        For each output index k along the axis:
        ``out[k] = 2 * sum_n grid[n] * cos(n, N, k)`` (SciPy's unnormalized form).

        Args:
            grid: 2-D array of real values
            axis: 0 to transform down each column, 1 to transform across each row

        Returns:
            New float64 array with the same shape as grid

        Raises:
            ValueError: If axis is not 0 or 1, or grid is not 2-D
        """
        if axis not in (0, 1):
            raise ValueError(f"Invalid axis specified: {axis}. Must be 0 or 1")
        values = np.asarray(grid, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Expected a 2-D grid, got {values.ndim} dimension(s)")
        if values.size == 0:
            return values.copy()

        size = values.shape[axis]
        basis = self.table.matrix(size)
        if axis == 0:
            # out[k, col] = 2 * sum_n grid[n, col] * cos[n, k]
            return 2.0 * (basis.T @ values)
        # out[row, k] = 2 * sum_n grid[row, n] * cos[n, k]
        return 2.0 * (values @ basis)

    def transform_2d(self, grid) -> np.ndarray:
        """Full 2-D DCT-II: columns first, then rows."""
        return self.transform(self.transform(grid, 0), 1)


_default_engine: Optional[DCTEngine] = None
_engine_lock = threading.Lock()


def get_default_engine() -> DCTEngine:
    """
    Get or create the shared DCT engine (thread-safe).

    Returns:
        Singleton DCTEngine instance
    """
    global _default_engine
    if _default_engine is None:
        with _engine_lock:
            if _default_engine is None:
                _default_engine = DCTEngine()
    return _default_engine


def reset_default_engine():
    """Drop the shared engine (mainly for testing)."""
    global _default_engine
    with _engine_lock:
        _default_engine = None


__all__ = [
    'CosineTable',
    'DCTEngine',
    'get_default_engine',
    'reset_default_engine',
]
