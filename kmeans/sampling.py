"""
Random index sources used to pick the initial centroids.

Every sampler honours the same contract: ``sample(n, k)`` returns ``k``
distinct indices in ``[0, n)`` or raises ``InsufficientPointsError``.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class InsufficientPointsError(ValueError):
    """Raised when more distinct indices are requested than there are points."""

    def __init__(self, n_points: int, k: int):
        super().__init__(
            f"Cannot select {k} distinct centroids from {n_points} points"
        )
        self.n_points = n_points
        self.k = k


class IndexSampler(ABC):
    """Base class for distinct-index samplers"""

    @abstractmethod
    def sample(self, n: int, k: int) -> np.ndarray:
        """
        Select k distinct indices out of range(n).

        Args:
            n: Number of candidates
            k: Number of indices to draw

        Returns:
            (k,) int array of distinct indices
        """
        pass

    @staticmethod
    def _check(n: int, k: int) -> None:
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        if k > n:
            raise InsufficientPointsError(n, k)


class SeededIndexSampler(IndexSampler):
    """Deterministic sampler backed by a seeded numpy Generator.

    Uses a partial Fisher-Yates shuffle, so exactly k draws are made and the
    same seed always produces the same sequence of selections.
    """

    def __init__(self, seed: Optional[int] = 0):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def sample(self, n: int, k: int) -> np.ndarray:
        self._check(n, k)
        indices = np.arange(n, dtype=np.intp)
        for i in range(k):
            j = int(self._rng.integers(i, n))
            indices[i], indices[j] = indices[j], indices[i]
        return indices[:k].copy()

    def __repr__(self) -> str:
        return f"SeededIndexSampler(seed={self.seed!r})"


class PlatformIndexSampler(IndexSampler):
    """Non-deterministic sampler backed by the operating system's random source."""

    def __init__(self):
        self._random = random.SystemRandom()

    def sample(self, n: int, k: int) -> np.ndarray:
        self._check(n, k)
        return np.array(self._random.sample(range(n), k), dtype=np.intp)

    def __repr__(self) -> str:
        return "PlatformIndexSampler()"
