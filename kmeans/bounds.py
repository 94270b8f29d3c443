"""
Per-point distance bounds and per-centroid aggregates for Hamerly's k-means.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .distance import pairwise_squared_distances


@dataclass
class BoundState:
    """Mutable bookkeeping for one clustering run.

    Attributes:
        labels: a(i), index of the centroid each point is assigned to
        upper: u(i), upper bound on the distance from point i to centroid a(i)
        lower: l(i), lower bound on the distance from point i to its
            nearest centroid other than a(i)
        counts: number of points assigned to each centroid
        sums: component-wise sum of the points assigned to each centroid
        moved: distance each centroid travelled in the last update
    """
    labels: np.ndarray
    upper: np.ndarray
    lower: np.ndarray
    counts: np.ndarray
    sums: np.ndarray
    moved: np.ndarray

    @property
    def n_points(self) -> int:
        return self.labels.shape[0]

    @property
    def n_clusters(self) -> int:
        return self.counts.shape[0]

    def reassign(self, points: np.ndarray, idx: np.ndarray, old: np.ndarray, new: np.ndarray) -> None:
        """Move the contribution of points[idx] from centroids `old` to `new`."""
        if idx.size == 0:
            return
        moving = points[idx]
        # np.*.at handles several points leaving/entering the same centroid
        np.subtract.at(self.counts, old, 1)
        np.subtract.at(self.sums, old, moving)
        np.add.at(self.counts, new, 1)
        np.add.at(self.sums, new, moving)


def nearest_two(X: np.ndarray, centroids: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Nearest and second-nearest centroid distances for every row of X.

    Ties resolve to the lowest centroid index.

    Returns:
        labels: (n,) index of the nearest centroid
        nearest: (n,) distance to that centroid
        second: (n,) distance to the nearest other centroid (inf when k == 1)
    """
    d2 = pairwise_squared_distances(X, centroids)
    rows = np.arange(d2.shape[0])
    labels = np.argmin(d2, axis=1)
    nearest = d2[rows, labels]
    d2[rows, labels] = np.inf
    second = np.min(d2, axis=1)
    return labels, np.sqrt(nearest), np.sqrt(second)


def initialize_bounds(points: np.ndarray, centroids: np.ndarray) -> BoundState:
    """Full nearest/second-nearest pass that seeds the bounds and aggregates."""
    k, dim = centroids.shape
    labels, upper, lower = nearest_two(points, centroids)

    counts = np.bincount(labels, minlength=k).astype(np.int64)
    sums = np.zeros((k, dim), dtype=np.float64)
    np.add.at(sums, labels, points)

    return BoundState(
        labels=labels.astype(np.intp),
        upper=upper,
        lower=lower,
        counts=counts,
        sums=sums,
        moved=np.zeros(k, dtype=np.float64),
    )
