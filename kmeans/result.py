"""
Result of a clustering run, with membership testing for new points.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from .distance import distance, pairwise_squared_distances

DistanceFunc = Callable[[np.ndarray, np.ndarray], float]


@dataclass
class KMeansResult:
    """
    Attributes:
        k: Number of clusters
        iterations: Iterations performed until convergence (or max_iter)
        centroids: (k, d) array of cluster centers
        labels: (n,) index of the centroid of each input point
    """
    k: int
    iterations: int
    centroids: np.ndarray
    labels: np.ndarray

    # Compact aliases: it -> iterations, idxs -> labels
    @property
    def it(self) -> int:
        return self.iterations

    @property
    def idxs(self) -> np.ndarray:
        return self.labels

    def test(self, point: Sequence[float], distance_func: Optional[DistanceFunc] = None) -> int:
        """
        Index of the centroid closest to a new point.

        Args:
            point: Vector with the same dimension as the centroids
            distance_func: Optional distance_func(centroid, point); Euclidean
                distance is used when omitted

        Returns:
            Centroid index (the lowest one on ties)
        """
        point = np.asarray(point, dtype=np.float64)
        if point.ndim != 1 or point.shape[0] != self.centroids.shape[1]:
            raise ValueError("Point should have the same length as centroid")

        dist = distance_func or distance
        min_centroid = 0
        min_dist = float('inf')
        for i, centroid in enumerate(self.centroids):
            centroid_dist = dist(centroid, point)
            if centroid_dist < min_dist:
                min_dist = centroid_dist
                min_centroid = i
        return min_centroid

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Euclidean nearest-centroid labels for a batch of points."""
        X = np.asarray(X, dtype=np.float64)
        if X.ndim != 2 or X.shape[1] != self.centroids.shape[1]:
            raise ValueError("Points should have the same length as centroid")
        return np.argmin(pairwise_squared_distances(X, self.centroids), axis=1)
