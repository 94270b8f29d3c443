"""
Euclidean distance helpers.

Nearest-centroid searches compare squared distances; anything that is stored
(bounds, centroid movement) is a true distance so that it can be compared
against other stored distances.
"""

import numpy as np


def squared_distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance along the last axis.

    Works for two vectors as well as for two equally shaped stacks of rows,
    in which case one distance per row is returned.
    """
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return np.sum(diff * diff, axis=-1)


def distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Euclidean distance along the last axis."""
    return np.sqrt(squared_distance(a, b))


def pairwise_squared_distances(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Squared distances from every row of X to every centroid.

    Filled one centroid column at a time so memory stays at O(n * (d + k))
    instead of materialising the (n, k, d) broadcast.

    Returns:
        Array of shape (n_samples, n_centroids)
    """
    out = np.empty((X.shape[0], centroids.shape[0]), dtype=np.float64)
    for j, centroid in enumerate(centroids):
        out[:, j] = squared_distance(X, centroid)
    return out
