"""
Plain Lloyd iteration, used as the reference the accelerated version must match.
"""

import numpy as np

from .distance import pairwise_squared_distances
from .hamerly import HamerlyResult, has_converged


def assign_clusters(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Assign each point to the nearest centroid."""
    return np.argmin(pairwise_squared_distances(X, centroids), axis=1)


def update_centroids(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Mean of each cluster; empty clusters keep their previous position."""
    new_centroids = centroids.copy()
    for k in range(centroids.shape[0]):
        mask = labels == k
        if np.any(mask):
            new_centroids[k] = X[mask].mean(axis=0)
    return new_centroids


def inertia(X: np.ndarray, centroids: np.ndarray, labels: np.ndarray) -> float:
    """Within-cluster sum of squared distances."""
    assigned_centroids = centroids[labels]
    return float(np.sum((X - assigned_centroids) ** 2))


def lloyd_kmeans(
    X: np.ndarray,
    initial_centroids: np.ndarray,
    max_iter: int,
    convergence_threshold: float = 0.0,
) -> HamerlyResult:
    """Unaccelerated k-means with the same stop rule as hamerly_kmeans."""
    X = np.asarray(X, dtype=np.float64)
    centroids = np.array(initial_centroids, dtype=np.float64)
    labels = np.zeros(X.shape[0], dtype=np.intp)

    iterations = 0
    while iterations < max_iter:
        labels = assign_clusters(X, centroids)
        new_centroids = update_centroids(X, labels, centroids)
        total_moved = float(np.sum((new_centroids - centroids) ** 2))
        centroids = new_centroids

        if has_converged(total_moved, convergence_threshold):
            break

        iterations += 1

    return HamerlyResult(centroids=centroids, labels=labels, iterations=iterations)
