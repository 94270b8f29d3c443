"""
Initial centroid selection.
"""

import numpy as np

from .sampling import IndexSampler


def init_centroids(points: np.ndarray, k: int, sampler: IndexSampler) -> np.ndarray:
    """Pick k distinct points as the starting centroids.

    Raises InsufficientPointsError when k exceeds the number of points.
    """
    indices = sampler.sample(points.shape[0], k)
    return np.array(points[indices], dtype=np.float64)
