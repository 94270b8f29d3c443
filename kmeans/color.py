"""
Color quantization of packed RGB pixels.
"""

from typing import Optional, Sequence, Union

import numpy as np

from .hamerly import hamerly_kmeans
from .sampling import IndexSampler, SeededIndexSampler
from .validation import rgb_to_points, validate_params


def kmeans_rgb(
    rgb: Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]],
    k: int,
    max_iter: int,
    convergence_threshold: Optional[float] = None,
    sampler: Optional[IndexSampler] = None,
) -> bytes:
    """
    Find k representative colors of an RGB buffer.

    Args:
        rgb: Flat R, G, B, R, G, B, ... byte values (length divisible by 3)
        k: Number of colors (>= 2)
        max_iter: Maximum number of iterations (>= 1)
        convergence_threshold: Total squared centroid movement below which
            the iteration stops (default 0)
        sampler: Random index source, SeededIndexSampler(0) by default

    Returns:
        3 * k bytes, one RGB triple per centroid. Components are truncated,
        not rounded.
    """
    threshold = validate_params(k, max_iter, convergence_threshold)
    points = rgb_to_points(rgb)

    result = hamerly_kmeans(
        points, k, max_iter, threshold,
        sampler=sampler or SeededIndexSampler(0),
    )
    return np.trunc(result.centroids).astype(np.uint8).tobytes()
