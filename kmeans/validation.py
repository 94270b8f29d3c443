"""
Argument checks and input conversion done before any clustering runs.
"""

from typing import Optional, Sequence, Union

import numpy as np

RGB_ARITY = 3


def validate_params(k: int, max_iter: int, convergence_threshold: Optional[float] = None) -> float:
    """Check the run parameters and return the effective convergence threshold."""
    if k < 2:
        raise ValueError("k must be greater than or equal to 2.")
    if max_iter < 1:
        raise ValueError("max_iter must be greater than or equal to 1.")
    if convergence_threshold is None:
        return 0.0
    convergence_threshold = float(convergence_threshold)
    if np.isnan(convergence_threshold) or np.signbit(convergence_threshold):
        raise ValueError("convergence_threshold must be positive")
    return convergence_threshold


def as_points(data: Union[np.ndarray, Sequence[Sequence[float]]]) -> np.ndarray:
    """Convert input data to a float64 array of shape (n, d)."""
    if not isinstance(data, np.ndarray):
        data = list(data)
        if not data:
            return np.empty((0, 0), dtype=np.float64)
        dimensions = {len(point) for point in data}
        if len(dimensions) > 1:
            raise ValueError("All data points must have the same dimension.")

    X = np.asarray(data, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError(f"data must be 2-D (n, d), got shape {X.shape}")
    return X


def rgb_to_points(rgb: Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]]) -> np.ndarray:
    """Promote a flat buffer of RGB byte triples to (n, 3) float points."""
    if isinstance(rgb, (bytes, bytearray, memoryview)):
        channels = np.frombuffer(rgb, dtype=np.uint8)
    else:
        channels = np.asarray(rgb)
        if channels.size and not np.issubdtype(channels.dtype, np.integer):
            raise ValueError("rgb_slice must contain integer byte values.")
        if channels.size and (channels.min() < 0 or channels.max() > 255):
            raise ValueError("rgb_slice values must be in the range 0..255.")
        channels = channels.astype(np.uint8).ravel()

    if channels.size % RGB_ARITY != 0:
        raise ValueError("The length of rgb_slice must be a multiple of 3.")
    return channels.reshape(-1, RGB_ARITY).astype(np.float64)
