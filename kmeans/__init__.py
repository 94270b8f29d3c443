"""
K-means clustering with Hamerly's triangle-inequality acceleration.

Example:
    >>> from kmeans import kmeans, kmeans_rgb
    >>> result = kmeans([[0, 0], [0, 1], [10, 0], [10, 1]], k=2, max_iter=10)
    >>> result.test([9.5, 0.2])
    >>> kmeans_rgb(bytes([0, 0, 0, 255, 255, 255]), k=2, max_iter=10)
"""

from .version import __version__
from .kmeans import KMeans, kmeans
from .color import kmeans_rgb
from .result import KMeansResult
from .hamerly import HamerlyResult, hamerly_kmeans
from .lloyd import lloyd_kmeans
from .sampling import IndexSampler, SeededIndexSampler, PlatformIndexSampler, InsufficientPointsError

__all__ = [
    "KMeans", "kmeans", "kmeans_rgb", "KMeansResult",
    "HamerlyResult", "hamerly_kmeans", "lloyd_kmeans",
    "IndexSampler", "SeededIndexSampler", "PlatformIndexSampler", "InsufficientPointsError",
    "__version__",
]
