"""
K-means clustering for arbitrary vector spaces.
Uses Hamerly's triangle-inequality bounds to skip most distance computations.
"""

import numpy as np
from typing import Optional, Sequence, Union

from .hamerly import HamerlyResult, hamerly_kmeans
from .initialization import init_centroids
from .lloyd import assign_clusters, inertia, lloyd_kmeans
from .result import KMeansResult
from .sampling import IndexSampler, PlatformIndexSampler, SeededIndexSampler
from .validation import as_points, validate_params


def kmeans(
    data: Union[np.ndarray, Sequence[Sequence[float]]],
    k: int,
    max_iter: int,
    convergence_threshold: Optional[float] = None,
    sampler: Optional[IndexSampler] = None,
) -> KMeansResult:
    """
    Find the k-means centroids of a set of points.

    Args:
        data: Points of shape (n_samples, n_features), every point with the
            same dimension
        k: Number of clusters (>= 2)
        max_iter: Maximum number of iterations (>= 1)
        convergence_threshold: Total squared centroid movement below which
            the iteration stops (default 0)
        sampler: Random index source for the initial centroids,
            SeededIndexSampler(0) by default

    Returns:
        KMeansResult
    """
    threshold = validate_params(k, max_iter, convergence_threshold)
    X = as_points(data)

    result = hamerly_kmeans(X, k, max_iter, threshold, sampler=sampler or SeededIndexSampler(0))
    return KMeansResult(k=k, iterations=result.iterations, centroids=result.centroids, labels=result.labels)


class KMeans:
    """
    K-means clustering estimator.

    Features:
    - Hamerly's accelerated assignment step (or plain Lloyd for comparison)
    - Multiple initialization attempts, keeping the lowest inertia
    - Pluggable random index source for the initial centroids
    - Early stopping on total squared centroid movement
    """

    ALGORITHMS = ('hamerly', 'lloyd')

    def __init__(
        self,
        n_clusters: int,
        max_iters: int = 300,
        tol: float = 0.0,
        n_init: int = 1,
        algorithm: str = 'hamerly',
        random_state: Optional[int] = None,
        sampler: Optional[IndexSampler] = None,
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            n_clusters: Number of clusters
            max_iters: Maximum number of iterations
            tol: Total squared centroid movement below which a run stops
            n_init: Number of different initializations to try
            algorithm: 'hamerly' or 'lloyd'
            random_state: Seed for the initial centroid selection; ignored
                when a sampler is given
            sampler: Explicit random index source
            verbose: Whether to print progress information
        """
        if algorithm not in self.ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        if n_init < 1:
            raise ValueError("n_init must be greater than or equal to 1.")

        self.n_clusters = n_clusters
        self.max_iters = max_iters
        self.tol = tol
        self.n_init = n_init
        self.algorithm = algorithm
        self.random_state = random_state
        self.sampler = sampler
        self.verbose = verbose

        # Results
        self.cluster_centers_ = None
        self.labels_ = None
        self.inertia_ = None
        self.n_iter_ = None

    def _make_sampler(self) -> IndexSampler:
        if self.sampler is not None:
            return self.sampler
        if self.random_state is not None:
            return SeededIndexSampler(self.random_state)
        return PlatformIndexSampler()

    def _fit_single(self, X: np.ndarray, sampler: IndexSampler, tol: float) -> HamerlyResult:
        """Single k-means run."""
        centroids = init_centroids(X, self.n_clusters, sampler)
        if self.algorithm == 'lloyd':
            return lloyd_kmeans(X, centroids, self.max_iters, tol)
        return hamerly_kmeans(X, self.n_clusters, self.max_iters, tol, initial_centroids=centroids)

    def fit(self, X: Union[np.ndarray, Sequence[Sequence[float]]]) -> 'KMeans':
        """
        Fit K-means clustering to the data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            self
        """
        tol = validate_params(self.n_clusters, self.max_iters, self.tol)
        X = as_points(X)
        sampler = self._make_sampler()

        if self.verbose:
            print(f"Fitting K-means ({self.algorithm}) with {self.n_clusters} clusters on {X.shape[0]} samples...")

        best_inertia = float('inf')
        best = None

        for init_run in range(self.n_init):
            result = self._fit_single(X, sampler, tol)
            run_inertia = inertia(X, result.centroids, result.labels)

            if self.verbose:
                print(f"Initialization {init_run + 1}/{self.n_init}: "
                      f"{result.iterations} iterations, inertia {run_inertia:.2f}")

            if best is None or run_inertia < best_inertia:
                best_inertia = run_inertia
                best = result

        self.cluster_centers_ = best.centroids
        self.labels_ = best.labels
        self.inertia_ = best_inertia
        self.n_iter_ = best.iterations

        if self.verbose:
            print(f"Final inertia: {self.inertia_:.2f}")

        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict cluster labels for new data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            Cluster labels
        """
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted before prediction")

        X = as_points(X)
        if X.shape[1] != self.cluster_centers_.shape[1]:
            raise ValueError("Point should have the same length as centroid")
        return assign_clusters(X, self.cluster_centers_)

    def fit_predict(self, X: np.ndarray) -> np.ndarray:
        """
        Fit the model and predict cluster labels.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            Cluster labels
        """
        return self.fit(X).labels_

    def to_result(self) -> KMeansResult:
        """Fitted state as a KMeansResult (for membership tests)."""
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted first")
        return KMeansResult(
            k=self.n_clusters,
            iterations=self.n_iter_,
            centroids=self.cluster_centers_,
            labels=self.labels_,
        )

    def get_cluster_info(self) -> dict:
        """Get information about the clustering results."""
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted first")

        cluster_sizes = np.bincount(self.labels_, minlength=self.n_clusters)

        return {
            'n_clusters': self.n_clusters,
            'algorithm': self.algorithm,
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'cluster_sizes': dict(enumerate(cluster_sizes.tolist())),
            'avg_cluster_size': float(np.mean(cluster_sizes)),
            'std_cluster_size': float(np.std(cluster_sizes)),
            'min_cluster_size': int(np.min(cluster_sizes)),
            'max_cluster_size': int(np.max(cluster_sizes)),
            'empty_clusters': int(np.count_nonzero(cluster_sizes == 0)),
        }
