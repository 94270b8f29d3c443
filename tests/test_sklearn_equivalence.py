import numpy as np
import pytest
from sklearn.cluster import KMeans as SklearnKMeans

from kmeans import KMeans, hamerly_kmeans
from kmeans.initialization import init_centroids
from kmeans.sampling import SeededIndexSampler


def _blobs(seed):
    rng = np.random.default_rng(seed)
    return np.vstack([
        rng.normal(loc=0.0, scale=0.5, size=(200, 16)),
        rng.normal(loc=5.0, scale=0.5, size=(200, 16)),
        rng.normal(loc=-4.0, scale=0.5, size=(200, 16)),
    ])


@pytest.mark.parametrize("seed", [0, 1, 42])
def test_matches_sklearn_lloyd_from_same_start(seed):
    X = _blobs(seed)
    initial = init_centroids(X, 3, SeededIndexSampler(seed))

    ours = hamerly_kmeans(X, 3, 300, 0.0, initial_centroids=initial)
    reference = SklearnKMeans(
        n_clusters=3, init=initial, n_init=1, max_iter=300, tol=0.0, algorithm="lloyd"
    ).fit(X)

    np.testing.assert_array_equal(ours.labels, reference.labels_)
    np.testing.assert_allclose(ours.centroids, reference.cluster_centers_, rtol=1e-7, atol=1e-7)


def test_inertia_close_to_sklearn_kmeans_plus_plus():
    X = _blobs(42).astype(np.float32)

    full = SklearnKMeans(n_clusters=3, n_init=5, max_iter=200, random_state=42)
    ours = KMeans(n_clusters=3, n_init=30, max_iters=200, random_state=42)

    full.fit(X)
    ours.fit(X)

    # Allow small relative difference
    rel_diff = (ours.inertia_ - full.inertia_) / full.inertia_
    assert rel_diff < 0.05, f"Hamerly KMeans inertia too high relative to sklearn KMeans: rel_diff={rel_diff:.3f}"
