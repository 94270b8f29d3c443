import numpy as np
import pytest

from kmeans import InsufficientPointsError, KMeans, KMeansResult, PlatformIndexSampler, SeededIndexSampler, kmeans


def _blobs(seed=42):
    rng = np.random.default_rng(seed)
    return np.vstack([
        rng.normal(loc=0.0, scale=0.5, size=(200, 16)),
        rng.normal(loc=5.0, scale=0.5, size=(200, 16)),
        rng.normal(loc=-4.0, scale=0.5, size=(200, 16)),
    ]).astype(np.float32)


def test_kmeans_function_returns_result():
    result = kmeans([[0, 0], [0, 1], [10, 0], [10, 1]], 2, 10)
    assert isinstance(result, KMeansResult)
    assert result.k == 2
    assert result.centroids.shape == (2, 2)
    assert result.labels.shape == (4,)
    assert 0 <= result.iterations <= 10
    assert result.it == result.iterations
    assert result.idxs is result.labels
    assert sorted(np.bincount(result.labels, minlength=2).tolist()) == [2, 2]


def test_kmeans_function_trivial_convergence():
    points = [[0, 0], [3, 4], [-1, 7], [2, -2]]
    result = kmeans(points, 4, 10)
    assert result.iterations == 0
    assert sorted(map(tuple, result.centroids.tolist())) == sorted(map(tuple, np.asarray(points, float).tolist()))


def test_kmeans_function_rejects_mixed_dimensions():
    with pytest.raises(ValueError, match="same dimension"):
        kmeans([[0, 0], [1, 1, 1]], 2, 10)


def test_kmeans_function_insufficient_points():
    with pytest.raises(InsufficientPointsError):
        kmeans([[0, 0], [1, 1], [2, 2]], 4, 10)


def test_kmeans_function_empty_data():
    result = kmeans([], 2, 10)
    assert result.iterations == 0
    assert result.labels.size == 0


@pytest.mark.parametrize("k,max_iter,threshold", [(1, 10, None), (2, 0, None), (2, 10, -1.0)])
def test_kmeans_function_validates(k, max_iter, threshold):
    with pytest.raises(ValueError):
        kmeans([[0, 0], [1, 1]], k, max_iter, threshold)


def test_estimator_recovers_blobs():
    X = _blobs()
    model = KMeans(n_clusters=3, n_init=30, random_state=42).fit(X)

    assert model.cluster_centers_.shape == (3, 16)
    assert sorted(np.bincount(model.labels_, minlength=3).tolist()) == [200, 200, 200]
    means = sorted(round(float(c.mean())) for c in model.cluster_centers_)
    assert means == [-4, 0, 5]
    assert model.n_iter_ >= 0
    np.testing.assert_array_equal(model.predict(X), model.labels_)


def test_estimator_hamerly_and_lloyd_agree():
    X = _blobs(7)
    fast = KMeans(n_clusters=5, random_state=3).fit(X)
    slow = KMeans(n_clusters=5, random_state=3, algorithm='lloyd').fit(X)

    np.testing.assert_array_equal(fast.labels_, slow.labels_)
    np.testing.assert_allclose(fast.cluster_centers_, slow.cluster_centers_, rtol=1e-9, atol=1e-9)
    assert fast.n_iter_ == slow.n_iter_
    assert fast.inertia_ == pytest.approx(slow.inertia_)


def test_estimator_keeps_best_of_n_init():
    X = _blobs(1)
    single = KMeans(n_clusters=4, n_init=1, sampler=SeededIndexSampler(0)).fit(X)
    multi = KMeans(n_clusters=4, n_init=5, sampler=SeededIndexSampler(0)).fit(X)
    assert multi.inertia_ <= single.inertia_ + 1e-9


def test_estimator_with_platform_sampler():
    X = _blobs(2)
    model = KMeans(n_clusters=3, n_init=2, sampler=PlatformIndexSampler()).fit(X)
    assert np.bincount(model.labels_, minlength=3).sum() == X.shape[0]


def test_fit_predict_and_cluster_info():
    X = _blobs(3)
    model = KMeans(n_clusters=3, random_state=0)
    labels = model.fit_predict(X)
    np.testing.assert_array_equal(labels, model.labels_)

    info = model.get_cluster_info()
    assert info['n_clusters'] == 3
    assert info['algorithm'] == 'hamerly'
    assert sum(info['cluster_sizes'].values()) == X.shape[0]
    assert info['min_cluster_size'] <= info['avg_cluster_size'] <= info['max_cluster_size']


def test_verbose_prints_progress(capsys):
    KMeans(n_clusters=3, n_init=2, random_state=0, verbose=True).fit(_blobs(4))
    out = capsys.readouterr().out
    assert "Fitting K-means (hamerly) with 3 clusters on 600 samples" in out
    assert "Initialization 2/2" in out
    assert "Final inertia" in out


def test_unfitted_model_raises():
    model = KMeans(n_clusters=3)
    with pytest.raises(ValueError, match="fitted"):
        model.predict(np.zeros((1, 2)))
    with pytest.raises(ValueError, match="fitted"):
        model.get_cluster_info()
    with pytest.raises(ValueError, match="fitted"):
        model.to_result()


def test_predict_rejects_wrong_dimension():
    model = KMeans(n_clusters=3, random_state=0).fit(_blobs(5))
    with pytest.raises(ValueError):
        model.predict(np.zeros((2, 3)))


@pytest.mark.parametrize("kwargs", [
    dict(n_clusters=1),
    dict(n_clusters=3, max_iters=0),
    dict(n_clusters=3, tol=-1e-3),
])
def test_fit_validates_parameters(kwargs):
    with pytest.raises(ValueError):
        KMeans(**kwargs).fit(_blobs(6))


def test_constructor_rejects_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        KMeans(n_clusters=3, algorithm='elkan')
