import numpy as np
import pytest

from kmeans import KMeans, KMeansResult


def _result():
    return KMeansResult(
        k=3,
        iterations=2,
        centroids=np.array([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]]),
        labels=np.array([0, 1, 2, 0]),
    )


def test_membership_uses_euclidean_distance_by_default():
    result = _result()
    assert result.test([1.0, 1.0]) == 0
    assert result.test([9.0, 2.0]) == 1
    assert result.test([-1.0, 8.0]) == 2


def test_membership_ties_go_to_lowest_index():
    assert _result().test([5.0, 0.0]) == 0


def test_membership_with_custom_distance():
    result = _result()
    # Negated distance picks the farthest centroid instead of the nearest
    farthest = lambda centroid, point: -float(np.linalg.norm(centroid - point))
    assert result.test([1.0, 1.0], farthest) in (1, 2)
    manhattan = lambda centroid, point: float(np.abs(centroid - point).sum())
    assert result.test([6.0, 5.0], manhattan) == 1


def test_membership_custom_distance_receives_centroid_then_point():
    seen = []

    def record(centroid, point):
        seen.append((tuple(centroid), tuple(point)))
        return 0.0

    _result().test([3.0, 4.0], record)
    assert seen[0] == ((0.0, 0.0), (3.0, 4.0))
    assert len(seen) == 3


def test_membership_rejects_wrong_dimension():
    with pytest.raises(ValueError, match="same length as centroid"):
        _result().test([1.0, 2.0, 3.0])
    with pytest.raises(ValueError, match="same length as centroid"):
        _result().test([1.0])


def test_predict_batch():
    result = _result()
    labels = result.predict(np.array([[1.0, 1.0], [9.0, 2.0], [-1.0, 8.0]]))
    assert labels.tolist() == [0, 1, 2]


def test_estimator_to_result():
    X = np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 0.0], [10.0, 1.0]])
    model = KMeans(n_clusters=2, random_state=0).fit(X)
    result = model.to_result()
    assert result.k == 2
    assert result.test([10.0, 0.4]) == model.predict(np.array([[10.0, 0.4]]))[0]
