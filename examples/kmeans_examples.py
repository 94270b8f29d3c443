#!/usr/bin/env python3
"""
K-means Examples
================

Vector-space clustering, membership tests, the estimator API and RGB color
quantization.
"""

import numpy as np
from kmeans import KMeans, PlatformIndexSampler, SeededIndexSampler, kmeans, kmeans_rgb


def basic_usage_example():
    """Cluster three Gaussian blobs"""
    print("=== Basic usage ===")

    rng = np.random.default_rng(0)
    data = np.vstack([
        rng.normal(loc=0.0, scale=0.5, size=(300, 8)),
        rng.normal(loc=5.0, scale=0.5, size=(300, 8)),
        rng.normal(loc=-4.0, scale=0.5, size=(300, 8)),
    ])

    result = kmeans(data, k=3, max_iter=100)

    print(f"Converged after {result.iterations} iterations")
    print(f"Cluster sizes: {np.bincount(result.labels, minlength=result.k).tolist()}")
    for i, centroid in enumerate(result.centroids):
        print(f"  centroid {i}: mean component {centroid.mean():.3f}")


def membership_test_example():
    """Classify new points against fitted centroids"""
    print("\n=== Membership test ===")

    result = kmeans([[0, 0], [0, 1], [10, 0], [10, 1]], k=2, max_iter=10)
    print(f"Centroids: {result.centroids.tolist()}")

    for point in ([1, 0.2], [9, 3]):
        print(f"  {point} -> centroid {result.test(point)}")

    manhattan = lambda centroid, point: float(np.abs(centroid - point).sum())
    print(f"  [4, 0] (manhattan) -> centroid {result.test([4, 0], manhattan)}")


def estimator_example():
    """Estimator API with several initializations"""
    print("\n=== Estimator ===")

    rng = np.random.default_rng(1)
    X = rng.random((2000, 16))

    for algorithm in ("hamerly", "lloyd"):
        model = KMeans(n_clusters=10, n_init=3, algorithm=algorithm, random_state=42)
        model.fit(X)
        info = model.get_cluster_info()
        print(f"  {algorithm:8s} inertia={info['inertia']:.2f} "
              f"iterations={info['n_iterations']} sizes {info['min_cluster_size']}..{info['max_cluster_size']}")

    # Non-deterministic seeding from the OS random source
    model = KMeans(n_clusters=10, sampler=PlatformIndexSampler()).fit(X)
    print(f"  platform-seeded inertia={model.inertia_:.2f}")


def color_quantization_example():
    """Reduce random pixels to a 4-color palette"""
    print("\n=== Color quantization ===")

    rng = np.random.default_rng(2)
    pixels = rng.integers(0, 256, size=(5000, 3), dtype=np.uint8).tobytes()

    palette = kmeans_rgb(pixels, k=4, max_iter=100, sampler=SeededIndexSampler(7))
    colors = [tuple(palette[i:i + 3]) for i in range(0, len(palette), 3)]
    print(f"Palette: {colors}")


def main():
    basic_usage_example()
    membership_test_example()
    estimator_example()
    color_quantization_example()


if __name__ == "__main__":
    main()
