"""
Hamerly's accelerated k-means.

Lloyd's algorithm where each point carries an upper bound on the distance to
its own centroid and a lower bound on the distance to any other centroid.
A point whose upper bound does not exceed max(sibling / 2, lower) cannot have
changed cluster, so most points skip the O(k * d) nearest-centroid search.
Centroids are recomputed from running per-cluster sums instead of a full
rescan over their members.

Reference: G. Hamerly, "Making k-means even faster", SDM 2010.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .bounds import BoundState, initialize_bounds, nearest_two
from .distance import distance, pairwise_squared_distances, squared_distance
from .initialization import init_centroids
from .sampling import IndexSampler, SeededIndexSampler

logger = logging.getLogger(__name__)

# callback(iteration, centroids, state), invoked after the bounds are corrected
IterationCallback = Callable[[int, np.ndarray, BoundState], None]


@dataclass
class HamerlyResult:
    centroids: np.ndarray  # (k, d)
    labels: np.ndarray  # (n,)
    iterations: int


def has_converged(total_squared_movement: float, convergence_threshold: float) -> bool:
    """Stop rule shared with the Lloyd baseline.

    Zero movement always counts as converged, so a threshold of 0 stops at an
    exact fixed point instead of running to max_iter.
    """
    return total_squared_movement < convergence_threshold or total_squared_movement == 0.0


def sibling_distances(centroids: np.ndarray) -> np.ndarray:
    """Distance from every centroid to its nearest other centroid."""
    d2 = pairwise_squared_distances(centroids, centroids)
    np.fill_diagonal(d2, np.inf)
    return np.sqrt(np.min(d2, axis=1))


def assign_points(points: np.ndarray, centroids: np.ndarray, state: BoundState) -> int:
    """Assignment step. Returns the number of points that changed cluster."""
    half_sibling = sibling_distances(centroids) / 2.0
    m = np.maximum(half_sibling[state.labels], state.lower)

    # Pruning test: u(i) <= m proves the assignment is still optimal
    candidates = np.flatnonzero(state.upper > m)
    if candidates.size == 0:
        return 0

    # Tighten u(i) to the exact distance and retest
    state.upper[candidates] = distance(points[candidates], centroids[state.labels[candidates]])
    candidates = candidates[state.upper[candidates] > m[candidates]]
    if candidates.size == 0:
        return 0

    new_labels, upper, lower = nearest_two(points[candidates], centroids)
    old_labels = state.labels[candidates]
    state.labels[candidates] = new_labels
    state.upper[candidates] = upper
    state.lower[candidates] = lower

    changed = old_labels != new_labels
    state.reassign(points, candidates[changed], old_labels[changed], new_labels[changed])
    return int(np.count_nonzero(changed))


def move_centers(centroids: np.ndarray, state: BoundState) -> float:
    """Update step: move every non-empty centroid to the mean of its points.

    Empty centroids stay where they are and record zero movement.

    Returns:
        Total squared distance moved by all centroids
    """
    nonempty = state.counts > 0
    new_centroids = centroids.copy()
    new_centroids[nonempty] = state.sums[nonempty] / state.counts[nonempty][:, np.newaxis]

    step = squared_distance(centroids, new_centroids)
    state.moved[:] = np.sqrt(step)
    centroids[:] = new_centroids

    if not nonempty.all():
        logger.debug("Centroids %s have no points, left in place", np.flatnonzero(~nonempty).tolist())

    return float(np.sum(step))


def update_bounds(state: BoundState) -> None:
    """Loosen the bounds by how far the centroids just moved.

    u(i) grows by the movement of its own centroid; l(i) shrinks by the
    largest movement among the other centroids, which is the largest mover
    overall unless that is a(i) itself, in which case the runner-up.
    """
    moved = state.moved
    r = int(np.argmax(moved))
    others = moved.copy()
    others[r] = -np.inf
    r2 = int(np.argmax(others))

    state.upper += moved[state.labels]
    state.lower -= np.where(state.labels == r, moved[r2], moved[r])


def hamerly_kmeans(
    points: np.ndarray,
    k: int,
    max_iter: int,
    convergence_threshold: float = 0.0,
    sampler: Optional[IndexSampler] = None,
    initial_centroids: Optional[np.ndarray] = None,
    callback: Optional[IterationCallback] = None,
) -> HamerlyResult:
    """
    Run Hamerly's k-means on validated input.

    Args:
        points: (n, d) float array
        k: Number of clusters
        max_iter: Maximum number of iterations
        convergence_threshold: Stop once the total squared centroid movement
            of an iteration falls below this value
        sampler: Random index source for the initial centroids
            (defaults to SeededIndexSampler(0))
        initial_centroids: Explicit (k, d) starting centroids; overrides sampler
        callback: Called as callback(iteration, centroids, state) at the end
            of every iteration

    Returns:
        HamerlyResult with the final centroids, the assignment of every point
        and the number of iterations performed (at most max_iter)
    """
    points = np.asarray(points, dtype=np.float64)
    if points.shape[0] == 0:
        dim = points.shape[1] if points.ndim == 2 else 0
        return HamerlyResult(
            centroids=np.empty((0, dim), dtype=np.float64),
            labels=np.empty(0, dtype=np.intp),
            iterations=0,
        )

    if initial_centroids is not None:
        centroids = np.array(initial_centroids, dtype=np.float64)
        if centroids.shape != (k, points.shape[1]):
            raise ValueError(
                f"initial_centroids must have shape {(k, points.shape[1])}, got {centroids.shape}"
            )
    else:
        centroids = init_centroids(points, k, sampler or SeededIndexSampler(0))

    state = initialize_bounds(points, centroids)
    iterations = 0

    while iterations < max_iter:
        reassigned = assign_points(points, centroids, state)
        total_moved = move_centers(centroids, state)
        update_bounds(state)

        logger.debug(
            "Iteration %d: %d points reassigned, squared movement %.6g",
            iterations, reassigned, total_moved,
        )
        if callback is not None:
            callback(iterations, centroids, state)

        if has_converged(total_moved, convergence_threshold):
            break

        iterations += 1

    return HamerlyResult(centroids=centroids, labels=state.labels, iterations=iterations)
