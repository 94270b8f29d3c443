#!/usr/bin/env python3
"""
K-means Benchmark - Hamerly vs Lloyd vs scikit-learn

Times the accelerated implementation against the plain Lloyd baseline and
sklearn.cluster.KMeans started from the same initial centroids.

Usage:
    python benchmarks/kmeans_benchmark.py --mode rgb                 # random pixels, k=3
    python benchmarks/kmeans_benchmark.py --mode vector              # k x dim grid
    python benchmarks/kmeans_benchmark.py --mode vector --size 2000 --repeats 3 --plot
"""

import argparse
import json
import os
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans as SklearnKMeans

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from kmeans import SeededIndexSampler, hamerly_kmeans, kmeans_rgb, lloyd_kmeans
from kmeans.initialization import init_centroids


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run"""
    mode: str = "vector"
    size: int = 10000
    k_values: List[int] = field(default_factory=lambda: [2, 10, 50])
    dim_values: List[int] = field(default_factory=lambda: [3, 10, 50])
    max_iter: int = 100
    repeats: int = 10
    seed: int = 42
    output_dir: str = "benchmark_results"
    plot: bool = False


def _average_time(fn, repeats: int, *args, **kwargs) -> float:
    """Average wall time of fn(*args, **kwargs) in milliseconds."""
    total = 0.0
    for _ in range(repeats):
        start = time.perf_counter()
        fn(*args, **kwargs)
        total += time.perf_counter() - start
    return total / repeats * 1000.0


class KMeansBenchmark:
    """
    Benchmark runner for the vector-space and RGB entry points.
    """

    def __init__(self, config: BenchmarkConfig):
        self.config = config
        self.output_dir = Path(config.output_dir)
        self.output_dir.mkdir(exist_ok=True)
        self.rng = np.random.default_rng(config.seed)
        self.results: List[Dict] = []

    def run_rgb(self):
        """Quantize random pixels to 3 colors, mirroring the native pixel benchmark."""
        cfg = self.config
        print(f"RGB benchmark: {cfg.size} random pixels, k=3, max_iter={cfg.max_iter}")
        print("-" * 60)

        pixels = self.rng.integers(0, 256, size=cfg.size * 3, dtype=np.uint8).tobytes()
        avg_ms = _average_time(kmeans_rgb, cfg.repeats, pixels, 3, cfg.max_iter)
        palette = kmeans_rgb(pixels, 3, cfg.max_iter)

        print(f"  Average time: {avg_ms:.2f} ms")
        print(f"  Palette: {[tuple(palette[i:i + 3]) for i in range(0, len(palette), 3)]}")
        self.results.append({'mode': 'rgb', 'pixels': cfg.size, 'k': 3, 'avg_time_ms': avg_ms})

    def run_vector(self):
        """Time every (k, dim) combination on uniform random data."""
        cfg = self.config
        print(f"Vector benchmark: {cfg.size} points, max_iter={cfg.max_iter}, {cfg.repeats} repeats")
        print("-" * 60)

        for k in cfg.k_values:
            for dim in cfg.dim_values:
                data = self.rng.random((cfg.size, dim))
                initial = init_centroids(data, k, SeededIndexSampler(cfg.seed))

                hamerly_ms = _average_time(
                    hamerly_kmeans, cfg.repeats, data, k, cfg.max_iter, initial_centroids=initial
                )
                lloyd_ms = _average_time(lloyd_kmeans, cfg.repeats, data, initial, cfg.max_iter)
                sklearn_ms = _average_time(
                    lambda: SklearnKMeans(
                        n_clusters=k, init=initial, n_init=1, max_iter=cfg.max_iter, tol=0.0
                    ).fit(data),
                    cfg.repeats,
                )
                iterations = hamerly_kmeans(data, k, cfg.max_iter, initial_centroids=initial).iterations

                row = {
                    'mode': 'vector',
                    'k': k,
                    'dim': dim,
                    'iterations': iterations,
                    'hamerly_ms': hamerly_ms,
                    'lloyd_ms': lloyd_ms,
                    'sklearn_ms': sklearn_ms,
                    'speedup_vs_lloyd': lloyd_ms / hamerly_ms if hamerly_ms > 0 else float('nan'),
                }
                self.results.append(row)
                print(f"  k={k:3d} dim={dim:3d} it={iterations:4d}  "
                      f"hamerly={hamerly_ms:9.2f} ms  lloyd={lloyd_ms:9.2f} ms  sklearn={sklearn_ms:9.2f} ms")

    def _plot_speedup(self, df: pd.DataFrame):
        """Bar chart of the Hamerly speedup over Lloyd per (k, dim)."""
        import matplotlib.pyplot as plt

        labels = [f"k={row.k}\nd={row.dim}" for row in df.itertuples()]
        fig, ax = plt.subplots(figsize=(max(6, len(labels)), 4))
        ax.bar(labels, df['speedup_vs_lloyd'])
        ax.axhline(1.0, color='grey', linestyle='--', linewidth=1)
        ax.set_ylabel('Speedup vs Lloyd')
        ax.set_title('Hamerly k-means speedup')
        ax.grid(True, axis='y', alpha=0.3)

        plt.tight_layout()
        plt.savefig(self.output_dir / 'speedup.png', dpi=150, bbox_inches='tight')
        plt.close(fig)

    def run(self):
        if self.config.mode == 'rgb':
            self.run_rgb()
        else:
            self.run_vector()

        df = pd.DataFrame(self.results)
        print("\nSummary:")
        print(df.to_string(index=False))

        if self.config.plot and self.config.mode == 'vector':
            self._plot_speedup(df)

        output = {
            'config': asdict(self.config),
            'results': self.results,
            'timestamp': time.strftime('%Y-%m-%d %H:%M:%S'),
        }
        filename = self.output_dir / f'kmeans_benchmark_{self.config.mode}.json'
        with open(filename, 'w') as f:
            json.dump(output, f, indent=2)
        print(f"\nResults saved to {filename}")


def main():
    parser = argparse.ArgumentParser(description="Hamerly k-means benchmark")
    parser.add_argument("--mode", choices=["rgb", "vector"], default="vector",
                        help="Benchmark the RGB or the vector-space entry point")
    parser.add_argument("--size", type=int, default=None,
                        help="Number of points/pixels (default 10000 for vector, 1000 for rgb)")
    parser.add_argument("--k", type=int, nargs="+", default=[2, 10, 50], help="Cluster counts (vector mode)")
    parser.add_argument("--dim", type=int, nargs="+", default=[3, 10, 50], help="Dimensions (vector mode)")
    parser.add_argument("--max-iter", type=int, default=None,
                        help="Maximum iterations (default 100 for vector, 1000 for rgb)")
    parser.add_argument("--repeats", type=int, default=10, help="Timed repetitions per configuration")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--output-dir", default="benchmark_results", help="Directory for JSON/plots")
    parser.add_argument("--plot", action="store_true", help="Save a speedup bar chart (vector mode)")

    args = parser.parse_args()

    rgb = args.mode == "rgb"
    config = BenchmarkConfig(
        mode=args.mode,
        size=args.size or (1000 if rgb else 10000),
        k_values=args.k,
        dim_values=args.dim,
        max_iter=args.max_iter or (1000 if rgb else 100),
        repeats=args.repeats,
        seed=args.seed,
        output_dir=args.output_dir,
        plot=args.plot,
    )
    KMeansBenchmark(config).run()


if __name__ == "__main__":
    main()
