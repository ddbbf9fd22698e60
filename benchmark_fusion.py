#!/usr/bin/env python3
"""Performance benchmarks for index fusion.

Times fusion, lookups and trailing-label queries on numeric, explicit and
fused indices of growing size, so the cost of the lazy representations
can be compared with materializing every label.
"""

import argparse
import time
from typing import Any, Callable, Dict, List

import numpy as np
import pandas as pd

from rowframe import Index, get_logger

logger = get_logger(__name__)


def make_indices(n_labels: int, overlap: float, seed: int) -> Dict[str, Index]:
    """Build the base and tail indices for one configuration.

    Parameters
    ----------
    n_labels : int
        Length of the numeric base index.
    overlap : float
        Fraction of the tail labels already present in the base.
    seed : int
        Random seed for the tail labels.

    Returns
    -------
    dict
        ``base`` (numeric), ``explicit`` (same labels, materialized) and
        ``tail`` (partly overlapping explicit index).
    """
    rng = np.random.default_rng(seed)
    tail_size = max(1, n_labels // 10)
    n_shared = int(tail_size * overlap)
    shared = rng.choice(n_labels, size=n_shared, replace=False)
    fresh = np.arange(n_labels, n_labels + tail_size - n_shared)
    tail = np.concatenate([shared, fresh])
    rng.shuffle(tail)
    return {
        "base": Index.numeric("base", 0, n_labels),
        "explicit": Index("explicit", range(n_labels)),
        "tail": Index("tail", tail.tolist()),
    }


def timed(fn: Callable[[], Any]) -> float:
    start = time.perf_counter()
    fn()
    return time.perf_counter() - start


def benchmark_configuration(n_labels: int, overlap: float, seed: int) -> List[Dict[str, Any]]:
    """Time every operation for one index size and overlap."""
    indices = make_indices(n_labels, overlap, seed)
    base, explicit, tail = indices["base"], indices["explicit"], indices["tail"]
    fused = base.fuse(tail)
    probe = n_labels - 1

    operations = {
        "fuse numeric": lambda: base.fuse(tail),
        "fuse explicit": lambda: explicit.fuse(tail),
        "position numeric": lambda: base.position_of(probe),
        "position explicit": lambda: explicit.position_of(probe),
        "position fused": lambda: fused.position_of(probe),
        "last 10 fused": lambda: fused.last_labels(10),
        "fuse_and_last 10": lambda: base.fuse_and_last(tail, 10),
        "materialize fused": lambda: fused.labels(),
        "equal numeric/explicit": lambda: base == explicit,
    }
    results = []
    for name, fn in operations.items():
        runtime = timed(fn)
        logger.debug("%s on %d labels: %.6fs", name, n_labels, runtime)
        results.append(
            {"operation": name, "n_labels": n_labels, "overlap": overlap, "runtime": runtime}
        )
    return results


def run_benchmark_suite(
    sizes: List[int], overlaps: List[float], n_trials: int, seed: int
) -> pd.DataFrame:
    """Run every configuration ``n_trials`` times and collect the timings."""
    results = []
    total = len(sizes) * len(overlaps)
    config_num = 0
    print(f"Running benchmark suite: {total} configurations x {n_trials} trials")
    for n_labels in sizes:
        for overlap in overlaps:
            config_num += 1
            print(f"[{config_num}/{total}] {n_labels} labels, overlap={overlap:.1f}")
            for trial in range(n_trials):
                results.extend(benchmark_configuration(n_labels, overlap, seed + trial))
    return pd.DataFrame(results)


def analyze_results(results: pd.DataFrame) -> None:
    """Print median runtimes per operation and size."""
    print()
    print("=" * 60)
    print("MEDIAN RUNTIME (seconds)")
    print("=" * 60)
    summary = results.pivot_table(
        index="operation", columns="n_labels", values="runtime", aggfunc="median"
    )
    print(summary.round(6))


def main():
    parser = argparse.ArgumentParser(description="Benchmark rowframe index fusion")
    parser.add_argument("--sizes", nargs="+", type=int, default=[1_000, 10_000, 100_000],
                        help="Lengths of the base index")
    parser.add_argument("--overlaps", nargs="+", type=float, default=[0.0, 0.5],
                        help="Fraction of tail labels shared with the base")
    parser.add_argument("--trials", type=int, default=3, help="Trials per configuration")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--save", help="Save raw results to this CSV file")
    args = parser.parse_args()

    results = run_benchmark_suite(args.sizes, args.overlaps, args.trials, args.seed)
    analyze_results(results)
    if args.save:
        results.to_csv(args.save, index=False)
        print(f"\nResults saved to {args.save}")


if __name__ == "__main__":
    main()
