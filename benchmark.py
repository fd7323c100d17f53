#!/usr/bin/env python3
"""Script CLI comparing BK-tree range queries with a linear scan."""
import argparse
import logging
import random
import string
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pandas as pd

from fuzzytree import BKTree, distance, similarity

METRICS = {
    "distance": distance,
    "similarity": similarity,
}


class CountingDistance:
    """Wrap a distance function and count how often it is called."""

    def __init__(self, func: Callable[[str, str], float]) -> None:
        self.func = func
        self.calls = 0

    def __call__(self, a: str, b: str) -> float:
        self.calls += 1
        return self.func(a, b)


def generate_words(count: int, seed: int = 0, min_length: int = 3, max_length: int = 10) -> List[str]:
    rng = random.Random(seed)
    return [
        "".join(rng.choice(string.ascii_lowercase) for _ in range(rng.randint(min_length, max_length)))
        for _ in range(count)
    ]


def load_words(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def run_benchmark(
    words: Sequence[str],
    queries: Sequence[str],
    radius: float,
    metric: str = "distance",
) -> pd.DataFrame:
    """Run every query against a BK-tree and a linear scan.

    Returns one row per query with match counts, distance calls and wall
    time for both strategies.
    """
    counter = CountingDistance(METRICS[metric])
    tree = BKTree(counter)
    tree.extend(words)
    logging.info(f"Tree built: {len(tree)} items, depth {tree.depth()}, {counter.calls} distance calls")

    rows = []
    for query in queries:
        counter.calls = 0
        start = time.perf_counter()
        tree_matches = set(tree.query(query, radius))
        tree_seconds = time.perf_counter() - start
        tree_calls = counter.calls

        counter.calls = 0
        start = time.perf_counter()
        scan_matches = {word for word in words if counter(word, query) <= radius}
        scan_seconds = time.perf_counter() - start

        if tree_matches != scan_matches:
            logging.warning(
                f"Query {query!r}: tree returned {len(tree_matches)} items, scan {len(scan_matches)}"
            )

        rows.append(
            {
                "query": query,
                "tree_matches": len(tree_matches),
                "scan_matches": len(scan_matches),
                "tree_calls": tree_calls,
                "scan_calls": counter.calls,
                "tree_seconds": tree_seconds,
                "scan_seconds": scan_seconds,
            }
        )
    return pd.DataFrame(rows)


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Benchmark BK-tree vs linear scan")
    parser.add_argument("--words", help="Word list, one per line (random words if omitted)")
    parser.add_argument("--count", type=int, default=5000, help="Number of random words")
    parser.add_argument("--queries", type=int, default=100, help="Number of queries")
    parser.add_argument("--radius", type=float, default=1, help="Search radius")
    parser.add_argument("--metric", choices=sorted(METRICS), default="distance")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", default="benchmark_report.csv", help="Fichier de sortie CSV")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    words = load_words(args.words) if args.words else generate_words(args.count, seed=args.seed)
    queries = random.Random(args.seed + 1).sample(words, min(args.queries, len(words)))

    df = run_benchmark(words, queries, args.radius, metric=args.metric)
    df.to_csv(Path(args.output), index=False)
    print(f"Mean distance calls: tree {df['tree_calls'].mean():.1f}, scan {df['scan_calls'].mean():.1f}")
    print(f"Rapport sauvegardé dans {args.output}")


if __name__ == "__main__":
    main()
