#!/usr/bin/env python3
"""
Performance Test Script for the Red-Black Tree

Tests:
1. Sequential insert throughput
2. Random insert throughput
3. Search throughput (hits and misses)
4. In-order walk throughput
5. Random remove throughput

Metrics:
- Operations per second (ops/sec)
- Latency (p50, p95, p99)
"""

import logging
import os
import random
import statistics
import sys
import time
from typing import List

from rbset import RedBlackTree, TraversalOrder

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)


class PerformanceTest:
    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)
        self.tree: RedBlackTree[int] = RedBlackTree()

    def reset(self) -> None:
        self.tree.clear()

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_us": min(latencies) / 1_000,
            "max_us": max(latencies) / 1_000,
            "mean_us": statistics.mean(latencies) / 1_000,
            "median_us": statistics.median(latencies) / 1_000,
            "p95_us": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000,
            "p99_us": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000,
        }

    @staticmethod
    def print_header(title: str) -> None:
        print(f"\n{'='*60}")
        print(title)
        print(f"{'='*60}")

    @staticmethod
    def print_results(results: dict) -> None:
        for key, value in results.items():
            if isinstance(value, float):
                print(f"  {key:>14}: {value:,.3f}")
            else:
                print(f"  {key:>14}: {value}")

    def _timed(self, name: str, values: List[int], operation) -> dict:
        latencies = []
        start_time = time.perf_counter_ns()

        for value in values:
            op_start = time.perf_counter_ns()
            operation(value)
            latencies.append(time.perf_counter_ns() - op_start)

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": name,
            "count": len(values),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(values) / elapsed if elapsed else float("inf"),
            **self.calculate_stats(latencies),
        }
        self.print_results(results)
        return results

    def test_sequential_insert(self, count: int) -> dict:
        """Test inserting ascending values, the classic worst case for an unbalanced BST."""
        self.print_header(f"Sequential Insert Test: {count} operations")
        self.reset()
        return self._timed("Sequential Insert", list(range(count)), self.tree.insert)

    def test_random_insert(self, count: int) -> dict:
        """Test inserting shuffled values."""
        self.print_header(f"Random Insert Test: {count} operations")
        self.reset()
        values = list(range(count))
        self.rng.shuffle(values)
        return self._timed("Random Insert", values, self.tree.insert)

    def test_search(self, count: int) -> dict:
        """Test searching a mix of present and absent values."""
        self.print_header(f"Search Test: {count} operations")
        size = max(self.tree.size(), 1)
        values = [self.rng.randrange(2 * size) for _ in range(count)]
        hits = sum(1 for v in values if v in self.tree)
        results = self._timed("Search", values, self.tree.search)
        results["hit_rate"] = hits / count
        print(f"  {'hit_rate':>14}: {results['hit_rate']:.3f}")
        return results

    def test_inorder_walk(self) -> dict:
        """Test walking every value in sorted order."""
        self.print_header(f"In-order Walk Test: {self.tree.size()} values")
        start_time = time.perf_counter_ns()
        count = sum(1 for _ in self.tree.walk(TraversalOrder.IN))
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": "In-order Walk",
            "count": count,
            "elapsed_sec": elapsed,
            "values_per_sec": count / elapsed if elapsed else float("inf"),
        }
        self.print_results(results)
        return results

    def test_random_remove(self) -> dict:
        """Test removing every stored value in random order."""
        values = list(self.tree)
        self.rng.shuffle(values)
        self.print_header(f"Random Remove Test: {len(values)} operations")
        return self._timed("Random Remove", values, self.tree.remove)


def run_tests(count: int) -> None:
    test = PerformanceTest()

    print(f"\n{'#'*60}")
    print(f"# Red-Black Tree Performance Test ({count} values)")
    print(f"{'#'*60}")

    test.test_sequential_insert(count)
    test.test_random_insert(count)
    test.test_search(count)
    test.test_inorder_walk()
    test.test_random_remove()

    print(f"\n{'#'*60}\n")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "quick":
        run_tests(10_000)
    else:
        run_tests(200_000)
