#!/usr/bin/env python3
"""Benchmark engine generation with the bundled default template."""

from __future__ import annotations

import argparse
import json
import random
import time
from pathlib import Path

from siege.generator import Generator

OUTPUT_SIZES: tuple[tuple[int, int], ...] = (
    (10, 7),
    (10, 10),
    (16, 12),
    (24, 16),
)


class GenerationBenchmark:
    """Times `Generator.generate` over a few output sizes."""

    def __init__(self, iterations: int, retries: int) -> None:
        self.iterations = iterations
        self.retries = retries
        self.generator = Generator.default()
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, width: int, height: int) -> tuple[float, int]:
        """Run one size; return average milliseconds and the number of failures."""
        elapsed_total = 0.0
        failures = 0

        for i in range(self.iterations):
            rng = random.Random((width * 1_000_000) + (height * 1_000) + i)

            start = time.perf_counter()
            engine = self.generator.generate(width, height, self.retries, rng)
            elapsed_total += time.perf_counter() - start

            if engine is None:
                failures += 1

        return (elapsed_total / self.iterations) * 1000.0, failures

    def run(self) -> None:
        print("Siege generation benchmark")
        print("=" * 42)
        print(f"Iterations per size: {self.iterations}, retries: {self.retries}")
        print()
        print(f"{'Size':>12} {'Time (ms)':>14} {'Failed':>8}")
        print("-" * 42)

        for width, height in OUTPUT_SIZES:
            elapsed_ms, failures = self._run_case(width, height)

            size_key = f"{width}x{height}"
            self.results[size_key] = {
                "ms": elapsed_ms,
                "failures": float(failures),
            }

            print(f"{size_key:>12} {elapsed_ms:14.2f} {failures:8d}")

    def save_results(self, filename: str) -> None:
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark siege engine generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per output size (default: 5)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=100,
        help="Retries per generation (default: 100)",
    )
    parser.add_argument("--save", type=str, help="Save results to JSON")
    args = parser.parse_args(argv)

    benchmark = GenerationBenchmark(iterations=args.iterations, retries=args.retries)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)


if __name__ == "__main__":
    main()
