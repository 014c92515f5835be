#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
from typing import Iterable, List, Sequence

from ExactTSP.cities import DEFAULT_SEED, City, SimpleRng, generate_cities
from ExactTSP.core import COST_TOLERANCE, ExactTSP
from ExactTSP.solvers import AlgorithmResult, BruteForceSolver, ParallelBruteForceSolver
from ExactTSP.solvers.exact.parallel import PARALLEL_MIN_CITIES

# Below this many cities every implementation runs unless asked otherwise.
ALL_SOLVERS_LIMIT = 15
BREAKDOWN_LIMIT = 8


def default_thread_count() -> int:
    return os.cpu_count() or 4


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="exacttsp",
        description="Solve a random Euclidean TSP instance exactly and compare solvers.",
        epilog=(
            "Example: exacttsp 5 123 4\n"
            "Example: exacttsp 16 42 --all\n\n"
            f"For {ALL_SOLVERS_LIMIT}+ cities only the optimized solution runs by default.\n"
            "Use --all to run every implementation (may take very long!)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("num_cities", type=int, help="Number of cities.")
    parser.add_argument(
        "seed",
        type=int,
        nargs="?",
        default=DEFAULT_SEED,
        help=f"Random seed for city generation (default: {DEFAULT_SEED}).",
    )
    parser.add_argument(
        "threads",
        type=int,
        nargs="?",
        default=None,
        help="Worker threads for the parallel brute force (default: number of CPU cores).",
    )
    parser.add_argument("--all", action="store_true", help="Run all implementations regardless of size.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    args = parser.parse_args(raw_args)
    if args.num_cities < 0:
        parser.error("num_cities must be non-negative")
    if args.threads is not None and args.threads < 1:
        parser.error("threads must be at least 1")
    if args.threads is None:
        args.threads = default_thread_count()
    return args


def format_route(path: Sequence[int]) -> str:
    if not path:
        return "(empty)"
    return " -> ".join(str(city) for city in [*path, path[0]])


def print_result(result: AlgorithmResult) -> None:
    print(f"Best path: {result.path}")
    print(f"Route: {format_route(result.path)}")
    print(f"Total distance: {result.cost:.2f}")
    print(f"Time taken: {result.elapsed:.3f} seconds")


def print_breakdown(cities: Sequence[City], path: Sequence[int]) -> None:
    for i in range(len(path)):
        from_idx = path[i]
        to_idx = path[(i + 1) % len(path)]
        dist = cities[from_idx].distance_to(cities[to_idx])
        print(f"  {from_idx} -> {to_idx}: {dist:.2f}")


def shuffled_order(seed: int, count: int) -> List[int]:
    rng = SimpleRng(seed + 1000)
    order = list(range(count))
    for i in range(count - 1, 0, -1):
        j = rng.next() % (i + 1)
        order[i], order[j] = order[j], order[i]
    return order


def run_optimized(cities: Sequence[City]) -> AlgorithmResult:
    print("=== Optimized Solution (Distance Matrix + Branch & Bound + Bitmask DP) ===")
    result = ExactTSP().solve(cities)
    print_result(result)
    return result


def run_all_implementations(cities: Sequence[City], seed: int, num_threads: int) -> List[AlgorithmResult | None]:
    labels = ["Single", "Multi", "Optimized"]
    order = shuffled_order(seed, len(labels))
    results: List[AlgorithmResult | None] = [None] * len(labels)
    names = ["Single-threaded", "Multi-threaded", "Optimized"]
    n = len(cities)

    for implementation in order:
        if implementation == 0:
            print("=== Single-threaded Solution ===")
            results[0] = BruteForceSolver().solve(cities)
            print_result(results[0])
        elif implementation == 1:
            if n >= PARALLEL_MIN_CITIES:
                print(f"=== Multi-threaded Solution ({num_threads} threads) ===")
                results[1] = ParallelBruteForceSolver(thread_count=num_threads).solve(cities)
                print_result(results[1])
            else:
                print(f"=== Multi-threaded Solution (Skipped for < {PARALLEL_MIN_CITIES} cities) ===")
        else:
            results[2] = run_optimized(cities)
        print()

    print("=== Performance Summary ===")
    print(f"Implementation order: {[labels[i] for i in order]}")
    print()

    ranked = sorted(
        range(len(results)),
        key=lambda idx: (results[idx] is None, results[idx].elapsed if results[idx] is not None else 0.0),
    )
    print("Performance Ranking:")
    fastest = results[ranked[0]]
    for rank, idx in enumerate(ranked):
        result = results[idx]
        if result is None:
            print(f"  {rank + 1}. {names[idx]}: skipped")
            continue
        if rank == 0 or fastest is None or fastest.elapsed <= 0.0:
            relative = "baseline" if rank == 0 else "n/a"
        else:
            relative = f"{result.elapsed / fastest.elapsed:.2f}"
        print(f"  {rank + 1}. {names[idx]}: {result.elapsed:.3f}s (distance: {result.cost:.2f}, {relative}x slower)")

    valid = [(names[idx], result) for idx, result in enumerate(results) if result is not None]
    if len(valid) > 1:
        best = min(result.cost for _, result in valid)
        if all(abs(result.cost - best) < COST_TOLERANCE for _, result in valid):
            print("\nAll implementations found the same optimal solution!")
        else:
            print("\nWARNING: Implementations found different solutions!")
            for name, result in valid:
                print(f"  {name}: {result.cost:.2f}")

    if n <= BREAKDOWN_LIMIT and results[0] is not None and results[0].path:
        print()
        print("Distance breakdown (using single-threaded result):")
        print_breakdown(cities, results[0].path)
    return results


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    num_cities = args.num_cities
    should_run_all = args.all or num_cities < ALL_SOLVERS_LIMIT

    if num_cities >= ALL_SOLVERS_LIMIT and not args.all:
        print(f"Note: For {num_cities} cities, only running optimized solution.")
        print("      Use --all flag to run all implementations (warning: may take very long!)")
        print()
    if num_cities > ALL_SOLVERS_LIMIT and args.all:
        print(f"Warning: {num_cities} cities with all implementations will take a very long time!")
        print(f"Factorial complexity: {num_cities}! permutations for brute force")
        print("Consider running without --all flag for optimized solution only.")
        print()

    print("=== Traveling Salesman Problem Solver ===")
    print(f"Cities: {num_cities}")
    print(f"Seed: {args.seed}")
    if should_run_all:
        print("Mode: All implementations")
        print(f"Available CPU threads: {args.threads}")
    else:
        print("Mode: Optimized solution only")
    print()

    cities = generate_cities(num_cities, args.seed)
    print("City Positions:")
    for city in cities:
        print(f"  City {city.id}: ({city.x:.2f}, {city.y:.2f})")
    print()

    if should_run_all:
        run_all_implementations(cities, args.seed, args.threads)
    else:
        run_optimized(cities)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
