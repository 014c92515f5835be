from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from tqdm import tqdm

from ExactTSP.cities import DEFAULT_SEED, SimpleRng, generate_cities
from ExactTSP.solvers import SOLVER_FAMILIES, SOLVER_LIMITS, SOLVER_REGISTRY, ParallelBruteForceSolver, get_solver
from ExactTSP.solvers.base import current_time


@dataclass
class BenchmarkResult:
    n_cities: int
    solver_name: str
    times: List[float]
    lengths: List[float]

    @property
    def avg_time(self) -> float:
        return sum(self.times) / len(self.times)

    @property
    def best_length(self) -> float:
        return min(self.lengths)

    @property
    def avg_length(self) -> float:
        return sum(self.lengths) / len(self.lengths)


def benchmark_solvers(
    sizes: Sequence[int],
    solver_names: Sequence[str],
    n_repeats: int = 3,
    seed: int = DEFAULT_SEED,
    thread_count: int = 4,
    progress: bool = True,
    respect_limits: bool = True,
) -> List[BenchmarkResult]:
    """Time every solver on the same generated instances for each size.

    With ``respect_limits`` a solver is skipped for sizes above its practical limit.
    """
    if n_repeats < 1:
        raise ValueError(f"n_repeats must be at least 1, got {n_repeats}")
    sizes = list(dict.fromkeys(sizes))
    rng = SimpleRng(seed)
    # One instance seed per (size, repeat) so every solver sees identical cities.
    instance_seeds: Dict[int, List[int]] = {n: [rng.next() for _ in range(n_repeats)] for n in sizes}
    results: List[BenchmarkResult] = []

    runs = [
        (n, name)
        for n in sizes
        for name in solver_names
        if not respect_limits or n <= SOLVER_LIMITS[name]
    ]
    for n, solver_name in tqdm(runs, desc="Benchmarking", unit="run", disable=not progress):
        kwargs = {"thread_count": thread_count} if solver_name == ParallelBruteForceSolver.name else {}
        solver = get_solver(solver_name, **kwargs)
        times: List[float] = []
        lengths: List[float] = []
        for inst_seed in instance_seeds[n]:
            cities = generate_cities(n, inst_seed)
            start_t = current_time()
            result = solver.solve(cities)
            times.append(current_time() - start_t)
            lengths.append(result.cost)
        results.append(BenchmarkResult(n_cities=n, solver_name=solver_name, times=times, lengths=lengths))

    return results


def format_summary_table(results: Iterable[BenchmarkResult]) -> str:
    header = f"{'n_cities':>8} | {'solver':>20} | {'family':>20} | {'avg_time (s)':>12} | {'best_len':>10} | {'avg_len':>10}"
    lines = [header, "-" * len(header)]
    for res in results:
        lines.append(
            f"{res.n_cities:8d} | "
            f"{res.solver_name:>20} | "
            f"{SOLVER_FAMILIES[res.solver_name].value:>20} | "
            f"{res.avg_time:12.4f} | "
            f"{res.best_length:10.4f} | "
            f"{res.avg_length:10.4f}"
        )
    return "\n".join(lines)


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark exact TSP solvers on generated instances.")
    parser.add_argument("--sizes", nargs="+", type=int, default=[5, 7, 9], help="City counts to benchmark.")
    parser.add_argument(
        "--solvers",
        nargs="+",
        choices=sorted(SOLVER_REGISTRY.keys()),
        help="Subset of solvers to run (default: all).",
    )
    parser.add_argument("--repeats", type=int, default=3, help="Instances per size.")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"Random seed (default: {DEFAULT_SEED}).")
    parser.add_argument("--threads", type=int, default=4, help="Workers for the parallel brute force.")
    return parser.parse_args(raw_args)


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    solver_names = args.solvers or list(SOLVER_REGISTRY.keys())
    results = benchmark_solvers(args.sizes, solver_names, n_repeats=args.repeats, seed=args.seed, thread_count=args.threads)
    print(format_summary_table(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
