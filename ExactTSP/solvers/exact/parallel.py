from __future__ import annotations

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np

from ExactTSP.cities import City
from ExactTSP.solvers.base import AlgorithmResult, BaseSolver, current_time
from ExactTSP.solvers.exact.brute_force import BruteForceSolver, search_tours, tours_from
from ExactTSP.utils.taxonomy import AlgorithmFamily

logger = logging.getLogger(__name__)

# Instances this small are solved sequentially.
PARALLEL_MIN_CITIES = 4

BACKENDS = ("thread", "process")


@dataclass
class WorkerResult:
    """Local best found by one worker over its chunk of second cities."""

    chunk: List[int] = field(default_factory=list)
    path: List[int] | None = None
    cost: float = float("inf")
    checked: int = 0


def partition_candidates(n: int, thread_count: int) -> List[List[int]]:
    """Split cities ``1..n-1`` into ``thread_count`` contiguous, near-even chunks.

    Surplus workers receive empty chunks.
    """
    if thread_count < 1:
        raise ValueError(f"thread_count must be at least 1, got {thread_count}")
    candidates = np.arange(1, max(n, 1))
    return [chunk.tolist() for chunk in np.array_split(candidates, thread_count)]


def explore_chunk(cities: Sequence[City], chunk: Sequence[int]) -> WorkerResult:
    """Search every tour whose second city is drawn from ``chunk``."""
    result = WorkerResult(chunk=list(chunk))
    n = len(cities)
    for second in chunk:
        rest = [city for city in range(1, n) if city != second]
        path, cost, checked = search_tours(cities, tours_from((0, second), rest))
        result.checked += checked
        if cost < result.cost:
            result.cost = cost
            result.path = path
    return result


def merge_results(results: Iterable[WorkerResult]) -> WorkerResult:
    """Reduce worker results to the global best.

    Only a strictly shorter tour replaces the current best, so the earliest
    worker wins ties and the outcome does not depend on completion order.
    """
    best = WorkerResult()
    checked = 0
    for result in results:
        checked += result.checked
        if result.path is not None and result.cost < best.cost:
            best = WorkerResult(chunk=result.chunk, path=result.path, cost=result.cost)
    best.checked = checked
    return best


def _make_executor(backend: str, workers: int) -> Executor:
    if backend == "thread":
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="exacttsp-worker")
    if backend == "process":
        return ProcessPoolExecutor(max_workers=workers)
    raise ValueError(f"Unknown backend: {backend!r} (expected one of {', '.join(BACKENDS)})")


class ParallelBruteForceSolver(BaseSolver):
    name = "parallel_brute_force"
    family = AlgorithmFamily.PARALLEL_ENUMERATION
    practical_limit = 12

    def __init__(self, thread_count: int = 4, backend: str = "thread"):
        if thread_count < 1:
            raise ValueError(f"thread_count must be at least 1, got {thread_count}")
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend: {backend!r} (expected one of {', '.join(BACKENDS)})")
        self.thread_count = int(thread_count)
        self.backend = backend

    def solve(self, cities: Sequence[City]) -> AlgorithmResult:
        start_time = current_time()
        n = len(cities)
        if n <= PARALLEL_MIN_CITIES:
            logger.debug("Parallel brute force falling back to sequential search for %d cities", n)
            result = BruteForceSolver().solve(cities)
            metadata = dict(result.metadata)
            metadata.update({"workers": 1, "fallback": BruteForceSolver.name})
            return AlgorithmResult(
                name=self.name,
                path=result.path,
                cost=result.cost,
                elapsed=current_time() - start_time,
                status=result.status,
                metadata=metadata,
            )

        chunks = partition_candidates(n, self.thread_count)
        logger.debug(
            "Parallel brute force over %d cities with %d %s workers: %s",
            n,
            self.thread_count,
            self.backend,
            chunks,
        )
        with _make_executor(self.backend, self.thread_count) as executor:
            futures = [executor.submit(explore_chunk, list(cities), chunk) for chunk in chunks]
            # result() re-raises a worker failure; nothing partial is returned.
            worker_results = [future.result() for future in futures]

        best = merge_results(worker_results)
        if best.path is None:
            raise RuntimeError(f"Parallel brute force found no tour for {n} cities")
        elapsed = current_time() - start_time
        logger.debug("Parallel brute force checked %d tours in %.3fs, best %.4f", best.checked, elapsed, best.cost)
        return AlgorithmResult(
            name=self.name,
            path=best.path,
            cost=best.cost,
            elapsed=elapsed,
            status="complete",
            metadata={
                "permutations_checked": best.checked,
                "workers": self.thread_count,
                "backend": self.backend,
                "chunks": chunks,
            },
        )


__all__ = [
    "BACKENDS",
    "PARALLEL_MIN_CITIES",
    "ParallelBruteForceSolver",
    "WorkerResult",
    "explore_chunk",
    "merge_results",
    "partition_candidates",
]
