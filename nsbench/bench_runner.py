"""Timed benchmark runs of a path resolver over a query set."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from nsbench.resolver import PathResolver
from nsbench.types import BenchError, QueryRecord


@dataclass
class RunOptions:
    """How a benchmark is run."""

    warmup_queries: int = 10000
    repeats: int = 5
    check_correctness: bool = True


@dataclass
class RepeatResult:
    """Statistics of one pass over the query set."""

    query_count: int = 0
    avg_ns: float = 0.0
    p50_ns: float = 0.0
    p95_ns: float = 0.0
    p99_ns: float = 0.0
    throughput_qps: float = 0.0
    avg_depth: float = 0.0
    avg_component_steps: float = 0.0
    avg_index_steps: float = 0.0
    avg_steps: float = 0.0


@dataclass
class BenchmarkReport:
    """All repeats of one backend over one query set."""

    backend: str = ""
    dataset_name: str = ""
    manifest_path: str = ""
    depth: int = 0
    query_kind: str = ""
    repeats: list[RepeatResult] = field(default_factory=list)


def compute_percentiles(latencies_ns: Sequence[int]) -> tuple[float, float, float]:
    """Return (p50, p95, p99) by nearest-lower rank; zeros for an empty input."""
    if not latencies_ns:
        return 0.0, 0.0, 0.0
    ordered = sorted(latencies_ns)
    last = len(ordered) - 1

    def pick(ratio: float) -> float:
        return float(ordered[int(ratio * last)])

    return pick(0.50), pick(0.95), pick(0.99)


class BenchRunner:
    """Runs warmup and repeated timed passes of a resolver."""

    def run(
        self,
        resolver: PathResolver,
        depth: int,
        query_kind: str,
        queries: Sequence[QueryRecord],
        options: RunOptions | None = None,
    ) -> BenchmarkReport:
        """Warm up, then run options.repeats timed passes; raises BenchError on mismatch."""
        if resolver is None:
            raise BenchError("invalid benchmark run args")
        options = options or RunOptions()

        if options.warmup_queries:
            resolver.warmup(list(queries[: options.warmup_queries]))

        report = BenchmarkReport(backend=resolver.name(), depth=depth, query_kind=query_kind)
        for _ in range(options.repeats):
            report.repeats.append(self.run_one(resolver, queries, options.check_correctness))
        return report

    def run_one(
        self,
        resolver: PathResolver,
        queries: Sequence[QueryRecord],
        check_correctness: bool,
    ) -> RepeatResult:
        """Resolve every query once, timing each; raises BenchError on mismatch."""
        if resolver is None:
            raise BenchError("invalid benchmark repeat args")

        latencies: list[int] = []
        total_depth = 0
        total_component_steps = 0
        total_index_steps = 0
        total_steps = 0

        begin = time.perf_counter_ns()
        for query in queries:
            q_begin = time.perf_counter_ns()
            resolved = resolver.resolve(query.prepared)
            q_end = time.perf_counter_ns()
            latencies.append(q_end - q_begin)
            total_depth += resolved.depth
            total_component_steps += resolved.component_steps
            total_index_steps += resolved.index_steps
            total_steps += resolved.steps

            if check_correctness:
                if resolved.found != query.expect_found:
                    raise BenchError(f"resolve correctness mismatch for path: {query.path}")
                if query.expect_found and resolved.inode_id != query.expected_inode_id:
                    raise BenchError(f"resolve inode mismatch for path: {query.path}")
        elapsed_seconds = (time.perf_counter_ns() - begin) / 1e9

        result = RepeatResult(query_count=len(latencies))
        if latencies:
            count = len(latencies)
            result.avg_ns = sum(latencies) / count
            result.p50_ns, result.p95_ns, result.p99_ns = compute_percentiles(latencies)
            result.avg_depth = total_depth / count
            result.avg_component_steps = total_component_steps / count
            result.avg_index_steps = total_index_steps / count
            result.avg_steps = total_steps / count
        if elapsed_seconds > 0.0:
            result.throughput_qps = len(queries) / elapsed_seconds
        return result