"""CSV output of benchmark reports."""

from __future__ import annotations

import os
from collections.abc import Iterable

from nsbench.bench_runner import BenchmarkReport
from nsbench.types import BenchError

HEADER = (
    "backend,dataset_name,manifest_path,depth,query_kind,repeat,query_count,"
    "avg_ns,p50_ns,p95_ns,p99_ns,throughput_qps,avg_depth,avg_component_steps,"
    "avg_index_steps,avg_steps"
)


def _num(value: float) -> str:
    return f"{value:g}"


def _rows(reports: Iterable[BenchmarkReport]) -> Iterable[str]:
    for report in reports:
        for index, repeat in enumerate(report.repeats):
            fields = [
                report.backend,
                report.dataset_name,
                report.manifest_path,
                str(report.depth),
                report.query_kind,
                str(index),
                str(repeat.query_count),
                _num(repeat.avg_ns),
                _num(repeat.p50_ns),
                _num(repeat.p95_ns),
                _num(repeat.p99_ns),
                _num(repeat.throughput_qps),
                _num(repeat.avg_depth),
                _num(repeat.avg_component_steps),
                _num(repeat.avg_index_steps),
                _num(repeat.avg_steps),
            ]
            yield ",".join(fields)


def append_benchmark_reports_csv(
    reports: Iterable[BenchmarkReport],
    csv_path: str | os.PathLike,
    write_header: bool,
) -> None:
    """Write one row per repeat; with write_header the file is truncated first."""
    try:
        handle = open(csv_path, "w" if write_header else "a", encoding="utf-8")
    except OSError as exc:
        raise BenchError(f"failed to open csv output: {os.fspath(csv_path)}") from exc
    try:
        with handle:
            if write_header:
                handle.write(HEADER + "\n")
            for row in _rows(reports):
                handle.write(row + "\n")
    except OSError as exc:
        raise BenchError(f"failed to write csv output: {os.fspath(csv_path)}") from exc


def write_benchmark_reports_csv(
    reports: Iterable[BenchmarkReport], csv_path: str | os.PathLike
) -> None:
    """Replace csv_path with a header and the reports' rows."""
    append_benchmark_reports_csv(reports, csv_path, True)