"""CSV output of memory and miss-latency results."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nsbench.fs.types import FsBenchError, MemorySnapshot

MEMORY_HEADER = (
    "backend,file_count,depth,siblings_per_dir,files_per_leaf,phase,"
    "total_meta_bytes,bytes_per_file,slab_dentry_bytes,slab_inode_bytes,"
    "slab_ext4_inode_bytes,lhm_index_bytes,lhm_inode_bytes,lhm_string_bytes,"
    "process_rss_bytes"
)

MISS_HEADER = (
    "backend,mode,op,query_kind,query_count,file_count,depth,siblings_per_dir,"
    "files_per_leaf,avg_ns,p50_ns,p95_ns,p99_ns,avg_bytes,success_rate"
)


@dataclass
class MemoryResultRow:
    """One memory measurement."""

    backend: str = ""
    file_count: int = 0
    depth: int = 0
    siblings_per_dir: int = 0
    files_per_leaf: int = 0
    phase: str = ""
    snapshot: MemorySnapshot = field(default_factory=MemorySnapshot)


@dataclass
class MissResultRow:
    """Latency statistics of one backend, operation and query kind."""

    backend: str = ""
    mode: str = ""
    op: str = ""
    query_kind: str = ""
    query_count: int = 0
    file_count: int = 0
    depth: int = 0
    siblings_per_dir: int = 0
    files_per_leaf: int = 0
    avg_ns: float = 0.0
    p50_ns: float = 0.0
    p95_ns: float = 0.0
    p99_ns: float = 0.0
    avg_bytes: float = 0.0
    success_rate: float = 0.0


def _num(value: float) -> str:
    return f"{value:g}"


def _write_csv(path: str | os.PathLike, header: str, rows: Iterable[list[str]]) -> None:
    target = Path(path)
    if target.parent != Path(""):
        target.parent.mkdir(parents=True, exist_ok=True)
    try:
        handle = open(target, "w", encoding="utf-8")
    except OSError as exc:
        raise FsBenchError(f"failed to open output csv: {target}") from exc
    with handle:
        handle.write(header + "\n")
        for fields in rows:
            handle.write(",".join(fields) + "\n")


def write_memory_results(rows: Iterable[MemoryResultRow], path: str | os.PathLike) -> None:
    """Replace path with a header and one line per memory row."""

    def lines() -> Iterable[list[str]]:
        for row in rows:
            snap = row.snapshot
            yield [
                row.backend,
                str(row.file_count),
                str(row.depth),
                str(row.siblings_per_dir),
                str(row.files_per_leaf),
                row.phase,
                str(snap.total_meta_bytes),
                str(snap.bytes_per_file),
                str(snap.slab_dentry_bytes),
                str(snap.slab_inode_bytes),
                str(snap.slab_ext4_inode_bytes),
                str(snap.lhm_index_bytes),
                str(snap.lhm_inode_bytes),
                str(snap.lhm_string_bytes),
                str(snap.process_rss_bytes),
            ]

    _write_csv(path, MEMORY_HEADER, lines())


def write_miss_results(rows: Iterable[MissResultRow], path: str | os.PathLike) -> None:
    """Replace path with a header and one line per latency row."""

    def lines() -> Iterable[list[str]]:
        for row in rows:
            yield [
                row.backend,
                row.mode,
                row.op,
                row.query_kind,
                str(row.query_count),
                str(row.file_count),
                str(row.depth),
                str(row.siblings_per_dir),
                str(row.files_per_leaf),
                _num(row.avg_ns),
                _num(row.p50_ns),
                _num(row.p95_ns),
                _num(row.p99_ns),
                _num(row.avg_bytes),
                _num(row.success_rate),
            ]

    _write_csv(path, MISS_HEADER, lines())