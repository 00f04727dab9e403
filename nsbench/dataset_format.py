"""Reading and writing dataset manifests, namespace records and query files."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from nsbench.paths import prepare_path
from nsbench.types import BenchError, NamespaceRecord, NodeType, QueryRecord, node_type_name

RECORDS_HEADER = "inode_id\tparent_inode_id\ttype\tpath"
QUERIES_HEADER = "path\texpect_found\texpected_inode_id\texpected_depth"

_PathLike = str | os.PathLike


@dataclass
class DatasetManifest:
    """Description of one generated dataset and where its files live."""

    dataset_name: str = ""
    depth: int = 0
    siblings_per_dir: int = 0
    files_per_leaf: int = 0
    total_records: int = 0
    total_queries: int = 0
    records_tsv: str = ""
    positive_queries_tsv: str = ""
    negative_queries_tsv: str = ""


_MANIFEST_TEXT_KEYS = ("dataset_name", "records_tsv", "positive_queries_tsv", "negative_queries_tsv")
_MANIFEST_INT_KEYS = ("depth", "siblings_per_dir", "files_per_leaf", "total_records", "total_queries")
_MANIFEST_ORDER = (
    "dataset_name",
    "depth",
    "siblings_per_dir",
    "files_per_leaf",
    "total_records",
    "total_queries",
    "records_tsv",
    "positive_queries_tsv",
    "negative_queries_tsv",
)


def _write_lines(path: _PathLike, lines: Iterable[str], kind: str) -> None:
    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise BenchError(f"failed to open {kind}: {os.fspath(path)}") from exc
    try:
        with handle:
            for line in lines:
                handle.write(line + "\n")
    except OSError as exc:
        raise BenchError(f"failed to write {kind}: {os.fspath(path)}") from exc


def _read_lines(path: _PathLike, kind: str) -> list[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BenchError(f"failed to open {kind}: {os.fspath(path)}") from exc
    return text.splitlines()


def _to_int(text: str, field_name: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise BenchError(f"invalid integer for {field_name}: {text!r}") from exc


def _data_rows(lines: list[str]) -> Iterator[list[str]]:
    """Yield four-field rows after the header, skipping empty and short lines."""
    for line in lines[1:]:
        if not line:
            continue
        fields = line.split("\t", 3)
        if len(fields) < 4 or not fields[3]:
            continue
        yield fields


def write_manifest(manifest: DatasetManifest, path: _PathLike) -> None:
    """Write a manifest as key=value lines."""
    _write_lines(
        path,
        (f"{key}={getattr(manifest, key)}" for key in _MANIFEST_ORDER),
        "output file",
    )


def read_manifest(path: _PathLike) -> DatasetManifest:
    """Read a manifest; unknown keys and lines without '=' are ignored."""
    parsed = DatasetManifest()
    for line in _read_lines(path, "manifest"):
        if not line or "=" not in line:
            continue
        key, value = line.split("=", 1)
        if key in _MANIFEST_TEXT_KEYS:
            setattr(parsed, key, value)
        elif key in _MANIFEST_INT_KEYS:
            setattr(parsed, key, _to_int(value, key))
    return parsed


def write_namespace_records(records: Iterable[NamespaceRecord], path: _PathLike) -> None:
    """Write namespace records as a tab-separated file with a header."""

    def lines() -> Iterator[str]:
        yield RECORDS_HEADER
        for record in records:
            yield (
                f"{record.inode_id}\t{record.parent_inode_id}\t"
                f"{node_type_name(record.node_type)}\t{record.path}"
            )

    _write_lines(path, lines(), "records file")


def read_namespace_records(path: _PathLike) -> list[NamespaceRecord]:
    """Read namespace records written by write_namespace_records."""
    records = []
    for inode_id, parent_inode_id, type_name, path_text in _data_rows(
        _read_lines(path, "records file")
    ):
        records.append(
            NamespaceRecord(
                inode_id=_to_int(inode_id, "inode_id"),
                parent_inode_id=_to_int(parent_inode_id, "parent_inode_id"),
                node_type=NodeType.DIRECTORY if type_name == "dir" else NodeType.FILE,
                path=path_text,
                prepared=prepare_path(path_text),
            )
        )
    return records


def write_queries(queries: Iterable[QueryRecord], path: _PathLike) -> None:
    """Write queries as a tab-separated file with a header."""

    def lines() -> Iterator[str]:
        yield QUERIES_HEADER
        for query in queries:
            yield (
                f"{query.path}\t{1 if query.expect_found else 0}\t"
                f"{query.expected_inode_id}\t{query.expected_depth}"
            )

    _write_lines(path, lines(), "queries file")


def read_queries(path: _PathLike) -> list[QueryRecord]:
    """Read queries written by write_queries."""
    queries = []
    for path_text, expect_found, expected_inode_id, expected_depth in _data_rows(
        _read_lines(path, "queries file")
    ):
        queries.append(
            QueryRecord(
                path=path_text,
                prepared=prepare_path(path_text),
                expect_found=expect_found == "1",
                expected_inode_id=_to_int(expected_inode_id, "expected_inode_id"),
                expected_depth=_to_int(expected_depth, "expected_depth"),
            )
        )
    return queries