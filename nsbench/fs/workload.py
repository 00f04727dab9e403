"""Generation of balanced directory trees and lookup queries for file-system runs."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from nsbench.fs.paths import prepare_path
from nsbench.fs.types import FsBenchError, NamespaceEntry, NodeType, PreparedPath, Query

_U64_MAX = (1 << 64) - 1
_MISSING_SUFFIX = ".missing"


@dataclass
class WorkloadOptions:
    """Shape of the generated tree and the number of queries."""

    depth: int = 8
    siblings_per_dir: int = 16
    files_per_leaf: int = 64
    target_file_count: int = 0
    positive_queries: int = 10000
    negative_queries: int = 10000
    seed: int = 1


@dataclass
class WorkloadData:
    """Generated entries and the queries run against them."""

    entries: list[NamespaceEntry] = field(default_factory=list)
    positive_queries: list[Query] = field(default_factory=list)
    negative_queries: list[Query] = field(default_factory=list)


def _entry(inode_id: int, parent: int, node_type: NodeType, path: str) -> NamespaceEntry:
    return NamespaceEntry(
        inode_id=inode_id,
        parent_inode_id=parent,
        node_type=node_type,
        path=path,
        prepared=prepare_path(path),
    )


def _dir_name(level: int, slot: int) -> str:
    return f"d{level:02d}_{slot}"


def _file_name(value: int) -> str:
    return f"f{value:010d}.dat"


def _saturating_pow(base: int, exp: int) -> int:
    value = 1
    for _ in range(exp):
        value = min(value * base, _U64_MAX)
        if value == _U64_MAX or value == 0:
            break
    return value


def _ceil_div(a: int, b: int) -> int:
    return 0 if b == 0 else -(-a // b)


def _leaf_digits(leaf_index: int, depth: int, branch_factor: int) -> list[int]:
    digits = [0] * depth
    for pos in reversed(range(depth)):
        leaf_index, digits[pos] = divmod(leaf_index, branch_factor)
    return digits


def _copy_prepared(prepared: PreparedPath) -> PreparedPath:
    return PreparedPath(normalized=prepared.normalized, components=list(prepared.components))


def build_workload(options: WorkloadOptions | None = None) -> WorkloadData:
    """Build the tree and queries; raises FsBenchError when the shape cannot hold the files."""
    options = options or WorkloadOptions()
    result = WorkloadData()
    next_inode = 1
    result.entries.append(_entry(next_inode, 0, NodeType.DIRECTORY, "/"))
    next_inode += 1

    target_files = options.target_file_count or options.files_per_leaf
    max_files_per_leaf = options.files_per_leaf or 1
    branch_factor = options.siblings_per_dir or 1
    leaf_dir_count = _ceil_div(target_files, max_files_per_leaf)
    max_leaf_capacity = 1 if options.depth == 0 else _saturating_pow(branch_factor, options.depth)

    if leaf_dir_count == 0:
        raise FsBenchError("target_file_count resolved to zero")
    if leaf_dir_count > max_leaf_capacity:
        raise FsBenchError("depth and siblings_per_dir cannot host target_file_count files")

    dir_to_inode: dict[str, int] = {"/": 1}
    leaf_dirs: list[tuple[str, int]] = []

    if options.depth == 0:
        leaf_dirs.append(("/", 1))
    else:
        for leaf_index in range(leaf_dir_count):
            digits = _leaf_digits(leaf_index, options.depth, branch_factor)
            current_path = ""
            current_parent = 1
            for level, digit in enumerate(digits, start=1):
                current_path += "/" + _dir_name(level, digit)
                existing = dir_to_inode.get(current_path)
                if existing is None:
                    inode_id = next_inode
                    next_inode += 1
                    result.entries.append(
                        _entry(inode_id, current_parent, NodeType.DIRECTORY, current_path)
                    )
                    dir_to_inode[current_path] = inode_id
                    current_parent = inode_id
                else:
                    current_parent = existing
            leaf_dirs.append((current_path, current_parent))

    for file_index in range(target_files):
        leaf_path, leaf_inode = leaf_dirs[file_index // max_files_per_leaf]
        base = "" if leaf_path == "/" else leaf_path
        file_path = f"{base}/{_file_name(file_index)}"
        result.entries.append(_entry(next_inode, leaf_inode, NodeType.FILE, file_path))
        next_inode += 1

    files = [entry for entry in result.entries if entry.node_type is NodeType.FILE]
    if not files:
        raise FsBenchError("workload generated no file entries")

    rng = random.Random(options.seed)
    for _ in range(options.positive_queries):
        picked = files[rng.randrange(len(files))]
        result.positive_queries.append(
            Query(prepared=_copy_prepared(picked.prepared), expect_found=True)
        )

    for _ in range(options.negative_queries):
        prepared = _copy_prepared(files[rng.randrange(len(files))].prepared)
        if prepared.components:
            prepared.components[-1] += _MISSING_SUFFIX
            prepared.normalized += _MISSING_SUFFIX
        result.negative_queries.append(Query(prepared=prepared, expect_found=False))

    return result


def count_files(entries: Iterable[NamespaceEntry]) -> int:
    """Number of file entries."""
    return sum(1 for entry in entries if entry.node_type is NodeType.FILE)