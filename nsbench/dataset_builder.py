"""Generation of deep-tree namespaces and their lookup queries."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from nsbench.dataset_format import DatasetManifest
from nsbench.paths import prepare_path
from nsbench.types import BenchError, NamespaceRecord, NodeType, QueryRecord

_U32_MASK = 0xFFFFFFFF


@dataclass
class DatasetBuildOptions:
    """Parameters of a dataset generation run."""

    dataset_name: str = "deep_tree"
    depths: list[int] = field(default_factory=list)
    siblings_per_dir: int = 8
    files_per_leaf: int = 32
    positive_queries_per_depth: int = 10000
    negative_queries_per_depth: int = 10000
    name_width: int = 4
    inode_start: int = 1
    seed: int = 1
    output_root: str = ""


@dataclass
class BuiltDataset:
    """A generated namespace with its queries and manifest."""

    manifest: DatasetManifest = field(default_factory=DatasetManifest)
    records: list[NamespaceRecord] = field(default_factory=list)
    positive_queries: list[QueryRecord] = field(default_factory=list)
    negative_queries: list[QueryRecord] = field(default_factory=list)


def _path_join(base: str, leaf: str) -> str:
    if not base:
        return leaf
    if base.endswith(("/", "\\")):
        return base + leaf
    return f"{base}/{leaf}"


def _join_child(parent: str, child: str) -> str:
    return f"/{child}" if parent == "/" else f"{parent}/{child}"


def make_name(prefix: str, a: int, b: int, width: int) -> str:
    """Name such as d0003, or s0003_0002 when b is non-zero."""
    name = f"{prefix}{a:0{width}d}"
    if b != 0:
        name += f"_{b:0{width}d}"
    return name


def _record(inode_id: int, parent: int, node_type: NodeType, path: str) -> NamespaceRecord:
    return NamespaceRecord(
        inode_id=inode_id,
        parent_inode_id=parent,
        node_type=node_type,
        path=path,
        prepared=prepare_path(path),
    )


def build_namespace(
    depth: int,
    siblings_per_dir: int,
    files_per_leaf: int,
    name_width: int,
    inode_start: int,
) -> list[NamespaceRecord]:
    """A chain of depth main directories, each level with sibling directories,
    and files_per_leaf files in the deepest main directory."""
    if inode_start == 0:
        raise BenchError("invalid namespace build args")

    next_inode = inode_start
    records = [_record(next_inode, 0, NodeType.DIRECTORY, "/")]
    next_inode += 1

    parent_path = "/"
    parent_inode = inode_start
    for level in range(1, depth + 1):
        main_path = _join_child(parent_path, make_name("d", level, 0, name_width))
        main_inode = next_inode
        next_inode += 1
        records.append(_record(main_inode, parent_inode, NodeType.DIRECTORY, main_path))

        for sibling in range(1, siblings_per_dir + 1):
            sibling_path = _join_child(parent_path, make_name("s", level, sibling, name_width))
            records.append(_record(next_inode, parent_inode, NodeType.DIRECTORY, sibling_path))
            next_inode += 1

        parent_path = main_path
        parent_inode = main_inode

    for file_index in range(1, files_per_leaf + 1):
        file_path = _join_child(parent_path, make_name("f", file_index, 0, name_width) + ".dat")
        records.append(_record(next_inode, parent_inode, NodeType.FILE, file_path))
        next_inode += 1

    return records


def _positive_queries(
    records: Sequence[NamespaceRecord], target_count: int, seed: int
) -> list[QueryRecord]:
    candidates = [record for record in records if record.path != "/"]
    random.Random(seed).shuffle(candidates)
    return [
        QueryRecord(
            path=record.path,
            prepared=record.prepared,
            expect_found=True,
            expected_inode_id=record.inode_id,
            expected_depth=record.prepared.depth(),
        )
        for record in candidates[:target_count]
    ]


def _negative_queries(
    records: Sequence[NamespaceRecord], target_count: int, seed: int
) -> list[QueryRecord]:
    directories = [record for record in records if record.node_type is NodeType.DIRECTORY]
    random.Random(seed).shuffle(directories)
    queries = []
    for index, directory in enumerate(directories[:target_count], start=1):
        path = _join_child(directory.path, make_name("m", index, 0, 4))
        prepared = prepare_path(path)
        queries.append(
            QueryRecord(
                path=path,
                prepared=prepared,
                expect_found=False,
                expected_inode_id=0,
                expected_depth=prepared.depth(),
            )
        )
    return queries


class DatasetBuilder:
    """Builds datasets for one or several tree depths."""

    def build_one(self, options: DatasetBuildOptions, depth: int) -> BuiltDataset:
        """Build the namespace, queries and manifest for one depth."""
        records = build_namespace(
            depth,
            options.siblings_per_dir,
            options.files_per_leaf,
            options.name_width,
            options.inode_start,
        )
        positive = _positive_queries(
            records, options.positive_queries_per_depth, (options.seed + depth) & _U32_MASK
        )
        negative = _negative_queries(
            records, options.negative_queries_per_depth, (options.seed + depth * 17) & _U32_MASK
        )

        root = _path_join(options.output_root, f"depth_{depth:02d}")
        manifest = DatasetManifest(
            dataset_name=options.dataset_name,
            depth=depth,
            siblings_per_dir=options.siblings_per_dir,
            files_per_leaf=options.files_per_leaf,
            total_records=len(records),
            total_queries=len(positive) + len(negative),
            records_tsv=_path_join(root, "records.tsv"),
            positive_queries_tsv=_path_join(root, "positive_queries.tsv"),
            negative_queries_tsv=_path_join(root, "negative_queries.tsv"),
        )
        return BuiltDataset(
            manifest=manifest,
            records=records,
            positive_queries=positive,
            negative_queries=negative,
        )

    def build_all(self, options: DatasetBuildOptions) -> list[BuiltDataset]:
        """Build one dataset per depth in options.depths, in order."""
        return [self.build_one(options, depth) for depth in options.depths]