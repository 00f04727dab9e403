"""Data types and backend interface of the file-system benchmark."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum


class FsBenchError(Exception):
    """Raised when a file-system benchmark operation fails."""


class NodeType(IntEnum):
    """Kind of namespace node."""

    DIRECTORY = 1
    FILE = 2


class OpKind(IntEnum):
    """Operation performed against a path."""

    LOOKUP_ONLY = 1
    OPEN_READ_4K = 2
    OPEN_WRITE_4K = 3
    NEGATIVE_LOOKUP = 4


@dataclass
class PreparedPath:
    """A normalized absolute path and its components."""

    normalized: str = ""
    components: list[str] = field(default_factory=list)

    def depth(self) -> int:
        """Number of components below the root."""
        return len(self.components)


@dataclass
class NamespaceEntry:
    """One directory or file of a generated workload."""

    inode_id: int = 0
    parent_inode_id: int = 0
    node_type: NodeType = NodeType.FILE
    path: str = ""
    prepared: PreparedPath = field(default_factory=PreparedPath)


@dataclass
class Query:
    """A path to look up and whether it should exist."""

    prepared: PreparedPath = field(default_factory=PreparedPath)
    expect_found: bool = True


@dataclass
class OpResult:
    """Outcome of one timed operation."""

    ok: bool = False
    latency_ns: int = 0
    bytes: int = 0
    depth: int = 0


@dataclass
class MemorySnapshot:
    """Metadata memory usage of a backend."""

    total_meta_bytes: int = 0
    bytes_per_file: int = 0
    slab_dentry_bytes: int = 0
    slab_inode_bytes: int = 0
    slab_ext4_inode_bytes: int = 0
    lhm_index_bytes: int = 0
    lhm_inode_bytes: int = 0
    lhm_string_bytes: int = 0
    process_rss_bytes: int = 0


class PathBackend(ABC):
    """A backend that hosts a namespace and runs path operations against it."""

    @abstractmethod
    def name(self) -> str:
        """Short backend name used in reports."""

    @abstractmethod
    def build(self, entries: Iterable[NamespaceEntry]) -> None:
        """Create the namespace; raises FsBenchError on failure."""

    @abstractmethod
    def run(self, path: PreparedPath, op: OpKind) -> OpResult:
        """Run one operation and time it."""

    @abstractmethod
    def snapshot_memory(self, file_count: int) -> MemorySnapshot:
        """Report metadata memory usage for a namespace of file_count files."""