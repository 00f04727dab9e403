"""Core data types shared by the namespace resolution benchmark."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class BenchError(Exception):
    """Raised when a benchmark operation cannot be completed."""


class NodeType(IntEnum):
    """Kind of namespace node."""

    DIRECTORY = 1
    FILE = 2


@dataclass
class PreparedPath:
    """A normalized absolute path split into components with per-component hashes."""

    normalized: str = ""
    components: list[str] = field(default_factory=list)
    masstree_hashes: list[int] = field(default_factory=list)

    def depth(self) -> int:
        """Number of components below the root."""
        return len(self.components)


@dataclass
class NamespaceRecord:
    """One directory or file of a generated namespace."""

    inode_id: int = 0
    parent_inode_id: int = 0
    node_type: NodeType = NodeType.FILE
    path: str = ""
    prepared: PreparedPath = field(default_factory=PreparedPath)


@dataclass
class QueryRecord:
    """A path lookup with its expected outcome."""

    path: str = ""
    prepared: PreparedPath = field(default_factory=PreparedPath)
    expect_found: bool = True
    expected_inode_id: int = 0
    expected_depth: int = 0


def node_type_name(node_type: NodeType | int) -> str:
    """Short textual name of a node type: "dir", "file" or "unknown"."""
    try:
        kind = NodeType(node_type)
    except ValueError:
        return "unknown"
    return "dir" if kind is NodeType.DIRECTORY else "file"