"""Interface of a path resolver under benchmark."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from nsbench.types import NamespaceRecord, PreparedPath, QueryRecord


@dataclass
class ResolveResult:
    """Outcome of resolving one path."""

    found: bool = False
    inode_id: int = 0
    depth: int = 0
    component_steps: int = 0
    index_steps: int = 0
    steps: int = 0


class PathResolver(ABC):
    """A namespace index that maps absolute paths to inode ids."""

    @abstractmethod
    def name(self) -> str:
        """Short backend name used in reports."""

    @abstractmethod
    def build(self, records: Iterable[NamespaceRecord]) -> None:
        """Load the namespace; raises BenchError on failure."""

    @abstractmethod
    def resolve(self, path: PreparedPath) -> ResolveResult:
        """Resolve one path; a miss is a result, not an error."""

    def warmup(self, queries: Iterable[QueryRecord]) -> None:
        """Resolve every query once and discard the results."""
        for query in queries:
            self.resolve(query.prepared)