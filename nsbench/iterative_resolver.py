"""Component-by-component path resolution over a persistent key-value store."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass

from nsbench.resolver import PathResolver, ResolveResult
from nsbench.rocks_schema import (
    decode_dentry_value,
    decode_inode_value,
    encode_dentry_key,
    encode_dentry_value,
    encode_inode_key,
    encode_inode_value,
)
from nsbench.types import BenchError, NamespaceRecord, PreparedPath

_MEMORY = ":memory:"


@dataclass
class IterativeResolverOptions:
    """Where the store lives and how it is opened; an empty db_path keeps it in memory."""

    db_path: str = ""
    create_if_missing: bool = True
    destroy_if_exists: bool = True
    verify_inode_on_resolve: bool = False
    root_inode_id: int = 1


class IterativeResolver(PathResolver):
    """Resolves paths by looking up one directory entry per component."""

    def __init__(self, options: IterativeResolverOptions | None = None) -> None:
        self._options = options or IterativeResolverOptions()
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> IterativeResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def name(self) -> str:
        return "kv_iterative"

    def close(self) -> None:
        """Close the store; later resolves raise until the next build."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def build(self, records: Iterable[NamespaceRecord]) -> None:
        """Reset the store and write inode and directory-entry keys for every record."""
        self._reset_db()
        self._open()
        rows: list[tuple[bytes, bytes]] = []
        for record in records:
            rows.append((encode_inode_key(record.inode_id), encode_inode_value(record)))
            if record.path != "/":
                rows.append(
                    (
                        encode_dentry_key(record.parent_inode_id, record.prepared.components[-1]),
                        encode_dentry_value(record.inode_id, record.node_type),
                    )
                )
        try:
            with self._conn:
                self._conn.executemany(
                    "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", rows
                )
        except sqlite3.Error as exc:
            raise BenchError(str(exc)) from exc

    def resolve(self, path: PreparedPath) -> ResolveResult:
        """Walk from the root inode; a missing component yields a miss."""
        if self._conn is None:
            raise BenchError("resolver is not ready")

        current = self._options.root_inode_id
        component_steps = 0
        index_steps = 0
        for component in path.components:
            index_steps += 1
            child = self._lookup_dentry(current, component)
            if child is None:
                return ResolveResult(
                    found=False,
                    inode_id=0,
                    depth=path.depth(),
                    component_steps=component_steps,
                    index_steps=index_steps,
                    steps=index_steps,
                )
            component_steps += 1
            current = child

        if self._options.verify_inode_on_resolve:
            index_steps += 1
            self._lookup_inode(current)

        return ResolveResult(
            found=True,
            inode_id=current,
            depth=path.depth(),
            component_steps=component_steps,
            index_steps=index_steps,
            steps=index_steps,
        )

    def _db_target(self) -> str:
        return self._options.db_path or _MEMORY

    def _reset_db(self) -> None:
        self.close()
        target = self._db_target()
        if not self._options.destroy_if_exists or target == _MEMORY:
            return
        for suffix in ("", "-journal", "-wal", "-shm"):
            try:
                os.remove(target + suffix)
            except FileNotFoundError:
                pass
            except OSError as exc:
                raise BenchError(f"failed to destroy store: {exc}") from exc

    def _open(self) -> None:
        if self._conn is not None:
            return
        target = self._db_target()
        if target != _MEMORY and not self._options.create_if_missing and not os.path.exists(target):
            raise BenchError(f"store does not exist: {target}")
        try:
            conn = sqlite3.connect(target)
            conn.execute("CREATE TABLE IF NOT EXISTS kv (key BLOB PRIMARY KEY, value BLOB NOT NULL)")
            conn.commit()
        except sqlite3.Error as exc:
            raise BenchError(str(exc)) from exc
        self._conn = conn

    def _get(self, key: bytes) -> bytes | None:
        assert self._conn is not None
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise BenchError(str(exc)) from exc
        return None if row is None else bytes(row[0])

    def _lookup_dentry(self, parent_inode_id: int, name: str) -> int | None:
        value = self._get(encode_dentry_key(parent_inode_id, name))
        if value is None:
            return None
        try:
            return decode_dentry_value(value).child_inode_id
        except BenchError:
            return None

    def _lookup_inode(self, inode_id: int) -> NamespaceRecord:
        value = self._get(encode_inode_key(inode_id))
        if value is None:
            raise BenchError(f"inode not found: {inode_id}")
        try:
            return decode_inode_value(value)
        except BenchError as exc:
            raise BenchError("invalid inode payload") from exc