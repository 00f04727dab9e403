"""Key and value encodings for the key-value namespace schema."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from nsbench.paths import prepare_path
from nsbench.types import BenchError, NamespaceRecord, NodeType

_U64 = struct.Struct(">Q")
_INODE_HEADER = struct.Struct(">QQB")
_DENTRY_VALUE = struct.Struct(">QB")


@dataclass(frozen=True)
class DentryValue:
    """Decoded directory-entry value."""

    child_inode_id: int = 0
    child_type: NodeType = NodeType.FILE


def _u64(value: int) -> bytes:
    if not 0 <= value < 2**64:
        raise BenchError(f"value out of uint64 range: {value}")
    return _U64.pack(value)


def _node_type(raw: int) -> NodeType:
    try:
        return NodeType(raw)
    except ValueError as exc:
        raise BenchError(f"invalid node type byte: {raw}") from exc


def encode_inode_key(inode_id: int) -> bytes:
    """Key of an inode record: b"I" followed by the big-endian inode id."""
    return b"I" + _u64(inode_id)


def encode_dentry_key(parent_inode_id: int, name: str) -> bytes:
    """Key of a directory entry: b"D", the big-endian parent id, then the name."""
    return b"D" + _u64(parent_inode_id) + name.encode("utf-8")


def encode_inode_value(record: NamespaceRecord) -> bytes:
    """Inode id, parent id, type byte and path."""
    return (
        _u64(record.inode_id)
        + _u64(record.parent_inode_id)
        + bytes([int(record.node_type)])
        + record.path.encode("utf-8")
    )


def decode_inode_value(value: bytes) -> NamespaceRecord:
    """Decode an inode value; raises BenchError when it is malformed."""
    if len(value) < _INODE_HEADER.size:
        raise BenchError("inode value too short")
    inode_id, parent_inode_id, raw_type = _INODE_HEADER.unpack_from(value)
    try:
        path = value[_INODE_HEADER.size:].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BenchError("inode path is not valid UTF-8") from exc
    return NamespaceRecord(
        inode_id=inode_id,
        parent_inode_id=parent_inode_id,
        node_type=_node_type(raw_type),
        path=path,
        prepared=prepare_path(path),
    )


def encode_dentry_value(child_inode_id: int, child_type: NodeType) -> bytes:
    """Child inode id followed by its type byte."""
    return _u64(child_inode_id) + bytes([int(child_type)])


def decode_dentry_value(value: bytes) -> DentryValue:
    """Decode a directory-entry value; it must be exactly nine bytes."""
    if len(value) != _DENTRY_VALUE.size:
        raise BenchError("invalid dentry value size")
    child_inode_id, raw_type = _DENTRY_VALUE.unpack(value)
    return DentryValue(child_inode_id=child_inode_id, child_type=_node_type(raw_type))