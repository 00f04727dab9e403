"""Path normalization, splitting and component hashing."""

from __future__ import annotations

import re

from nsbench.types import BenchError, PreparedPath

_FNV_OFFSET = 14695981039346656037
_FNV_PRIME = 1099511628211
_MASK64 = (1 << 64) - 1
_SLASH_RUN = re.compile(r"/+")


def hash_path_component(component: str) -> int:
    """64-bit FNV-1a hash of a component's UTF-8 bytes."""
    value = _FNV_OFFSET
    for byte in component.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK64
    return value


def normalize_absolute_path(path: str) -> str:
    """Turn backslashes into slashes, collapse slash runs and drop trailing slashes."""
    converted = path.replace("\\", "/")
    if not converted.startswith("/"):
        raise BenchError("invalid absolute path")
    return _SLASH_RUN.sub("/", converted).rstrip("/") or "/"


def split_normalized_path(normalized: str) -> list[str]:
    """Split a normalized absolute path into its non-empty components."""
    if not normalized.startswith("/"):
        raise BenchError("failed to split normalized path")
    return [part for part in normalized.split("/") if part]


def prepare_path(path: str) -> PreparedPath:
    """Normalize, split and hash an absolute path."""
    normalized = normalize_absolute_path(path)
    components = split_normalized_path(normalized)
    return PreparedPath(
        normalized=normalized,
        components=components,
        masstree_hashes=[hash_path_component(c) for c in components],
    )


def path_depth(normalized: str) -> int:
    """Number of components in a path; zero for the root or an empty string."""
    if not normalized or normalized == "/":
        return 0
    return sum(1 for part in normalized.split("/") if part)