"""Path normalization and splitting for the file-system benchmark."""

from __future__ import annotations

import re

from nsbench.fs.types import FsBenchError, PreparedPath

_SLASH_RUN = re.compile(r"/+")


def normalize_absolute_path(path: str) -> str:
    """Collapse slash runs, turn backslashes into slashes and drop one trailing slash.

    The input must start with a forward slash.
    """
    if not path.startswith("/"):
        raise FsBenchError("path must be absolute")
    out = _SLASH_RUN.sub("/", path.replace("\\", "/"))
    if len(out) > 1 and out.endswith("/"):
        out = out[:-1]
    return out


def split_normalized_path(normalized: str) -> list[str]:
    """Split a normalized absolute path into components."""
    if not normalized.startswith("/"):
        raise FsBenchError("failed to split normalized path")
    if normalized == "/":
        return []
    parts = normalized[1:].split("/")
    if parts[-1] == "":
        parts.pop()
    return parts


def prepare_path(path: str) -> PreparedPath:
    """Normalize and split an absolute path."""
    normalized = normalize_absolute_path(path)
    return PreparedPath(normalized=normalized, components=split_normalized_path(normalized))