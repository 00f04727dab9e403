"""Kernel slab cache usage from the slabinfo file."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from nsbench.fs.types import FsBenchError

SLABINFO_PATH = "/proc/slabinfo"
_HEADER_LINES = 2


@dataclass
class SlabEntry:
    """One slab cache line."""

    name: str = ""
    active_objs: int = 0
    num_objs: int = 0
    obj_size: int = 0

    def active_bytes(self) -> int:
        """Bytes held by active objects."""
        return self.active_objs * self.obj_size


def _parse_count(text: str) -> int:
    value = int(text)
    if value < 0:
        raise ValueError(text)
    return value


def parse_slabinfo(text: str) -> list[SlabEntry]:
    """Parse slabinfo text; the two header lines and malformed lines are skipped."""
    entries = []
    for line in text.splitlines()[_HEADER_LINES:]:
        fields = line.split()
        if len(fields) < 4:
            continue
        try:
            active_objs, num_objs, obj_size = (_parse_count(f) for f in fields[1:4])
        except ValueError:
            continue
        entries.append(
            SlabEntry(name=fields[0], active_objs=active_objs, num_objs=num_objs, obj_size=obj_size)
        )
    return entries


def snapshot_slabs(slabinfo_path: str | os.PathLike = SLABINFO_PATH) -> list[SlabEntry]:
    """Read and parse slabinfo; raises FsBenchError if it cannot be opened."""
    try:
        text = Path(slabinfo_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FsBenchError(f"failed to open {os.fspath(slabinfo_path)}") from exc
    return parse_slabinfo(text)


def query_active_bytes(slabs: Iterable[SlabEntry], slab_name: str) -> int:
    """Active bytes of the first slab with this name, or zero if there is none."""
    return next((entry.active_bytes() for entry in slabs if entry.name == slab_name), 0)