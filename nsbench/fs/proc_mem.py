"""Process memory usage from the kernel's per-process status file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from nsbench.fs.types import FsBenchError

SELF_STATUS_PATH = "/proc/self/status"


@dataclass
class ProcMemInfo:
    """Resident and virtual memory of a process, in bytes."""

    rss_bytes: int = 0
    vm_bytes: int = 0


def _kb_value(line: str) -> int:
    fields = line.split()
    if len(fields) < 2:
        return 0
    try:
        value = int(fields[1])
    except ValueError:
        return 0
    return max(value, 0) * 1024


def parse_proc_status(text: str) -> ProcMemInfo:
    """Read the VmRSS and VmSize lines of a status file; missing lines stay zero."""
    info = ProcMemInfo()
    for line in text.splitlines():
        if line.startswith("VmRSS:"):
            info.rss_bytes = _kb_value(line)
        elif line.startswith("VmSize:"):
            info.vm_bytes = _kb_value(line)
    return info


def snapshot_self(status_path: str | os.PathLike = SELF_STATUS_PATH) -> ProcMemInfo:
    """Memory usage of the current process; raises FsBenchError if the file is unreadable."""
    try:
        text = Path(status_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FsBenchError(f"failed to open {os.fspath(status_path)}") from exc
    return parse_proc_status(text)