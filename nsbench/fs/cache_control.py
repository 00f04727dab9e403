"""Flushing dirty data and dropping kernel caches between runs."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from nsbench.fs.types import FsBenchError

DROP_CACHES_PATH = "/proc/sys/vm/drop_caches"


@dataclass
class CacheController:
    """Syncs file systems and writes to the kernel's drop_caches control."""

    drop_caches_path: str = DROP_CACHES_PATH

    @staticmethod
    def _require_supported() -> None:
        if sys.platform == "win32":
            raise FsBenchError("cache control is not available on Windows")

    def sync(self) -> None:
        """Flush dirty file-system data to disk."""
        self._require_supported()
        os.sync()

    def _drop(self, level: int) -> None:
        self.sync()
        try:
            handle = open(self.drop_caches_path, "w", encoding="ascii")
        except OSError as exc:
            raise FsBenchError(f"failed to open {self.drop_caches_path}") from exc
        try:
            with handle:
                handle.write(f"{level}\n")
        except OSError as exc:
            raise FsBenchError(f"failed to write drop_caches={level}") from exc

    def drop_page_cache(self) -> None:
        """Sync, then drop the page cache."""
        self._drop(1)

    def drop_all_caches(self) -> None:
        """Sync, then drop the page cache, dentries and inodes."""
        self._drop(3)