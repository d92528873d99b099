"""Single-entry discovery cache keyed by base path and version-marker mtime."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .models import DiscoveryResult

logger = logging.getLogger(__name__)

CacheKey = Tuple[Path, float]


@dataclass(frozen=True)
class _CacheEntry:
    key: CacheKey
    result: DiscoveryResult


class DiscoveryCache:
    """Holds at most one discovery result.

    The entry is replaced as a whole, never edited in place, so a reader
    either sees the previous result or the new one.
    """

    def __init__(self) -> None:
        self._entry: Optional[_CacheEntry] = None

    def get(self, base_path: Path, mtime: float) -> Optional[DiscoveryResult]:
        entry = self._entry
        if entry is not None and entry.key == (base_path, mtime):
            logger.debug(f"Discovery cache hit for {base_path} (mtime={mtime})")
            return entry.result
        return None

    def put(self, base_path: Path, mtime: float, result: DiscoveryResult) -> None:
        self._entry = _CacheEntry(key=(base_path, mtime), result=result)

    def clear(self) -> None:
        self._entry = None

    def __len__(self) -> int:
        return 0 if self._entry is None else 1
