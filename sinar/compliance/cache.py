from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol

from sinar.entities import LegalComparison


class ComparisonCache(Protocol):
    """Storage for computed comparisons, keyed by business id."""

    def get(self, business_id: str) -> Optional[LegalComparison]:
        ...

    def put(self, business_id: str, comparison: LegalComparison) -> None:
        ...

    def invalidate(self, business_id: str) -> None:
        ...


class InMemoryComparisonCache:
    """Process-local cache. Each put replaces the entry whole; last write wins."""

    def __init__(self) -> None:
        self._entries: Dict[str, LegalComparison] = {}
        self._lock = threading.Lock()

    def get(self, business_id: str) -> Optional[LegalComparison]:
        with self._lock:
            return self._entries.get(business_id)

    def put(self, business_id: str, comparison: LegalComparison) -> None:
        with self._lock:
            self._entries[business_id] = comparison

    def invalidate(self, business_id: str) -> None:
        with self._lock:
            self._entries.pop(business_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["ComparisonCache", "InMemoryComparisonCache"]
