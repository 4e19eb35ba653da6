from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from sinar.entities import BusinessProfile
from sinar.loaders import load_businesses

logger = logging.getLogger(__name__)


class BusinessRegistry:
    """In-process view of the business aggregates handed over by the owning service."""

    def __init__(self, businesses: Optional[Dict[str, BusinessProfile]] = None) -> None:
        self._businesses: Dict[str, BusinessProfile] = dict(businesses or {})
        self._lock = threading.Lock()

    @classmethod
    def from_directory(cls, directory: Path) -> "BusinessRegistry":
        businesses = load_businesses(directory)
        logger.info("readiness.registry.seeded", extra={"directory": str(directory), "count": len(businesses)})
        return cls(businesses)

    def get(self, business_id: str) -> Optional[BusinessProfile]:
        with self._lock:
            return self._businesses.get(business_id)

    def put(self, business: BusinessProfile) -> None:
        with self._lock:
            self._businesses[business.id] = business


__all__ = ["BusinessRegistry"]
