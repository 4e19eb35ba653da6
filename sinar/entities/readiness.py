from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict


class ReadinessStage(str, Enum):
    UMKM = "UMKM"
    SCALE_UP = "Scale-up"
    GROWTH = "Growth"
    INVESTMENT_READY = "Investment Ready"


@dataclass(frozen=True)
class ReadinessScore:
    value: int
    stage: ReadinessStage

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "stage": self.stage.value}


@dataclass(frozen=True)
class ValuationPoint:
    timestamp: datetime
    period: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "period": self.period, "value": self.value}


@dataclass(frozen=True)
class InvestmentCapacity:
    """How much outside money a business can still take, bounded by its current value."""

    maximum: float
    existing: float
    remaining: float
    minimum: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maximum": self.maximum,
            "existing": self.existing,
            "remaining": self.remaining,
            "minimum": self.minimum,
        }
