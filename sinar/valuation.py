"""EBITDA-multiple valuation keyed on revenue tiers.

Amounts are in the business's reporting currency (IDR for the bundled
thresholds). A snapshot's value is its EBITDA times the multiplier of the
tier its revenue falls in, floored at zero.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sinar.entities import BusinessProfile, FinancialSnapshot, InvestmentCapacity, ValuationPoint
from sinar.errors import ValidationError

logger = logging.getLogger(__name__)

# (lower bound inclusive, upper bound exclusive, multiplier)
REVENUE_TIERS: Tuple[Tuple[float, float, float], ...] = (
    (0, 1_000_000_000, 1.0),
    (1_000_000_000, 5_000_000_000, 2.0),
    (5_000_000_000, 10_000_000_000, 3.0),
    (10_000_000_000, 50_000_000_000, 4.0),
    (50_000_000_000, math.inf, 5.0),
)


def multiplier(revenue: Optional[float]) -> float:
    amount = revenue or 0
    if not math.isfinite(amount):
        amount = 0
    for _lower, upper, factor in REVENUE_TIERS:
        if amount < upper:
            return factor
    return REVENUE_TIERS[-1][2]


def value_of(snapshot: FinancialSnapshot) -> float:
    return max(0.0, (snapshot.ebitda or 0) * multiplier(snapshot.revenue or 0))


def net_worth(snapshot: FinancialSnapshot) -> Optional[float]:
    """Book value (assets minus liabilities), or ``None`` if either side is unknown."""
    if snapshot.assets is None or snapshot.liabilities is None:
        return None
    return snapshot.assets - snapshot.liabilities


def period_label(snapshot: FinancialSnapshot) -> str:
    if snapshot.created_at is None:
        raise ValidationError(f"Financial snapshot {snapshot.id!r} has no created_at")
    return snapshot.created_at.strftime("%Y-%m")


def _require_timestamps(snapshots: Sequence[FinancialSnapshot]) -> None:
    for snapshot in snapshots:
        if snapshot.created_at is None:
            raise ValidationError(f"Financial snapshot {snapshot.id!r} has no created_at; history cannot be ordered")


def history_of(snapshots: Sequence[FinancialSnapshot]) -> List[ValuationPoint]:
    """One valuation point per snapshot, oldest first, each labelled with its own period."""
    _require_timestamps(snapshots)
    ordered = sorted(snapshots, key=lambda snapshot: snapshot.created_at)
    return [
        ValuationPoint(timestamp=snapshot.created_at, period=period_label(snapshot), value=value_of(snapshot))
        for snapshot in ordered
    ]


def latest_snapshot(business: BusinessProfile) -> Optional[FinancialSnapshot]:
    history = business.financial_history
    if not history:
        return business.latest_financial
    dated = [snapshot for snapshot in history if snapshot.created_at is not None]
    if dated:
        return max(dated, key=lambda snapshot: snapshot.created_at)
    return history[-1]


def current_value(business: BusinessProfile) -> float:
    snapshot = latest_snapshot(business)
    if snapshot is None:
        return 0.0
    return value_of(snapshot)


def valuation_summary(business: BusinessProfile) -> Dict[str, Any]:
    snapshot = latest_snapshot(business)
    history = history_of(business.financial_history)
    logger.debug(
        "readiness.valuation.summary",
        extra={"business_id": business.id, "points": len(history)},
    )
    return {
        "current": value_of(snapshot) if snapshot else 0.0,
        "multiplier": multiplier(snapshot.revenue) if snapshot else multiplier(0),
        "net_worth": net_worth(snapshot) if snapshot else None,
        "history": history,
    }


# Smallest ticket, as a share of the remaining capacity.
MIN_INVESTMENT_SHARE = 0.001


def investment_capacity(business: BusinessProfile, existing_investments: float = 0.0) -> InvestmentCapacity:
    """Investment bounds derived from the current valuation.

    The ceiling is the current business value. Whatever is already invested
    comes off it, never going below zero, and the smallest accepted ticket is
    0.1% of what remains (0 once nothing remains).
    """
    existing = float(existing_investments or 0)
    if not math.isfinite(existing) or existing < 0:
        raise ValidationError(f"existing_investments must be a non-negative number, got {existing_investments!r}")
    maximum = current_value(business)
    remaining = max(0.0, maximum - existing)
    minimum = min(remaining * MIN_INVESTMENT_SHARE, remaining) if remaining > 0 else 0.0
    return InvestmentCapacity(maximum=maximum, existing=existing, remaining=remaining, minimum=minimum)


__all__ = [
    "REVENUE_TIERS",
    "multiplier",
    "value_of",
    "net_worth",
    "period_label",
    "history_of",
    "latest_snapshot",
    "current_value",
    "valuation_summary",
    "MIN_INVESTMENT_SHARE",
    "investment_capacity",
]
