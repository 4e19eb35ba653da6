from __future__ import annotations

from typing import Dict, Tuple

from sinar.entities import BusinessProfile, ReadinessScore, ReadinessStage

MARKET_CAP_THRESHOLD = 10_000_000_000

WEIGHTS: Dict[str, int] = {
    "financial_history": 30,
    "legal_documents": 25,
    "products": 20,
    "description": 15,
    "market_cap": 10,
}

# Inclusive lower bounds, checked highest first.
STAGE_THRESHOLDS: Tuple[Tuple[int, ReadinessStage], ...] = (
    (80, ReadinessStage.INVESTMENT_READY),
    (60, ReadinessStage.GROWTH),
    (40, ReadinessStage.SCALE_UP),
)


def score_breakdown(business: BusinessProfile) -> Dict[str, int]:
    """Points earned per criterion; criteria that are not met contribute 0."""
    met = {
        "financial_history": bool(business.financial_history),
        "legal_documents": bool(business.legal_documents),
        "products": bool(business.products),
        "description": bool((business.description or "").strip()),
        "market_cap": (business.market_cap or 0) > MARKET_CAP_THRESHOLD,
    }
    return {key: WEIGHTS[key] if met[key] else 0 for key in WEIGHTS}


def stage_for(value: int) -> ReadinessStage:
    for threshold, stage in STAGE_THRESHOLDS:
        if value >= threshold:
            return stage
    return ReadinessStage.UMKM


def score(business: BusinessProfile) -> ReadinessScore:
    value = max(0, min(100, sum(score_breakdown(business).values())))
    return ReadinessScore(value=value, stage=stage_for(value))


__all__ = ["MARKET_CAP_THRESHOLD", "WEIGHTS", "STAGE_THRESHOLDS", "score", "score_breakdown", "stage_for"]
