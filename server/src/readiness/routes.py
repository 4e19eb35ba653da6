from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sinar.compliance import ComparisonCache, ComplianceComparator, InMemoryComparisonCache
from sinar.entities import BusinessProfile
from sinar.errors import StepLockedError, ValidationError
from sinar.loaders import load_catalog
from sinar.scoring import score, score_breakdown
from sinar.valuation import history_of, investment_capacity, latest_snapshot, multiplier, net_worth, value_of

from .config import ReadinessConfig, create_engine_from_config, load_readiness_config
from .registry import BusinessRegistry
from .schema import (
    BusinessProfileIn,
    InvestmentCapacityOut,
    LegalComparisonOut,
    ReadinessScoreOut,
    RemediationProgressOut,
    StepAccessOut,
    ValuationOut,
    ValuationPointOut,
)
from .sessions import RemediationSession, RemediationSessionManager
from .store import SqlComparisonCache

logger = logging.getLogger(__name__)


@dataclass
class ReadinessContainer:
    config: ReadinessConfig
    registry: BusinessRegistry
    comparator: ComplianceComparator
    sessions: RemediationSessionManager


def _build_cache(config: ReadinessConfig) -> ComparisonCache:
    if config.uses_sql_cache:
        store = SqlComparisonCache(create_engine_from_config(config))
        store.ensure_schema()
        return store
    return InMemoryComparisonCache()


def _progress(session: RemediationSession) -> RemediationProgressOut:
    tracker = session.tracker
    return RemediationProgressOut(
        requirement_id=session.requirement_id,
        type=session.requirement.type,
        total_steps=tracker.total_steps,
        completed=sorted(tracker.completed),
        progress_percent=tracker.progress_percent(),
        complete=tracker.is_complete(),
    )


def build_readiness_router(
    config: Optional[ReadinessConfig] = None,
    *,
    registry: Optional[BusinessRegistry] = None,
    cache: Optional[ComparisonCache] = None,
) -> APIRouter:
    cfg = config or load_readiness_config()
    catalog = load_catalog(cfg.catalog_path)
    if registry is None:
        registry = BusinessRegistry.from_directory(cfg.profiles_dir) if cfg.profiles_dir else BusinessRegistry()
    container = ReadinessContainer(
        config=cfg,
        registry=registry,
        comparator=ComplianceComparator(catalog, cache if cache is not None else _build_cache(cfg)),
        sessions=RemediationSessionManager(strict=cfg.strict_remediation),
    )

    router = APIRouter(prefix="/api/readiness", tags=["readiness"])

    def get_container() -> ReadinessContainer:
        return container

    def require_business(business_id: str) -> BusinessProfile:
        business = container.registry.get(business_id)
        if business is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Business not found")
        return business

    def require_session(requirement_id: str) -> RemediationSession:
        try:
            return container.sessions.get(requirement_id)
        except KeyError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Remediation requirement not found")

    @router.put("/businesses/{business_id}")
    def put_business(
        business_id: str,
        payload: BusinessProfileIn,
        container: ReadinessContainer = Depends(get_container),
    ) -> dict:
        try:
            business = payload.to_profile(business_id)
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        container.registry.put(business)
        container.comparator.invalidate(business_id)
        logger.info(
            "readiness.business.registered",
            extra={"business_id": business_id, "classification": business.classification.value},
        )
        return {"business_id": business_id, "classification": business.classification.value}

    @router.get("/businesses/{business_id}/legal-comparison", response_model=LegalComparisonOut)
    def legal_comparison(
        business_id: str,
        refresh: bool = Query(default=False),
        container: ReadinessContainer = Depends(get_container),
    ) -> LegalComparisonOut:
        business = require_business(business_id)
        comparison = container.comparator.compare(business, force_refresh=refresh)
        try:
            container.sessions.sync(business_id, comparison)
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return LegalComparisonOut.from_core(business_id, comparison)

    @router.get("/businesses/{business_id}/readiness", response_model=ReadinessScoreOut)
    def readiness(business_id: str) -> ReadinessScoreOut:
        business = require_business(business_id)
        return ReadinessScoreOut.from_core(business_id, score(business), score_breakdown(business))

    @router.get("/businesses/{business_id}/valuation-history", response_model=List[ValuationPointOut])
    def valuation_history(business_id: str) -> List[ValuationPointOut]:
        business = require_business(business_id)
        try:
            points = history_of(business.financial_history)
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return [ValuationPointOut.from_core(point) for point in points]

    @router.get("/businesses/{business_id}/valuation", response_model=ValuationOut)
    def valuation(business_id: str) -> ValuationOut:
        business = require_business(business_id)
        snapshot = latest_snapshot(business)
        if snapshot is None:
            return ValuationOut(business_id=business_id, current=0.0, multiplier=multiplier(0))
        return ValuationOut(
            business_id=business_id,
            current=value_of(snapshot),
            multiplier=multiplier(snapshot.revenue),
            net_worth=net_worth(snapshot),
        )

    @router.get("/businesses/{business_id}/investment-capacity", response_model=InvestmentCapacityOut)
    def capacity(business_id: str, existing: float = Query(default=0.0, ge=0)) -> InvestmentCapacityOut:
        business = require_business(business_id)
        try:
            result = investment_capacity(business, existing)
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return InvestmentCapacityOut.from_core(business_id, result)

    @router.get("/remediation/{requirement_id}", response_model=RemediationProgressOut)
    def remediation_progress(requirement_id: str) -> RemediationProgressOut:
        return _progress(require_session(requirement_id))

    @router.post("/remediation/{requirement_id}/steps/{step_number}/toggle", response_model=RemediationProgressOut)
    def toggle_step(
        requirement_id: str,
        step_number: int,
        container: ReadinessContainer = Depends(get_container),
    ) -> RemediationProgressOut:
        require_session(requirement_id)
        try:
            container.sessions.toggle_step(requirement_id, step_number)
        except StepLockedError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return _progress(container.sessions.get(requirement_id))

    @router.get("/remediation/{requirement_id}/steps/{step_number}/accessible", response_model=StepAccessOut)
    def step_access(
        requirement_id: str,
        step_number: int,
        container: ReadinessContainer = Depends(get_container),
    ) -> StepAccessOut:
        session = require_session(requirement_id)
        if not 1 <= step_number <= session.tracker.total_steps:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Step out of range")
        accessible = session.tracker.is_accessible(step_number)
        redirect = container.sessions.redirect_for(requirement_id, step_number).target if accessible else None
        return StepAccessOut(
            requirement_id=requirement_id,
            step_number=step_number,
            accessible=accessible,
            redirect_url=redirect,
        )

    return router


__all__ = ["build_readiness_router", "ReadinessContainer"]
