from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from sinar.entities import (
    BusinessProfile,
    InvestmentCapacity,
    LegalComparison,
    LegalRequirement,
    ReadinessScore,
    RemediationStep,
    ValuationPoint,
)
from sinar.ids import business_requirement_id, product_requirement_id


class LegalDocumentIn(BaseModel):
    type: str
    file_name: Optional[str] = None
    issued_by: Optional[str] = None
    issued_at: Optional[date] = None
    valid_until: Optional[date] = None
    notes: Optional[str] = None


class ProductIn(BaseModel):
    name: str
    category: Optional[str] = None
    description: Optional[str] = None
    legal_documents: List[LegalDocumentIn] = Field(default_factory=list)


class FinancialSnapshotIn(BaseModel):
    id: str
    created_at: Optional[datetime] = None
    revenue: Optional[float] = Field(default=None, ge=0)
    ebitda: Optional[float] = None
    assets: Optional[float] = None
    liabilities: Optional[float] = None
    equity: Optional[float] = None
    notes: Optional[str] = None


class BusinessProfileIn(BaseModel):
    """Business aggregate as resolved by the owning service."""

    name: str
    classification: Optional[str] = None
    type: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    market_cap: Optional[float] = None
    products: List[ProductIn] = Field(default_factory=list)
    legal_documents: List[LegalDocumentIn] = Field(default_factory=list)
    financial_history: List[FinancialSnapshotIn] = Field(default_factory=list)
    financial: Optional[FinancialSnapshotIn] = Field(default=None, description="Legacy single financial record")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    def to_profile(self, business_id: str) -> BusinessProfile:
        payload = self.model_dump()
        payload["id"] = business_id
        return BusinessProfile.from_mapping(payload)


class RemediationStepOut(BaseModel):
    step_number: int
    description: str
    redirect_url: str
    external: bool

    @classmethod
    def from_core(cls, step: RemediationStep) -> "RemediationStepOut":
        return cls(
            step_number=step.step_number,
            description=step.description,
            redirect_url=step.redirect.target,
            external=step.redirect.is_external,
        )


class LegalRequirementOut(BaseModel):
    requirement_id: str
    type: str
    has_legal: bool
    notes: Optional[str] = None
    steps: List[RemediationStepOut] = Field(default_factory=list)

    @classmethod
    def from_core(cls, requirement_id: str, requirement: LegalRequirement) -> "LegalRequirementOut":
        return cls(
            requirement_id=requirement_id,
            type=requirement.type,
            has_legal=requirement.has_legal,
            notes=requirement.notes,
            steps=[RemediationStepOut.from_core(step) for step in requirement.steps],
        )


class ProductComparisonOut(BaseModel):
    product_name: str
    required: List[LegalRequirementOut]
    missing_count: int


class LegalComparisonOut(BaseModel):
    business_id: str
    required: List[LegalRequirementOut]
    products: List[ProductComparisonOut]
    missing_count: int
    completed_count: int

    @classmethod
    def from_core(cls, business_id: str, comparison: LegalComparison) -> "LegalComparisonOut":
        return cls(
            business_id=business_id,
            required=[
                LegalRequirementOut.from_core(business_requirement_id(business_id, req.type), req)
                for req in comparison.required
            ],
            products=[
                ProductComparisonOut(
                    product_name=product.product_name,
                    required=[
                        LegalRequirementOut.from_core(
                            product_requirement_id(business_id, product.product_name, req.type), req
                        )
                        for req in product.required
                    ],
                    missing_count=product.missing_count,
                )
                for product in comparison.products
            ],
            missing_count=comparison.missing_count,
            completed_count=comparison.completed_count,
        )


class ReadinessScoreOut(BaseModel):
    business_id: str
    value: int = Field(ge=0, le=100)
    stage: str
    breakdown: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_core(cls, business_id: str, result: ReadinessScore, breakdown: Dict[str, int]) -> "ReadinessScoreOut":
        return cls(business_id=business_id, value=result.value, stage=result.stage.value, breakdown=breakdown)


class ValuationPointOut(BaseModel):
    timestamp: datetime
    period: str
    value: float

    @classmethod
    def from_core(cls, point: ValuationPoint) -> "ValuationPointOut":
        return cls(timestamp=point.timestamp, period=point.period, value=point.value)


class ValuationOut(BaseModel):
    business_id: str
    current: float
    multiplier: float
    net_worth: Optional[float] = None


class InvestmentCapacityOut(BaseModel):
    business_id: str
    maximum: float
    existing: float
    remaining: float
    minimum: float

    @classmethod
    def from_core(cls, business_id: str, capacity: InvestmentCapacity) -> "InvestmentCapacityOut":
        return cls(business_id=business_id, **capacity.to_dict())


class RemediationProgressOut(BaseModel):
    requirement_id: str
    type: str
    total_steps: int
    completed: List[int]
    progress_percent: float
    complete: bool


class StepAccessOut(BaseModel):
    requirement_id: str
    step_number: int
    accessible: bool
    redirect_url: Optional[str] = None


__all__ = [
    "LegalDocumentIn",
    "ProductIn",
    "FinancialSnapshotIn",
    "BusinessProfileIn",
    "RemediationStepOut",
    "LegalRequirementOut",
    "ProductComparisonOut",
    "LegalComparisonOut",
    "ReadinessScoreOut",
    "ValuationPointOut",
    "ValuationOut",
    "InvestmentCapacityOut",
    "RemediationProgressOut",
    "StepAccessOut",
]
