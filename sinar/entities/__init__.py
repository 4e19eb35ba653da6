"""Entity definitions consumed and produced by the engine."""

from .business import BusinessClassification, BusinessProfile, Product, ProductCategory
from .financial import FinancialSnapshot
from .legal import (
    LegalComparison,
    LegalDocument,
    LegalRequirement,
    ProductComparison,
    RedirectKind,
    RedirectTarget,
    RemediationStep,
    RequirementTemplate,
)
from .readiness import InvestmentCapacity, ReadinessScore, ReadinessStage, ValuationPoint

__all__ = [
    "BusinessClassification",
    "BusinessProfile",
    "FinancialSnapshot",
    "InvestmentCapacity",
    "LegalComparison",
    "LegalDocument",
    "LegalRequirement",
    "Product",
    "ProductCategory",
    "ProductComparison",
    "ReadinessScore",
    "ReadinessStage",
    "RedirectKind",
    "RedirectTarget",
    "RemediationStep",
    "RequirementTemplate",
    "ValuationPoint",
]
