"""Investment readiness and legal compliance engine for small businesses."""

from .compliance import (
    ComparisonCache,
    ComplianceCatalog,
    ComplianceComparator,
    InMemoryComparisonCache,
    RemediationTracker,
    build_comparison,
)
from .entities import (
    BusinessClassification,
    BusinessProfile,
    FinancialSnapshot,
    InvestmentCapacity,
    LegalComparison,
    LegalDocument,
    LegalRequirement,
    Product,
    ProductCategory,
    ReadinessScore,
    ReadinessStage,
    ValuationPoint,
)
from .errors import CatalogError, SinarError, StepLockedError, ValidationError
from .scoring import score
from .valuation import current_value, history_of, investment_capacity, multiplier, value_of

valuation_history = history_of
current_valuation = current_value

__all__ = [
    "BusinessClassification",
    "BusinessProfile",
    "CatalogError",
    "ComparisonCache",
    "ComplianceCatalog",
    "ComplianceComparator",
    "FinancialSnapshot",
    "InMemoryComparisonCache",
    "InvestmentCapacity",
    "LegalComparison",
    "LegalDocument",
    "LegalRequirement",
    "Product",
    "ProductCategory",
    "ReadinessScore",
    "ReadinessStage",
    "RemediationTracker",
    "SinarError",
    "StepLockedError",
    "ValidationError",
    "ValuationPoint",
    "build_comparison",
    "current_valuation",
    "current_value",
    "history_of",
    "investment_capacity",
    "multiplier",
    "score",
    "valuation_history",
    "value_of",
]
