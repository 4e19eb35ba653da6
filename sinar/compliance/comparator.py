from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

from sinar.entities import (
    BusinessProfile,
    LegalComparison,
    LegalRequirement,
    ProductComparison,
    RequirementTemplate,
)

from .cache import ComparisonCache, InMemoryComparisonCache
from .catalog import ComplianceCatalog

logger = logging.getLogger(__name__)


def _diff(templates: Iterable[RequirementTemplate], holds: Callable[[str], bool]) -> Tuple[LegalRequirement, ...]:
    requirements = []
    for template in templates:
        has_legal = holds(template.type)
        requirements.append(
            LegalRequirement(
                type=template.type,
                has_legal=has_legal,
                notes=template.notes,
                steps=() if has_legal else template.steps,
            )
        )
    return tuple(requirements)


def build_comparison(business: BusinessProfile, catalog: ComplianceCatalog) -> LegalComparison:
    """Diff what the catalog requires against the documents the business and its products hold."""
    required = _diff(catalog.requirements_for(business.classification), business.holds)
    products = tuple(
        ProductComparison(
            product_name=product.name,
            required=_diff(catalog.requirements_for_product(product.category), product.holds),
        )
        for product in business.products
    )
    return LegalComparison(required=required, products=products)


class ComplianceComparator:
    """Serves comparisons from a cache unless a refresh is forced."""

    def __init__(self, catalog: ComplianceCatalog, cache: Optional[ComparisonCache] = None) -> None:
        self.catalog = catalog
        self.cache: ComparisonCache = cache if cache is not None else InMemoryComparisonCache()

    def compare(self, business: BusinessProfile, force_refresh: bool = False) -> LegalComparison:
        if not force_refresh:
            cached = self.cache.get(business.id)
            if cached is not None:
                logger.debug("readiness.compare.cache_hit", extra={"business_id": business.id})
                return cached

        comparison = build_comparison(business, self.catalog)
        self.cache.put(business.id, comparison)
        logger.info(
            "readiness.compare.computed",
            extra={
                "business_id": business.id,
                "forced": force_refresh,
                "missing": comparison.missing_count,
                "completed": comparison.completed_count,
            },
        )
        return comparison

    def invalidate(self, business_id: str) -> None:
        self.cache.invalidate(business_id)


__all__ = ["build_comparison", "ComplianceComparator"]
