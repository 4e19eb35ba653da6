from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence, Tuple, Union

from sinar.entities import BusinessClassification, ProductCategory, RequirementTemplate
from sinar.errors import CatalogError, ValidationError

logger = logging.getLogger(__name__)

CatalogKey = Union[BusinessClassification, ProductCategory, str, None]


@dataclass(frozen=True)
class ComplianceCatalog:
    """Required legal documents per business classification and per product category.

    The catalog is the only source of truth for what is "required": a key it
    does not know simply has no mandatory documents.
    """

    businesses: Mapping[BusinessClassification, Tuple[RequirementTemplate, ...]] = field(default_factory=dict)
    products: Mapping[ProductCategory, Tuple[RequirementTemplate, ...]] = field(default_factory=dict)

    def requirements_for(self, key: CatalogKey) -> Tuple[RequirementTemplate, ...]:
        if isinstance(key, ProductCategory):
            return self.requirements_for_product(key)
        classification = BusinessClassification.parse(key)
        return tuple(self.businesses.get(classification, ()))

    def requirements_for_product(self, category: Union[ProductCategory, str, None]) -> Tuple[RequirementTemplate, ...]:
        parsed = ProductCategory.parse(category)
        return tuple(self.products.get(parsed, ()))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ComplianceCatalog":
        businesses = {
            _strict_key(BusinessClassification, raw, "businesses"): _templates(raw, rows)
            for raw, rows in (payload.get("businesses") or {}).items()
        }
        products = {
            _strict_key(ProductCategory, raw, "products"): _templates(raw, rows)
            for raw, rows in (payload.get("products") or {}).items()
        }
        logger.info(
            "readiness.catalog.loaded",
            extra={"business_keys": len(businesses), "product_keys": len(products)},
        )
        return cls(businesses=businesses, products=products)

    @classmethod
    def build(
        cls,
        businesses: Mapping[Any, Iterable[RequirementTemplate]] | None = None,
        products: Mapping[Any, Iterable[RequirementTemplate]] | None = None,
    ) -> "ComplianceCatalog":
        return cls(
            businesses={
                _strict_key(BusinessClassification, key, "businesses"): tuple(rows)
                for key, rows in (businesses or {}).items()
            },
            products={
                _strict_key(ProductCategory, key, "products"): tuple(rows)
                for key, rows in (products or {}).items()
            },
        )


def _strict_key(enum_cls, raw: Any, section: str):
    parsed = enum_cls.parse(raw)
    if not parsed.recognized:
        raise CatalogError(f"Unknown {section} key {raw!r} in compliance catalog")
    return parsed


def _templates(key: Any, rows: Sequence[Mapping[str, Any]] | None) -> Tuple[RequirementTemplate, ...]:
    templates = []
    for row in rows or []:
        try:
            templates.append(RequirementTemplate.from_mapping(row))
        except CatalogError:
            raise
        except ValidationError as exc:
            raise CatalogError(f"Invalid requirement under {key!r}: {exc}") from exc
    return tuple(templates)


__all__ = ["ComplianceCatalog", "CatalogKey"]
