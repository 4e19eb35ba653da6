from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from .financial import FinancialSnapshot, _optional_float
from .legal import LegalDocument

K = TypeVar("K", bound=Enum)

_SPACES_RE = re.compile(r"\s+")


def _normalise(value: str) -> str:
    return _SPACES_RE.sub(" ", value.strip().lower())


class BusinessClassification(str, Enum):
    """Business type/industry used to look up mandatory company documents."""

    F_AND_B = "F&B"
    RETAIL = "Retail"
    MANUFACTURING = "Manufacturing"
    TECHNOLOGY = "Technology"
    SERVICES = "Services"
    AGRICULTURE = "Agriculture"
    HEALTH = "Health"
    CREATIVE = "Creative"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, value: Any) -> "BusinessClassification":
        return _parse_key(cls, _CLASSIFICATION_ALIASES, value)

    @property
    def recognized(self) -> bool:
        return self is not BusinessClassification.UNRECOGNIZED


class ProductCategory(str, Enum):
    """Product category used to look up mandatory product documents."""

    FOOD = "Food"
    BEVERAGE = "Beverage"
    COSMETICS = "Cosmetics"
    HERBAL = "Herbal Medicine"
    FASHION = "Fashion"
    HANDICRAFT = "Handicraft"
    ELECTRONICS = "Electronics"
    SOFTWARE = "Software"
    SERVICE = "Service"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, value: Any) -> "ProductCategory":
        return _parse_key(cls, _CATEGORY_ALIASES, value)

    @property
    def recognized(self) -> bool:
        return self is not ProductCategory.UNRECOGNIZED


_CLASSIFICATION_ALIASES: Dict[str, BusinessClassification] = {
    "fnb": BusinessClassification.F_AND_B,
    "f & b": BusinessClassification.F_AND_B,
    "food & beverage": BusinessClassification.F_AND_B,
    "food and beverage": BusinessClassification.F_AND_B,
    "kuliner": BusinessClassification.F_AND_B,
    "ritel": BusinessClassification.RETAIL,
    "manufaktur": BusinessClassification.MANUFACTURING,
    "tech": BusinessClassification.TECHNOLOGY,
    "teknologi": BusinessClassification.TECHNOLOGY,
    "service": BusinessClassification.SERVICES,
    "jasa": BusinessClassification.SERVICES,
    "pertanian": BusinessClassification.AGRICULTURE,
    "healthcare": BusinessClassification.HEALTH,
    "kesehatan": BusinessClassification.HEALTH,
    "creative industry": BusinessClassification.CREATIVE,
    "ekonomi kreatif": BusinessClassification.CREATIVE,
}

_CATEGORY_ALIASES: Dict[str, ProductCategory] = {
    "makanan": ProductCategory.FOOD,
    "minuman": ProductCategory.BEVERAGE,
    "drink": ProductCategory.BEVERAGE,
    "kosmetik": ProductCategory.COSMETICS,
    "herbal": ProductCategory.HERBAL,
    "jamu": ProductCategory.HERBAL,
    "apparel": ProductCategory.FASHION,
    "kerajinan": ProductCategory.HANDICRAFT,
    "craft": ProductCategory.HANDICRAFT,
    "elektronik": ProductCategory.ELECTRONICS,
    "tech": ProductCategory.SOFTWARE,
    "app": ProductCategory.SOFTWARE,
    "services": ProductCategory.SERVICE,
    "jasa": ProductCategory.SERVICE,
}


def _parse_key(enum_cls: Type[K], aliases: Mapping[str, K], value: Any) -> K:
    if isinstance(value, enum_cls):
        return value
    unrecognized = enum_cls["UNRECOGNIZED"]
    if value is None:
        return unrecognized
    key = _normalise(str(value))
    if not key:
        return unrecognized
    for member in enum_cls:
        if member is not unrecognized and _normalise(member.value) == key:
            return member
    return aliases.get(key, unrecognized)


@dataclass
class Product:
    name: str
    category: ProductCategory = ProductCategory.UNRECOGNIZED
    description: Optional[str] = None
    legal_documents: List[LegalDocument] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Product":
        documents = payload.get("legal_documents", payload.get("product_legals")) or []
        return cls(
            name=str(payload.get("name", "")),
            category=ProductCategory.parse(payload.get("category")),
            description=payload.get("description"),
            legal_documents=[LegalDocument.from_mapping(item) for item in documents],
        )

    def holds(self, doc_type: str) -> bool:
        return any(document.type == doc_type for document in self.legal_documents)


@dataclass
class BusinessProfile:
    """Read view of a business aggregate, fully resolved by the caller."""

    id: str
    name: str = ""
    classification: BusinessClassification = BusinessClassification.UNRECOGNIZED
    business_type: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    market_cap: Optional[float] = None
    products: List[Product] = field(default_factory=list)
    legal_documents: List[LegalDocument] = field(default_factory=list)
    financial_history: List[FinancialSnapshot] = field(default_factory=list)
    latest_financial: Optional[FinancialSnapshot] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "BusinessProfile":
        business_type = payload.get("type", payload.get("business_type"))
        industry = payload.get("industry")
        legacy = payload.get("financial", payload.get("latest_financial"))
        documents = payload.get("legal_documents", payload.get("legals")) or []
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name", payload["id"])),
            classification=resolve_classification(payload.get("classification"), industry, business_type),
            business_type=business_type,
            industry=industry,
            description=payload.get("description"),
            market_cap=_optional_float(payload, "market_cap"),
            products=[Product.from_mapping(item) for item in payload.get("products") or []],
            legal_documents=[LegalDocument.from_mapping(item) for item in documents],
            financial_history=[
                FinancialSnapshot.from_mapping(item) for item in payload.get("financial_history") or []
            ],
            latest_financial=FinancialSnapshot.from_mapping(legacy) if legacy else None,
        )

    def holds(self, doc_type: str) -> bool:
        return any(document.type == doc_type for document in self.legal_documents)


def resolve_classification(*candidates: Any) -> BusinessClassification:
    """First candidate (explicit classification, industry, type) that names a known classification."""
    for candidate in candidates:
        parsed = BusinessClassification.parse(candidate)
        if parsed.recognized:
            return parsed
    return BusinessClassification.UNRECOGNIZED


__all__ = [
    "BusinessClassification",
    "ProductCategory",
    "Product",
    "BusinessProfile",
    "resolve_classification",
]
