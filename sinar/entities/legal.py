from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from sinar.errors import ValidationError


class RedirectKind(str, Enum):
    URL = "url"
    GUIDE = "guide"


@dataclass(frozen=True)
class RedirectTarget:
    """Where a remediation step sends the owner: an external site or an in-app guide."""

    kind: RedirectKind
    target: str

    @classmethod
    def parse(cls, value: str) -> "RedirectTarget":
        text = (value or "").strip()
        if text.lower().startswith(("http://", "https://")):
            return cls(kind=RedirectKind.URL, target=text)
        return cls(kind=RedirectKind.GUIDE, target=text)

    @property
    def is_external(self) -> bool:
        return self.kind is RedirectKind.URL

    def __str__(self) -> str:
        return self.target


@dataclass(frozen=True)
class RemediationStep:
    step_number: int
    description: str
    redirect: RedirectTarget

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RemediationStep":
        try:
            number = int(payload["step_number"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Remediation step needs an integer step_number: {dict(payload)!r}") from exc
        redirect = payload.get("redirect_url", payload.get("redirect", ""))
        return cls(
            step_number=number,
            description=str(payload.get("description", "")),
            redirect=RedirectTarget.parse(str(redirect or "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "description": self.description,
            "redirect_url": self.redirect.target,
        }


def validate_step_sequence(steps: Sequence[RemediationStep], *, owner: str) -> Tuple[RemediationStep, ...]:
    """Sort steps by number and check they run 1..N without gaps or repeats."""
    ordered = tuple(sorted(steps, key=lambda step: step.step_number))
    for expected, step in enumerate(ordered, start=1):
        if step.step_number != expected:
            raise ValidationError(
                f"Steps for {owner!r} must be numbered 1..{len(ordered)} without gaps, got {step.step_number} at position {expected}"
            )
    return ordered


@dataclass(frozen=True)
class RequirementTemplate:
    type: str
    notes: Optional[str] = None
    steps: Tuple[RemediationStep, ...] = ()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RequirementTemplate":
        doc_type = str(payload.get("type", "")).strip()
        if not doc_type:
            raise ValidationError(f"Requirement template is missing a type: {dict(payload)!r}")
        steps = [RemediationStep.from_mapping(item) for item in payload.get("steps") or []]
        return cls(
            type=doc_type,
            notes=payload.get("notes") or None,
            steps=validate_step_sequence(steps, owner=doc_type),
        )


@dataclass(frozen=True)
class LegalRequirement:
    type: str
    has_legal: bool
    notes: Optional[str] = None
    steps: Tuple[RemediationStep, ...] = ()

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def step(self, step_number: int) -> RemediationStep:
        for step in self.steps:
            if step.step_number == step_number:
                return step
        raise ValidationError(f"{self.type!r} has no step {step_number}")

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.type, "has_legal": self.has_legal}
        if self.notes:
            payload["notes"] = self.notes
        if self.steps:
            payload["steps"] = [step.to_dict() for step in self.steps]
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LegalRequirement":
        return cls(
            type=str(payload["type"]),
            has_legal=bool(payload.get("has_legal", False)),
            notes=payload.get("notes") or None,
            steps=tuple(RemediationStep.from_mapping(item) for item in payload.get("steps") or []),
        )


def _count(requirements: Sequence[LegalRequirement], has_legal: bool) -> int:
    return sum(1 for requirement in requirements if requirement.has_legal is has_legal)


@dataclass(frozen=True)
class ProductComparison:
    product_name: str
    required: Tuple[LegalRequirement, ...] = ()

    @property
    def missing_count(self) -> int:
        return _count(self.required, False)

    @property
    def completed_count(self) -> int:
        return _count(self.required, True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_name": self.product_name,
            "required": [requirement.to_dict() for requirement in self.required],
        }


@dataclass(frozen=True)
class LegalComparison:
    """Required documents for a business and its products, and which of them are held."""

    required: Tuple[LegalRequirement, ...] = ()
    products: Tuple[ProductComparison, ...] = ()

    def all_requirements(self) -> Tuple[LegalRequirement, ...]:
        collected = list(self.required)
        for product in self.products:
            collected.extend(product.required)
        return tuple(collected)

    @property
    def missing_count(self) -> int:
        return _count(self.all_requirements(), False)

    @property
    def completed_count(self) -> int:
        return _count(self.all_requirements(), True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required": [requirement.to_dict() for requirement in self.required],
            "products": [product.to_dict() for product in self.products],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LegalComparison":
        return cls(
            required=tuple(LegalRequirement.from_dict(item) for item in payload.get("required") or []),
            products=tuple(
                ProductComparison(
                    product_name=str(item["product_name"]),
                    required=tuple(LegalRequirement.from_dict(req) for req in item.get("required") or []),
                )
                for item in payload.get("products") or []
            ),
        )


def _parse_date(value: Any, *, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name} date {value!r}") from exc


@dataclass
class LegalDocument:
    """A legal document the business (or one of its products) already holds."""

    type: str
    file_name: Optional[str] = None
    issued_by: Optional[str] = None
    issued_at: Optional[date] = None
    valid_until: Optional[date] = None
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | str) -> "LegalDocument":
        if isinstance(payload, str):
            return cls(type=payload.strip())
        doc_type = payload.get("type", payload.get("legal_type", ""))
        return cls(
            type=str(doc_type or "").strip(),
            file_name=payload.get("file_name"),
            issued_by=payload.get("issued_by"),
            issued_at=_parse_date(payload.get("issued_at"), field_name="issued_at"),
            valid_until=_parse_date(payload.get("valid_until"), field_name="valid_until"),
            notes=payload.get("notes"),
        )


__all__ = [
    "RedirectKind",
    "RedirectTarget",
    "RemediationStep",
    "RequirementTemplate",
    "LegalRequirement",
    "ProductComparison",
    "LegalComparison",
    "LegalDocument",
    "validate_step_sequence",
]
