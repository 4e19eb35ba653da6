from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from sinar.errors import ValidationError


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Coerce a timestamp-like value to an aware UTC datetime.

    ``None`` and empty strings mean "no timestamp". Naive datetimes are taken
    to be UTC. Anything that cannot be read as a timestamp raises
    :class:`ValidationError`.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError(f"Invalid timestamp {value!r}") from exc
    else:
        raise ValidationError(f"Unsupported timestamp value {value!r}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _optional_float(payload: Mapping[str, Any], key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{key} must be numeric, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValidationError(f"{key} must be a finite number, got {value!r}")
    return number


@dataclass(frozen=True)
class FinancialSnapshot:
    """One immutable entry in a business's financial history."""

    id: str
    created_at: Optional[datetime] = None
    revenue: Optional[float] = None
    ebitda: Optional[float] = None
    assets: Optional[float] = None
    liabilities: Optional[float] = None
    equity: Optional[float] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        # Stored as aware UTC; naive input is taken as UTC.
        object.__setattr__(self, "created_at", parse_timestamp(self.created_at))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "FinancialSnapshot":
        revenue = _optional_float(payload, "revenue")
        if revenue is not None and revenue < 0:
            raise ValidationError(f"revenue must not be negative, got {revenue}")
        return cls(
            id=str(payload.get("id", "")),
            created_at=payload.get("created_at"),
            revenue=revenue,
            ebitda=_optional_float(payload, "ebitda"),
            assets=_optional_float(payload, "assets"),
            liabilities=_optional_float(payload, "liabilities"),
            equity=_optional_float(payload, "equity"),
            notes=payload.get("notes"),
        )


__all__ = ["FinancialSnapshot", "parse_timestamp"]
