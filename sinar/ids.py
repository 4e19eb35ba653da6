from __future__ import annotations

import hashlib
import re
from typing import Iterable

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    slug = _SLUG_RE.sub("-", value.lower()).strip("-")
    return slug or "item"


def _hash_for(parts: Iterable[str]) -> str:
    joined = "::".join(parts)
    return hashlib.sha1(joined.encode("utf-8")).hexdigest()[:10]


def _join(scope: str, parts: Iterable[str]) -> str:
    parts = [str(part) for part in parts]
    readable = ":".join([scope, *(slugify(part) for part in parts)])
    return f"{readable}:{_hash_for([scope, *parts])}"


def business_requirement_id(business_id: str, doc_type: str) -> str:
    """Stable id for a company-level requirement, e.g. ``business:42:halal-certificate:<hash>``.

    The slugs keep the id readable; the hash of the raw parts keeps names that
    slugify alike (``Kopi Susu`` / ``Kopi-Susu``) apart.
    """
    return _join("business", [business_id, doc_type])


def product_requirement_id(business_id: str, product_name: str, doc_type: str) -> str:
    return _join("product", [business_id, product_name, doc_type])


__all__ = ["slugify", "business_requirement_id", "product_requirement_id"]
