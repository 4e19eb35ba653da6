from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sinar.compliance.catalog import ComplianceCatalog
from sinar.entities import BusinessProfile

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.yaml"


def _read_yaml_mapping(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Expected YAML data file at {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Expected mapping at {path}, got {type(payload).__name__}")
    return payload


def load_catalog(path: Optional[Path] = None) -> ComplianceCatalog:
    return ComplianceCatalog.from_mapping(_read_yaml_mapping(Path(path or DEFAULT_CATALOG_PATH)))


def load_business(path: Path) -> BusinessProfile:
    return BusinessProfile.from_mapping(_read_yaml_mapping(Path(path)))


def load_businesses(directory: Path) -> Dict[str, BusinessProfile]:
    businesses: Dict[str, BusinessProfile] = {}
    for path in sorted(Path(directory).glob("*.y*ml")):
        business = load_business(path)
        businesses[business.id] = business
    return businesses


__all__ = ["DEFAULT_CATALOG_PATH", "load_catalog", "load_business", "load_businesses"]
