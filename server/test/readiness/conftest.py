from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from server.src.readiness.config import ReadinessConfig, create_engine_from_config, load_readiness_config
from server.src.readiness.store import SqlComparisonCache

WARUNG = {
    "name": "Warung Sinar",
    "industry": "F&B",
    "description": "Family-run warung",
    "products": [{"name": "Sambal Roa", "category": "Food"}],
    "legal_documents": [{"type": "Business License"}],
    "financial_history": [
        {"id": "f2", "created_at": "2024-06-01T00:00:00Z", "revenue": 3_000_000_000, "ebitda": 500_000_000},
        {"id": "f1", "created_at": "2023-06-01T00:00:00Z", "revenue": 500_000_000, "ebitda": 100_000_000},
    ],
}


@pytest.fixture()
def readiness_env(tmp_path: Path) -> Dict[str, str]:
    db_path = tmp_path / "readiness.db"
    return {
        "READINESS_CACHE_BACKEND": "sql",
        "READINESS_DB_URL": f"sqlite:///{db_path}",
    }


@pytest.fixture()
def readiness_config(readiness_env: Dict[str, str]) -> ReadinessConfig:
    return load_readiness_config(readiness_env)


@pytest.fixture()
def sql_cache(readiness_config: ReadinessConfig) -> SqlComparisonCache:
    cache = SqlComparisonCache(create_engine_from_config(readiness_config))
    cache.ensure_schema()
    return cache


@pytest.fixture()
def warung_payload() -> dict:
    return {key: (list(value) if isinstance(value, list) else value) for key, value in WARUNG.items()}
