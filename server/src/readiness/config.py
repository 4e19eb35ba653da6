from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ReadinessConfig:
    catalog_path: Optional[Path] = None
    cache_backend: str = "memory"
    db_url: str = "sqlite:///./readiness.db"
    echo_sql: bool = False
    strict_remediation: bool = False
    profiles_dir: Optional[Path] = None

    @property
    def is_sqlite(self) -> bool:
        return self.db_url.startswith("sqlite")

    @property
    def uses_sql_cache(self) -> bool:
        return self.cache_backend == "sql"


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if not value or not value.strip():
        return None
    return Path(value.strip())


def load_readiness_config(env: Dict[str, str] | None = None) -> ReadinessConfig:
    env = env if env is not None else os.environ
    backend = env.get("READINESS_CACHE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "sql"}:
        raise ValueError(f"READINESS_CACHE_BACKEND must be 'memory' or 'sql', got {backend!r}")
    return ReadinessConfig(
        catalog_path=_optional_path(env.get("READINESS_CATALOG_PATH")),
        cache_backend=backend,
        db_url=env.get("READINESS_DB_URL") or "sqlite:///./readiness.db",
        echo_sql=env.get("READINESS_SQL_ECHO", "false").strip().lower() in _TRUTHY,
        strict_remediation=env.get("READINESS_STRICT_REMEDIATION", "false").strip().lower() in _TRUTHY,
        profiles_dir=_optional_path(env.get("READINESS_PROFILES_DIR")),
    )


def create_engine_from_config(config: ReadinessConfig) -> Engine:
    connect_args = {}
    if config.is_sqlite:
        connect_args["check_same_thread"] = False
    return create_engine(
        config.db_url,
        echo=config.echo_sql,
        future=True,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


__all__ = ["ReadinessConfig", "load_readiness_config", "create_engine_from_config"]
