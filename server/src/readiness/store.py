from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import JSON, DateTime, String, delete
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from sinar.entities import LegalComparison

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class ComparisonRecord(Base):
    __tablename__ = "legal_comparisons"

    business_id: Mapped[str] = mapped_column(String, primary_key=True)
    payload: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    computed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SqlComparisonCache:
    """Comparison cache persisted in a SQL table, one row per business."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.Session = sessionmaker(bind=engine, future=True, expire_on_commit=False)
        self._created = False

    def ensure_schema(self) -> None:
        if self._created:
            return
        Base.metadata.create_all(self.engine)
        self._created = True

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self.Session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get(self, business_id: str) -> Optional[LegalComparison]:
        self.ensure_schema()
        with self.session() as session:
            record = session.get(ComparisonRecord, business_id)
            if record is None:
                return None
            return LegalComparison.from_dict(record.payload)

    def put(self, business_id: str, comparison: LegalComparison) -> None:
        self.ensure_schema()
        logger.info("readiness.cache.put", extra={"business_id": business_id})
        with self.session() as session:
            session.merge(
                ComparisonRecord(
                    business_id=business_id,
                    payload=comparison.to_dict(),
                    computed_at=datetime.now(timezone.utc),
                )
            )

    def invalidate(self, business_id: str) -> None:
        self.ensure_schema()
        logger.info("readiness.cache.invalidate", extra={"business_id": business_id})
        with self.session() as session:
            session.execute(delete(ComparisonRecord).where(ComparisonRecord.business_id == business_id))

    def computed_at(self, business_id: str) -> Optional[datetime]:
        self.ensure_schema()
        with self.session() as session:
            record = session.get(ComparisonRecord, business_id)
            return record.computed_at if record else None


__all__ = ["SqlComparisonCache", "ComparisonRecord", "Base"]
