from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List

from sinar.compliance import RemediationTracker
from sinar.entities import LegalComparison, LegalRequirement, RedirectTarget
from sinar.errors import ValidationError
from sinar.ids import business_requirement_id, product_requirement_id

logger = logging.getLogger(__name__)


@dataclass
class RemediationSession:
    requirement_id: str
    business_id: str
    requirement: LegalRequirement
    tracker: RemediationTracker


def missing_requirements(business_id: str, comparison: LegalComparison) -> Dict[str, LegalRequirement]:
    """Requirement id -> requirement, for every entry the business still lacks."""
    missing: Dict[str, LegalRequirement] = {}

    def add(key: str, requirement: LegalRequirement) -> None:
        if key in missing:
            raise ValidationError(f"Requirement {requirement.type!r} is listed twice for the same owner ({key})")
        missing[key] = requirement

    for requirement in comparison.required:
        if not requirement.has_legal:
            add(business_requirement_id(business_id, requirement.type), requirement)
    for product in comparison.products:
        for requirement in product.required:
            if not requirement.has_legal:
                add(product_requirement_id(business_id, product.product_name, requirement.type), requirement)
    return missing


class RemediationSessionManager:
    """Holds one remediation tracker per missing requirement, keyed by requirement id."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._sessions: Dict[str, RemediationSession] = {}
        self._lock = threading.Lock()

    def sync(self, business_id: str, comparison: LegalComparison) -> List[str]:
        """Open sessions for newly missing requirements and close ones that are now satisfied.

        Progress on a requirement whose steps did not change is kept.
        """
        missing = missing_requirements(business_id, comparison)
        with self._lock:
            stale = [
                key
                for key, session in self._sessions.items()
                if session.business_id == business_id and key not in missing
            ]
            for key in stale:
                del self._sessions[key]
            for key, requirement in missing.items():
                existing = self._sessions.get(key)
                if existing and existing.requirement.steps == requirement.steps:
                    continue
                self._sessions[key] = RemediationSession(
                    requirement_id=key,
                    business_id=business_id,
                    requirement=requirement,
                    tracker=RemediationTracker.for_requirement(requirement, strict=self.strict),
                )
        logger.info(
            "readiness.remediation.sync",
            extra={"business_id": business_id, "open": len(missing), "closed": len(stale)},
        )
        return list(missing)

    def get(self, requirement_id: str) -> RemediationSession:
        with self._lock:
            session = self._sessions.get(requirement_id)
        if session is None:
            raise KeyError(requirement_id)
        return session

    def toggle_step(self, requirement_id: str, step_number: int) -> RemediationTracker:
        with self._lock:
            session = self._sessions.get(requirement_id)
            if session is None:
                raise KeyError(requirement_id)
            session.tracker = session.tracker.toggle(step_number)
            tracker = session.tracker
        logger.info(
            "readiness.remediation.toggle",
            extra={"requirement_id": requirement_id, "step": step_number, "progress": tracker.progress_percent()},
        )
        return tracker

    def is_accessible(self, requirement_id: str, step_number: int) -> bool:
        return self.get(requirement_id).tracker.is_accessible(step_number)

    def progress(self, requirement_id: str) -> float:
        return self.get(requirement_id).tracker.progress_percent()

    def redirect_for(self, requirement_id: str, step_number: int) -> RedirectTarget:
        session = self.get(requirement_id)
        return session.tracker.redirect_for(session.requirement, step_number)

    def list(self, business_id: str) -> List[RemediationSession]:
        with self._lock:
            return [session for session in self._sessions.values() if session.business_id == business_id]


__all__ = ["RemediationSession", "RemediationSessionManager", "missing_requirements"]
