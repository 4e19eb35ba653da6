from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable

from sinar.entities import LegalRequirement, RedirectTarget
from sinar.errors import StepLockedError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemediationTracker:
    """Completed-step state for walking one missing requirement's remediation steps.

    The tracker is a value: ``toggle`` returns a new tracker and leaves the
    original untouched, so the caller decides where the state lives.

    Completing a step is not gated by accessibility unless ``strict`` is set;
    opening a step's redirect always is (see :meth:`redirect_for`).
    """

    total_steps: int
    completed: FrozenSet[int] = field(default_factory=frozenset)
    strict: bool = False

    def __post_init__(self) -> None:
        if self.total_steps < 0:
            raise ValidationError("total_steps must not be negative")
        object.__setattr__(self, "completed", frozenset(self.completed))
        stray = [number for number in self.completed if not 1 <= number <= self.total_steps]
        if stray:
            raise ValidationError(f"Completed steps {sorted(stray)} outside 1..{self.total_steps}")

    @classmethod
    def for_requirement(
        cls,
        requirement: LegalRequirement,
        completed: Iterable[int] = (),
        *,
        strict: bool = False,
    ) -> "RemediationTracker":
        return cls(total_steps=requirement.total_steps, completed=frozenset(completed), strict=strict)

    def _check_range(self, step_number: int) -> None:
        if not 1 <= step_number <= self.total_steps:
            raise ValidationError(f"Step {step_number} is outside 1..{self.total_steps}")

    def is_accessible(self, step_number: int) -> bool:
        return step_number == 1 or (step_number - 1) in self.completed

    def toggle(self, step_number: int) -> "RemediationTracker":
        self._check_range(step_number)
        if step_number in self.completed:
            updated = self.completed - {step_number}
        else:
            if self.strict and not self.is_accessible(step_number):
                raise StepLockedError(step_number)
            updated = self.completed | {step_number}
        logger.debug(
            "readiness.remediation.toggle",
            extra={"step": step_number, "completed": sorted(updated), "total": self.total_steps},
        )
        return replace(self, completed=updated)

    def progress_percent(self) -> float:
        if self.total_steps == 0:
            return 0.0
        return len(self.completed) / self.total_steps * 100

    def is_complete(self) -> bool:
        return self.progress_percent() == 100

    def redirect_for(self, requirement: LegalRequirement, step_number: int) -> RedirectTarget:
        self._check_range(step_number)
        if not self.is_accessible(step_number):
            raise StepLockedError(step_number)
        return requirement.step(step_number).redirect


__all__ = ["RemediationTracker"]
