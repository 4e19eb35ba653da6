from __future__ import annotations


class SinarError(Exception):
    """Base class for errors raised by the readiness engine."""


class ValidationError(SinarError, ValueError):
    """Input that the engine cannot compute a definite result from."""


class CatalogError(ValidationError):
    """Malformed compliance catalog configuration."""


class StepLockedError(ValidationError):
    """A remediation step was used before its predecessor was completed."""

    def __init__(self, step_number: int) -> None:
        super().__init__(f"Step {step_number} is locked until step {step_number - 1} is completed")
        self.step_number = step_number


__all__ = ["SinarError", "ValidationError", "CatalogError", "StepLockedError"]
