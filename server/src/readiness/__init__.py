"""HTTP surface for the readiness engine."""

from .routes import build_readiness_router

__all__ = ["build_readiness_router"]
