from __future__ import annotations

from fastapi import FastAPI

from .src.readiness.config import load_readiness_config
from .src.readiness.routes import build_readiness_router


def create_app() -> FastAPI:
    config = load_readiness_config()
    app = FastAPI(title="SINAR Readiness API", version="0.1.0")

    app.include_router(build_readiness_router(config=config))

    @app.get("/health", tags=["system"])
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


__all__ = ["app", "create_app"]
