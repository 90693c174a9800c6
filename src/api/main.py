from __future__ import annotations

from fastapi import FastAPI

from api.actions.report import router as report_router


def create_app(report_body: bytes) -> FastAPI:
    """Read-only viewer API over an immutable, already-loaded report body."""
    app = FastAPI(title="zklense report viewer", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.report_body = bytes(report_body)
    app.include_router(report_router)
    return app


__all__ = ["create_app"]
