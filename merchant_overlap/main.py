from __future__ import annotations

from fastapi import FastAPI

from merchant_overlap.config import load_env_files
from merchant_overlap.logging_utils import configure_logging


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    configure_logging()

    application = FastAPI(
        title="Merchant Overlap API",
        version="1.0.0",
    )

    from merchant_overlap.api.routers import overlap_router

    application.include_router(overlap_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
