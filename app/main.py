from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from app.config import ALLOWED_LLM_ADAPTERS, ALLOWED_LOG_LEVELS, load_env_files
from app.schemas.analysis import HealthCheckResponse

APP_VERSION = "1.0.0"


def _validate_env() -> None:
    """
    Validate environment variables at startup.

    Raises RuntimeError listing every invalid variable so the operator can
    fix all problems in one restart cycle. A missing LLM API key is not an
    error: narrative requests fall back to a fixed message.
    """

    load_env_files()

    errors: list[str] = []

    # --- LOG_LEVEL ------------------------------------------------------
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in ALLOWED_LOG_LEVELS:
        errors.append(
            f"LOG_LEVEL='{log_level}' is not valid. "
            f"Allowed values: {sorted(ALLOWED_LOG_LEVELS)}."
        )

    # --- LLM adapter ----------------------------------------------------
    adapter = os.getenv("LLM_ADAPTER", "openai").strip().lower()
    if adapter not in ALLOWED_LLM_ADAPTERS:
        errors.append(
            f"LLM_ADAPTER='{adapter}' is not valid. "
            f"Allowed values: {sorted(ALLOWED_LLM_ADAPTERS)}."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed. Invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Equipment Insight API",
        version=APP_VERSION,
    )

    from app.api.routers import analysis_router, history_router, monitor_router

    application.include_router(analysis_router)
    application.include_router(history_router)
    application.include_router(monitor_router)

    @application.get("/health")
    def healthcheck() -> HealthCheckResponse:
        return HealthCheckResponse(status="ok", version=APP_VERSION)

    logging.getLogger(__name__).info("Equipment Insight API initialised")
    return application


app = create_app()
