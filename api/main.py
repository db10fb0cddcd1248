"""
FastAPI application entrypoint for the storefront checkout probe API.

This module sets up the FastAPI app, configures logging, and registers
route handlers.
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from api.routes import checks
from api.schemas import HealthResponse
from shared.config import get_config
from shared.logging import configure_logging

load_dotenv()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()

    log_level = logging.getLevelName(config.log_level.upper())
    configure_logging(
        level=log_level,
        log_file=config.log_file,
        log_stdout=config.log_stdout,
    )

    app = FastAPI(
        title="Storefront Checkout Probe API",
        description="Detect CAPTCHA, a product id and checkout payment methods of a storefront",
        version="0.1.0",
    )

    app.include_router(checks.router)

    @app.get("/health", response_model=HealthResponse)
    def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse()

    return app


app = create_app()
