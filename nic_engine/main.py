"""FastAPI application entry point — wires the NIC API together.

Usage:
    python -m nic_engine.main

Serves the JSON API and a health check via uvicorn.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from nic_engine.api.nic import router as nic_router
from nic_engine.config import settings

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

# ── FastAPI lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle."""
    logger.info("Starting NIC engine (env=%s, timezone=%s)", settings.environment, settings.timezone)
    try:
        yield
    finally:
        logger.info("NIC engine shutdown complete")


# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="NIC Engine API",
    description="Sri Lankan NIC validation, birth date / gender decoding and age calculation",
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(nic_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
    }


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "nic_engine.main:app",
        host=settings.api.api_host,
        port=settings.api.api_port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
