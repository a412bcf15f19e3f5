import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.api.deps import get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Load config and validate on startup (fail-fast)
    try:
        config = get_config()
        logger.info("Signed links ready for %s", config.base_url)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Config load failed: %s", e)
        sys.exit(1)

    yield


app = FastAPI(
    title="Signed Invitations API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import invitations  # noqa: E402

app.include_router(invitations.router, prefix="/api/invitations", tags=["Invitations"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
