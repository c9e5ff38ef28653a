"""
FastAPI app entrypoint.

Sea-Style marina availability: marina directory and per-day / per-month availability.
Run from backend: uvicorn seastyle.main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from seastyle.api.routes import availability, marinas
from seastyle.config import settings
from seastyle.services.upstream import default_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = default_client.config
    if config.uses_relay():
        logger.info("Sea-Style requests go through relay %s", config.api_base)
    else:
        logger.info("Sea-Style requests go to %s", config.base_url)
    logger.info("Backend ready at http://127.0.0.1:8000")
    yield


app = FastAPI(title="Sea-Style Availability", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production frontend
_cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(marinas.router, prefix="/marinas", tags=["marinas"])
app.include_router(availability.router, prefix="/availability", tags=["availability"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Sea-Style Availability API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {
        "status": "ok",
        "upstream": settings.seastyle_api_base or settings.seastyle_origin,
    }
