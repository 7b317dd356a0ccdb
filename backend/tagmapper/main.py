"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from tagmapper.config import get_settings
from tagmapper.db.session import SessionLocal
from tagmapper.routers import extraction, mappings, templates

logger = logging.getLogger(__name__)


def _warm_backend_state() -> None:
    """Prime the DB connection and template storage directory at process start."""

    try:
        get_settings().template_storage_dir.mkdir(parents=True, exist_ok=True)
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Backend warm-up failed; continuing without startup pre-warm.")


@asynccontextmanager
async def lifespan(_: FastAPI):
    _warm_backend_state()
    yield


settings = get_settings()
app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(templates.router, tags=["templates"])
app.include_router(mappings.router, tags=["mappings"])
app.include_router(extraction.router, tags=["extraction"])


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}
