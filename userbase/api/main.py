import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userbase import __version__
from userbase.adapters.sqlite.migrator import SQLiteMigrator
from userbase.api.deps import get_settings
from userbase.api.errors import register_exception_handlers
from userbase.app_shell.config import validate_startup
from userbase.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Fail fast: refuse to serve with a bad configuration
    try:
        settings = get_settings()
        rules = load_rules(settings.rules_path)
        validate_startup(settings, rules)
        SQLiteMigrator(settings.db_path).run_migrations()
    except Exception:
        logger.critical("Startup aborted", exc_info=True)
        raise
    logger.info("Rules loaded from %s", settings.rules_path)

    yield


app = FastAPI(
    title="Userbase API",
    description="User management with email/password login and bearer tokens.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api-docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

# --- Routers ---
from userbase.api.routes import auth, users  # noqa: E402

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(users.router, prefix="/users", tags=["Users"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "userbase"}
