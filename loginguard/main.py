"""Entry point. Builds the attempt guard, wires it into routes and serves the API.

The guard is process-local: one instance per worker, reaper started on
startup and stopped on shutdown via the FastAPI lifespan.
"""
import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loginguard.api.routes.auth_routes import router as auth_router
from loginguard.application.login_service import LoginService
from loginguard.domain.guard_config import GuardConfig
from loginguard.infrastructure.auth.admin_credentials import admin_configured
from loginguard.infrastructure.auth.attempt_guard import AttemptGuard

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("loginguard.startup")


def create_app(guard: AttemptGuard | None = None) -> FastAPI:
    """Build the FastAPI app around *guard* (a fresh env-configured one by default)."""
    if guard is None:
        guard = AttemptGuard(GuardConfig.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        guard.start()
        if not admin_configured():
            log.warning("No admin credential configured; every login will be rejected.")
        try:
            yield
        finally:
            guard.stop()

    app = FastAPI(
        title="loginguard",
        description="Admin login endpoint with in-memory brute-force protection.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.guard = guard

    # CORS configuration: read allowed origins from env (comma-separated).
    _allowed = os.environ.get("ALLOWED_ORIGINS", "").strip()
    if _allowed:
        allow_origins = [o.strip() for o in _allowed.split(",") if o.strip()]
    else:
        # Default to wildcard for ease of local development.
        allow_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.login_service = LoginService(guard)
    app.include_router(auth_router)

    @app.get("/health")
    def health():
        return {
            "status": "online",
            "system": "loginguard v1.0.0",
            "reaper": "running" if guard.running else "stopped",
            "guard": guard.stats(),
        }

    return app


app = create_app()
