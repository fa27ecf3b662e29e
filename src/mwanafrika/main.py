"""FastAPI application entry point."""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mwanafrika.api import locations, profiles, routes, wellness, whatsapp
from mwanafrika.config import get_settings


def configure_logging(is_development: bool) -> None:
    """Console output in development, JSON lines otherwise."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if is_development:
        # Development: console format for human readability
        processors.append(structlog.dev.ConsoleRenderer())
        level = logging.DEBUG
    else:
        # Production: JSON format for machine parsing
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        level = logging.INFO
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


settings = get_settings()
configure_logging(settings.is_development)

app = FastAPI(title="MwanAfrika", version="0.1.0")
_allowed_origins_env = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
)
allowed_origins = [o.strip() for o in _allowed_origins_env.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(routes.router)
app.include_router(locations.router)
app.include_router(profiles.router)
app.include_router(wellness.router)
app.include_router(whatsapp.router)

# Paths that authenticate themselves (webhook signature) or must stay public
_PUBLIC_PATHS = ("/api/health", "/api/whatsapp")


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    """Optional APP_SECRET authentication middleware."""
    if not settings.app_secret or request.url.path in _PUBLIC_PATHS:
        return await call_next(request)
    if request.headers.get("X-App-Secret", "") != settings.app_secret:
        return JSONResponse({"error": "Unauthorized"}, status_code=401)
    return await call_next(request)


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "mwanafrika.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
