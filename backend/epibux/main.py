"""EpiBux — FastAPI Application Entry Point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from epibux.config import settings
from epibux.database import engine, Base
from epibux.error_handlers import register_error_handlers
from epibux.middleware.rate_limit import limiter
from epibux.observability import setup_logging
from epibux.routers import codes, marketplace
import epibux.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

# ── CORS origins from env ───────────────────────────────────────────────────
_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="EpiBux",
    description="Virtual marketplace with an internal EB currency.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

register_error_handlers(app)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(marketplace.router)
app.include_router(codes.router)


@app.on_event("startup")
def on_startup():
    """Configure logging and create any missing tables."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    Base.metadata.create_all(bind=engine)
    logger.info("EpiBux server ready")


@app.get("/")
def root():
    return {
        "name": "EpiBux Marketplace API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("epibux.main:app", host="0.0.0.0", port=settings.PORT)
