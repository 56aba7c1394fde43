"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- Logging
- API routes
- Middleware (logging, CORS, rate limiting)
- Startup/shutdown of the in-memory services

Run with:
    uvicorn shortener.main:app --port 8000
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shortener.api import endpoints
from shortener.core.logging_config import configure_logging
from shortener.core.rate_limit import limiter
from shortener.core.service_manager import initialize_services, shutdown_services
from shortener.core.setting import settings
from shortener.middleware.logging import add_logging_middleware

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="URL Shortener Service",
    description="URL shortener with an in-memory registry and domain popularity ranking",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": {"error": "internal_error", "message": "Internal server error"}},
    )


# Health endpoints defined before router to match before catch-all route
@app.get("/", tags=["Health"])
def root():
    return {
        "message": "URL Shortener Service",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["URL Shortener"])


@app.on_event("startup")
def startup_event():
    """Initialize services on startup."""
    initialize_services()


@app.on_event("shutdown")
def shutdown_event():
    """Drain pending ranking updates on shutdown."""
    shutdown_services()
