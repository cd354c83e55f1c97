"""Lodging Manager — FastAPI application entry point.

Routes are ``async def`` and call the synchronous services directly, so
requests run one at a time on the event loop and the store sees a single
writer.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lodging.api.deps import get_store
from lodging.api.v1.bookings import router as bookings_router
from lodging.api.v1.dashboard import router as dashboard_router
from lodging.api.v1.guests import router as guests_router
from lodging.api.v1.rooms import router as rooms_router
from lodging.config import settings
from lodging.exceptions import LodgingError

# Configure root logger so all lodging.* loggers output to stderr.
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup: make sure every collection exists
    store = app.dependency_overrides.get(get_store, get_store)()
    store.initialize()
    logger.info("Store ready (%s backend, %s)", settings.store_backend, settings.environment)
    yield
    # Shutdown: dispose engine connections
    from lodging.database import engine

    engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Guests, rooms, bookings and room availability for a single lodging property.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LodgingError)
async def lodging_error_handler(request: Request, exc: LodgingError) -> JSONResponse:
    """Answer service errors with their status code and message."""
    logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Routers
app.include_router(guests_router)
app.include_router(rooms_router)
app.include_router(bookings_router)
app.include_router(dashboard_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """Serve the API with uvicorn (``lodging-api`` console script)."""
    import uvicorn

    uvicorn.run("lodging.main:app", host=settings.host, port=settings.port, reload=settings.debug)
