"""
FastAPI application entry point.
Sets up the API with lifespan events for logging and the Drive client.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from gateway.config import settings
from gateway.api.router import api_router
from gateway.middleware.metrics_middleware import MetricsMiddleware
from gateway.middleware.request_logging import RequestLoggingMiddleware
from gateway.schemas.status import StatusResponse
from gateway.storage.drive_client import get_drive_client
from gateway.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure JSON logging, build the Drive client once
    """
    configure_logging('image-gateway', settings.log_level)

    # Logs a warning when GOOGLE_REFRESH_TOKEN is missing; /auth still works
    get_drive_client()

    yield


# Create FastAPI app
app = FastAPI(
    title="Image Gateway",
    description="Uploads images to Google Drive and proxies them back",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware (for mobile and web clients)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.get("/", response_model=StatusResponse)
async def root():
    """Liveness endpoint."""
    return StatusResponse(
        status="online",
        message="Image Gateway is Running",
        timestamp=datetime.now(timezone.utc),
        env=settings.environment
    )


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
