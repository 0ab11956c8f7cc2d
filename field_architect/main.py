"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from field_architect.config import settings
from field_architect.middleware.error_handler import ErrorHandlerMiddleware
from field_architect.middleware.rate_limit import limiter
from field_architect.api.v1.routers import analysis, fields, sessions

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Health raster: {settings.health_raster_steps}x{settings.health_raster_steps} grid, "
                f"sensors: {settings.sensor_target_count} per field "
                f"({settings.sensor_max_attempts} draws max)")
    logger.info(f"Saved fields: {settings.saved_fields_path or 'in-memory'}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Field Measurement API

    Trace a field boundary or a linear measurement by adding tapped map
    points, and get real-world area, perimeter and distance back.

    ## Features

    - **Measurement Sessions**: Add, undo and clear vertices under the boundary
      or ruler tool; derived values are recomputed on every change
    - **Health Raster**: Synthetic per-cell crop health grid clipped to a boundary
    - **Sensor Grid**: Rejection-sampled sensor positions inside a boundary
    - **Saved Fields**: Store and reopen named boundaries
    - **Unit Formatting**: Metric (ha, m, km) or imperial (acres, ft, mi) display

    ## Geometry

    Distances use the haversine formula on a spherical earth; areas use a
    spherical-excess-corrected planar approximation suited to field-sized
    polygons.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(sessions.router, prefix="/api/v1")
app.include_router(analysis.router, prefix="/api/v1")
app.include_router(fields.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
