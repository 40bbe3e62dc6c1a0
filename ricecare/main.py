"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ricecare.config import settings
from ricecare.api.rate_limit import limiter
from ricecare.api.v1.routers import diagnosis, risk, weather
from ricecare.domain.exceptions import ModelLoadError
from ricecare.infrastructure.model_host import ModelHost
from ricecare.middleware.error_handler import ErrorHandlerMiddleware

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
    logger.info(f"Risk thresholds: high>={settings.risk_high_threshold}, "
                f"moderate>={settings.risk_moderate_threshold}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")
    
    if settings.model_preload_on_startup:
        try:
            await app.state.model_host.load()
        except ModelLoadError as e:
            # Stays UNLOADED; the first classification retries the load
            logger.warning(f"Model preload failed: {e.message}")
    
    yield
    
    # Shutdown
    from ricecare.infrastructure.weather_client import get_weather_client
    logger.info("Shutting down application...")
    client = get_weather_client()
    await client.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Diagnostic API for rice leaf condition assessment
    
    ## Features
    
    - **Leaf Classification**: Classify a 224x224 leaf photo into a severity
      class with an ONNX image classifier, and return treatment advice
    - **Disease Risk Monitoring**: Score short-range weather forecasts against
      threshold profiles of common rice diseases and pests
    - **Robust Error Handling**: Automatic retries with exponential backoff for
      weather provider calls
    - **Rate Limiting**: Protects the classifier from abuse
    
    ## Risk Scoring
    
    For each disease the engine counts how many of its defined conditions
    (temperature window, humidity, rainfall, dew point window, leaf wetness)
    a day meets. A match rate of at least 80% is HIGH, at least 50% is
    MODERATE, anything lower is LOW.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# The single inference session owner for this application
app.state.model_host = ModelHost(
    settings.model_path,
    serialize_runs=settings.model_serialize_runs,
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
app.include_router(diagnosis.router, prefix="/api/v1")
app.include_router(risk.router, prefix="/api/v1")
app.include_router(weather.router, prefix="/api/v1")


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
async def health_check(request: Request):
    """
    Health check endpoint.
    
    Returns:
        Health status including the model lifecycle state
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "model_state": request.app.state.model_host.state.value,
    }
