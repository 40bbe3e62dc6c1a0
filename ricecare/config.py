"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Classification Model
    model_path: str = Field(
        default="assets/leaf_classifier.onnx",
        description="Path to the bundled ONNX leaf classifier"
    )
    model_preload_on_startup: bool = Field(
        default=True,
        description="Load the inference graph during application startup"
    )
    model_serialize_runs: bool = Field(
        default=True,
        description="Run at most one inference at a time on the shared session"
    )
    image_size: int = Field(
        default=224,
        description="Expected width and height of incoming leaf images"
    )
    image_formats: list[str] = Field(
        default=["JPEG", "PNG"],
        description="Image encodings accepted by the tensor builder"
    )
    
    # Weather Provider Configuration
    weather_api_base_url: str = Field(
        default="https://api.open-meteo.com/v1",
        description="Base URL for the Open-Meteo forecast API"
    )
    weather_api_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for weather requests"
    )
    
    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )
    
    # Risk Monitoring Parameters
    agro_forecast_days: int = Field(
        default=3,
        description="Number of forecast days scored for disease risk"
    )
    display_forecast_days: int = Field(
        default=5,
        description="Number of forecast days returned for display"
    )
    leaf_wetness_rh_threshold: float = Field(
        default=90.0,
        description="Hourly relative humidity (%) counted as a leaf wetness hour"
    )
    risk_high_threshold: float = Field(
        default=0.8,
        description="Minimum match rate classified as HIGH risk"
    )
    risk_moderate_threshold: float = Field(
        default=0.5,
        description="Minimum match rate classified as MODERATE risk"
    )
    
    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    
    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )
    
    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )
    
    # Application Settings
    app_name: str = Field(
        default="RiceCare Diagnostic Engine",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )
    
    class Config:
        env_file = ".env"
        case_sensitive = False
        protected_namespaces = ("settings_",)


# Global settings instance
settings = Settings()
