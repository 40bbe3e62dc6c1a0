"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends, Request

from ricecare.infrastructure.model_host import ModelHost
from ricecare.infrastructure.weather_client import (
    WeatherClient,
    get_weather_client,
)
from ricecare.services.application.diagnosis_service import DiagnosisService
from ricecare.services.application.risk_service import RiskMonitorService


def get_model_host(request: Request) -> ModelHost:
    """
    Return the model host owned by the running application.
    
    The host is created once with the app and kept on ``app.state``.
    """
    return request.app.state.model_host


def get_diagnosis_service(
    model_host: Annotated[ModelHost, Depends(get_model_host)],
) -> DiagnosisService:
    """
    Dependency factory for DiagnosisService.
    
    Args:
        model_host: Shared model host (injected)
        
    Returns:
        DiagnosisService instance
    """
    return DiagnosisService(model_host=model_host)


def get_risk_service(
    weather_client: Annotated[WeatherClient, Depends(get_weather_client)],
) -> RiskMonitorService:
    """
    Dependency factory for RiskMonitorService.
    
    Args:
        weather_client: Weather forecast client (injected)
        
    Returns:
        RiskMonitorService instance
    """
    return RiskMonitorService(weather_client=weather_client)


# Type aliases for cleaner route signatures
DiagnosisServiceDep = Annotated[DiagnosisService, Depends(get_diagnosis_service)]
RiskServiceDep = Annotated[RiskMonitorService, Depends(get_risk_service)]
WeatherClientDep = Annotated[WeatherClient, Depends(get_weather_client)]
