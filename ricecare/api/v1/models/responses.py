"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ricecare.domain.models import (
    CurrentConditions,
    DailyForecast,
    DiseaseProfile,
    RiskLevel,
    SeverityLabel,
    Treatment,
)


class ClassificationResponse(BaseModel):
    """Response model for the leaf classification endpoint."""
    label: SeverityLabel = Field(
        description="Predicted severity class"
    )
    confidence: float = Field(
        description="Raw maximum model score (not necessarily a probability)"
    )
    treatment: Treatment = Field(
        description="Recommended actions for the predicted class"
    )
    
    class Config:
        json_schema_extra = {
            "example": {
                "label": "severity_3",
                "confidence": 7.84,
                "treatment": {
                    "title": "Low Infection",
                    "description": "Visible lesions appearing on some leaves (Severity 3).",
                    "treatment": ["Avoid excessive Nitrogen application."],
                },
            }
        }


class RiskResultResponse(BaseModel):
    """Risk for one disease on one day."""
    code: str
    name: Optional[str] = Field(
        default=None,
        description="Disease or pest name; null for unknown codes"
    )
    risk: RiskLevel
    match_count: int
    total_conditions: int
    match_rate: float


class DayRiskResponse(BaseModel):
    """Ranked risk results for one forecast day."""
    date: str
    results: List[RiskResultResponse]


class RiskAssessmentResponse(BaseModel):
    """Response model for risk assessment endpoints."""
    days: List[DayRiskResponse]


class DiseaseProfilesResponse(BaseModel):
    """Response model listing monitored disease profiles."""
    diseases: List[DiseaseProfile]


class WeatherForecastResponse(BaseModel):
    """Response model for the display forecast endpoint."""
    latitude: float
    longitude: float
    current: Optional[CurrentConditions] = None
    days: List[DailyForecast]
