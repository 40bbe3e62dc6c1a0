"""
Domain models for leaf diagnosis and weather-driven risk scoring.

These models represent the core domain entities and should be independent
of any infrastructure concerns (model runtime, weather provider, etc.).
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class SeverityLabel(str, Enum):
    """Leaf-condition classes, in the model's output index order."""
    SEVERITY_0 = "severity_0"
    SEVERITY_1 = "severity_1"
    SEVERITY_3 = "severity_3"
    SEVERITY_5 = "severity_5"
    SEVERITY_7 = "severity_7"
    SEVERITY_9 = "severity_9"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    """Discrete disease risk level."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class ThreatType(str, Enum):
    """Whether a monitored threat is a disease or an insect pest."""
    DISEASE = "disease"
    PEST = "pest"


class ClassificationResult(BaseModel):
    """Outcome of one leaf image classification."""
    label: SeverityLabel
    confidence: float = Field(
        description="Raw maximum model output; not guaranteed to be a probability"
    )


class Treatment(BaseModel):
    """Advice shown for a severity label."""
    title: str
    description: str
    treatment: List[str]


class WeatherDay(BaseModel):
    """One forecast day's aggregated conditions."""
    model_config = ConfigDict(frozen=True)
    
    date: str = Field(description="Forecast date, YYYY-MM-DD")
    temp_max: float = Field(description="Maximum air temperature in °C")
    temp_min: float = Field(description="Minimum air temperature in °C")
    rh_avg: float = Field(description="Mean relative humidity in %")
    rain_sum: float = Field(description="Total rainfall in mm")
    dewpoint_avg: float = Field(description="Mean dew point in °C")
    leaf_wetness_hours: float = Field(
        description="Hours with humidity above the wetness threshold (derived)"
    )


class DiseaseProfile(BaseModel):
    """
    Static weather thresholds favouring one disease or pest.
    
    The temperature window is always present. Every other condition is only
    evaluated when its threshold is set; the dew point window needs both ends.
    """
    model_config = ConfigDict(frozen=True)
    
    code: str
    name: str
    type: ThreatType
    temp_min: float
    temp_max: float
    rh_min: Optional[float] = None
    rain_min: Optional[float] = None
    dewpoint_min: Optional[float] = None
    dewpoint_max: Optional[float] = None
    leaf_wetness_min: Optional[float] = None
    consecutive_days: int = Field(
        default=1,
        description="Consecutive favourable days the pathogen needs (informational)"
    )


class RiskResult(BaseModel):
    """Scoring outcome for one (day, disease) pair."""
    model_config = ConfigDict(frozen=True)
    
    code: str
    risk: RiskLevel
    match_count: int
    total_conditions: int
    
    @property
    def match_rate(self) -> float:
        if self.total_conditions == 0:
            return 0.0
        return self.match_count / self.total_conditions


class DayRiskAssessment(BaseModel):
    """Ranked risk results for a single forecast day."""
    date: str
    results: List[RiskResult]


class DailyForecast(BaseModel):
    """Display-oriented summary of one forecast day."""
    date: str
    weather_code: int
    description: str
    rain_sum: float
    precipitation_probability_max: Optional[float] = None
    temp_max: Optional[float] = None
    temp_min: Optional[float] = None


class CurrentConditions(BaseModel):
    """Weather at the field right now."""
    temperature: float = Field(description="Air temperature in °C")
    weather_code: int
    description: str


class DisplayForecast(BaseModel):
    """Current conditions plus the short daily outlook shown to the farmer."""
    current: Optional[CurrentConditions] = None
    days: List[DailyForecast]
