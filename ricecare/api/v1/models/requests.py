"""
API request models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ricecare.domain.models import WeatherDay


class RiskAssessmentRequest(BaseModel):
    """Request model for scoring caller-supplied weather days."""
    days: List[WeatherDay] = Field(
        min_length=1,
        description="Aggregated forecast days in chronological order"
    )
    monitored_codes: Optional[List[str]] = Field(
        default=None,
        description="Disease codes in display-priority order; all diseases when omitted"
    )
    
    class Config:
        json_schema_extra = {
            "example": {
                "days": [{
                    "date": "2026-07-01",
                    "temp_max": 28.0,
                    "temp_min": 23.0,
                    "rh_avg": 90.0,
                    "rain_sum": 3.0,
                    "dewpoint_avg": 21.0,
                    "leaf_wetness_hours": 9,
                }],
                "monitored_codes": ["SB", "RB", "BS"],
            }
        }
