"""
Application service: Orchestration layer for weather-driven risk monitoring.
"""
from typing import List, Optional, Sequence

from ricecare.domain.disease_profiles import DISEASE_LIST
from ricecare.domain.models import DayRiskAssessment, WeatherDay
from ricecare.infrastructure.weather_client import WeatherClient
from ricecare.services.domain.risk_aggregator import RiskAggregator


class RiskMonitorService:
    """
    Application service for disease risk monitoring.
    
    Fetching weather is delegated to the weather client; scoring and
    ranking are delegated to the risk aggregator.
    """
    
    def __init__(
        self,
        weather_client: WeatherClient,
        aggregator: Optional[RiskAggregator] = None,
    ):
        self.weather_client = weather_client
        self.aggregator = aggregator or RiskAggregator()
    
    def assess(
        self,
        days: Sequence[WeatherDay],
        monitored_codes: Optional[Sequence[str]] = None,
    ) -> List[DayRiskAssessment]:
        """
        Rank disease risk for already-aggregated weather days.
        
        Args:
            days: Forecast days in chronological order
            monitored_codes: Diseases to score; all known diseases when None,
                nothing when empty
            
        Returns:
            One ranked assessment per day
        """
        codes = list(DISEASE_LIST) if monitored_codes is None else list(monitored_codes)
        return self.aggregator.assess_forecast(days, codes)
    
    async def forecast_risk(
        self,
        latitude: float,
        longitude: float,
        monitored_codes: Optional[Sequence[str]] = None,
        days: Optional[int] = None,
    ) -> List[DayRiskAssessment]:
        """
        Fetch the agro forecast for a location and rank disease risk per day.
        
        Raises:
            WeatherAPIError: If the forecast cannot be fetched or parsed
        """
        weather_days = await self.weather_client.get_agro_forecast(
            latitude, longitude, days=days
        )
        return self.assess(weather_days, monitored_codes)
