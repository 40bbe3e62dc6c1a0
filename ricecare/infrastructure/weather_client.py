"""
Infrastructure layer: Weather forecast client with retry logic.

Provider payloads are parsed eagerly into strict models and aggregated into
WeatherDay records here, so malformed data never reaches the risk engine.
"""
import logging
from typing import List, Dict, Any, Optional

import httpx
import numpy as np
from pydantic import BaseModel, ValidationError, model_validator
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from ricecare.config import settings
from ricecare.domain.exceptions import WeatherAPIError
from ricecare.domain.models import (
    CurrentConditions,
    DailyForecast,
    DisplayForecast,
    WeatherDay,
)
from ricecare.infrastructure.api_constants import (
    APIConstants,
    OpenMeteoEndpoints,
    OpenMeteoVariables,
)
from ricecare.infrastructure.weather_codes import describe_weather_code

logger = logging.getLogger(__name__)


def _check_equal_lengths(series: Dict[str, list]) -> None:
    lengths = {name: len(values) for name, values in series.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"Series lengths differ: {lengths}")


# Pydantic models for provider responses
class AgroHourly(BaseModel):
    """Hourly series used to derive humidity, dew point and leaf wetness."""
    relative_humidity_2m: List[float]
    dew_point_2m: List[float]

    @model_validator(mode="after")
    def series_aligned(self):
        _check_equal_lengths({
            "relative_humidity_2m": self.relative_humidity_2m,
            "dew_point_2m": self.dew_point_2m,
        })
        return self


class AgroDaily(BaseModel):
    """Daily series used for temperature and rainfall."""
    time: List[str]
    temperature_2m_max: List[float]
    temperature_2m_min: List[float]
    rain_sum: List[float]

    @model_validator(mode="after")
    def series_aligned(self):
        _check_equal_lengths({
            "time": self.time,
            "temperature_2m_max": self.temperature_2m_max,
            "temperature_2m_min": self.temperature_2m_min,
            "rain_sum": self.rain_sum,
        })
        return self


class AgroForecastResponse(BaseModel):
    """Forecast response requested for risk scoring."""
    hourly: AgroHourly
    daily: AgroDaily


class DisplayDaily(BaseModel):
    """Daily series requested for the display forecast."""
    time: List[str]
    weather_code: List[int]
    rain_sum: List[float]
    precipitation_probability_max: Optional[List[Optional[float]]] = None
    temperature_2m_max: Optional[List[float]] = None
    temperature_2m_min: Optional[List[float]] = None

    @model_validator(mode="after")
    def series_aligned(self):
        _check_equal_lengths({
            "time": self.time,
            "weather_code": self.weather_code,
            "rain_sum": self.rain_sum,
        })
        return self


class DisplayCurrent(BaseModel):
    """Current conditions block of the display forecast."""
    temperature_2m: float
    weather_code: int


class DisplayForecastResponse(BaseModel):
    """Forecast response requested for display."""
    current: Optional[DisplayCurrent] = None
    daily: DisplayDaily


def aggregate_agro_days(
    forecast: AgroForecastResponse,
    days: int,
    wetness_threshold: float,
) -> List[WeatherDay]:
    """
    Collapse hourly series into daily WeatherDay records.

    Day ``i`` uses hourly samples ``[24 * i, 24 * i + 24)``. Leaf wetness is
    approximated as the number of those hours with humidity at or above
    ``wetness_threshold``.

    Args:
        forecast: Parsed provider response
        days: Maximum number of days to aggregate
        wetness_threshold: Relative humidity (%) counted as a wet hour

    Returns:
        List of WeatherDay, one per forecast day

    Raises:
        WeatherAPIError: If a day has no hourly samples
    """
    hourly = forecast.hourly
    daily = forecast.daily
    day_count = min(days, len(daily.time))

    weather_days = []
    for i in range(day_count):
        start = i * APIConstants.HOURS_PER_DAY
        end = start + APIConstants.HOURS_PER_DAY

        rh = np.asarray(hourly.relative_humidity_2m[start:end], dtype=float)
        dew = np.asarray(hourly.dew_point_2m[start:end], dtype=float)

        if rh.size == 0:
            raise WeatherAPIError(f"No hourly samples for forecast day {daily.time[i]}")

        weather_days.append(WeatherDay(
            date=daily.time[i],
            temp_max=daily.temperature_2m_max[i],
            temp_min=daily.temperature_2m_min[i],
            rain_sum=daily.rain_sum[i],
            rh_avg=float(rh.mean()),
            dewpoint_avg=float(dew.mean()),
            leaf_wetness_hours=int(np.count_nonzero(rh >= wetness_threshold)),
        ))

    return weather_days


class WeatherClient:
    """
    Client for the Open-Meteo forecast API.
    Implements retry logic with exponential backoff.
    """

    def __init__(self, base_url: Optional[str] = None):
        """Initialize the API client with configuration."""
        self.base_url = base_url or settings.weather_api_base_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": APIConstants.CONTENT_TYPE_JSON},
            timeout=settings.weather_api_timeout,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Server errors (5xx) and transport errors are retried; client errors
        (4xx) fail immediately.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            WeatherAPIError: On a 4xx response
        """
        response = await self.client.request(method, endpoint, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code >= 500:
                raise
            raise WeatherAPIError(
                f"Weather request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise WeatherAPIError(f"Weather response is not valid JSON: {e}") from e

    async def _fetch(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await self._make_request("GET", OpenMeteoEndpoints.FORECAST, params=params)
        except httpx.HTTPStatusError as e:
            raise WeatherAPIError(
                f"Weather provider unavailable: {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise WeatherAPIError(f"Weather request error: {str(e)}") from e

    async def get_agro_forecast(
        self,
        latitude: float,
        longitude: float,
        days: Optional[int] = None,
    ) -> List[WeatherDay]:
        """
        Fetch the forecast used for disease risk scoring.

        Args:
            latitude: Field latitude in degrees
            longitude: Field longitude in degrees
            days: Number of forecast days (defaults to settings)

        Returns:
            List of WeatherDay, one per forecast day

        Raises:
            WeatherAPIError: If the request fails or the payload is malformed
        """
        days = days or settings.agro_forecast_days
        data = await self._fetch({
            "latitude": latitude,
            "longitude": longitude,
            "hourly": OpenMeteoVariables.join(OpenMeteoVariables.AGRO_HOURLY),
            "daily": OpenMeteoVariables.join(OpenMeteoVariables.AGRO_DAILY),
            "timezone": "auto",
            "forecast_days": min(days, APIConstants.MAX_FORECAST_DAYS),
        })

        try:
            forecast = AgroForecastResponse.model_validate(data)
        except ValidationError as e:
            raise WeatherAPIError(f"Malformed agro forecast payload: {e}") from e

        weather_days = aggregate_agro_days(
            forecast, days, settings.leaf_wetness_rh_threshold
        )
        logger.info(f"Fetched {len(weather_days)} agro forecast days for ({latitude}, {longitude})")
        return weather_days

    async def get_display_forecast(
        self,
        latitude: float,
        longitude: float,
        days: Optional[int] = None,
    ) -> DisplayForecast:
        """
        Fetch current conditions and a short daily forecast for display.

        Raises:
            WeatherAPIError: If the request fails or the payload is malformed
        """
        days = days or settings.display_forecast_days
        data = await self._fetch({
            "latitude": latitude,
            "longitude": longitude,
            "current": OpenMeteoVariables.join(OpenMeteoVariables.DISPLAY_CURRENT),
            "daily": OpenMeteoVariables.join(OpenMeteoVariables.DISPLAY_DAILY),
            "timezone": "auto",
            "forecast_days": min(days, APIConstants.MAX_FORECAST_DAYS),
        })

        try:
            response = DisplayForecastResponse.model_validate(data)
        except ValidationError as e:
            raise WeatherAPIError(f"Malformed forecast payload: {e}") from e

        daily = response.daily
        forecast = []
        for i in range(min(days, len(daily.time))):
            forecast.append(DailyForecast(
                date=daily.time[i],
                weather_code=daily.weather_code[i],
                description=describe_weather_code(daily.weather_code[i]),
                rain_sum=daily.rain_sum[i],
                precipitation_probability_max=_item(daily.precipitation_probability_max, i),
                temp_max=_item(daily.temperature_2m_max, i),
                temp_min=_item(daily.temperature_2m_min, i),
            ))

        current = None
        if response.current is not None:
            current = CurrentConditions(
                temperature=response.current.temperature_2m,
                weather_code=response.current.weather_code,
                description=describe_weather_code(response.current.weather_code),
            )

        return DisplayForecast(current=current, days=forecast)


def _item(series: Optional[List[Any]], index: int) -> Any:
    if series is None or index >= len(series):
        return None
    return series[index]


# Singleton instance
_weather_client: Optional[WeatherClient] = None


def get_weather_client() -> WeatherClient:
    """
    Get or create the singleton weather client instance.

    Returns:
        WeatherClient instance
    """
    global _weather_client
    if _weather_client is None:
        _weather_client = WeatherClient()
    return _weather_client
