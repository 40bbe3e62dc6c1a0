"""
API router for weather forecast endpoints.
"""
from typing import Annotated
from fastapi import APIRouter, Query

from ricecare.api.dependencies import WeatherClientDep
from ricecare.api.v1.models.responses import WeatherForecastResponse


router = APIRouter(
    prefix="/weather",
    tags=["weather"],
)


@router.get(
    "/forecast",
    response_model=WeatherForecastResponse,
    summary="Get the display forecast",
    responses={
        502: {"description": "Weather provider failure"},
    }
)
async def get_forecast(
    latitude: Annotated[float, Query(ge=-90, le=90)],
    longitude: Annotated[float, Query(ge=-180, le=180)],
    weather_client: WeatherClientDep,
) -> WeatherForecastResponse:
    """Return current conditions and the daily forecast shown alongside risk results."""
    forecast = await weather_client.get_display_forecast(latitude, longitude)
    return WeatherForecastResponse(
        latitude=latitude,
        longitude=longitude,
        current=forecast.current,
        days=forecast.days,
    )
