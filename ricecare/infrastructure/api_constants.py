"""
Weather provider endpoint constants and request parameters.

Centralizing these values makes it easy to swap out endpoints or adjust the
variables requested from the provider.
"""


# Open-Meteo API Endpoints
class OpenMeteoEndpoints:
    """Open-Meteo endpoint paths."""
    
    FORECAST = "/forecast"


class OpenMeteoVariables:
    """Variables requested from the forecast endpoint."""
    
    # Hourly series aggregated into daily means for risk scoring
    AGRO_HOURLY = ["relative_humidity_2m", "dew_point_2m"]
    AGRO_DAILY = ["temperature_2m_max", "temperature_2m_min", "rain_sum"]
    
    # Display forecast
    DISPLAY_CURRENT = ["temperature_2m", "weather_code"]
    DISPLAY_DAILY = [
        "weather_code",
        "rain_sum",
        "precipitation_probability_max",
        "temperature_2m_max",
        "temperature_2m_min",
    ]
    
    @staticmethod
    def join(variables: list[str]) -> str:
        """Format a variable list as the comma-separated query value."""
        return ",".join(variables)


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""
    
    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"
    
    # Hourly samples per forecast day
    HOURS_PER_DAY = 24
    
    # Provider limit for forecast_days
    MAX_FORECAST_DAYS = 16
