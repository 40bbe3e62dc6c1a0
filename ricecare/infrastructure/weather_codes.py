"""
WMO weather interpretation codes used by the forecast provider.
"""


def describe_weather_code(code: int) -> str:
    """Return a human-readable description for a WMO weather code."""
    if code == 0:
        return "Clear sky"
    if code in (1, 2, 3):
        return "Mainly clear, partly cloudy, and overcast"
    if code in (45, 48):
        return "Fog and depositing rime fog"
    if 51 <= code <= 55:
        return "Drizzle: Light, moderate, and dense intensity"
    if 61 <= code <= 65:
        return "Rain: Slight, moderate and heavy intensity"
    if 80 <= code <= 82:
        return "Rain showers: Slight, moderate, and violent"
    if code >= 95:
        return "Thunderstorm: Slight or moderate"
    return "Unknown"
