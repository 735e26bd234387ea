"""Clients for third-party services used by ancillary scenarios."""

from .weather_api import (
    WeatherApiClient,
    WeatherObservation,
    extract_weather,
    parse_temperature,
    temperatures_match,
)

__all__ = [
    "WeatherApiClient",
    "WeatherObservation",
    "extract_weather",
    "parse_temperature",
    "temperatures_match",
]
