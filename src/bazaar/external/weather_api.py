"""
Weather API client for the API-vs-UI temperature comparison scenario.

Current conditions endpoint:
    GET /currentconditions/v1/{locationKey}
    Authorization: Bearer <api key>

The response is a JSON array; the first entry carries the public
forecast page ``Link`` and ``Temperature.Metric.Value``.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from bazaar.errors import WeatherApiError

logger = logging.getLogger(__name__)

TEMPERATURE_PATTERN = re.compile(r"([-+]?\d+(?:\.\d+)?)")


@dataclass
class WeatherObservation:
    link: str
    temperature: float


class WeatherApiClient:
    """Client for the current-conditions endpoint."""

    DEFAULT_BASE_URL = "https://dataservice.accuweather.com"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the weather API client.

        Args:
            api_key: Bearer token for the API
            base_url: API root
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        if not api_key:
            raise WeatherApiError("Weather API key is required. Set WEATHER_API_KEY in .env or environment")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def get_current_conditions(self, location_key: str) -> List[Dict[str, Any]]:
        """
        Fetch current conditions for a location.

        Raises:
            WeatherApiError: transport failure, non-200 status or empty body
        """
        logger.info(f"Getting current conditions for location key: {location_key}")
        url = f"{self.base_url}/currentconditions/v1/{location_key}"

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url, headers={"Authorization": f"Bearer {self.api_key}"})
        except httpx.HTTPError as e:
            logger.error(f"Weather API request failed for {location_key}: {e}")
            raise WeatherApiError(f"Weather API request failed: {e}", {"location_key": location_key}) from e

        logger.info(f"Response status code: {response.status_code}")
        logger.debug(f"Response body: {response.text}")

        if response.status_code != 200:
            raise WeatherApiError(
                f"Weather API returned {response.status_code}",
                {"location_key": location_key, "body": response.text[:200]},
            )
        if not response.text.strip():
            raise WeatherApiError("Weather API returned an empty body", {"location_key": location_key})

        return response.json()


def extract_weather(payload: List[Dict[str, Any]]) -> WeatherObservation:
    """Pull the forecast link and metric temperature out of the first entry."""
    try:
        entry = payload[0]
        link = entry["Link"]
        temperature = entry["Temperature"]["Metric"]["Value"]
    except (IndexError, KeyError, TypeError) as e:
        raise WeatherApiError(f"Unexpected weather payload: {e}") from e

    if not link:
        raise WeatherApiError("Weather payload has no link")
    if temperature is None:
        raise WeatherApiError("Weather payload has no temperature")

    return WeatherObservation(link=link, temperature=float(temperature))


def parse_temperature(text: Optional[str]) -> Optional[float]:
    """'23°C' -> 23.0; None when no number is present."""
    if text is None or not text.strip():
        return None
    match = TEMPERATURE_PATTERN.search(text.replace("°", "").replace("C", "").strip())
    if not match:
        return None
    return float(match.group(1))


def temperatures_match(api_temperature: float, ui_temperature: float, tolerance: float = 1.0) -> bool:
    difference = abs(api_temperature - ui_temperature)
    logger.info(
        f"API: {api_temperature}°C, UI: {ui_temperature}°C, "
        f"difference: {difference}°C, tolerance: {tolerance}°C"
    )
    return difference <= tolerance
