"""
OpenWeatherMap lookup for ridership records.

One request per record, no caching and no retry. Weather is best effort:
every failure is turned into a fixed sentinel so record creation never
blocks on it.
"""

import logging
import os
from typing import Callable

import requests

logger = logging.getLogger(__name__)

WEATHER_FAILURE = "Ошибка"
WEATHER_UNKNOWN = "Неизвестно"
WEATHER_ERROR_NOTICE = "Ошибка загрузки погоды"

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


def format_weather(payload: dict) -> str:
    """
    Compose ``"<Description>, <temp>°C"`` from a /weather response body.

    Raises:
        KeyError, TypeError, ValueError: If the payload lacks main.temp.
    """
    conditions = payload.get("weather") or []
    description = conditions[0].get("description") if conditions else None
    if description:
        description = description[:1].upper() + description[1:]
    else:
        description = WEATHER_UNKNOWN
    temperature = float(payload["main"]["temp"])
    return f"{description}, {temperature}°C"


class WeatherClient:
    """
    Fetches current conditions for a coordinate pair.

    Used by the entry flow for every saved record.
    """

    def __init__(
        self,
        config: dict | None = None,
        notify: Callable[[str], None] | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the weather client.

        Args:
            config: Weather configuration dict (base_url, api_key_env, lang,
                units, timeout).
            notify: Called with a user-facing message when a lookup fails.
            session: Optional requests session, mainly for tests.
        """
        self.config = config or {}
        self.base_url = self.config.get("base_url", DEFAULT_BASE_URL).rstrip("/")
        self.lang = self.config.get("lang", "ru")
        self.units = self.config.get("units", "metric")
        self.timeout = self.config.get("timeout", 10)
        self.notify = notify

        api_key_env = self.config.get("api_key_env", "OPEN_WEATHER_MAP_API_KEY")
        self.api_key = self.config.get("api_key") or os.environ.get(api_key_env)
        if not self.api_key:
            logger.warning(f"Weather API key not found in environment variable: {api_key_env}")

        self._session = session or requests.Session()

    def fetch(self, latitude: str, longitude: str) -> str:
        """
        Look up the weather at a coordinate pair.

        Args:
            latitude: Decimal latitude string.
            longitude: Decimal longitude string.

        Returns:
            Human-readable weather, or WEATHER_FAILURE on any error.
        """
        params = {
            "lat": latitude,
            "lon": longitude,
            "appid": self.api_key or "",
            "lang": self.lang,
            "units": self.units,
        }
        try:
            response = self._session.get(
                f"{self.base_url}/weather", params=params, timeout=self.timeout
            )
            response.raise_for_status()
            weather = format_weather(response.json())
        except Exception as e:
            logger.error(f"Weather lookup failed for ({latitude}, {longitude}): {e}")
            if self.notify:
                self.notify(WEATHER_ERROR_NOTICE)
            return WEATHER_FAILURE

        logger.debug(f"Weather at ({latitude}, {longitude}): {weather}")
        return weather

    def close(self) -> None:
        """Release the HTTP session."""
        self._session.close()
