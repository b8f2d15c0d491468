# file: backend/weather_api.py

import asyncio
import logging
from typing import Optional

import aiohttp

from backend.config import ProviderConfig
from backend.models import WeatherSnapshot

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,wind_speed_10m"


async def fetch_weather(session: aiohttp.ClientSession, config: ProviderConfig,
                        latitude: float, longitude: float) -> Optional[WeatherSnapshot]:
    """Fetch current conditions from Open-Meteo; None whenever the call fails."""
    params = {"latitude": latitude, "longitude": longitude, "current": CURRENT_FIELDS}
    try:
        async with session.get(config.open_meteo_url, params=params) as response:
            if response.status < 200 or response.status >= 300:
                logging.warning(f"Skipping weather for ({latitude},{longitude}): HTTP {response.status}")
                return None
            weather = await response.json()
        current = weather["current"]
        return WeatherSnapshot(
            temperature_celsius=current["temperature_2m"],
            humidity_percent=current["relative_humidity_2m"],
            wind_speed_kph=current["wind_speed_10m"],
        )
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logging.error(f"Weather fetch error: {e}")
    except (KeyError, TypeError, ValueError) as e:
        logging.error(f"Unexpected weather payload for ({latitude},{longitude}): {e}")
    return None
