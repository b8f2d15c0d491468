# file: backend/config.py

import json
import os
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()

AIRNOW_URL = "https://www.airnowapi.org/aq/observation/zipCode/current/"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
PEXELS_URL = "https://api.pexels.com/v1/search"


class ConfigurationError(RuntimeError):
    """A provider setting required to serve the request is missing."""

    def __init__(self, setting: str) :
        self.setting = setting
        super().__init__(f"{setting} is not configured")


@dataclass(frozen=True)
class ProviderConfig:
    airnow_api_key: Optional[str] = None
    pexels_api_key: Optional[str] = None
    airnow_url: str = AIRNOW_URL
    open_meteo_url: str = OPEN_METEO_URL
    pexels_url: str = PEXELS_URL
    airnow_timeout: float = 20.0
    search_radius: int = 100
    photos_per_query: int = 15
    photo_overrides: Dict[str, List[str]] = field(default_factory=dict)

    def require(self, name: str) -> str:
        """Return a setting or raise ConfigurationError when it is empty."""
        value = getattr(self, name)
        if not value:
            logging.error(f"{name.upper()} not found")
            raise ConfigurationError(name.upper())
        return value


def _load_photo_overrides(path: Optional[str]) -> Dict[str, List[str]]:
    """Curated photos keyed by state name; an unreadable file leaves the table empty."""
    if not path:
        return {}
    try:
        with open(path, "r") as f :
            data = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning(f"Ignoring photo overrides file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logging.warning(f"Ignoring photo overrides file {path}: expected a JSON object")
        return {}
    overrides = {}
    for name, urls in data.items():
        if not isinstance(urls, list):
            logging.warning(f"Ignoring photo override for {name}: expected a list of URLs")
            continue
        overrides[str(name)] = [str(url) for url in urls]
    return overrides


def load_config() -> ProviderConfig:
    """Build provider settings from the process environment at call time."""
    return ProviderConfig(
        airnow_api_key=os.getenv("AIRNOW_API_KEY"),
        pexels_api_key=os.getenv("PEXELS_API_KEY"),
        airnow_timeout=float(os.getenv("AIRNOW_TIMEOUT_SECONDS", "20")),
        search_radius=int(os.getenv("AIRNOW_SEARCH_RADIUS", "100")),
    )


def load_photo_config() -> ProviderConfig:
    """Provider settings plus the photo override table, for the photo route only."""
    return replace(load_config(), photo_overrides=_load_photo_overrides(os.getenv("PHOTO_OVERRIDES_FILE")))
