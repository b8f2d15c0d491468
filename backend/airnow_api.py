# file: backend/airnow_api.py

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import ValidationError

from backend.config import ProviderConfig
from backend.models import PollutantReading, PollutantReport, empty_pollutants
from backend.states import lookup_location, normalize_code

# AirNow ParameterName -> pollutant kind
PARAM_MAPPING = {
    "PM2.5": "pm25",
    "PM10": "pm10",
    "O3": "ozone",
    "OZONE": "ozone",
    "NO2": "no2",
}

TIMEOUT_MESSAGE = "Request timed out. The air quality service is responding slowly. Please try again."
NETWORK_MESSAGE = "Unable to retrieve air quality data. The service may be temporarily unavailable."
NO_DATA_MESSAGE = "Data currently unavailable for this state"


def _reading(observation: Dict[str, Any]) -> Optional[PollutantReading]:
    """Reading for one observation, or None when AirNow marks it unusable (AQI -1, category 7)."""
    category = observation.get("Category") or {}
    try:
        return PollutantReading(
            aqi=observation.get("AQI"),
            category=category.get("Name", "Unknown"),
            category_number=category.get("Number"),
        )
    except ValidationError as e:
        logging.warning(f"Skipping unusable {observation.get('ParameterName')} observation: "
                        f"{e.error_count()} validation errors")
        return None


def extract_pollutants(observations: List[Dict[str, Any]]) -> Dict[str, Optional[PollutantReading]]:
    """Pick the first usable observation of each recognized pollutant kind."""
    pollutants = empty_pollutants()
    for obs in observations:
        kind = PARAM_MAPPING.get(str(obs.get("ParameterName", "")).upper())
        if kind is None or pollutants[kind] is not None:
            continue
        pollutants[kind] = _reading(obs)
    return pollutants


def build_report(state_code: str, observations: List[Dict[str, Any]]) -> PollutantReport:
    first = observations[0]
    return PollutantReport(
        available=True,
        reporting_area=first.get("ReportingArea") or state_code,
        date_observed=first.get("DateObserved"),
        hour_observed=first.get("HourObserved"),
        latitude=first.get("Latitude"),
        longitude=first.get("Longitude"),
        pollutants=extract_pollutants(observations),
    )


async def fetch_pollutants(session: aiohttp.ClientSession, config: ProviderConfig, state_code: str) -> PollutantReport:
    """Fetch current AirNow observations around the state's representative zip code."""
    state_code = normalize_code(state_code)
    postal_code = lookup_location(state_code).postal_code
    params = {
        "format": "application/json",
        "zipCode": postal_code,
        "distance": config.search_radius,
        "API_KEY": config.require("airnow_api_key"),
    }
    logging.info(f"Fetching air quality data for state: {state_code} with zip: {postal_code}")

    try:
        async with session.get(config.airnow_url, params=params,
                               timeout=aiohttp.ClientTimeout(total=config.airnow_timeout)) as response:
            if response.status < 200 or response.status >= 300:
                error_text = await response.text()
                logging.error(f"AirNow API error: {response.status} - {error_text}")
                return PollutantReport.unavailable(
                    f"Air quality data temporarily unavailable (Status: {response.status})")
            observations = await response.json(content_type=None)
    except asyncio.TimeoutError:
        logging.error(f"AirNow API timed out for {state_code} after {config.airnow_timeout}s")
        return PollutantReport.unavailable(TIMEOUT_MESSAGE)
    except aiohttp.ClientError as e:
        logging.error(f"AirNow API fetch error for {state_code}: {e}")
        return PollutantReport.unavailable(NETWORK_MESSAGE)

    if not observations:
        logging.info(f"No data available for state: {state_code}")
        return PollutantReport.unavailable(NO_DATA_MESSAGE)
    return build_report(state_code, observations)
