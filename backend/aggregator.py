# file: backend/aggregator.py

import logging
from typing import List, Sequence, Tuple

import aiohttp

from backend.airnow_api import fetch_pollutants
from backend.classifier import aqi_color, classify_aqi, summarize
from backend.config import ConfigurationError, ProviderConfig
from backend.models import AirQualityRecord, PollutantReport, UsaOverview
from backend.states import lookup_location, normalize_code
from backend.utils import gather_successful, get_current_time
from backend.weather_api import fetch_weather

GENERIC_MESSAGE = "Unable to retrieve air quality data. Please try again later."
OVERVIEW_STATES = ("CA", "NY", "TX", "FL", "IL")


def weather_coordinates(report: PollutantReport, state_code: str) -> Tuple[float, float]:
    """Provider coordinates when present, otherwise the state's approximate centroid."""
    fallback = lookup_location(state_code)
    lat = report.latitude or fallback.latitude
    lon = report.longitude or fallback.longitude
    return lat, lon


async def _build_record(session: aiohttp.ClientSession, config: ProviderConfig, state_code: str) -> AirQualityRecord:
    report = await fetch_pollutants(session, config, state_code)
    if not report.available:
        return AirQualityRecord.unavailable(report.message)

    lat, lon = weather_coordinates(report, state_code)
    weather = await fetch_weather(session, config, lat, lon)

    return AirQualityRecord(
        available=True,
        state_code=state_code,
        reporting_area=report.reporting_area,
        date_observed=report.date_observed,
        hour_observed=report.hour_observed,
        pollutants=report.pollutants,
        weather=weather,
        summary=summarize(report.pollutants),
    )


async def get_air_quality(session: aiohttp.ClientSession, config: ProviderConfig, state_code: str) -> AirQualityRecord:
    """Current pollutant and weather readings for one state.

    Provider failures come back as unavailable records with a specific
    message. Any other error is logged and turned into a generic
    unavailable record carrying the error text. Missing configuration is
    not data-unavailability and is re-raised.
    """
    state_code = normalize_code(state_code)
    try:
        return await _build_record(session, config, state_code)
    except ConfigurationError:
        raise
    except Exception as e:
        logging.exception(f"Error in air quality aggregation for {state_code}: {e}")
        return AirQualityRecord.unavailable(GENERIC_MESSAGE, error=str(e) or type(e).__name__)


def _average(values: List[int]) -> int:
    # half-up, not banker's rounding
    return int(sum(values) / len(values) + 0.5)


async def get_usa_overview(session: aiohttp.ClientSession, config: ProviderConfig,
                           state_codes: Sequence[str] = OVERVIEW_STATES) -> UsaOverview:
    """Average the headline AQI of a handful of representative states."""
    config.require("airnow_api_key")
    records = await gather_successful(get_air_quality(session, config, code) for code in state_codes)
    sampled = [record for record in records if record.available and record.summary is not None]
    if not sampled:
        logging.warning(f"No air quality data for overview states: {', '.join(state_codes)}")
        return UsaOverview(available=False, message="Unable to load air quality data",
                           generated_at=get_current_time())

    avg_aqi = _average([record.summary.aqi for record in sampled])
    pm25 = _average([record.pollutants["pm25"].aqi if record.pollutants["pm25"] else 0 for record in sampled])
    pm10 = _average([record.pollutants["pm10"].aqi if record.pollutants["pm10"] else 0 for record in sampled])
    return UsaOverview(
        available=True,
        aqi=avg_aqi,
        category=classify_aqi(avg_aqi),
        color=aqi_color(avg_aqi),
        pm25=pm25,
        pm10=pm10,
        states_sampled=[record.state_code for record in sampled],
        generated_at=get_current_time(),
    )
