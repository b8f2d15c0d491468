from __future__ import annotations

import asyncio

import aiohttp
import pytest

from backend.airnow_api import (
    NETWORK_MESSAGE,
    NO_DATA_MESSAGE,
    TIMEOUT_MESSAGE,
    extract_pollutants,
    fetch_pollutants,
)
from backend.config import ConfigurationError, ProviderConfig
from conftest import FakeResponse, FakeSession, observation


@pytest.mark.asyncio
async def test_single_pm25_observation(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: FakeResponse(payload=[observation("PM2.5", 42, 1, "Good")])})

    report = await fetch_pollutants(session, config, "CA")

    assert report.available is True
    assert report.message is None
    assert report.pollutants["pm25"].aqi == 42
    assert report.pollutants["pm25"].category == "Good"
    assert report.pollutants["pm25"].category_number == 1
    assert report.pollutants["pm10"] is None
    assert report.pollutants["ozone"] is None
    assert report.pollutants["no2"] is None
    assert report.reporting_area == "Los Angeles"
    assert report.hour_observed == 14
    assert (report.latitude, report.longitude) == (34.05, -118.24)


@pytest.mark.asyncio
async def test_request_parameters(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: FakeResponse(payload=[observation("PM2.5", 42, 1, "Good")])})

    await fetch_pollutants(session, config, "ca")

    [kwargs] = session.calls_to(urls["airnow"])
    assert kwargs["params"]["zipCode"] == "90001"
    assert kwargs["params"]["distance"] == 100
    assert kwargs["params"]["API_KEY"] == "test-airnow"
    assert kwargs["timeout"].total == 20.0


def test_first_observation_per_kind_wins() -> None:
    pollutants = extract_pollutants([
        observation("OZONE", 61, 2, "Moderate"),
        observation("O3", 10, 1, "Good"),
        observation("PM10", 30, 1, "Good"),
        observation("PM10", 99, 2, "Moderate"),
        observation("NO2", 12, 1, "Good"),
        observation("CO", 5, 1, "Good"),
    ])
    assert pollutants["ozone"].aqi == 61
    assert pollutants["pm10"].aqi == 30
    assert pollutants["no2"].aqi == 12
    assert pollutants["pm25"] is None
    assert set(pollutants) == {"pm25", "pm10", "ozone", "no2"}


def test_lowercase_parameter_names_are_recognized() -> None:
    pollutants = extract_pollutants([observation("pm2.5", 7, 1, "Good"), observation("o3", 8, 1, "Good")])
    assert pollutants["pm25"].aqi == 7
    assert pollutants["ozone"].aqi == 8


@pytest.mark.asyncio
async def test_unusable_observation_maps_to_none(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: FakeResponse(payload=[
        observation("PM2.5", 42, 1, "Good"),
        observation("O3", -1, 7, "Unavailable"),
    ])})

    report = await fetch_pollutants(session, config, "CA")

    assert report.available is True
    assert report.pollutants["pm25"].aqi == 42
    assert report.pollutants["ozone"] is None


def test_later_usable_observation_replaces_unusable_one() -> None:
    pollutants = extract_pollutants([
        observation("NO2", -1, 7, "Unavailable"),
        observation("PM10", 20, 1, "Good", Category={"Name": "Good"}),
        observation("NO2", 18, 1, "Good"),
        observation("PM10", 25, 1, "Good"),
    ])
    assert pollutants["no2"].aqi == 18
    assert pollutants["pm10"].aqi == 25


@pytest.mark.asyncio
async def test_missing_reporting_area_falls_back_to_state(config: ProviderConfig, urls: dict[str, str]) -> None:
    obs = observation("PM2.5", 42, 1, "Good", ReportingArea="")
    session = FakeSession({urls["airnow"]: FakeResponse(payload=[obs])})

    report = await fetch_pollutants(session, config, "CA")

    assert report.reporting_area == "CA"


@pytest.mark.asyncio
async def test_empty_array_is_unavailable(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: FakeResponse(payload=[])})

    report = await fetch_pollutants(session, config, "CA")

    assert report.available is False
    assert report.message == NO_DATA_MESSAGE


@pytest.mark.asyncio
async def test_http_error_embeds_status(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: FakeResponse(status=503, text="Service Unavailable")})

    report = await fetch_pollutants(session, config, "CA")

    assert report.available is False
    assert "503" in report.message


@pytest.mark.asyncio
async def test_timeout_has_its_own_message(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: asyncio.TimeoutError()})

    report = await fetch_pollutants(session, config, "CA")

    assert report.available is False
    assert report.message == TIMEOUT_MESSAGE


@pytest.mark.asyncio
async def test_network_error_message(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: aiohttp.ClientConnectionError("connection reset")})

    report = await fetch_pollutants(session, config, "CA")

    assert report.available is False
    assert report.message == NETWORK_MESSAGE
    assert report.message != TIMEOUT_MESSAGE


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error(urls: dict[str, str]) -> None:
    session = FakeSession()

    with pytest.raises(ConfigurationError):
        await fetch_pollutants(session, ProviderConfig(), "CA")
    assert session.calls == []


@pytest.mark.asyncio
async def test_unknown_state_uses_fallback_zip(config: ProviderConfig, urls: dict[str, str]) -> None:
    session = FakeSession({urls["airnow"]: FakeResponse(payload=[])})

    report = await fetch_pollutants(session, config, "ZZ")

    assert report.available is False
    assert session.calls_to(urls["airnow"])[0]["params"]["zipCode"] == "10001"
