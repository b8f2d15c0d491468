"""Shared fakes: an in-memory stand-in for aiohttp.ClientSession."""

from __future__ import annotations

from typing import Any

import pytest

from backend.config import AIRNOW_URL, OPEN_METEO_URL, PEXELS_URL, ProviderConfig


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, text: str = "") -> None:
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self, **_kwargs: Any) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *_exc: object) -> bool:
        return False


class _RaisingContext:
    def __init__(self, error: BaseException) -> None:
        self._error = error

    async def __aenter__(self) -> None:
        raise self._error

    async def __aexit__(self, *_exc: object) -> bool:
        return False


class FakeSession:
    """Answers GETs by URL; a callable route receives the request kwargs."""

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes = routes or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> Any:
        self.calls.append((url, kwargs))
        if url not in self.routes:
            raise AssertionError(f"unexpected request to {url}")
        outcome = self.routes[url]
        if callable(outcome) and not isinstance(outcome, FakeResponse):
            outcome = outcome(kwargs)
        if isinstance(outcome, BaseException):
            return _RaisingContext(outcome)
        return outcome

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [kwargs for called, kwargs in self.calls if called == url]


def observation(parameter: str, aqi: int, number: int, name: str, **extra: Any) -> dict[str, Any]:
    obs = {
        "DateObserved": "2024-05-01 ",
        "HourObserved": 14,
        "LocalTimeZone": "PST",
        "ReportingArea": "Los Angeles",
        "StateCode": "CA",
        "Latitude": 34.05,
        "Longitude": -118.24,
        "ParameterName": parameter,
        "AQI": aqi,
        "Category": {"Number": number, "Name": name},
    }
    obs.update(extra)
    return obs


def weather_payload(temperature: float = 20, humidity: float = 55, wind: float = 10) -> dict[str, Any]:
    return {
        "current": {
            "temperature_2m": temperature,
            "relative_humidity_2m": humidity,
            "wind_speed_10m": wind,
        }
    }


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(airnow_api_key="test-airnow", pexels_api_key="test-pexels")


@pytest.fixture
def urls() -> dict[str, str]:
    return {"airnow": AIRNOW_URL, "weather": OPEN_METEO_URL, "pexels": PEXELS_URL}
