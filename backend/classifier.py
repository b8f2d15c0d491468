# file: backend/classifier.py

from typing import Dict, List, Optional, Tuple

from backend.models import AqiSummary, PollutantReading

# (exclusive lower bound, category, color), checked in descending order
AQI_TIERS: List[Tuple[int, str, str]] = [
    (300, "Hazardous", "#7e0023"),
    (200, "Very Unhealthy", "#8f3f97"),
    (150, "Unhealthy", "#ff0000"),
    (100, "Unhealthy for Sensitive Groups", "#ff7e00"),
    (50, "Moderate", "#ffff00"),
]
GOOD = ("Good", "#00e400")

CATEGORY_NUMBER_COLORS: Dict[int, str] = {
    1: "#00e400",
    2: "#ffff00",
    3: "#ff7e00",
    4: "#ff0000",
    5: "#8f3f97",
    6: "#7e0023",
}
UNKNOWN_COLOR = "#9e9e9e"


def _tier(aqi: float) -> Tuple[str, str]:
    for threshold, category, color in AQI_TIERS:
        if aqi > threshold:
            return category, color
    return GOOD


def classify_aqi(aqi: float) -> str:
    """Map an AQI value to its category name, e.g. 300 -> 'Very Unhealthy'."""
    return _tier(aqi)[0]


def aqi_color(aqi: float) -> str:
    return _tier(aqi)[1]


def category_color(category_number: int) -> str:
    """Color for a provider category number (1-6)."""
    return CATEGORY_NUMBER_COLORS.get(category_number, UNKNOWN_COLOR)


def headline_aqi(pollutants: Dict[str, Optional[PollutantReading]]) -> Optional[int]:
    values = [reading.aqi for reading in pollutants.values() if reading is not None]
    return max(values) if values else None


def summarize(pollutants: Dict[str, Optional[PollutantReading]]) -> Optional[AqiSummary]:
    aqi = headline_aqi(pollutants)
    if aqi is None:
        return None
    category, color = _tier(aqi)
    return AqiSummary(aqi=aqi, category=category, color=color)
