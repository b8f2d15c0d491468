# file: backend/states.py

from typing import Dict, List, Optional, Tuple

from backend.models import GeoLocation, StateIdentity

FALLBACK_POSTAL_CODE = "10001"
FALLBACK_COORDINATES = (40.0, -100.0)  # continental US centroid

# code: (name, representative zip, latitude, longitude)
STATE_TABLE: Dict[str, Tuple[str, str, float, float]] = {
    "AL": ("Alabama", "35203", 32.806671, -86.791130),
    "AK": ("Alaska", "99501", 61.370716, -152.404419),
    "AZ": ("Arizona", "85001", 33.729759, -111.431221),
    "AR": ("Arkansas", "72201", 34.969704, -92.373123),
    "CA": ("California", "90001", 36.116203, -119.681564),
    "CO": ("Colorado", "80201", 39.059811, -105.311104),
    "CT": ("Connecticut", "06101", 41.597782, -72.755371),
    "DE": ("Delaware", "19901", 39.318523, -75.507141),
    "FL": ("Florida", "32301", 27.766279, -81.686783),
    "GA": ("Georgia", "30301", 33.040619, -83.643074),
    "HI": ("Hawaii", "96801", 21.094318, -157.498337),
    "ID": ("Idaho", "83701", 44.240459, -114.478828),
    "IL": ("Illinois", "60601", 40.349457, -88.986137),
    "IN": ("Indiana", "46201", 39.849426, -86.258278),
    "IA": ("Iowa", "50301", 42.011539, -93.210526),
    "KS": ("Kansas", "66101", 38.526600, -96.726486),
    "KY": ("Kentucky", "40201", 37.668140, -84.670067),
    "LA": ("Louisiana", "70112", 31.169546, -91.867805),
    "ME": ("Maine", "04101", 44.693947, -69.381927),
    "MD": ("Maryland", "21201", 39.063946, -76.802101),
    "MA": ("Massachusetts", "02101", 42.230171, -71.530106),
    "MI": ("Michigan", "48201", 43.326618, -84.536095),
    "MN": ("Minnesota", "55101", 45.694454, -93.900192),
    "MS": ("Mississippi", "39201", 32.741646, -89.678696),
    "MO": ("Missouri", "63101", 38.456085, -92.288368),
    "MT": ("Montana", "59601", 46.921925, -110.454353),
    "NE": ("Nebraska", "68501", 41.125370, -98.268082),
    "NV": ("Nevada", "89501", 38.313515, -117.055374),
    "NH": ("New Hampshire", "03301", 43.452492, -71.563896),
    "NJ": ("New Jersey", "07101", 40.298904, -74.521011),
    "NM": ("New Mexico", "87101", 34.840515, -106.248482),
    "NY": ("New York", "10001", 42.165726, -74.948051),
    "NC": ("North Carolina", "27601", 35.630066, -79.806419),
    "ND": ("North Dakota", "58501", 47.528912, -99.784012),
    "OH": ("Ohio", "43201", 40.388783, -82.764915),
    "OK": ("Oklahoma", "73101", 35.565342, -96.928917),
    "OR": ("Oregon", "97201", 44.572021, -122.070938),
    "PA": ("Pennsylvania", "19101", 40.590752, -77.209755),
    "RI": ("Rhode Island", "02901", 41.680893, -71.511780),
    "SC": ("South Carolina", "29201", 33.856892, -80.945007),
    "SD": ("South Dakota", "57501", 44.299782, -99.438828),
    "TN": ("Tennessee", "37201", 35.747845, -86.692345),
    "TX": ("Texas", "73301", 31.054487, -97.563461),
    "UT": ("Utah", "84101", 40.150032, -111.862434),
    "VT": ("Vermont", "05601", 44.045876, -72.710686),
    "VA": ("Virginia", "23218", 37.769337, -78.169968),
    "WA": ("Washington", "98101", 47.400902, -121.490494),
    "WV": ("West Virginia", "25301", 38.491226, -80.954453),
    "WI": ("Wisconsin", "53701", 44.268543, -89.616508),
    "WY": ("Wyoming", "82001", 42.755966, -107.302490),
}

STATES: List[StateIdentity] = [
    StateIdentity(code=code, name=entry[0]) for code, entry in STATE_TABLE.items()
]

_CODES_BY_NAME = {entry[0].lower(): code for code, entry in STATE_TABLE.items()}


def normalize_code(state_code: str) -> str:
    return (state_code or "").strip().upper()


def lookup_location(state_code: str) -> GeoLocation:
    """Representative zip and coordinates for a state, or the US-wide fallback."""
    entry = STATE_TABLE.get(normalize_code(state_code))
    if entry is None :
        lat, lon = FALLBACK_COORDINATES
        return GeoLocation(postal_code=FALLBACK_POSTAL_CODE, latitude=lat, longitude=lon)
    _, postal_code, lat, lon = entry
    return GeoLocation(postal_code=postal_code, latitude=lat, longitude=lon)


def state_name(state_code: str) -> Optional[str]:
    entry = STATE_TABLE.get(normalize_code(state_code))
    return entry[0] if entry else None


def state_code_for_name(name: str) -> Optional[str]:
    """Resolve a display name such as 'New York' to its postal code."""
    return _CODES_BY_NAME.get((name or "").strip().lower())
