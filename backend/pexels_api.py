# file: backend/pexels_api.py

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from backend.config import ProviderConfig
from backend.states import normalize_code, state_code_for_name

MAX_PHOTOS = 3
PLACEHOLDER_URL = "https://picsum.photos/seed/{seed}{index}/800/600"


def placeholder_photos(seed: str) -> List[str]:
    return [PLACEHOLDER_URL.format(seed=seed, index=index) for index in range(1, MAX_PHOTOS + 1)]


def placeholder_seed(state_name: str, state_code: Optional[str] = None) -> str:
    """State code used to seed placeholders: explicit, resolved from the name, or the bare name."""
    if state_code and state_code.strip():
        return normalize_code(state_code)
    return state_code_for_name(state_name) or "".join(state_name.split())


def unique_photo_urls(photos: List[Dict[str, Any]], limit: int = MAX_PHOTOS) -> List[str]:
    """Large-size URLs, first occurrence of each photo id wins."""
    by_id: Dict[Any, Optional[str]] = {}
    for photo in photos:
        by_id.setdefault(photo.get("id"), (photo.get("src") or {}).get("large"))
    return [url for url in by_id.values() if url][:limit]


def override_photos(config: ProviderConfig, state_name: str) -> Optional[List[str]]:
    wanted = state_name.strip().lower()
    for name, photos in config.photo_overrides.items():
        if name.strip().lower() == wanted:
            return photos[:MAX_PHOTOS]
    return None


async def search_photos(session: aiohttp.ClientSession, config: ProviderConfig, state_name: str) -> List[str]:
    query = f"{state_name} landmarks landscape"
    params = {"query": query, "per_page": config.photos_per_query}
    headers = {"Authorization": config.require("pexels_api_key")}
    try:
        async with session.get(config.pexels_url, params=params, headers=headers) as response:
            if response.status < 200 or response.status >= 300:
                logging.error(f"Pexels API error for query \"{query}\": {response.status}")
                return []
            data = await response.json()
        return unique_photo_urls(data.get("photos") or [])
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logging.error(f"Error fetching photos for {state_name}: {e}")
    except (AttributeError, TypeError, ValueError) as e:
        logging.error(f"Unexpected Pexels payload for {state_name}: {e}")
    return []


async def fetch_state_photos(session: aiohttp.ClientSession, config: ProviderConfig,
                             state_name: str, state_code: Optional[str] = None) -> List[str]:
    """Return up to three photo URLs for a state, never an empty list."""
    curated = override_photos(config, state_name)
    if curated:
        logging.info(f"Using curated photos for {state_name}")
        return curated

    photos = await search_photos(session, config, state_name)
    if not photos:
        seed = placeholder_seed(state_name, state_code)
        logging.warning(f"No photos found for {state_name}, using placeholders seeded by {seed}")
        return placeholder_photos(seed)

    logging.info(f"Fetched {len(photos)} photos for {state_name}")
    return photos
