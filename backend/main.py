# file: backend/main.py

import logging
import uvicorn
import aiohttp
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from backend.aggregator import get_air_quality, get_usa_overview
from backend.config import ConfigurationError, ProviderConfig, load_config, load_photo_config
from backend.models import AirQualityRequest, PhotoRequest, PhotoSet, StateIdentity, UsaOverview
from backend.pexels_api import fetch_state_photos
from backend.states import STATES
from backend.utils import client_session

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


@asynccontextmanager
async def lifespan(app: FastAPI) :
    """Warn about missing provider keys on startup; they are re-read per request."""
    config = load_config()
    for name in ("airnow_api_key", "pexels_api_key"):
        if not getattr(config, name):
            logging.warning(f"{name.upper()} is not set, related endpoints will fail until it is")
    yield


app = FastAPI(
    title = "State Air Quality",
    description = "Current air quality, weather and photos for U.S. states from AirNow, Open-Meteo and Pexels.",
    version = "0.1",
    lifespan = lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=CORS_HEADERS,
)


async def get_session() -> AsyncIterator[aiohttp.ClientSession]:
    async with client_session() as session:
        yield session


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logging.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "API key not configured"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logging.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error occurred", "available": False})


@app.post("/fetch-air-quality")
async def fetch_air_quality(body: AirQualityRequest,
                            session: aiohttp.ClientSession = Depends(get_session),
                            config: ProviderConfig = Depends(load_config)):
    """Current pollutant readings and weather for one state."""
    if not body.state_code or not body.state_code.strip():
        return JSONResponse(status_code=400, content={"error": "State code is required"})
    record = await get_air_quality(session, config, body.state_code)
    return JSONResponse(status_code=500 if record.error else 200, content=record.to_payload())


@app.post("/fetch-state-photos", response_model=PhotoSet)
async def fetch_photos(body: PhotoRequest,
                       session: aiohttp.ClientSession = Depends(get_session),
                       config: ProviderConfig = Depends(load_photo_config)):
    """Up to three photos of a state, falling back to placeholders."""
    if not body.state_name or not body.state_name.strip():
        return JSONResponse(status_code=400, content={"error": "State name is required"})
    photos = await fetch_state_photos(session, config, body.state_name.strip(), body.state_code)
    return PhotoSet(photos=photos)


@app.get("/usa-overview", response_model=UsaOverview)
async def usa_overview(session: aiohttp.ClientSession = Depends(get_session),
                       config: ProviderConfig = Depends(load_config)):
    """Nationwide AQI averaged over a few representative states."""
    return await get_usa_overview(session, config)


@app.get("/states", response_model=List[StateIdentity])
async def states():
    return STATES


if __name__ == "__main__" :
    uvicorn.run(app, host = "0.0.0.0", port = 8000, log_level="info")
