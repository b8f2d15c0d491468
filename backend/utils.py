#file: backend/utils.py

import asyncio
import logging
import ssl
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Awaitable, Iterable, List

import aiohttp
import certifi
import pytz


def get_current_time() -> str:
    """Get current UTC time as a formatted string."""
    return datetime.now(pytz.utc).isoformat()


async def gather_successful(calls: Iterable[Awaitable[Any]]) -> List[Any]:
    """Run calls concurrently and keep only the results that succeeded.

    Failed calls are logged and dropped rather than failing the whole batch,
    as are calls that returned None. Input order is preserved.
    """
    results = await asyncio.gather(*calls, return_exceptions=True)
    successes = []
    for result in results:
        if isinstance(result, BaseException):
            logging.error(f"Dropping failed call: {result!r}")
        elif result is not None:
            successes.append(result)
    return successes


@asynccontextmanager
async def client_session() -> AsyncIterator[aiohttp.ClientSession]:
    """Open a short-lived aiohttp session trusting the certifi CA bundle."""
    ssl_context = ssl.create_default_context(cafile=certifi.where())
    async with aiohttp.ClientSession(connector=aiohttp.TCPConnector(ssl=ssl_context)) as session:
        yield session
