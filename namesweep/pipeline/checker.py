"""
Availability checker.

Issues exactly one GET per candidate against the username endpoint and
classifies the response by status code alone. The endpoint answers
``204 No Content`` for names that are not registered.
"""

from __future__ import annotations

import asyncio
from http import HTTPStatus
from typing import Protocol, runtime_checkable

import aiohttp

from namesweep.errors import TransportError


@runtime_checkable
class AvailabilityChecker(Protocol):
    """
    Interface the workers call for each candidate.

    Implementations return True when the name is available, False otherwise,
    and raise TransportError when the request could not be completed.
    """

    async def is_available(self, name: str) -> bool:
        ...


def is_available_status(status: int) -> bool:
    """True iff ``status`` is success-class and exactly 204 No Content."""
    return 200 <= status < 300 and status == HTTPStatus.NO_CONTENT


class HttpAvailabilityChecker:
    """
    Check names against ``<endpoint_url>/<name>`` with a shared aiohttp session.

    No retries and no timeout beyond the session defaults; one request per
    call.
    """

    def __init__(self, session: aiohttp.ClientSession, endpoint_url: str) -> None:
        self._session = session
        self.endpoint_url = endpoint_url.rstrip("/")

    def url_for(self, name: str) -> str:
        return f"{self.endpoint_url}/{name}"

    async def is_available(self, name: str) -> bool:
        try:
            async with self._session.get(self.url_for(name)) as resp:
                return is_available_status(resp.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(name, exc) from exc


def open_session(num_workers: int) -> aiohttp.ClientSession:
    """
    Build a client session sized for the worker pool.

    The connector allows one connection per worker so an in-flight request
    never holds up another worker waiting for a free connection.
    """
    connector = aiohttp.TCPConnector(limit=num_workers, limit_per_host=num_workers)
    return aiohttp.ClientSession(connector=connector)


__all__ = [
    "AvailabilityChecker",
    "HttpAvailabilityChecker",
    "is_available_status",
    "open_session",
]
