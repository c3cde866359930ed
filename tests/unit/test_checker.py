from __future__ import annotations

from contextlib import AbstractAsyncContextManager

import aiohttp
import pytest

from namesweep.errors import TransportError
from namesweep.pipeline.checker import (
    AvailabilityChecker,
    HttpAvailabilityChecker,
    is_available_status,
)

ENDPOINT = "https://passport.example/usernames"


class _FakeResponse:
    def __init__(self, status: int) -> None:
        self.status = status


class _FakeRequestContext(AbstractAsyncContextManager[_FakeResponse]):
    def __init__(self, status: int | None, error: BaseException | None) -> None:
        self._status = status
        self._error = error

    async def __aenter__(self) -> _FakeResponse:
        if self._error is not None:
            raise self._error
        return _FakeResponse(self._status)

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        return False


class _FakeSession:
    def __init__(self, status: int = 204, error: BaseException | None = None) -> None:
        self.status = status
        self.error = error
        self.requested: list[str] = []

    def get(self, url: str) -> _FakeRequestContext:
        self.requested.append(url)
        return _FakeRequestContext(self.status, self.error)


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (204, True),
        (200, False),
        (201, False),
        (206, False),
        (302, False),
        (404, False),
        (429, False),
        (500, False),
    ],
)
def test_only_no_content_means_available(status: int, expected: bool) -> None:
    assert is_available_status(status) is expected


@pytest.mark.asyncio
async def test_checker_issues_one_get_per_candidate() -> None:
    session = _FakeSession(status=204)
    checker = HttpAvailabilityChecker(session, ENDPOINT)  # type: ignore[arg-type]

    assert await checker.is_available("qx") is True
    assert session.requested == [f"{ENDPOINT}/qx"]


@pytest.mark.asyncio
async def test_taken_name_is_unavailable() -> None:
    session = _FakeSession(status=200)
    checker = HttpAvailabilityChecker(session, ENDPOINT)  # type: ignore[arg-type]

    assert await checker.is_available("ab") is False


def test_trailing_slash_on_endpoint_is_normalized() -> None:
    checker = HttpAvailabilityChecker(_FakeSession(), ENDPOINT + "/")  # type: ignore[arg-type]
    assert checker.url_for("zz") == f"{ENDPOINT}/zz"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        aiohttp.ClientConnectionError("connection refused"),
        aiohttp.ServerDisconnectedError(),
        TimeoutError(),
    ],
)
async def test_transport_failure_raises_transport_error(error: BaseException) -> None:
    session = _FakeSession(error=error)
    checker = HttpAvailabilityChecker(session, ENDPOINT)  # type: ignore[arg-type]

    with pytest.raises(TransportError) as excinfo:
        await checker.is_available("mn")

    assert excinfo.value.name == "mn"
    assert excinfo.value.cause is error
    assert len(session.requested) == 1


def test_http_checker_satisfies_protocol() -> None:
    checker = HttpAvailabilityChecker(_FakeSession(), ENDPOINT)  # type: ignore[arg-type]
    assert isinstance(checker, AvailabilityChecker)
