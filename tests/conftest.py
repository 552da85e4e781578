"""Shared fixtures: a scripted cal.com double and an app client wired to it."""

from typing import Any, List, Optional, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.main import app
from backend.routers.dispatch import get_upstream_transport


class CalComStub:
    """Records outbound requests and answers them from a queue."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._outcomes: List[Union[httpx.Response, Exception]] = []

    def reply(
        self,
        status_code: int = 200,
        *,
        json: Any = None,
        text: Optional[str] = None,
    ) -> None:
        if json is not None:
            self._outcomes.append(httpx.Response(status_code, json=json))
        else:
            self._outcomes.append(httpx.Response(status_code, text=text or ""))

    def fail(self, exc: Exception) -> None:
        self._outcomes.append(exc)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def calcom() -> CalComStub:
    return CalComStub()


@pytest.fixture
def client(calcom: CalComStub):
    app.dependency_overrides[get_upstream_transport] = lambda: httpx.MockTransport(calcom)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
