"""
Pytest configuration and fixtures for API tests.

The probe runner dependency is overridden with a stub so no request ever
leaves the process.
"""

from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from api.routes.checks import get_probe_runner
from prober.models import ProbeResult


class StubRunner:
    """Records probed URLs and returns a canned result (or raises)."""

    def __init__(self) -> None:
        self.result: ProbeResult = ProbeResult()
        self.error: Exception | None = None
        self.calls: list[str] = []

    def __call__(self, url: str) -> ProbeResult:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def probe_runner() -> StubRunner:
    return StubRunner()


@pytest.fixture
def client(probe_runner):
    """Create a FastAPI test client with the stub probe runner."""
    app = create_app()

    def override_get_probe_runner() -> Callable[[str], ProbeResult]:
        return probe_runner

    app.dependency_overrides[get_probe_runner] = override_get_probe_runner

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
