from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import UpstreamRecorder, make_settings
from prospector.config import Settings
from prospector.dependencies import get_identity_verifier, get_maps_client
from prospector.main import create_app
from prospector.services.google_maps import GoogleMapsClient


@pytest.fixture(name="upstream")
def upstream_fixture() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture(name="make_client")
def make_client_fixture(upstream: UpstreamRecorder):
    """Factory for TestClients with injected settings, verifier and upstream.

    ``app_hook`` receives the app before startup, e.g. to mount extra routes.
    """
    opened: list[TestClient] = []

    def _make(settings: Settings | None = None, verifier: Any = None, app_hook=None) -> TestClient:
        app = create_app(settings or make_settings())
        maps_client = GoogleMapsClient(
            httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
        )
        app.dependency_overrides[get_maps_client] = lambda: maps_client
        app.dependency_overrides[get_identity_verifier] = lambda: verifier
        if app_hook is not None:
            app_hook(app)
        tc = TestClient(app)
        tc.__enter__()
        opened.append(tc)
        return tc

    yield _make

    for tc in opened:
        tc.__exit__(None, None, None)


@pytest.fixture(name="client")
def client_fixture(make_client) -> TestClient:
    """Places key configured (maps key falls back to it), no Firebase."""
    return make_client()


@pytest.fixture(name="client_no_keys")
def client_no_keys_fixture(make_client) -> TestClient:
    return make_client(make_settings(google_places_api_key="", google_maps_api_key=""))
