"""Tests for the mandatory (require_auth) and optional (optional_auth) gates.

The two gates look alike in the "no verifier" branch but differ on purpose:
the mandatory gate lets development traffic through as ``dev-user``, the
optional one labels everybody it cannot verify as ``anonymous``.
"""

from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI

from fakes import FakeVerifier
from prospector.dependencies import optional_auth, require_auth
from prospector.services.identity import VerifiedIdentity


def _mount_gated_routes(app: FastAPI) -> None:
    @app.get("/gated/protected")
    async def protected(identity: VerifiedIdentity = Depends(require_auth)):
        return {"subject_id": identity.subject_id, "email": identity.email}

    @app.get("/gated/open")
    async def open_route(identity: VerifiedIdentity = Depends(optional_auth)):
        return {"subject_id": identity.subject_id, "email": identity.email}


@pytest.fixture(name="gated_client")
def gated_client_fixture(make_client):
    def _make(verifier=None):
        return make_client(verifier=verifier, app_hook=_mount_gated_routes)

    return _make


# ---------------------------------------------------------------------------
# Mandatory gate
# ---------------------------------------------------------------------------


class TestRequireAuth:
    def test_no_verifier_authorizes_as_dev_user(self, gated_client):
        """Regression: an unconfigured verifier must NOT turn into a 401."""
        client = gated_client(verifier=None)

        resp = client.get("/gated/protected")

        assert resp.status_code == 200
        assert resp.json() == {"subject_id": "dev-user", "email": None}

    def test_no_verifier_ignores_token(self, gated_client):
        client = gated_client(verifier=None)

        resp = client.get("/gated/protected", headers={"Authorization": "Bearer whatever"})

        assert resp.status_code == 200
        assert resp.json()["subject_id"] == "dev-user"

    def test_missing_token_is_401(self, gated_client):
        verifier = FakeVerifier()
        client = gated_client(verifier=verifier)

        resp = client.get("/gated/protected")

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized - No token provided"}
        assert verifier.calls == []

    def test_non_bearer_scheme_is_401(self, gated_client):
        client = gated_client(verifier=FakeVerifier())

        resp = client.get("/gated/protected", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized - No token provided"}

    def test_invalid_token_is_401(self, gated_client):
        verifier = FakeVerifier()
        client = gated_client(verifier=verifier)

        resp = client.get("/gated/protected", headers={"Authorization": "Bearer expired"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized - Invalid token"}
        assert verifier.calls == ["expired"]

    def test_verifier_crash_is_401(self, gated_client):
        """An unexpected verifier fault rejects, it does not fall through to a 500."""
        verifier = FakeVerifier(error=RuntimeError("certs unavailable"))
        client = gated_client(verifier=verifier)

        resp = client.get("/gated/protected", headers={"Authorization": "Bearer good-token"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized - Invalid token"}
        assert verifier.calls == ["good-token"]

    def test_valid_token_attaches_identity(self, gated_client):
        client = gated_client(verifier=FakeVerifier())

        resp = client.get("/gated/protected", headers={"Authorization": "Bearer good-token"})

        assert resp.status_code == 200
        assert resp.json() == {"subject_id": "uid-123", "email": "user@example.com"}


# ---------------------------------------------------------------------------
# Optional gate
# ---------------------------------------------------------------------------


class TestOptionalAuth:
    def test_no_token_is_anonymous(self, gated_client):
        verifier = FakeVerifier()
        client = gated_client(verifier=verifier)

        resp = client.get("/gated/open")

        assert resp.status_code == 200
        assert resp.json()["subject_id"] == "anonymous"
        assert verifier.calls == []

    def test_invalid_token_is_anonymous(self, gated_client):
        client = gated_client(verifier=FakeVerifier())

        resp = client.get("/gated/open", headers={"Authorization": "Bearer expired"})

        assert resp.status_code == 200
        assert resp.json() == {"subject_id": "anonymous", "email": None}

    def test_verifier_crash_is_anonymous(self, gated_client):
        client = gated_client(verifier=FakeVerifier(error=RuntimeError("certs unavailable")))

        resp = client.get("/gated/open", headers={"Authorization": "Bearer good-token"})

        assert resp.status_code == 200
        assert resp.json()["subject_id"] == "anonymous"

    def test_no_verifier_is_anonymous_even_with_token(self, gated_client):
        client = gated_client(verifier=None)

        resp = client.get("/gated/open", headers={"Authorization": "Bearer good-token"})

        assert resp.status_code == 200
        assert resp.json()["subject_id"] == "anonymous"

    def test_valid_token_attaches_identity(self, gated_client):
        client = gated_client(verifier=FakeVerifier())

        resp = client.get("/gated/open", headers={"Authorization": "Bearer good-token"})

        assert resp.status_code == 200
        assert resp.json() == {"subject_id": "uid-123", "email": "user@example.com"}
