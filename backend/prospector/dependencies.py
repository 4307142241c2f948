"""FastAPI dependencies: settings, shared services and the two auth gates."""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from prospector.config import Settings
from prospector.errors import ConfigurationError, UnauthorizedError
from prospector.services.google_maps import GoogleMapsClient
from prospector.services.identity import (
    ANONYMOUS_IDENTITY,
    DEV_IDENTITY,
    IdentityVerifier,
    VerificationError,
    VerifiedIdentity,
)

logger = logging.getLogger(__name__)

# auto_error=False: each gate decides what a missing token means
_bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Inject the Settings the app was created with."""
    return request.app.state.settings


def get_identity_verifier(request: Request) -> IdentityVerifier | None:
    """Inject the IdentityVerifier, or None when Firebase is not configured."""
    return getattr(request.app.state, "identity_verifier", None)


def get_maps_client(request: Request) -> GoogleMapsClient:
    """Inject the GoogleMapsClient initialized at startup."""
    return request.app.state.maps_client


def require_places_key(settings: Settings = Depends(get_app_settings)) -> str:
    if not settings.places_api_key:
        logger.error("Google Places API key missing; rejecting request")
        raise ConfigurationError("Google Places API not configured")
    return settings.places_api_key


def require_maps_key(settings: Settings = Depends(get_app_settings)) -> str:
    if not settings.maps_api_key:
        logger.error("Google Maps API key missing; rejecting request")
        raise ConfigurationError("Google Maps API not configured")
    return settings.maps_api_key


async def require_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    verifier: IdentityVerifier | None = Depends(get_identity_verifier),
) -> VerifiedIdentity:
    """Mandatory auth gate.

    With no verifier configured (development) every request is allowed
    through as ``dev-user``. Otherwise a valid Firebase ID token is required
    and a missing or bad one is a 401.
    """
    if verifier is None:
        request.state.identity = DEV_IDENTITY
        return DEV_IDENTITY

    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")

    try:
        identity = await verifier.verify(credentials.credentials)
    except VerificationError as exc:
        logger.warning("Token verification error: %s", exc)
        raise UnauthorizedError("Invalid token")
    except Exception:
        # Any other verifier fault is still a 401
        logger.error("Token verification failed unexpectedly", exc_info=True)
        raise UnauthorizedError("Invalid token")

    request.state.identity = identity
    return identity


async def optional_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    verifier: IdentityVerifier | None = Depends(get_identity_verifier),
) -> VerifiedIdentity:
    """Optional auth gate: identifies the caller if it can, never rejects.

    The proxy routes are protected by keeping the Google keys server-side,
    so the identity here is informational only.
    """
    identity = ANONYMOUS_IDENTITY
    if credentials is not None and credentials.credentials and verifier is not None:
        try:
            identity = await verifier.verify(credentials.credentials)
        except Exception:
            # Any failure degrades to anonymous; the caller is never rejected
            logger.debug("Optional token verification failed", exc_info=True)
            identity = ANONYMOUS_IDENTITY

    request.state.identity = identity
    logger.debug("%s %s as %s", request.method, request.url.path, identity.subject_id)
    return identity
