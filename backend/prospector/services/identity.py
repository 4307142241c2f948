"""Firebase ID-token verification.

Tokens are checked with google-auth against Google's public Firebase signing
certificates, using the service-account project as the expected audience.
When no service account is configured the verifier is simply absent and the
auth gates fall back to placeholder identities.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import google.auth.exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token, service_account

from prospector.config import Settings

logger = logging.getLogger(__name__)


class VerificationError(Exception):
    """The token is malformed, expired, revoked or could not be checked."""


@dataclass(frozen=True, slots=True)
class VerifiedIdentity:
    """Identity attached to a single request. Never stored."""

    subject_id: str
    email: str | None = None


DEV_IDENTITY = VerifiedIdentity(subject_id="dev-user")
ANONYMOUS_IDENTITY = VerifiedIdentity(subject_id="anonymous")

FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


def _parse_service_account(raw: str) -> dict[str, Any]:
    info = json.loads(raw)
    if not isinstance(info, dict):
        raise ValueError(
            f"Service account JSON must be an object, got {type(info).__name__}"
        )
    return info


def load_service_account_info(settings: Settings) -> dict[str, Any] | None:
    """Read the service account from a file path, else from inline JSON.

    Returns None when neither source yields a credential. Malformed JSON,
    or JSON that is not an object, raises ``ValueError``.
    """
    info: dict[str, Any] | None = None

    if settings.google_application_credentials:
        cred_path = Path(settings.google_application_credentials).expanduser().resolve()
        if cred_path.is_file():
            info = _parse_service_account(cred_path.read_text(encoding="utf-8"))
            logger.info("Loaded Firebase credentials from file")
        else:
            logger.warning("Firebase credentials file not found: %s", cred_path)

    if info is None and settings.firebase_service_account:
        info = _parse_service_account(settings.firebase_service_account)
        logger.info("Loaded Firebase credentials from environment variable")

    return info


class IdentityVerifier:
    """Verify Firebase ID tokens issued for one project."""

    def __init__(self, project_id: str, request: google_requests.Request | None = None) -> None:
        self._project_id = project_id
        # google-auth's Request caches the certificate fetch session
        self._request = request or google_requests.Request()

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def expected_issuer(self) -> str:
        return f"{FIREBASE_ISSUER_PREFIX}{self._project_id}"

    @classmethod
    def from_settings(cls, settings: Settings) -> IdentityVerifier | None:
        """Build a verifier, or return None when it cannot be configured.

        A broken credential is logged and treated as absent so the server
        still starts.
        """
        try:
            info = load_service_account_info(settings)
            if info is None:
                logger.info(
                    "Firebase Admin not configured - API endpoints will work "
                    "without server-side auth verification"
                )
                return None
            credentials = service_account.Credentials.from_service_account_info(info)
        except (OSError, ValueError):
            logger.error("Firebase initialization error", exc_info=True)
            return None

        project_id = credentials.project_id or info.get("project_id")
        if not project_id:
            logger.error("Firebase service account has no project_id")
            return None

        logger.info("Firebase Admin initialized successfully")
        return cls(project_id)

    def _verify_sync(self, token: str) -> VerifiedIdentity:
        try:
            claims = id_token.verify_firebase_token(
                token, self._request, audience=self._project_id
            )
        except (ValueError, google.auth.exceptions.GoogleAuthError) as exc:
            raise VerificationError(str(exc)) from exc

        if not claims:
            raise VerificationError("Token has no claims")
        if claims.get("iss") != self.expected_issuer:
            raise VerificationError("Token was not issued for this project")
        subject_id = claims.get("sub") or claims.get("user_id")
        if not subject_id:
            raise VerificationError("Token has no subject")
        return VerifiedIdentity(subject_id=subject_id, email=claims.get("email"))

    async def verify(self, token: str) -> VerifiedIdentity:
        """Verify ``token`` and return its identity.

        Raises VerificationError if the token is not valid for this project.
        """
        if not token:
            raise VerificationError("Empty token")
        # Certificate fetch and signature check are blocking
        return await asyncio.to_thread(self._verify_sync, token)
