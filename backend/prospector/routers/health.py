from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from prospector.config import Settings
from prospector.dependencies import get_app_settings, get_identity_verifier
from prospector.services.identity import IdentityVerifier

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_app_settings),
    verifier: IdentityVerifier | None = Depends(get_identity_verifier),
):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "firebase": verifier is not None,
        "googlePlaces": bool(settings.places_api_key),
    }
