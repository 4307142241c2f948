"""Frontend configuration router.

Only values that are public by nature leave this router: the Firebase web
config (meant to ship in the browser bundle), feature flags, and the Maps key,
which is restricted by HTTP referrer in the Google Cloud console.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prospector.config import Settings
from prospector.dependencies import get_app_settings

router = APIRouter(prefix="/api", tags=["config"])


@router.get("/maps-config")
async def maps_config(settings: Settings = Depends(get_app_settings)) -> dict[str, str | None]:
    """Maps JavaScript API key for client-side map widgets and autocomplete."""
    return {"apiKey": settings.maps_api_key or None}


@router.get("/config")
async def frontend_config(settings: Settings = Depends(get_app_settings)) -> dict:
    return {
        "firebase": {
            "apiKey": settings.firebase_web_api_key,
            "authDomain": settings.firebase_auth_domain,
            "projectId": settings.firebase_project_id,
            "storageBucket": settings.firebase_storage_bucket,
            "messagingSenderId": settings.firebase_messaging_sender_id,
            "appId": settings.firebase_app_id,
        },
        # Flags only, never the keys themselves
        "features": {
            "googlePlaces": bool(settings.places_api_key),
            "directions": bool(settings.maps_api_key),
        },
    }
