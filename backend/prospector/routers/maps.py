"""Google Maps proxy router: geocoding, directions and distance matrix."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from prospector.dependencies import get_maps_client, optional_auth, require_maps_key
from prospector.errors import MissingFieldsError
from prospector.models.requests import DirectionsRequest, DistanceMatrixRequest
from prospector.routers.common import is_missing, relay
from prospector.services import google_maps
from prospector.services.google_maps import GoogleMapsClient
from prospector.utils.coordinates import join_points, normalize

router = APIRouter(prefix="/api", tags=["maps"], dependencies=[Depends(optional_auth)])

DEFAULT_TRAVEL_MODE = "driving"


def format_waypoints(waypoints: list[Any], optimize: bool = False) -> str:
    joined = join_points(waypoints)
    return f"optimize:true|{joined}" if optimize else joined


def _format_point_list(points: list[Any] | str) -> str:
    # A bare string is taken as already "|"-joined
    if isinstance(points, str):
        return points
    return join_points(points)


@router.get("/geocode")
async def geocode(
    address: str | None = None,
    latlng: str | None = None,
    api_key: str = Depends(require_maps_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    """Forward (address) or reverse (latlng) geocoding."""
    if is_missing(address) and is_missing(latlng):
        raise MissingFieldsError("address", "latlng", alternatives=True)

    params = {"key": api_key}
    if address:
        params["address"] = address
    if latlng:
        params["latlng"] = latlng

    return await relay(client, google_maps.GEOCODE, params, "Failed to geocode")


@router.post("/directions")
async def directions(
    body: DirectionsRequest | None = None,
    api_key: str = Depends(require_maps_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    body = body or DirectionsRequest()
    if is_missing(body.origin) or is_missing(body.destination):
        raise MissingFieldsError("origin", "destination")

    params = {
        "origin": normalize(body.origin),
        "destination": normalize(body.destination),
        "mode": body.mode or DEFAULT_TRAVEL_MODE,
        "key": api_key,
    }
    if body.waypoints:
        params["waypoints"] = format_waypoints(body.waypoints, optimize=bool(body.optimize))

    return await relay(client, google_maps.DIRECTIONS, params, "Failed to get directions")


@router.post("/distance-matrix")
async def distance_matrix(
    body: DistanceMatrixRequest | None = None,
    api_key: str = Depends(require_maps_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    body = body or DistanceMatrixRequest()
    if not body.origins or not body.destinations:
        raise MissingFieldsError("origins", "destinations")

    params = {
        "origins": _format_point_list(body.origins),
        "destinations": _format_point_list(body.destinations),
        "mode": body.mode or DEFAULT_TRAVEL_MODE,
        "key": api_key,
    }
    return await relay(
        client, google_maps.DISTANCE_MATRIX, params, "Failed to get distance matrix"
    )
