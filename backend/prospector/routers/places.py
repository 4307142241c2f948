"""Google Places proxy router for nearby search, text search, details and autocomplete.

None of these routes require a signed-in user: the Places key stays on the
server, which is the only thing worth protecting here. The optional auth gate
just records who is calling.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from prospector.dependencies import get_maps_client, optional_auth, require_places_key
from prospector.errors import MissingFieldsError
from prospector.models.requests import NearbySearchRequest, TextSearchRequest
from prospector.routers.common import is_missing, relay
from prospector.services import google_maps
from prospector.services.google_maps import GoogleMapsClient
from prospector.utils.coordinates import LatLng, format_coordinate

router = APIRouter(
    prefix="/api/places",
    tags=["places"],
    dependencies=[Depends(optional_auth)],
)

DEFAULT_SEARCH_RADIUS = 8047  # 5 miles in meters
DEFAULT_AUTOCOMPLETE_RADIUS = 50000
DEFAULT_DETAIL_FIELDS = (
    "name,formatted_address,formatted_phone_number,opening_hours,geometry,website,rating"
)

# Fields of a nearby-search result the browser is allowed to see
PLACE_FIELDS = (
    "place_id",
    "name",
    "vicinity",
    "geometry",
    "types",
    "rating",
    "user_ratings_total",
    "business_status",
    "opening_hours",
)


def project_place(place: dict[str, Any]) -> dict[str, Any]:
    """Keep only PLACE_FIELDS; values are passed through unchanged."""
    return {key: place[key] for key in PLACE_FIELDS if key in place}


def search_radius(radius: Any) -> str:
    # A zero radius searches nothing, so it gets the default too
    if is_missing(radius) or radius == 0:
        return str(DEFAULT_SEARCH_RADIUS)
    return str(radius)


@router.post("/nearby")
async def nearby_search(
    body: NearbySearchRequest | None = None,
    api_key: str = Depends(require_places_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    """Nearby search, with each result reduced to PLACE_FIELDS."""
    body = body or NearbySearchRequest()
    if is_missing(body.lat) or is_missing(body.lng):
        raise MissingFieldsError("lat", "lng")

    params = {
        "location": format_coordinate(LatLng(body.lat, body.lng)),
        "radius": search_radius(body.radius),
        "key": api_key,
    }
    if body.type:
        params["type"] = body.type
    if body.keyword:
        params["keyword"] = body.keyword

    data = await relay(
        client, google_maps.NEARBY_SEARCH, params, "Failed to fetch nearby places"
    )

    if isinstance(data, dict) and isinstance(data.get("results"), list):
        data["results"] = [
            project_place(place) if isinstance(place, dict) else place
            for place in data["results"]
        ]
    return data


@router.post("/text-search")
async def text_search(
    body: TextSearchRequest | None = None,
    api_key: str = Depends(require_places_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    body = body or TextSearchRequest()
    if is_missing(body.query):
        raise MissingFieldsError("query")

    params = {"query": body.query, "key": api_key}
    if not is_missing(body.lat) and not is_missing(body.lng):
        params["location"] = format_coordinate(LatLng(body.lat, body.lng))
        params["radius"] = search_radius(body.radius)

    return await relay(client, google_maps.TEXT_SEARCH, params, "Failed to search places")


@router.get("/details/{place_id}")
async def place_details(
    place_id: str,
    fields: str | None = None,
    api_key: str = Depends(require_places_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    if is_missing(place_id.strip()):
        raise MissingFieldsError("placeId")

    params = {
        "place_id": place_id,
        "fields": fields or DEFAULT_DETAIL_FIELDS,
        "key": api_key,
    }
    return await relay(
        client, google_maps.PLACE_DETAILS, params, "Failed to fetch place details"
    )


@router.get("/autocomplete")
async def autocomplete(
    input: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
    radius: str | None = None,
    types: str | None = None,
    api_key: str = Depends(require_places_key),
    client: GoogleMapsClient = Depends(get_maps_client),
) -> Any:
    if is_missing(input):
        raise MissingFieldsError("input")

    params = {"input": input, "key": api_key}
    if lat and lng:
        params["location"] = format_coordinate(LatLng(lat, lng))
        params["radius"] = radius or str(DEFAULT_AUTOCOMPLETE_RADIUS)
    if types:
        params["types"] = types

    return await relay(
        client,
        google_maps.PLACE_AUTOCOMPLETE,
        params,
        "Failed to get autocomplete suggestions",
    )
