"""JSON request bodies for the POST proxy routes.

Every field is optional at the schema level: required fields are checked by
the routes so a missing one is a 400 naming the field rather than a generic
validation error. Scalars keep the type the browser sent (``40`` vs ``40.0``)
so they are echoed to Google exactly as given.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict

Scalar = Union[int, float, str]


class _Body(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NearbySearchRequest(_Body):
    lat: Scalar | None = None
    lng: Scalar | None = None
    radius: Scalar | None = None
    type: str | None = None
    keyword: str | None = None


class TextSearchRequest(_Body):
    query: str | None = None
    lat: Scalar | None = None
    lng: Scalar | None = None
    radius: Scalar | None = None


class DirectionsRequest(_Body):
    # A point is {"lat": .., "lng": ..} or a string Google understands
    origin: dict[str, Any] | Scalar | None = None
    destination: dict[str, Any] | Scalar | None = None
    waypoints: list[dict[str, Any] | Scalar] | None = None
    mode: str | None = None
    optimize: bool | None = None


class DistanceMatrixRequest(_Body):
    origins: list[dict[str, Any] | Scalar] | str | None = None
    destinations: list[dict[str, Any] | Scalar] | str | None = None
    mode: str | None = None
