"""Coordinate normalization for upstream query strings.

Clients send a point either as ``{"lat": .., "lng": ..}`` or as a
pre-formatted ``"lat,lng"`` string (Google also accepts place names and
``place_id:`` references in that slot). Both are parsed once into a
:data:`Coordinate` and rendered by :func:`format_coordinate`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class LatLng:
    lat: Any
    lng: Any


@dataclass(frozen=True, slots=True)
class Preformatted:
    text: str


Coordinate = Union[LatLng, Preformatted]


def _render(value: Any) -> str:
    # bool is an int subclass; keep JSON spelling for it anyway
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_coordinate(value: Any) -> Coordinate:
    """Tag a raw request value as a lat/lng pair or a pre-formatted string."""
    if isinstance(value, (LatLng, Preformatted)):
        return value
    if isinstance(value, Mapping):
        return LatLng(lat=value.get("lat"), lng=value.get("lng"))
    return Preformatted(text=_render(value))


def format_coordinate(coordinate: Coordinate) -> str:
    if isinstance(coordinate, LatLng):
        return f"{_render(coordinate.lat)},{_render(coordinate.lng)}"
    return coordinate.text


def normalize(value: Any) -> str:
    return format_coordinate(parse_coordinate(value))


def join_points(values: Iterable[Any]) -> str:
    """Normalize each point and join them with ``|``."""
    return "|".join(normalize(v) for v in values)
