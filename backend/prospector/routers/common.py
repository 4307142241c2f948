"""Helpers shared by the upstream proxy routers."""

from __future__ import annotations

import logging
from typing import Any

from prospector.errors import UpstreamError
from prospector.services.google_maps import GoogleMapsClient, UpstreamFetchError

logger = logging.getLogger(__name__)


def is_missing(value: Any) -> bool:
    return value is None or value == ""


async def relay(
    client: GoogleMapsClient,
    capability: str,
    params: dict[str, str],
    failure_message: str,
) -> Any:
    """Fetch from Google, turning any transport failure into a 500.

    The cause is logged here and never sent to the client.
    """
    try:
        return await client.fetch(capability, params)
    except UpstreamFetchError:
        logger.error("%s", failure_message, exc_info=True)
        raise UpstreamError(failure_message)
