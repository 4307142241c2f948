"""HTTP error types raised by the proxy routes and auth gates.

Every error renders as ``{"error": <message>}`` via the handler installed in
``prospector.main``.
"""

from __future__ import annotations

from fastapi import HTTPException, status


class ConfigurationError(HTTPException):
    """A secret the route needs is not configured."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )


class MissingFieldsError(HTTPException):
    """The caller omitted one or more required fields."""

    def __init__(self, *fields: str, alternatives: bool = False) -> None:
        self.fields = fields
        joiner = " or " if alternatives else " and "
        verb = "is" if len(fields) == 1 or alternatives else "are"
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{joiner.join(fields)} {verb} required",
        )


class UpstreamError(HTTPException):
    """The outbound call to the upstream service failed."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )


class UnauthorizedError(HTTPException):
    def __init__(self, reason: str) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unauthorized - {reason}",
        )
