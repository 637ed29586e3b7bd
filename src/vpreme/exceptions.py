"""Centralized exception hierarchy for the vpreme package.

Every error carries the HTTP status and the ``{error, details}`` payload
the API boundary returns, so handlers can raise and the app can render
without knowing which collaborator failed.
"""

from __future__ import annotations


class VpremeError(Exception):
    """Base exception for all vpreme errors."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def to_payload(self) -> dict[str, str]:
        """Render the JSON error body for this exception."""
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


# ---------------------------------------------------------------------------
# Client errors
# ---------------------------------------------------------------------------


class ClientInputError(VpremeError):
    """Raised when the caller supplied an unparseable or missing reference."""

    status_code = 400


class NotFoundError(VpremeError):
    """Raised when a collaborator has no record for the requested item."""

    status_code = 404


# ---------------------------------------------------------------------------
# Downstream errors
# ---------------------------------------------------------------------------


class DownstreamError(VpremeError):
    """Raised when a required outbound call fails or returns garbage."""

    status_code = 500
