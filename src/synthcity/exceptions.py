"""Custom exception hierarchy for synthcity."""

from __future__ import annotations


class SynthError(Exception):
    """Base exception for all synthcity errors."""


class SynthConfigError(SynthError):
    """Invalid or missing configuration."""


class InvalidRequestError(SynthError):
    """Request rejected before any work was done (HTTP 400 class)."""


class InvalidDataTypeError(InvalidRequestError):
    """The requested data type tag is not known to the generator."""

    def __init__(self, data_type: object) -> None:
        self.data_type = data_type
        super().__init__(f"Invalid data type: {data_type!r}")


class GenerationError(SynthError):
    """Record generation failed for a single tick or request."""

    def __init__(self, message: str, *, data_type: str = "") -> None:
        self.data_type = data_type
        super().__init__(message)


class SynthTransportError(SynthError):
    """HTTP or WebSocket failure on the dashboard client side."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class EmptyExportError(SynthError):
    """Export requested while the ingest buffer holds no records."""
