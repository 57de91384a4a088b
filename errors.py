"""Exceptions raised while talking to Open Food Facts."""
from typing import Optional


class UpstreamError(Exception):
    """Base class for every upstream failure."""


class TransientUpstreamError(UpstreamError):
    """A single attempt failed: network error or non-2xx status."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"status {status_code}"
        else:
            message = reason or "network error"
        super().__init__(message)


class UpstreamExhaustedError(UpstreamError):
    """Every permitted attempt failed."""

    def __init__(self, url: str, attempts: int, last_error: Exception):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(str(last_error))


class NotFoundError(UpstreamError):
    """Upstream reported no product for the barcode."""

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__(f"product {barcode} not found")


class MalformedResponseError(UpstreamError):
    """Upstream body is not the JSON shape we expect."""
