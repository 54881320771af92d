"""
errors.py — Error Taxonomy for the Draft Order Service

Every failure a request can run into is expressed as one of the exceptions below.
They are raised deep in the pipeline (validation, Shopify client) and caught only at
the single request-handling boundary in `main.py`, where `responses.py` maps them to
an HTTP status and JSON body.

Exceptions:
    - ConfigurationError: shop domain or access token missing (HTTP 500).
    - ValidationError: bad or missing input, user-correctable (HTTP 400).
    - UpstreamError: Shopify rejected the request or broke its response contract.
    - UnexpectedError: wrapper for anything else caught at the boundary (HTTP 500).
"""

from typing import Optional


class DraftOrderError(Exception):
    """Base class for all errors raised by the draft order pipeline."""


class ConfigurationError(DraftOrderError):
    """Raised when the service runs without a shop domain or access token."""

    def __init__(self, message: str = "Server not configured: missing SHOP_DOMAIN or SHOPIFY_ADMIN_TOKEN"):
        super().__init__(message)
        self.message = message


class ValidationError(DraftOrderError):
    """
    Raised when the request body cannot be turned into a valid order request.

    Attributes:
        code (str): Machine-readable reason, e.g. 'invalid_price' or 'invalid_body'.
        message (str): Human-readable message returned to the caller.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class UpstreamError(DraftOrderError):
    """
    Raised when Shopify answers with a non-success status, cannot be reached,
    or returns a success response that violates its contract.

    Attributes:
        status_code (int): Upstream status where available, else 502.
        code (str): 'rejected', 'unreachable' or 'missing_id'.
        message (str): Error message returned to the caller.
        details (str | None): Raw upstream body (or transport error text).
    """

    def __init__(self, status_code: int, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class UnexpectedError(DraftOrderError):
    """Wraps any other exception caught at the request boundary."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or "Unknown error")
        self.cause = cause
        self.message = str(cause) or "Unknown error"
