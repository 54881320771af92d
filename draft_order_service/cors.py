"""
cors.py — CORS Headers for the Storefront Origins

Only the configured storefronts may call the endpoint from a browser. Unknown origins
are answered with the first allow-listed origin, so browsers reject the response.
"""

from typing import Dict, Optional

from .config import ServiceConfig

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


def resolve_origin(origin: Optional[str], config: ServiceConfig) -> str:
    if origin and origin in config.allowed_origins:
        return origin
    return config.allowed_origins[0]


def cors_headers(origin: Optional[str], config: ServiceConfig, preflight: bool = False) -> Dict[str, str]:
    """
    Builds the CORS headers for a response.

    Args:
        origin (str | None): The request's Origin header.
        config (ServiceConfig): Allow-list and preflight max age.
        preflight (bool): Whether this answers an OPTIONS preflight.

    Returns:
        dict: Header names and values.
    """
    headers = {
        "Access-Control-Allow-Origin": resolve_origin(origin, config),
        "Vary": "Origin",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }
    if preflight and config.cors_max_age:
        headers["Access-Control-Max-Age"] = str(config.cors_max_age)
    return headers
