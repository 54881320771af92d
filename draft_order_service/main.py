"""
main.py — FastAPI Entry Point for the Draft Order Service

This module provides the HTTP interface used by the storefront to check out a product
variant at a negotiated (custom) price. It is deployed as a serverless function; the
hosting platform dispatches requests to the ASGI `app`.

Responsibilities:
    • Accept custom-price checkout requests via HTTP POST
    • Answer CORS preflight requests for the storefront origins
    • Run the draft order pipeline (validation → line item → Shopify Admin API)
    • Map every outcome, including failures, to a JSON response
    • Provide system health information
"""

import os
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response

from .clients import ShopifyClient
from .config import ServiceConfig, load_config
from .cors import cors_headers
from .errors import ConfigurationError, DraftOrderError, UnexpectedError
from .logging_config import get_logger, setup_logging
from .responses import error_response, method_not_allowed, success_response
from .validation import parse_body
from .workflow import process_draft_order

ENDPOINT_PATHS = ("/", "/api/draft-order-checkout")
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

log = get_logger(__name__)


def create_app(config: Optional[ServiceConfig] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Creates the FastAPI application with its configuration injected.

    Args:
        config (ServiceConfig | None): Configuration, read from the environment if None.
        transport (httpx.AsyncBaseTransport | None): Transport for outbound Shopify calls
            (the mock Shopify app in tests, the network otherwise).

    Returns:
        FastAPI: The application.
    """
    config = config or load_config()
    app = FastAPI(title="Draft Order Checkout")
    app.state.config = config
    app.state.shopify_transport = transport

    if not config.is_configured:
        log.warning("SHOP_DOMAIN oder SHOPIFY_ADMIN_TOKEN fehlt. Alle Anfragen werden mit 500 beantwortet.")

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        preflight = request.method == "OPTIONS"
        for name, value in cors_headers(request.headers.get("origin"), config, preflight).items():
            response.headers[name] = value
        return response

    async def draft_order_checkout(request: Request):
        """
        Receives a custom-price checkout request from the storefront.

        OPTIONS answers the CORS preflight with 204, every method other than POST gets
        405. For POST the body is validated, a draft order is created on Shopify and its
        checkout URL is returned.

        Returns:
            JSONResponse: On success:
                - success (bool): Always true.
                - draftOrderId: Shopify draft order id.
                - checkoutUrl (str): Invoice URL for the customer.
                - message (str): Confirmation message.
            On failure {error, ...} with the status chosen by `responses.error_response`.
        """
        if request.method == "OPTIONS":
            return Response(status_code=204)
        if request.method != "POST":
            return method_not_allowed()

        try:
            # configuration is checked before the body is read
            if not config.is_configured:
                raise ConfigurationError()
            body = parse_body(await request.body())
            async with ShopifyClient(config, transport=app.state.shopify_transport) as shopify:
                result = await process_draft_order(body, config, shopify)
            return success_response(result)

        except DraftOrderError as e:
            log.warning(f"Draft Order Anfrage fehlgeschlagen ({type(e).__name__}): {e}")
            return error_response(e)

        except Exception as e:
            log.critical(f"Unbekannter Fehler in der Draft Order API: {e}", exc_info=True)
            return error_response(UnexpectedError(e))

    for path in ENDPOINT_PATHS:
        app.add_api_route(path, draft_order_checkout, methods=ALL_METHODS, include_in_schema=path == "/")

    # Health Check Endpoint
    @app.get("/health")
    def health_check():
        """
        Simple health check endpoint.

        Returns:
            dict: Service availability and whether Shopify credentials are configured.
        """
        return {"status": "ok", "configured": config.is_configured}

    return app


# Initialization
# Configure logging and read the configuration once per process
setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
