"""
responses.py — Mapping of Pipeline Outcomes to HTTP Responses

Every outcome of a draft order request, successful or not, ends up here and is turned
into a status code and JSON body for the storefront.
"""

from fastapi.responses import JSONResponse

from .errors import ConfigurationError, DraftOrderError, UnexpectedError, UpstreamError, ValidationError
from .models import DraftOrderResult

SUCCESS_MESSAGE = "Draft order created successfully"


def method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


def success_response(result: DraftOrderResult) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "draftOrderId": result.id,
            "checkoutUrl": result.checkout_url,
            "message": SUCCESS_MESSAGE,
        },
    )


def error_response(error: DraftOrderError) -> JSONResponse:
    """
    Maps a pipeline error to its HTTP response.

    | Error                          | Status          | Body                       |
    |--------------------------------|-----------------|----------------------------|
    | ConfigurationError             | 500             | {error}                    |
    | ValidationError                | 400             | {error}                    |
    | UpstreamError with details     | upstream / 502  | {error, details}           |
    | UpstreamError (missing id)     | 502             | {error}                    |
    | UnexpectedError                | 500             | {error, message}           |
    """
    if isinstance(error, ConfigurationError):
        return JSONResponse(status_code=500, content={"error": error.message})

    if isinstance(error, ValidationError):
        return JSONResponse(status_code=400, content={"error": error.message})

    if isinstance(error, UpstreamError):
        content = {"error": error.message}
        if error.details is not None:
            content["details"] = error.details
        return JSONResponse(status_code=error.status_code, content=content)

    if isinstance(error, UnexpectedError):
        message = error.message
    else:
        message = str(error) or "Unknown error"
    return JSONResponse(status_code=500, content={"error": "Internal server error", "message": message})
