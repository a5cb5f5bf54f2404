"""
Maps processing outcomes to API Gateway proxy responses.

Every response carries the same CORS headers regardless of outcome.
"""

from typing import Dict, Iterable

from .models import ErrorKind, HttpResponse

SUCCESS_BODY = "Email has been successfully sent."
FAILURE_BODY = "Email could not be sent at this time. Please try again later."
BAD_REQUEST_PREFIX = "Bad request: "

CORS_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Credentials': 'true',
}

# Only sent on preflight answers
PREFLIGHT_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
}


def _response(status_code: int, body: str) -> HttpResponse:
    return HttpResponse(status_code=status_code, headers=dict(CORS_HEADERS), body=body)


def ok() -> HttpResponse:
    """200 response confirming the email was sent."""
    return _response(200, SUCCESS_BODY)


def preflight() -> HttpResponse:
    """200 response with an empty body for CORS preflight requests."""
    response = _response(200, '')
    response.headers.update(PREFLIGHT_HEADERS)
    return response


def bad_request(errors: Iterable[ErrorKind]) -> HttpResponse:
    """400 response listing validation errors in check order."""
    return _response(400, BAD_REQUEST_PREFIX + "; ".join(error.text for error in errors))


def server_error() -> HttpResponse:
    """500 response with a generic message; the cause is never included."""
    return _response(500, FAILURE_BODY)
