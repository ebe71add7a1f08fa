"""
Response Handling
Turns one Daraja HTTP exchange into a decoded body or a classified error.
Shared by the authenticator and the request executor.
"""

import logging
from typing import Any, Optional, Type

import httpx
from marshmallow import Schema, ValidationError

from daraja.errors import (
    MpesaError,
    NetworkError,
    ParseError,
    ServiceError,
    TransientError,
)
from daraja.schemas import ResponseErrorSchema

logger = logging.getLogger(__name__)

_error_schema = ResponseErrorSchema()


def transport_error(exc: httpx.HTTPError, context: str = "") -> MpesaError:
    """Map an httpx transport failure to a transient or permanent error."""
    # TLS handshake failures surface as ConnectError
    if isinstance(exc, (httpx.TimeoutException, httpx.ConnectError)):
        logger.debug("Daraja [%s]: transport error, can retry: %r", context, exc)
        return TransientError(f"{TransientError.error} ({exc.__class__.__name__}: {exc})")
    else:
        logger.error("Daraja [%s]: transport error: %r", context, exc)
        return NetworkError(f"{NetworkError.error}: {exc}")


def is_html(response: httpx.Response) -> bool:
    return "text/html" in response.headers.get("content-type", "").lower()


def is_transient_status(response: httpx.Response) -> bool:
    """
    Daraja's gateway answers rate limiting and outages with HTML pages
    (403) or bare 429/503 responses instead of a JSON error body.
    """
    status = response.status_code
    return (
        (is_html(response) and status == httpx.codes.FORBIDDEN)
        or status == httpx.codes.TOO_MANY_REQUESTS
        or status == httpx.codes.SERVICE_UNAVAILABLE
    )


def handle_response(
    response: httpx.Response,
    schema: Optional[Schema] = None,
    context: str = "",
    service_error: Type[ServiceError] = ServiceError,
) -> Any:
    """
    Decode a Daraja response.

    Args:
        response: Fully read httpx response
        schema: Optional marshmallow schema the success body is loaded through
        context: Short label used in log lines
        service_error: ServiceError subclass raised for decoded error bodies

    Returns:
        Decoded JSON body, or the schema's load() result

    Raises:
        ParseError: 2xx body is not valid JSON / does not match the schema,
            or an error body is undecodable outside the transient heuristic
        TransientError: undecodable error body under rate-limit/outage conditions
        ServiceError: decoded Daraja error body
    """
    if response.is_success:
        return _decode_success(response, schema, context)

    try:
        response_error = _error_schema.load(response.json())
    except (ValueError, ValidationError) as exc:
        if is_transient_status(response):
            logger.debug(
                "Transient Error Occurred url: %s status: %s is_html: %s. Can Retry",
                response.url.path, response.status_code, is_html(response)
            )
            raise TransientError() from exc

        logger.error(
            "error decoding body url: %s status: %s is html: %s err: %s : %s",
            response.url, response.status_code, is_html(response), exc, response.text[:300]
        )
        raise ParseError(f"{ParseError.error}: {exc}") from exc

    logger.debug("Daraja [%s] HTTP %s: %s", context, response.status_code, response_error)
    raise service_error(response_error, status_code=response.status_code)


def _decode_success(response: httpx.Response, schema: Optional[Schema], context: str) -> Any:
    try:
        data = response.json()
        if schema is not None:
            data = schema.load(data)
    except (ValueError, ValidationError) as exc:
        logger.error("Daraja [%s] error decoding body err: %s: %s", context, exc, response.text[:300])
        raise ParseError(f"{ParseError.error}: {exc}") from exc

    return data
