"""
Request Executor
Runs a logical Daraja request with bearer auth and automatic retries.

A single send() call moves through
    Idle -> TokenResolved -> Attempting -> Success
                                        -> Retrying -> Attempting
                                        -> Failed
"""

import json
import logging
from typing import Any, Optional

import httpx
from marshmallow import Schema, ValidationError

from daraja.errors import BuilderError, ParseError
from daraja.models import Request
from daraja.services.auth_service import AuthService
from daraja.services.response_handler import handle_response, transport_error
from daraja.services.retry_policy import RetryPolicy
from daraja.services.token_cache import TokenCache

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Executes Daraja operations on behalf of the client"""

    def __init__(
            self,
            http_client: httpx.AsyncClient,
            base_url: str,
            token_cache: TokenCache,
            auth_service: AuthService,
            retry_policy: Optional[RetryPolicy] = None
    ):
        self.http_client = http_client
        self.base_url = base_url.rstrip('/')
        self.token_cache = token_cache
        self.auth_service = auth_service
        self.retry_policy = retry_policy or RetryPolicy()

    async def resolve_token(self) -> str:
        """Return the cached token, authenticating first when it is missing or stale."""
        if self.token_cache.has_valid_token():
            return self.token_cache.read_token()

        logger.debug("Daraja: no valid cached token, authenticating")
        return await self.retry_policy.run(self.auth_service.authenticate)

    async def send(
            self,
            request: Request,
            response_schema: Optional[Schema] = None,
            request_schema: Optional[Schema] = None
    ) -> Any:
        """
        Send a request to the Daraja API.

        The token resolved at the start is used for every attempt of this
        call, even when the retries outlive its expiry.

        Args:
            request: Logical request (method, path, body)
            response_schema: Optional marshmallow schema for the success body
            request_schema: Optional marshmallow schema the body is dumped through

        Returns:
            Decoded response body
        """
        token = await self.resolve_token()
        logger.debug("Daraja [%s]: token resolved", request.path)

        content = self._encode_body(request, request_schema)
        url = request.url(self.base_url)
        attempts = 0

        async def attempt():
            nonlocal attempts
            attempts += 1
            logger.debug("Daraja [%s]: attempt %s", request.path, attempts)
            return await self._execute(request, url, content, token, response_schema)

        try:
            result = await self.retry_policy.run(attempt)
        except Exception as exc:
            logger.debug(
                "Daraja [%s]: failed after %s attempt(s): %s", request.path, attempts, exc
            )
            raise

        logger.debug("Daraja [%s]: succeeded after %s attempt(s)", request.path, attempts)
        return result

    async def _execute(
            self,
            request: Request,
            url: str,
            content: Optional[bytes],
            token: str,
            response_schema: Optional[Schema]
    ) -> Any:
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if content is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = await self.http_client.request(
                request.method.value, url, content=content, headers=headers
            )
        except httpx.InvalidURL as exc:
            raise BuilderError.invalid_field('url') from exc
        except httpx.HTTPError as exc:
            raise transport_error(exc, context=request.path) from exc

        return handle_response(response, schema=response_schema, context=request.path)

    @staticmethod
    def _encode_body(request: Request, request_schema: Optional[Schema] = None) -> Optional[bytes]:
        if request.body is None:
            return None
        try:
            body = request.body
            if request_schema is not None:
                body = request_schema.dump(body)
            return json.dumps(body).encode('utf-8')
        except (TypeError, ValueError, AttributeError, ValidationError) as exc:
            raise ParseError(f"{ParseError.error}: {exc}") from exc
