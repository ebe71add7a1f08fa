import logging
from datetime import timedelta

import httpx

from daraja.errors import AuthenticationError
from daraja.models import Credentials
from daraja.schemas import AuthenticationResponse, AuthenticationResponseSchema
from daraja.services.response_handler import handle_response, transport_error
from daraja.services.token_cache import TokenCache

logger = logging.getLogger(__name__)

AUTHENTICATION_URL = "/oauth/v1/generate"


class AuthService:
    """Fetches bearer tokens from the Daraja OAuth endpoint"""

    def __init__(
            self,
            http_client: httpx.AsyncClient,
            credentials: Credentials,
            base_url: str,
            token_cache: TokenCache
    ):
        self.http_client = http_client
        self.credentials = credentials
        self.base_url = base_url.rstrip('/')
        self.token_cache = token_cache
        self._schema = AuthenticationResponseSchema()

    @property
    def url(self) -> str:
        return f"{self.base_url}{AUTHENTICATION_URL}"

    async def authenticate(self) -> str:
        """
        Perform one token exchange and store the result in the token cache.

        Returns:
            The new access token

        Raises:
            TransientError: connection/timeout failure, or rate-limit/outage page
            AuthenticationError: decoded error body from the token endpoint
            ParseError: undecodable success or error body
        """
        try:
            response = await self.http_client.get(
                self.url,
                params={"grant_type": "client_credentials"},
                auth=self.credentials.basic_auth(),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise transport_error(exc, context="auth") from exc

        arrived_at = self.token_cache.now()
        value: AuthenticationResponse = handle_response(
            response,
            schema=self._schema,
            context="auth",
            service_error=AuthenticationError,
        )

        expiry = arrived_at + timedelta(seconds=value.expires_in)
        self.token_cache.write_token(value.access_token, expiry)

        logger.debug("Daraja: access token refreshed (%s)", value)
        return value.access_token
