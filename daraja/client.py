"""
Mpesa Client
Entry point for talking to the Safaricom Daraja API.

Operation builders (B2C, B2B, bill manager, express, reversal, ...) call
Mpesa.send() with a Request and, optionally, a marshmallow schema for the
response. Authentication, token caching and retries are handled here.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional, Type, Union

import httpx
from marshmallow import Schema

from daraja import __version__
from daraja.config import Config, config as configs
from daraja.errors import EncryptionError, EnvironmentVariableError, MpesaError
from daraja.models import Credentials, Request
from daraja.providers import (
    ApiEnvironment,
    SecurityCredentialProvider,
    StaticSecurityCredential,
    get_environment,
)
from daraja.services import AuthService, RequestExecutor, RetryPolicy, TokenCache
from daraja.services.token_cache import utc_now
from daraja.utils import EVENT_HOOKS

logger = logging.getLogger(__name__)

# Source: https://developer.safaricom.co.ke/test_credentials
DEFAULT_INITIATOR_PASSWORD = "Safaricom999!*!"

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_TIMEOUT = 30.0


class Mpesa:
    """
    Mpesa client that facilitates communication with the Safaricom API.

    Usage:
        async with Mpesa(key, secret, get_environment('sandbox')) as client:
            assert await client.is_connected()
            body = await client.send(Request.post("mpesa/b2c/v1/paymentrequest", payload))
    """

    def __init__(
            self,
            consumer_key: str,
            consumer_secret: str,
            environment: Union[ApiEnvironment, str] = 'sandbox',
            retry_policy: Optional[RetryPolicy] = None,
            http_client: Optional[httpx.AsyncClient] = None,
            security_credential_provider: Optional[SecurityCredentialProvider] = None,
            connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
            timeout: float = DEFAULT_TIMEOUT,
            clock: Callable[[], datetime] = utc_now
    ):
        self.credentials = Credentials(consumer_key, consumer_secret)

        if isinstance(environment, str):
            environment = get_environment(environment)
        self.environment = environment
        self.base_url = environment.base_url
        self.certificate = environment.certificate

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout, connect=connect_timeout),
                headers={"User-Agent": f"daraja-python/{__version__}"},
                event_hooks=EVENT_HOOKS,
            )
        self.http_client = http_client

        self.security_credential_provider = security_credential_provider
        self._initiator_password: Optional[str] = None

        self.token_cache = TokenCache(clock=clock)
        self.auth_service = AuthService(
            self.http_client, self.credentials, self.base_url, self.token_cache
        )
        self.executor = RequestExecutor(
            self.http_client,
            self.base_url,
            self.token_cache,
            self.auth_service,
            retry_policy=retry_policy,
        )

    @classmethod
    def from_env(cls, config_name: str = 'default', **kwargs) -> 'Mpesa':
        """
        Build a client from DARAJA_* environment variables (and .env).

        Args:
            config_name: Key of daraja.config.config ('sandbox', 'production', 'testing', 'default')
            **kwargs: Extra constructor arguments, e.g. http_client

        Raises:
            EnvironmentVariableError: If credentials are missing or config_name is unknown
        """
        cfg: Optional[Type[Config]] = configs.get(config_name)
        if cfg is None:
            raise EnvironmentVariableError(f"Unknown config: '{config_name}'")

        missing = [
            name for name, value in (
                ('DARAJA_CONSUMER_KEY', cfg.CONSUMER_KEY),
                ('DARAJA_CONSUMER_SECRET', cfg.CONSUMER_SECRET),
            ) if not value
        ]
        if missing:
            raise EnvironmentVariableError(
                f"{EnvironmentVariableError.error}: missing {', '.join(missing)}"
            )

        kwargs.setdefault('environment', get_environment(cfg.ENVIRONMENT, cfg.CERTIFICATE))
        kwargs.setdefault('retry_policy', RetryPolicy(
            initial_interval=cfg.RETRY_INITIAL_INTERVAL,
            multiplier=cfg.RETRY_MULTIPLIER,
            max_interval=cfg.RETRY_MAX_INTERVAL,
            max_elapsed_time=cfg.RETRY_MAX_ELAPSED,
            max_attempts=cfg.RETRY_MAX_ATTEMPTS,
        ))
        kwargs.setdefault('connect_timeout', cfg.CONNECT_TIMEOUT)
        kwargs.setdefault('timeout', cfg.TIMEOUT)
        if cfg.SECURITY_CREDENTIAL:
            kwargs.setdefault(
                'security_credential_provider', StaticSecurityCredential(cfg.SECURITY_CREDENTIAL)
            )

        client = cls(cfg.CONSUMER_KEY, cfg.CONSUMER_SECRET, **kwargs)
        if cfg.INITIATOR_PASSWORD:
            client.set_initiator_password(cfg.INITIATOR_PASSWORD)
        return client

    # Credentials

    @property
    def consumer_key(self) -> str:
        return self.credentials.consumer_key

    @property
    def initiator_password(self) -> str:
        """Initiator password, the sandbox test password unless overridden"""
        return self._initiator_password or DEFAULT_INITIATOR_PASSWORD

    def set_initiator_password(self, initiator_password: str) -> None:
        """
        Optional in development but required in production for account
        balance, B2B, B2C, transaction reversal and transaction status.
        """
        self._initiator_password = initiator_password

    def gen_security_credentials(self) -> str:
        """
        Generate the SecurityCredential for the current initiator password.

        Raises:
            EncryptionError: No provider configured, or the provider failed
        """
        if self.security_credential_provider is None:
            raise EncryptionError(f"{EncryptionError.error}: no security credential provider configured")
        try:
            return self.security_credential_provider.generate(self.initiator_password, self.certificate)
        except MpesaError:
            raise
        except Exception as exc:
            raise EncryptionError(f"{EncryptionError.error}: {exc}") from exc

    # Auth

    def has_cached_auth(self) -> bool:
        """Check if we have a cached valid auth token"""
        return self.token_cache.has_valid_token()

    async def auth(self) -> str:
        """
        Return a valid bearer token, fetching a new one when the cached
        token is missing or expired.
        """
        return await self.executor.resolve_token()

    async def is_connected(self) -> bool:
        """Checks if the client can be authenticated"""
        try:
            await self.auth()
        except MpesaError as exc:
            logger.warning("Daraja: authentication failed: %s", exc)
            return False
        return True

    # Requests

    async def send(
            self,
            request: Request,
            response_schema: Optional[Schema] = None,
            request_schema: Optional[Schema] = None
    ) -> Any:
        """
        Send a request to the Safaricom API.

        Used by all operation builders. Retries and token refresh are
        transparent to the caller.

        Args:
            request: Logical request (method, path, body)
            response_schema: Optional marshmallow schema for the success body
            request_schema: Optional marshmallow schema used to dump the body

        Returns:
            Decoded response body (or the schema's load() result)

        Raises:
            MpesaError: Permanent failure, or the last error once retries run out
        """
        return await self.executor.send(
            request, response_schema=response_schema, request_schema=request_schema
        )

    # Lifecycle

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> 'Mpesa':
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    def __repr__(self):
        return f"<Mpesa consumer_key={self.consumer_key!r} environment={self.environment!r}>"
