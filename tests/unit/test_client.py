"""
Unit Tests for the Mpesa client facade, environments and configuration
"""

import logging

import httpx
import pytest

from daraja import (
    CustomEnvironment,
    Mpesa,
    ProductionEnvironment,
    Request,
    SandboxEnvironment,
    StaticSecurityCredential,
    get_environment,
)
from daraja.client import DEFAULT_INITIATOR_PASSWORD
from daraja.config import TestingConfig
from daraja.errors import (
    BuilderError,
    EncryptionError,
    EnvironmentVariableError,
)
from daraja.providers import SecurityCredentialProvider, list_available_environments
from daraja.utils import EVENT_HOOKS, get_logger, redact_headers


class TestEnvironments:
    """Test cases for the environment providers"""

    def test_sandbox(self):
        env = get_environment("sandbox")
        assert isinstance(env, SandboxEnvironment)
        assert env.base_url == "https://sandbox.safaricom.co.ke"

    def test_production(self):
        env = get_environment("Production", certificate="pem")
        assert isinstance(env, ProductionEnvironment)
        assert env.base_url == "https://api.safaricom.co.ke"
        assert env.certificate == "pem"

    def test_unknown_environment_raises(self):
        with pytest.raises(EnvironmentVariableError):
            get_environment("staging")

    def test_list_available_environments(self):
        assert list_available_environments() == ["sandbox", "production"]

    def test_custom_environment(self):
        env = CustomEnvironment("https://example.com/", certificate="certificate")
        assert env.base_url == "https://example.com"
        assert env.certificate == "certificate"

    def test_custom_environment_rejects_invalid_url(self):
        with pytest.raises(BuilderError):
            CustomEnvironment("example.com")


class TestClientConstruction:
    """Test cases for Mpesa.__init__ / from_env"""

    def test_environment_by_name(self):
        client = Mpesa("key", "secret", "production")
        assert client.base_url == "https://api.safaricom.co.ke"

    def test_custom_environment(self, client):
        assert client.base_url == "https://daraja.test"
        assert client.certificate == "certificate"

    @pytest.mark.parametrize("key,secret", [("", "secret"), ("key", "")])
    def test_missing_credentials_raise(self, key, secret):
        with pytest.raises(BuilderError):
            Mpesa(key, secret)

    def test_secret_not_in_repr(self, client):
        assert "consumer-secret" not in repr(client)
        assert "consumer-secret" not in repr(client.credentials)

    def test_default_connect_timeout(self):
        client = Mpesa("key", "secret")
        assert client.http_client.timeout.connect == 10.0

    def test_from_env_with_testing_config(self):
        client = Mpesa.from_env("testing")

        assert client.consumer_key == TestingConfig.CONSUMER_KEY
        assert client.base_url == "https://sandbox.safaricom.co.ke"
        assert client.executor.retry_policy.max_attempts == TestingConfig.RETRY_MAX_ATTEMPTS

    def test_from_env_missing_credentials(self, monkeypatch):
        monkeypatch.setattr(TestingConfig, "CONSUMER_SECRET", None)

        with pytest.raises(EnvironmentVariableError) as exc_info:
            Mpesa.from_env("testing")
        assert "DARAJA_CONSUMER_SECRET" in str(exc_info.value)

    def test_from_env_unknown_config(self):
        with pytest.raises(EnvironmentVariableError):
            Mpesa.from_env("nope")


class TestInitiatorAndSecurityCredentials:
    """Initiator password and security credential provider"""

    def test_default_initiator_password(self, client):
        assert client.initiator_password == DEFAULT_INITIATOR_PASSWORD

    def test_set_initiator_password(self, client):
        client.set_initiator_password("foo_bar")
        assert client.initiator_password == "foo_bar"

    def test_without_provider_raises_encryption_error(self, client):
        with pytest.raises(EncryptionError):
            client.gen_security_credentials()

    def test_static_security_credential(self, client):
        client.security_credential_provider = StaticSecurityCredential("c2VjcmV0")
        assert client.gen_security_credentials() == "c2VjcmV0"

    def test_provider_receives_password_and_certificate(self, client):
        class Recording(SecurityCredentialProvider):
            def generate(self, initiator_password, certificate):
                return f"{initiator_password}|{certificate}"

        client.security_credential_provider = Recording()
        client.set_initiator_password("pw")

        assert client.gen_security_credentials() == "pw|certificate"

    def test_provider_failure_is_wrapped(self, client):
        class Broken(SecurityCredentialProvider):
            def generate(self, initiator_password, certificate):
                raise ValueError("not a valid pem")

        client.security_credential_provider = Broken()

        with pytest.raises(EncryptionError) as exc_info:
            client.gen_security_credentials()
        assert "not a valid pem" in str(exc_info.value)


class TestConnectivity:
    """auth() / is_connected()"""

    @pytest.mark.asyncio
    async def test_is_connected(self, client):
        assert await client.is_connected() is True
        assert client.has_cached_auth() is True

    @pytest.mark.asyncio
    async def test_is_connected_false_on_bad_credentials(self, client, stub):
        stub.auth_responses.append(httpx.Response(400, json={
            "requestID": "r1", "errorCode": "400.008.01", "errorMessage": "Invalid Authentication passed"
        }))

        assert await client.is_connected() is False
        assert client.has_cached_auth() is False

    @pytest.mark.asyncio
    async def test_auth_returns_cached_token(self, client, stub):
        assert await client.auth() == "tok1"
        assert await client.auth() == "tok1"
        assert len(stub.auth_requests) == 1

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_own_http_client(self):
        async with Mpesa("key", "secret") as client:
            http_client = client.http_client
        assert http_client.is_closed

    @pytest.mark.asyncio
    async def test_injected_http_client_is_left_open(self, client, http_client):
        await client.aclose()
        assert not http_client.is_closed


class TestRequestModel:
    """Validation of the logical request"""

    def test_unknown_method_raises(self):
        with pytest.raises(BuilderError):
            Request("FETCH", "mpesa/b2c/v1/paymentrequest")

    @pytest.mark.parametrize("path", ["", "/"])
    def test_empty_path_raises(self, path):
        with pytest.raises(BuilderError) as exc_info:
            Request.post(path, {})
        assert exc_info.value.field == "path"


class TestLogging:
    """Secrets never reach the logs"""

    def test_redact_headers(self):
        headers = {"Authorization": "Bearer tok1", "Accept": "application/json"}
        assert redact_headers(headers) == {"Authorization": "REDACTED", "Accept": "application/json"}

    @pytest.mark.asyncio
    async def test_http_event_hooks_redact_tokens(self, stub, caplog):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        client = Mpesa("consumer-key", "consumer-secret", CustomEnvironment("https://daraja.test"),
                       http_client=http_client)
        http_client.event_hooks = EVENT_HOOKS

        with caplog.at_level(logging.DEBUG, logger="daraja"):
            await client.send(Request.post("mpesa/b2c/v1/paymentrequest", {"Amount": 1}))

        assert "GET daraja.test/oauth/v1/generate" in caplog.text
        assert "Status: 200" in caplog.text
        assert "tok1" not in caplog.text
        assert "consumer-secret" not in caplog.text

    def test_get_logger_honours_level_and_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DARAJA_LOG_LEVEL", "debug")
        monkeypatch.setenv("DARAJA_LOG_DIR", str(tmp_path))

        logger = get_logger("daraja.tests.get_logger")
        try:
            logger.debug("hello")

            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            assert (tmp_path / "daraja.log").exists()
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    @pytest.mark.asyncio
    async def test_package_logger_collects_engine_records(self, client, monkeypatch, capsys):
        monkeypatch.setenv("DARAJA_LOG_LEVEL", "debug")

        logger = get_logger("daraja")
        try:
            await client.send(Request.post("mpesa/b2c/v1/paymentrequest", {"Amount": 1}))
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)

        out = capsys.readouterr().out
        assert "daraja.services.request_executor" in out
        assert "succeeded after 1 attempt(s)" in out
        assert "tok1" not in out
