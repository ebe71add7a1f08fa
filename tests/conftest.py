"""
Pytest Configuration and Fixtures
"""
from collections import deque
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from daraja import CustomEnvironment, Mpesa, RetryPolicy

BASE_URL = "https://daraja.test"
AUTH_PATH = "/oauth/v1/generate"


class FakeClock:
    """Manually advanced UTC clock"""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, seconds):
        self.current += timedelta(seconds=seconds)


class RecordingSleep:
    """Stands in for asyncio.sleep; records waits and optionally moves a clock"""

    def __init__(self, clock=None):
        self.delays = []
        self.clock = clock

    async def __call__(self, seconds):
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)


class DarajaStub:
    """
    httpx.MockTransport handler faking the token and operation endpoints.

    Queue httpx.Response objects (or exceptions to raise) on auth_responses /
    operation_responses; when a queue is empty the default is returned.
    """

    def __init__(self):
        self.auth_responses = deque()
        self.operation_responses = deque()
        self.requests = []
        self.default_auth = {"access_token": "tok1", "expires_in": "3600"}
        self.default_operation = {"ResponseCode": "0", "ResponseDescription": "Accept the service request successfully."}

    @property
    def auth_requests(self):
        return [r for r in self.requests if r.url.path == AUTH_PATH]

    @property
    def operation_requests(self):
        return [r for r in self.requests if r.url.path != AUTH_PATH]

    def __call__(self, request):
        self.requests.append(request)
        if request.url.path == AUTH_PATH:
            queued, default = self.auth_responses, self.default_auth
        else:
            queued, default = self.operation_responses, self.default_operation

        if not queued:
            return httpx.Response(200, json=default)

        response = queued.popleft()
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper(clock):
    """Records waits and moves the fake clock forward by each one"""
    return RecordingSleep(clock)


@pytest.fixture
def stub():
    return DarajaStub()


@pytest.fixture
def retry_policy(sleeper):
    return RetryPolicy(jitter=0, max_attempts=5, sleep=sleeper)


@pytest.fixture
def http_client(stub):
    return httpx.AsyncClient(transport=httpx.MockTransport(stub))


@pytest.fixture
def client(http_client, retry_policy, clock):
    """Mpesa client wired to the stub transport"""
    return Mpesa(
        "consumer-key",
        "consumer-secret",
        CustomEnvironment(BASE_URL, certificate="certificate"),
        retry_policy=retry_policy,
        http_client=http_client,
        clock=clock,
    )
