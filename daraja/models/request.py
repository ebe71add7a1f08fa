from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from daraja.errors import BuilderError


class HttpMethod(str, Enum):
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    PATCH = 'PATCH'
    DELETE = 'DELETE'


@dataclass(frozen=True)
class Request:
    """
    A single Daraja operation call, independent of auth and retries.

    Builders for individual operations (B2C, B2B, bill manager, ...) hand
    one of these to Mpesa.send().

    Args:
        method: HTTP method
        path: Operation path relative to the environment base URL,
              e.g. "mpesa/b2c/v1/paymentrequest"
        body: JSON-serialisable request body
    """
    method: HttpMethod
    path: str
    body: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self):
        if not isinstance(self.method, HttpMethod):
            try:
                method = HttpMethod(str(self.method).upper())
            except ValueError:
                raise BuilderError.invalid_field('method') from None
            object.__setattr__(self, 'method', method)

        if not self.path or not self.path.strip('/'):
            raise BuilderError.uninitialized_field('path')

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.path.lstrip('/')}"

    @classmethod
    def post(cls, path: str, body: Any) -> 'Request':
        return cls(HttpMethod.POST, path, body)
