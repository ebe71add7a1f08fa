__version__ = '0.1.0'

from daraja.errors import (  # noqa: E402
    MpesaError,
    NetworkError,
    TransientError,
    ParseError,
    ServiceError,
    AuthenticationError,
    EnvironmentVariableError,
    EncryptionError,
    BuilderError,
)
from daraja.models import Credentials, Request, HttpMethod  # noqa: E402
from daraja.providers import (  # noqa: E402
    ApiEnvironment,
    SandboxEnvironment,
    ProductionEnvironment,
    CustomEnvironment,
    SecurityCredentialProvider,
    StaticSecurityCredential,
    get_environment,
)
from daraja.schemas import ResponseError  # noqa: E402
from daraja.services import RetryPolicy  # noqa: E402
from daraja.utils import get_logger  # noqa: E402
from daraja.client import Mpesa  # noqa: E402

__all__ = [
    'Mpesa',
    'Request',
    'HttpMethod',
    'Credentials',
    'RetryPolicy',
    'ResponseError',
    'ApiEnvironment',
    'SandboxEnvironment',
    'ProductionEnvironment',
    'CustomEnvironment',
    'SecurityCredentialProvider',
    'StaticSecurityCredential',
    'get_environment',
    'get_logger',
    'MpesaError',
    'NetworkError',
    'TransientError',
    'ParseError',
    'ServiceError',
    'AuthenticationError',
    'EnvironmentVariableError',
    'EncryptionError',
    'BuilderError',
]
