from daraja.errors.exceptions import (
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

__all__ = [
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
