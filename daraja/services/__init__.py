from daraja.services.token_cache import TokenCache
from daraja.services.auth_service import AuthService
from daraja.services.retry_policy import (
    RetryPolicy,
    RetryDecision,
    Permanent,
    Transient,
    TransientWithDelay,
    classify,
)
from daraja.services.request_executor import RequestExecutor

__all__ = [
    'TokenCache',
    'AuthService',
    'RetryPolicy',
    'RetryDecision',
    'Permanent',
    'Transient',
    'TransientWithDelay',
    'classify',
    'RequestExecutor',
]
