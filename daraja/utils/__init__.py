"""
Utils Package
Utility functions and helpers
"""

from daraja.utils.logger import (
    get_logger,
    redact_headers,
    log_request,
    log_response,
    EVENT_HOOKS
)

__all__ = [
    'get_logger',
    'redact_headers',
    'log_request',
    'log_response',
    'EVENT_HOOKS'
]
