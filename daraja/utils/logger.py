"""
Logging Configuration
Logging setup for the Daraja client

The library only emits records; call get_logger("daraja") once to attach
console (and optional rotating file) handlers for the whole package.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
import os

import httpx

_REDACTED_HEADERS = ('authorization',)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance

    Level comes from DARAJA_LOG_LEVEL (default INFO). A rotating file
    handler is added when DARAJA_LOG_DIR is set.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        level = os.getenv('DARAJA_LOG_LEVEL', 'INFO').upper()
        logger.setLevel(level)

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_formatter = logging.Formatter(
            '%(levelname)s - %(name)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        log_dir = os.getenv('DARAJA_LOG_DIR')
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, 'daraja.log'),
                maxBytes=10485760,  # 10MB
                backupCount=10
            )
            file_handler.setLevel(level)
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

    return logger


def redact_headers(headers) -> dict:
    """Copy of headers safe to log"""
    return {
        key: ('REDACTED' if key.lower() in _REDACTED_HEADERS else value)
        for key, value in headers.items()
    }


async def log_request(request: httpx.Request):
    """httpx event hook: log every outgoing request"""
    logger = logging.getLogger('daraja.http')
    logger.debug(
        f'{request.method} {request.url.host}{request.url.path} - '
        f'headers: {redact_headers(request.headers)}'
    )


async def log_response(response: httpx.Response):
    """httpx event hook: log every response status"""
    logger = logging.getLogger('daraja.http')
    request = response.request
    logger.debug(
        f'{request.method} {request.url.path} - '
        f'Status: {response.status_code}'
    )


EVENT_HOOKS = {
    'request': [log_request],
    'response': [log_response],
}
