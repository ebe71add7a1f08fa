"""
Schemas Package
Marshmallow schemas for Daraja response bodies
"""

from daraja.schemas.auth_schema import (
    AuthenticationResponse,
    AuthenticationResponseSchema
)
from daraja.schemas.error_schema import (
    ResponseError,
    ResponseErrorSchema
)

__all__ = [
    'AuthenticationResponse',
    'AuthenticationResponseSchema',
    'ResponseError',
    'ResponseErrorSchema'
]
