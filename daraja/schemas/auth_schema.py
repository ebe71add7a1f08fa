from dataclasses import dataclass, field

from marshmallow import Schema, fields, post_load, validates, ValidationError, EXCLUDE

# Daraja tokens live for an hour; anything beyond a year is a malformed response
MAX_EXPIRES_IN = 365 * 24 * 60 * 60


@dataclass(frozen=True)
class AuthenticationResponse:
    """Response returned from the token endpoint"""
    access_token: str = field(repr=False)
    expires_in: int

    def __str__(self):
        return f"token expires in: {self.expires_in}"


class AuthenticationResponseSchema(Schema):
    """ Response from GET /oauth/v1/generate """

    class Meta:
        unknown = EXCLUDE

    access_token = fields.Str(required=True)
    # Daraja sends this as a string ("3599"); plain numbers are accepted too
    expires_in = fields.Int(required=True)

    @validates('expires_in')
    def validate_expires_in(self, value, **kwargs):
        if value < 0:
            raise ValidationError('expires_in must not be negative')
        if value > MAX_EXPIRES_IN:
            raise ValidationError(f'expires_in must not exceed {MAX_EXPIRES_IN} seconds')

    @post_load
    def make_authentication_response(self, data, **kwargs):
        return AuthenticationResponse(**data)
