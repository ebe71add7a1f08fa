from dataclasses import dataclass

from marshmallow import Schema, fields, pre_load, post_load, EXCLUDE


@dataclass(frozen=True)
class ResponseError:
    """Error body returned by Daraja on any non-2xx response"""
    request_id: str
    error_code: str
    error_message: str

    def __str__(self):
        return (
            f"requestID: {self.request_id}, errorCode:{self.error_code}, "
            f"errorMessage:{self.error_message}"
        )


# Spellings seen across Daraja endpoints for the same three keys
_KEY_ALIASES = {
    "requestID":    ("requestID", "requestId", "RequestID", "request_id"),
    "errorCode":    ("errorCode", "ErrorCode", "error_code"),
    "errorMessage": ("errorMessage", "ErrorMessage", "error_message"),
}


class ResponseErrorSchema(Schema):
    """Daraja error body schema"""

    class Meta:
        unknown = EXCLUDE

    request_id = fields.Str(required=True, data_key="requestID")
    error_code = fields.Str(required=True, data_key="errorCode")
    error_message = fields.Str(required=True, data_key="errorMessage")

    @pre_load
    def normalise_keys(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        normalised = dict(data)
        for canonical, aliases in _KEY_ALIASES.items():
            if canonical in normalised:
                continue
            for alias in aliases:
                if alias in normalised:
                    normalised[canonical] = normalised.pop(alias)
                    break
        return normalised

    @post_load
    def make_response_error(self, data, **kwargs):
        return ResponseError(**data)
