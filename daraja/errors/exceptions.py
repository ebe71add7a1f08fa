from typing import Optional

from daraja.schemas.error_schema import ResponseError


class MpesaError(Exception):
    error = "M-Pesa error"

    def __init__(self, message: Optional[str] = None):
        message = message or self.error
        super().__init__(message)
        self.message = message


class NetworkError(MpesaError):
    error = "An error has occurred while performing the http request"


class TransientError(MpesaError):
    error = "A recoverable error has occurred while performing an operation. Retrying is possible."


class ParseError(MpesaError):
    error = "An error has occurred while serializing/ deserializing"


class ServiceError(MpesaError):
    """Structured error returned by the Daraja API"""
    error = "Service error"

    def __init__(self, response_error: ResponseError, status_code: Optional[int] = None):
        super().__init__(f"{self.error}: {response_error}")
        self.response_error = response_error
        self.status_code = status_code

    @property
    def request_id(self) -> str:
        return self.response_error.request_id

    @property
    def error_code(self) -> str:
        return self.response_error.error_code

    @property
    def error_message(self) -> str:
        return self.response_error.error_message


class AuthenticationError(ServiceError):
    """Service error returned by the token endpoint"""
    error = "Authentication error"


class EnvironmentVariableError(MpesaError):
    error = "An error has occurred while retrieving an environmental variable"


class EncryptionError(MpesaError):
    error = "An error has occurred while generating security credentials"


class BuilderError(MpesaError):
    error = "An error has occurred while building the request"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(f"{self.error}: {message}")
        self.field = field

    @classmethod
    def uninitialized_field(cls, field: str) -> "BuilderError":
        return cls(f"Field [{field}] is required", field=field)

    @classmethod
    def invalid_field(cls, field: str) -> "BuilderError":
        return cls(f"Field [{field}] is invalid", field=field)
