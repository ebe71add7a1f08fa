from daraja.errors import EncryptionError
from daraja.providers.base import SecurityCredentialProvider


class StaticSecurityCredential(SecurityCredentialProvider):
    """
    Returns a SecurityCredential generated ahead of time, e.g. from the
    "Generate Credentials" tool of the Daraja portal.
    """

    def __init__(self, security_credential: str):
        self._security_credential = security_credential

    def generate(self, initiator_password: str, certificate: str) -> str:
        if not self._security_credential:
            raise EncryptionError(f"{EncryptionError.error}: no security credential configured")
        return self._security_credential

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
