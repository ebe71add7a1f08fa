from abc import ABC, abstractmethod


class ApiEnvironment(ABC):
    """Abstract base class for Daraja environments"""

    def __init__(self, certificate: str = ""):
        """
        Args:
            certificate: PEM encoded M-Pesa public certificate for this
                         environment, used to generate security credentials
        """
        self._certificate = certificate
        self.environment_name = self.__class__.__name__.replace('Environment', '').lower()

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Base URL every request path is appended to"""
        pass

    @property
    def certificate(self) -> str:
        return self._certificate

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.base_url}>"


class SecurityCredentialProvider(ABC):
    """Strategy that turns the initiator password into a SecurityCredential"""

    @abstractmethod
    def generate(self, initiator_password: str, certificate: str) -> str:
        """
        Produce the base64 SecurityCredential sent with B2C, B2B, reversal,
        transaction status and account balance requests.

        Args:
            initiator_password: Plain initiator password
            certificate: PEM certificate of the active environment

        Returns:
            Base64 encoded credential
        """
        pass
