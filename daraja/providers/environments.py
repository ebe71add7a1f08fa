from daraja.errors import BuilderError
from daraja.providers.base import ApiEnvironment


class SandboxEnvironment(ApiEnvironment):
    BASE_URL = "https://sandbox.safaricom.co.ke"

    @property
    def base_url(self) -> str:
        return self.BASE_URL


class ProductionEnvironment(ApiEnvironment):
    BASE_URL = "https://api.safaricom.co.ke"

    @property
    def base_url(self) -> str:
        return self.BASE_URL


class CustomEnvironment(ApiEnvironment):
    """Any other Daraja-compatible host, e.g. a local mock server"""

    def __init__(self, base_url: str, certificate: str = ""):
        super().__init__(certificate)
        if not base_url or not base_url.startswith(("http://", "https://")):
            raise BuilderError.invalid_field('base_url')
        self._base_url = base_url.rstrip('/')

    @property
    def base_url(self) -> str:
        return self._base_url
