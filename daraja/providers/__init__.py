from typing import Dict, Type

from daraja.errors import EnvironmentVariableError
from daraja.providers.base import ApiEnvironment, SecurityCredentialProvider
from daraja.providers.environments import (
    SandboxEnvironment,
    ProductionEnvironment,
    CustomEnvironment,
)
from daraja.providers.security import StaticSecurityCredential

# Environment registry
ENVIRONMENTS: Dict[str, Type[ApiEnvironment]] = {
    'sandbox':    SandboxEnvironment,
    'production': ProductionEnvironment,
}


def get_environment(environment_name: str, certificate: str = "") -> ApiEnvironment:
    """
    Get environment instance by name.

    Args:
        environment_name: 'sandbox' or 'production'
        certificate: PEM certificate for security credential generation

    Returns:
        Initialized environment instance

    Raises:
        EnvironmentVariableError: If the environment is unknown
    """
    environment_class = ENVIRONMENTS.get((environment_name or '').strip().lower())

    if not environment_class:
        raise EnvironmentVariableError(
            f"Unknown environment: '{environment_name}'. Use one of: {', '.join(ENVIRONMENTS)}"
        )

    return environment_class(certificate)


def list_available_environments():
    """List all available environments."""
    return list(ENVIRONMENTS.keys())


__all__ = [
    'ApiEnvironment',
    'SecurityCredentialProvider',
    'SandboxEnvironment',
    'ProductionEnvironment',
    'CustomEnvironment',
    'StaticSecurityCredential',
    'get_environment',
    'list_available_environments',
    'ENVIRONMENTS',
]
