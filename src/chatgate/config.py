"""Credential and endpoint loading from the environment.

The core never reads environment variables; this module resolves them once
and hands plain values to Client.

Environment variables:
- OPENAI_API_KEY: Secret for the direct API.
- OPENAI_ENDPOINT: Optional override of the direct API endpoint.
- AZURE_OPENAI_API_KEY: Secret for key-based gateway auth.
- AZURE_OPENAI_ENDPOINT: Gateway resource endpoint (both gateway kinds).
- AZURE_OPENAI_API_VERSION: Gateway API version used by scripts.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import ConfigurationError
from .providers import DEFAULT_AZURE_API_VERSION, DEFAULT_OPENAI_ENDPOINT, ApiType

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
OPENAI_ENDPOINT_ENV = "OPENAI_ENDPOINT"
AZURE_API_KEY_ENV = "AZURE_OPENAI_API_KEY"
AZURE_ENDPOINT_ENV = "AZURE_OPENAI_ENDPOINT"
AZURE_API_VERSION_ENV = "AZURE_OPENAI_API_VERSION"


@dataclass(frozen=True)
class Credentials:
    """Resolved secret and endpoint for one provider kind."""

    endpoint: str
    api_key: str = field(default="", repr=False)


def load_credentials(api_type: ApiType, use_dotenv: bool = True) -> Credentials:
    """Resolve credentials for a provider kind from the environment.

    Args:
        api_type: Provider kind to resolve for.
        use_dotenv: Load a `.env` file first. Existing variables win.

    Returns:
        Credentials for the provider.

    Raises:
        ConfigurationError: A required variable is unset or empty.
    """
    if use_dotenv:
        load_dotenv()

    if api_type == ApiType.OPENAI:
        return Credentials(
            endpoint=os.environ.get(OPENAI_ENDPOINT_ENV) or DEFAULT_OPENAI_ENDPOINT,
            api_key=_require(OPENAI_API_KEY_ENV, api_type),
        )

    endpoint = _require(AZURE_ENDPOINT_ENV, api_type)
    if api_type == ApiType.AZURE_AD:
        # Managed identity: no secret is used
        return Credentials(endpoint=endpoint)
    return Credentials(endpoint=endpoint, api_key=_require(AZURE_API_KEY_ENV, api_type))


def azure_api_version() -> str:
    """Gateway API version from the environment, or the default."""
    return os.environ.get(AZURE_API_VERSION_ENV) or DEFAULT_AZURE_API_VERSION


def _require(variable: str, api_type: ApiType) -> str:
    value = os.environ.get(variable)
    if not value:
        raise ConfigurationError(variable, api_type=api_type.value)
    return value
