"""Provider kinds and endpoint URI resolution.

The direct API carries the model in the request body and addresses
`<endpoint>engines/<path>`. Gateway (deployment) providers carry the model as
a deployment path segment and need an `api-version` query parameter.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ModelIdMissingError

DEFAULT_OPENAI_ENDPOINT = "https://api.openai.com/v1/"
DEFAULT_AZURE_API_VERSION = "2023-05-15"


class ApiType(str, Enum):
    """Provider contract.

    OPENAI: direct API, bearer-token auth
    AZURE: deployment gateway, `api-key` header auth
    AZURE_AD: deployment gateway, managed identity (no credential header)
    """

    OPENAI = "openai"
    AZURE = "azure"
    AZURE_AD = "azure_ad"

    @property
    def is_gateway(self) -> bool:
        return self in (ApiType.AZURE, ApiType.AZURE_AD)


class ProviderConfig(BaseModel):
    """Endpoint, provider kind and secret for one client.

    Frozen after construction so it can be shared across concurrent calls.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str
    api_type: ApiType
    api_key: str = Field(default="", repr=False)

    @field_validator("endpoint")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        if not value.endswith("/"):
            return value + "/"
        return value

    def generate_api_uri(
        self,
        api_path: str,
        model_id: str | None = None,
        api_version: str | None = None,
    ) -> str:
        """Build the request URI for an API path.

        Args:
            api_path: Path below the provider root, e.g. "chat/completions".
            model_id: Deployment id. Required for gateway providers, ignored otherwise.
            api_version: Gateway API version. Defaults to DEFAULT_AZURE_API_VERSION.

        Returns:
            Absolute request URI.

        Raises:
            ModelIdMissingError: Gateway provider without a model id.
        """
        if self.api_type == ApiType.OPENAI:
            return f"{self.endpoint}engines/{api_path}"

        if self.api_type.is_gateway:
            if not model_id:
                raise ModelIdMissingError(self.api_type.value)
            version = api_version or DEFAULT_AZURE_API_VERSION
            return (
                f"{self.endpoint}openai/deployments/{model_id}/{api_path}"
                f"?api-version={version}"
            )

        raise ValueError(f"Unknown api type: {self.api_type}")
