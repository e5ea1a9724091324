"""Chat completion client.

Holds the provider configuration and the HTTP transport, and exposes the
dispatch operations used by ChatCompletion.create.
"""

import logging

import httpx

from .config import load_credentials
from .models import ChatCompletionResponse
from .providers import DEFAULT_OPENAI_ENDPOINT, ApiType, ProviderConfig
from .requestor import Requestor

logger = logging.getLogger(__name__)


class Client:
    """Provider-aware client for the chat completion API.

    The configuration is immutable and the underlying httpx.AsyncClient pools
    connections, so one Client can serve concurrent calls.

    Usage:
        async with Client.new_openai_client(api_key) as client:
            response = await ChatCompletion().set_messages(msgs).create(client, "gpt-4")
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        api_type: ApiType,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: Provider secret. Unused for ApiType.AZURE_AD.
            endpoint: Provider root URL; a trailing "/" is added if missing.
            api_type: Provider contract.
            http_client: Transport to share. A private one is created (and
                closed by aclose) when omitted.
        """
        self._config = ProviderConfig(endpoint=endpoint, api_type=api_type, api_key=api_key)
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient()
        self._requestor = Requestor(self._config, self._http_client)

    @classmethod
    def new_openai_client(
        cls,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> "Client":
        """Client for the direct API at the default endpoint."""
        return cls(api_key, DEFAULT_OPENAI_ENDPOINT, ApiType.OPENAI, http_client=http_client)

    @classmethod
    def from_env(
        cls,
        api_type: ApiType = ApiType.OPENAI,
        http_client: httpx.AsyncClient | None = None,
    ) -> "Client":
        """Client configured from environment variables (see chatgate.config)."""
        credentials = load_credentials(api_type)
        logger.debug(
            "Loaded credentials from environment",
            extra={"api_type": api_type.value, "endpoint": credentials.endpoint},
        )
        return cls(credentials.api_key, credentials.endpoint, api_type, http_client=http_client)

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def api_type(self) -> ApiType:
        return self._config.api_type

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def generate_api_uri(
        self,
        api_path: str,
        model_id: str | None = None,
        api_version: str | None = None,
    ) -> str:
        return self._config.generate_api_uri(api_path, model_id, api_version)

    async def post(
        self,
        api_path: str,
        body: str,
        model_id: str | None = None,
        api_version: str | None = None,
    ) -> str:
        """POST a JSON body and return the raw response text."""
        return await self._requestor.post(api_path, body, model_id, api_version)

    async def post_for_completion(
        self,
        api_path: str,
        body: str,
        model_id: str | None = None,
        api_version: str | None = None,
    ) -> ChatCompletionResponse:
        """POST a JSON body and decode a chat completion."""
        return await self._requestor.post_for_completion(api_path, body, model_id, api_version)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
