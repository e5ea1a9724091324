"""HTTP dispatch for chat completion calls.

Resolves the request URI, attaches provider-specific authentication and POSTs
a pre-serialized JSON body. Failures are mapped onto the chatgate error
hierarchy and raised immediately; nothing here retries.
"""

import logging
import time

import httpx
from pydantic import ValidationError

from .errors import (
    APIError,
    AuthenticationError,
    ContentFilterError,
    InvalidRequestError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
    ResponseDecodeError,
    TimeoutError,
)
from .models import ChatCompletionResponse
from .providers import ApiType, ProviderConfig

logger = logging.getLogger(__name__)

API_KEY_HEADER = "api-key"
REQUEST_ID_HEADER = "x-request-id"


class Requestor:
    """Sends requests for one ProviderConfig over a shared httpx client."""

    def __init__(self, config: ProviderConfig, http_client: httpx.AsyncClient):
        self._config = config
        self._http_client = http_client

    @property
    def config(self) -> ProviderConfig:
        return self._config

    def build_headers(self) -> dict[str, str]:
        """Headers for a request, including provider authentication.

        Managed-identity gateways authenticate through ambient infrastructure,
        so no credential header is attached and the secret is never sent.
        """
        headers = {"Content-Type": "application/json"}
        api_type = self._config.api_type

        if api_type == ApiType.AZURE:
            headers[API_KEY_HEADER] = self._config.api_key
        elif api_type == ApiType.OPENAI:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        elif api_type == ApiType.AZURE_AD:
            pass
        else:
            raise ValueError(f"Unknown api type: {api_type}")

        return headers

    async def post(
        self,
        api_path: str,
        body: str,
        model_id: str | None = None,
        api_version: str | None = None,
    ) -> str:
        """POST a JSON body and return the raw response text.

        Args:
            api_path: Path below the provider root, e.g. "chat/completions".
            body: Serialized JSON request, sent as-is.
            model_id: Deployment id for gateway providers.
            api_version: Gateway API version.

        Returns:
            Response body text of a 2xx response.

        Raises:
            ModelIdMissingError: Gateway provider without a model id.
            TimeoutError: Transport timed out.
            ProviderError: Connection failure or 5xx response.
            AuthenticationError, RateLimitError, InvalidRequestError,
            ContentFilterError, ModelNotFoundError, APIError: Non-2xx response.
        """
        response = await self._send(api_path, body, model_id, api_version)
        return response.text

    async def post_for_completion(
        self,
        api_path: str,
        body: str,
        model_id: str | None = None,
        api_version: str | None = None,
    ) -> ChatCompletionResponse:
        """POST a JSON body and decode the response as a chat completion.

        Raises:
            ResponseDecodeError: The 2xx body is not a valid completion.
            Anything `post` raises.
        """
        response = await self._send(api_path, body, model_id, api_version)
        try:
            return ChatCompletionResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                "Failed to decode chat completion response",
                extra={
                    "api_type": self._config.api_type.value,
                    "status_code": response.status_code,
                    "error_type": type(e).__name__,
                },
            )
            raise ResponseDecodeError(
                f"Invalid chat completion response: {e.error_count()} validation error(s)",
                body=response.text,
                api_type=self._config.api_type.value,
                request_id=response.headers.get(REQUEST_ID_HEADER),
                status_code=response.status_code,
            ) from e

    async def _send(
        self,
        api_path: str,
        body: str,
        model_id: str | None,
        api_version: str | None,
    ) -> httpx.Response:
        api_type = self._config.api_type.value
        uri = self._config.generate_api_uri(api_path, model_id, api_version)

        logger.debug("POST %s", uri, extra={"api_type": api_type})
        start_time = time.perf_counter()

        try:
            response = await self._http_client.post(
                uri,
                headers=self.build_headers(),
                content=body,
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request to {uri} timed out",
                api_type=api_type,
            ) from e
        except httpx.TransportError as e:
            raise ProviderError(
                f"Failed to connect to {uri}: {e}",
                api_type=api_type,
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not response.is_success:
            logger.warning(
                "Request failed with status %d",
                response.status_code,
                extra={
                    "api_type": api_type,
                    "status_code": response.status_code,
                    "latency_ms": latency_ms,
                },
            )
            self._handle_api_error(response)

        logger.info(
            "Request succeeded",
            extra={
                "api_type": api_type,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
                "request_id": response.headers.get(REQUEST_ID_HEADER),
            },
        )
        return response

    def _handle_api_error(self, response: httpx.Response) -> None:
        """Convert a non-2xx response to an LLMError."""
        status_code = response.status_code
        message = _error_message(response)
        context = {
            "api_type": self._config.api_type.value,
            "request_id": response.headers.get(REQUEST_ID_HEADER),
            "status_code": status_code,
        }

        if status_code in (401, 403):
            raise AuthenticationError(f"Authentication failed: {message}", **context)

        if status_code == 404:
            raise ModelNotFoundError(f"Model or deployment not found: {message}", **context)

        if status_code == 429:
            retry_after = None
            retry_after_str = response.headers.get("retry-after")
            if retry_after_str:
                try:
                    retry_after = float(retry_after_str)
                except ValueError:
                    pass
            raise RateLimitError(
                f"Rate limit exceeded: {message}",
                retry_after=retry_after,
                **context,
            )

        if status_code == 400:
            if "content_filter" in message.lower():
                raise ContentFilterError(f"Content blocked by filter: {message}", **context)
            raise InvalidRequestError(f"Invalid request: {message}", **context)

        if status_code >= 500:
            raise ProviderError(f"Server error ({status_code}): {message}", **context)

        raise APIError(f"HTTP {status_code}: {message}", body=response.text, **context)


def _error_message(response: httpx.Response) -> str:
    """Pull `error.message` out of an API error body, falling back to the text."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            code = error.get("code")
            text = str(error.get("message") or "")
            if code and str(code) not in text:
                return f"{text} ({code})" if text else str(code)
            return text or response.text
    return response.text
