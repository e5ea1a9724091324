"""Async client for chat completion APIs.

Supports the direct API and deployment gateways (key or managed-identity auth)
behind a single request builder and dispatcher.
"""

from .client import Client
from .completion import ChatCompletion
from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ContentFilterError,
    EmptyMessageContentError,
    EmptyMessagesError,
    FrequencyPenaltyOutOfRangeError,
    InvalidRequestError,
    LLMError,
    ModelIdMissingError,
    ModelNotFoundError,
    PresencePenaltyOutOfRangeError,
    ProviderError,
    RateLimitError,
    RequestValidationError,
    ResolutionError,
    ResponseDecodeError,
    StopSequencesOutOfRangeError,
    TemperatureOutOfRangeError,
    TimeoutError,
    TopPOutOfRangeError,
)
from .messages import ChatMessageBuilder
from .models import (
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    FunctionCall,
    FunctionDefinition,
    Role,
    Usage,
)
from .providers import DEFAULT_AZURE_API_VERSION, DEFAULT_OPENAI_ENDPOINT, ApiType, ProviderConfig

__all__ = [
    "Client",
    "ChatCompletion",
    "ChatMessageBuilder",
    "ApiType",
    "ProviderConfig",
    "DEFAULT_AZURE_API_VERSION",
    "DEFAULT_OPENAI_ENDPOINT",
    "Role",
    "ChatMessage",
    "FunctionCall",
    "FunctionDefinition",
    "Usage",
    "Choice",
    "ChatCompletionResponse",
    "LLMError",
    "RequestValidationError",
    "EmptyMessageContentError",
    "EmptyMessagesError",
    "TemperatureOutOfRangeError",
    "TopPOutOfRangeError",
    "StopSequencesOutOfRangeError",
    "PresencePenaltyOutOfRangeError",
    "FrequencyPenaltyOutOfRangeError",
    "ResolutionError",
    "ModelIdMissingError",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitError",
    "TimeoutError",
    "InvalidRequestError",
    "ContentFilterError",
    "ModelNotFoundError",
    "ProviderError",
    "APIError",
    "ResponseDecodeError",
]
