"""Chat completion error hierarchy.

Three families, all rooted at LLMError:
- RequestValidationError: raised while building a request, before any I/O.
- ResolutionError: the request cannot be addressed (missing deployment, config).
- Transport errors: the call was attempted and failed (status, connection, decode).

Every error carries structured context so callers can match on attributes
rather than on message text.
"""

from typing import Any


class LLMError(Exception):
    """Base exception for chat completion operations."""

    def __init__(
        self,
        message: str,
        api_type: str | None = None,
        request_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.api_type = api_type
        self.request_id = request_id
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.api_type:
            parts.append(f"api_type={self.api_type}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        return " ".join(parts)


# =============================================================================
# Validation errors (request building)
# =============================================================================


class RequestValidationError(LLMError):
    """A request field was given a value the API would reject."""

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class EmptyMessageContentError(RequestValidationError):
    """A message with empty content was added to the request."""

    def __init__(self):
        super().__init__("Message content cannot be empty", field="messages", value="")


class EmptyMessagesError(RequestValidationError):
    """The request has no messages to send."""

    def __init__(self):
        super().__init__("Messages cannot be empty", field="messages", value=[])


class ValueOutOfRangeError(RequestValidationError):
    """Numeric field outside its documented closed interval."""

    field_label = "Value"

    def __init__(self, field: str, value: float, minimum: float, maximum: float):
        super().__init__(
            f"{self.field_label} value must be between {minimum} and {maximum} "
            f"[Given value: {value}]",
            field=field,
            value=value,
        )
        self.minimum = minimum
        self.maximum = maximum


class TemperatureOutOfRangeError(ValueOutOfRangeError):
    field_label = "Temperature"

    def __init__(self, value: float):
        super().__init__("temperature", value, 0.0, 2.0)


class TopPOutOfRangeError(ValueOutOfRangeError):
    field_label = "Top P"

    def __init__(self, value: float):
        super().__init__("top_p", value, 0.0, 1.0)


class PresencePenaltyOutOfRangeError(ValueOutOfRangeError):
    field_label = "Presence penalty"

    def __init__(self, value: float):
        super().__init__("presence_penalty", value, -2.0, 2.0)


class FrequencyPenaltyOutOfRangeError(ValueOutOfRangeError):
    field_label = "Frequency penalty"

    def __init__(self, value: float):
        super().__init__("frequency_penalty", value, -2.0, 2.0)


class StopSequencesOutOfRangeError(RequestValidationError):
    """More stop sequences than the API accepts."""

    MAX_SEQUENCES = 4

    def __init__(self, count: int):
        super().__init__(
            f"Stop value must have between 0 and {self.MAX_SEQUENCES} sequences "
            f"[Number of sequences: {count}]",
            field="stop",
            value=count,
        )
        self.count = count


# =============================================================================
# Resolution errors (before dispatch)
# =============================================================================


class ResolutionError(LLMError):
    """The request cannot be addressed to an endpoint."""

    pass


class ModelIdMissingError(ResolutionError):
    """Gateway providers need a deployment (model) id in the URI."""

    def __init__(self, api_type: str):
        super().__init__(
            f"Model ID is required to generate the API URI for {api_type}",
            api_type=api_type,
        )


class ConfigurationError(ResolutionError):
    """Required configuration value is missing from the environment."""

    def __init__(self, variable: str, api_type: str | None = None):
        super().__init__(
            f"{variable} is not configured. Set the {variable} environment variable.",
            api_type=api_type,
        )
        self.variable = variable


# =============================================================================
# Transport errors (during or after the HTTP call)
# =============================================================================


class AuthenticationError(LLMError):
    """401/403 - Invalid or missing credentials."""

    pass


class RateLimitError(LLMError):
    """429 - Rate limit exceeded.

    retry_after is taken from the Retry-After header when present. Nothing in
    this package retries; the value is exposed for the caller.
    """

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        api_type: str | None = None,
        request_id: str | None = None,
        status_code: int | None = 429,
    ):
        super().__init__(message, api_type, request_id, status_code)
        self.retry_after = retry_after


class TimeoutError(LLMError):
    """Request exceeded the transport's timeout."""

    pass


class InvalidRequestError(LLMError):
    """400 - Malformed request rejected by the API."""

    pass


class ContentFilterError(InvalidRequestError):
    """400 - Prompt blocked by the provider's content filter."""

    pass


class ModelNotFoundError(LLMError):
    """404 - Model or deployment not recognized."""

    pass


class ProviderError(LLMError):
    """5xx or connection failure on the provider side."""

    pass


class APIError(LLMError):
    """Non-2xx status that has no more specific mapping."""

    def __init__(
        self,
        message: str,
        body: str = "",
        api_type: str | None = None,
        request_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, api_type, request_id, status_code)
        self.body = body


class ResponseDecodeError(LLMError):
    """A successful response body could not be decoded into a completion."""

    def __init__(
        self,
        message: str,
        body: str,
        api_type: str | None = None,
        request_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, api_type, request_id, status_code)
        self.body = body


VALIDATION_ERRORS = (RequestValidationError,)
TRANSPORT_ERRORS = (
    AuthenticationError,
    RateLimitError,
    TimeoutError,
    InvalidRequestError,
    ModelNotFoundError,
    ProviderError,
    APIError,
    ResponseDecodeError,
)
