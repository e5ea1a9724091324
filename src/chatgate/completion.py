"""Chat completion request builder.

Each setter validates its value when it is set, so a ChatCompletion that
reaches `create` is already well-formed apart from the non-empty message
check done by `finalize`.

Example:
    messages = ChatMessageBuilder().system("Be brief.").user("Hi").build()
    response = await (
        ChatCompletion()
        .set_messages(messages)
        .set_temperature(0.8)
        .set_max_tokens(256)
        .create(client, "gpt-4")
    )
"""

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from .errors import (
    EmptyMessageContentError,
    EmptyMessagesError,
    FrequencyPenaltyOutOfRangeError,
    PresencePenaltyOutOfRangeError,
    StopSequencesOutOfRangeError,
    TemperatureOutOfRangeError,
    TopPOutOfRangeError,
)
from .models import ChatCompletionResponse, ChatMessage, FunctionDefinition
from .providers import ApiType

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)

API_PATH = "chat/completions"
MAX_STOP_SEQUENCES = StopSequencesOutOfRangeError.MAX_SEQUENCES


class ChatCompletion(BaseModel):
    """Chat completion request body.

    Unset optional fields are None and are omitted from the serialized JSON.
    """

    model: str | None = None
    messages: list[ChatMessage] = Field(default_factory=list)
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    stream: bool | None = None
    stop: list[str] | None = None
    max_tokens: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    logit_bias: dict[str, float] | None = None
    user: str | None = None
    function_call: str | dict[str, str] | None = None
    functions: list[FunctionDefinition] | None = None

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def add_message(self, message: ChatMessage) -> "ChatCompletion":
        """Append one message.

        Raises:
            EmptyMessageContentError: The message content is an empty string.
        """
        if message.content == "":
            raise EmptyMessageContentError()
        self.messages.append(message)
        return self

    def set_messages(self, messages: list[ChatMessage]) -> "ChatCompletion":
        """Replace the whole message list.

        Content is not re-checked here: lists come from ChatMessageBuilder or
        from a previous conversation, and function/assistant turns may
        legitimately carry empty content. Use add_message for checked appends.
        """
        self.messages = list(messages)
        return self

    # -------------------------------------------------------------------------
    # Validated sampling controls
    # -------------------------------------------------------------------------

    def set_temperature(self, temperature: float) -> "ChatCompletion":
        if not 0.0 <= temperature <= 2.0:
            raise TemperatureOutOfRangeError(temperature)
        self.temperature = temperature
        return self

    def set_top_p(self, top_p: float) -> "ChatCompletion":
        if not 0.0 <= top_p <= 1.0:
            raise TopPOutOfRangeError(top_p)
        self.top_p = top_p
        return self

    def set_stop(self, stop: list[str]) -> "ChatCompletion":
        """Set up to four stop sequences. An empty list clears the field."""
        if not stop:
            self.stop = None
        elif len(stop) > MAX_STOP_SEQUENCES:
            raise StopSequencesOutOfRangeError(len(stop))
        else:
            self.stop = list(stop)
        return self

    def set_presence_penalty(self, presence_penalty: float) -> "ChatCompletion":
        if not -2.0 <= presence_penalty <= 2.0:
            raise PresencePenaltyOutOfRangeError(presence_penalty)
        self.presence_penalty = presence_penalty
        return self

    def set_frequency_penalty(self, frequency_penalty: float) -> "ChatCompletion":
        if not -2.0 <= frequency_penalty <= 2.0:
            raise FrequencyPenaltyOutOfRangeError(frequency_penalty)
        self.frequency_penalty = frequency_penalty
        return self

    # -------------------------------------------------------------------------
    # Unchecked fields (empty clears)
    # -------------------------------------------------------------------------

    def set_n(self, n: int) -> "ChatCompletion":
        self.n = n
        return self

    def set_stream(self, stream: bool) -> "ChatCompletion":
        self.stream = stream
        return self

    def set_max_tokens(self, max_tokens: int) -> "ChatCompletion":
        self.max_tokens = max_tokens
        return self

    def set_logit_bias(self, logit_bias: dict[str, float]) -> "ChatCompletion":
        self.logit_bias = dict(logit_bias) if logit_bias else None
        return self

    def set_user(self, user: str) -> "ChatCompletion":
        self.user = user or None
        return self

    def set_function_call(self, function_call: str | dict[str, str]) -> "ChatCompletion":
        """Set the function-call directive ("auto", "none" or {"name": ...})."""
        self.function_call = function_call or None
        return self

    def set_functions(self, functions: list[FunctionDefinition]) -> "ChatCompletion":
        self.functions = list(functions) if functions else None
        return self

    # -------------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------------

    def finalize(self, api_type: ApiType, model_id: str) -> "ChatCompletion":
        """Prepare the body for a provider.

        The direct API needs the model in the body; gateway providers address
        the model through the URI, so it must not appear in the body.

        Raises:
            EmptyMessagesError: No messages have been added.
        """
        if not self.messages:
            raise EmptyMessagesError()

        if api_type == ApiType.OPENAI:
            self.model = model_id
        else:
            self.model = None
        return self

    def to_json(self) -> str:
        """Serialize to the wire format, omitting unset fields."""
        return self.model_dump_json(exclude_none=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    async def create(
        self,
        client: "Client",
        model_id: str,
        api_version: str | None = None,
    ) -> ChatCompletionResponse:
        """Send the request and decode the completion.

        Args:
            client: Configured client.
            model_id: Model name (direct API) or deployment id (gateway).
            api_version: Gateway API version; the default is used when omitted.

        Returns:
            Decoded chat completion.
        """
        body = self._prepare(client, model_id)
        return await client.post_for_completion(API_PATH, body, model_id, api_version)

    async def create_raw(
        self,
        client: "Client",
        model_id: str,
        api_version: str | None = None,
    ) -> str:
        """Send the request and return the undecoded response body."""
        body = self._prepare(client, model_id)
        return await client.post(API_PATH, body, model_id, api_version)

    def _prepare(self, client: "Client", model_id: str) -> str:
        self.finalize(client.api_type, model_id)
        logger.debug(
            "Prepared chat completion with %d message(s)",
            len(self.messages),
            extra={"api_type": client.api_type.value, "model_id": model_id},
        )
        return self.to_json()
