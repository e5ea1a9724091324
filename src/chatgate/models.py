"""Chat completion data models.

Wire-level records shared by requests and responses. Field names match the
JSON members of the API; role tags are lower-case on the wire.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Role(str, Enum):
    """Author of a conversation message."""

    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"
    FUNCTION = "function"


class FunctionCall(BaseModel):
    """A function invocation carried by a message.

    Requests usually send arguments as raw JSON text; some responses decode
    them as a mapping. Both shapes are accepted.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: str | dict[str, Any]

    def parsed_arguments(self) -> dict[str, Any]:
        """Arguments as a mapping, decoding JSON text if needed."""
        if isinstance(self.arguments, dict):
            return dict(self.arguments)
        if not self.arguments.strip():
            return {}
        return json.loads(self.arguments)


class FunctionDefinition(BaseModel):
    """A function the model may call."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None  # JSON Schema object


class ChatMessage(BaseModel):
    """A single message in the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    function_call: FunctionCall | None = None
    name: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _null_content_as_empty(cls, value: Any) -> Any:
        # Assistant messages that only call a function come back with null content
        return "" if value is None else value


class Usage(BaseModel):
    """Token usage statistics."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class Choice(BaseModel):
    """One candidate continuation."""

    model_config = ConfigDict(frozen=True)

    index: int
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Decoded chat completion result."""

    model_config = ConfigDict(frozen=True)

    id: str
    object: str
    created: int
    model: str
    choices: list[Choice]
    usage: Usage | None = None

    @property
    def content(self) -> str | None:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content
