"""Conversation history builder."""

from .models import ChatMessage, FunctionCall, Role


class ChatMessageBuilder:
    """Accumulates messages in chronological turn order.

    Performs no validation; empty content is rejected later by
    ChatCompletion.add_message.

    Example:
        messages = (
            ChatMessageBuilder()
            .system("You are a helpful assistant.")
            .user("Tell me a joke")
            .build()
        )
    """

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    def system(self, content: str) -> "ChatMessageBuilder":
        return self._append(ChatMessage(role=Role.SYSTEM, content=content))

    def assistant(self, content: str) -> "ChatMessageBuilder":
        return self._append(ChatMessage(role=Role.ASSISTANT, content=content))

    def user(self, content: str) -> "ChatMessageBuilder":
        return self._append(ChatMessage(role=Role.USER, content=content))

    def function(
        self,
        content: str,
        function_call: FunctionCall,
        name: str,
    ) -> "ChatMessageBuilder":
        """Append the result of a function call."""
        return self._append(
            ChatMessage(
                role=Role.FUNCTION,
                content=content,
                function_call=function_call,
                name=name,
            )
        )

    def build(self) -> list[ChatMessage]:
        """Return the messages in the order they were added."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def _append(self, message: ChatMessage) -> "ChatMessageBuilder":
        self._messages.append(message)
        return self
