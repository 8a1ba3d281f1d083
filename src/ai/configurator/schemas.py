"""
Pydantic schemas for the configurator chat.

Conversation messages follow the parts-based shape the chat UI keeps: each
message is a list of text parts and tool invocation parts.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.ai.configurator.exceptions import InvalidHistoryError


class TextPart(BaseModel):
    """Plain text content of a message."""

    type: Literal["text"] = "text"
    text: str


class ToolInvocationPart(BaseModel):
    """A tool call the assistant made, with the output it received."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["tool-invocation"] = "tool-invocation"
    tool_call_id: str = Field(..., alias="toolCallId")
    tool_name: str = Field(..., alias="toolName")
    input: dict[str, Any] = Field(default_factory=dict)
    output: dict[str, Any] | None = None


MessagePart = Annotated[TextPart | ToolInvocationPart, Field(discriminator="type")]


class ConversationMessage(BaseModel):
    """One message of a chat session."""

    id: str | None = None
    role: Literal["user", "assistant"]
    parts: list[MessagePart] = Field(default_factory=list)

    @model_validator(mode="after")
    def tool_parts_only_from_assistant(self) -> "ConversationMessage":
        if self.role == "user" and any(
            isinstance(part, ToolInvocationPart) for part in self.parts
        ):
            raise ValueError("user messages cannot contain tool invocations")
        return self

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts if isinstance(part, TextPart))


def validate_history(messages: list[ConversationMessage]) -> None:
    """Check that a history can start a model turn.

    Raises:
        InvalidHistoryError: If the history is empty or does not end with a
            non-empty user message
    """
    if not messages:
        raise InvalidHistoryError("conversation history is empty")
    last = messages[-1]
    if last.role != "user":
        raise InvalidHistoryError("conversation must end with a user message")
    if not last.text.strip():
        raise InvalidHistoryError("latest user message has no text")


class ChatRequest(BaseModel):
    """Chat request with the full message history."""

    messages: list[ConversationMessage]

    @field_validator("messages")
    @classmethod
    def history_ends_with_user_turn(
        cls, messages: list[ConversationMessage]
    ) -> list[ConversationMessage]:
        try:
            validate_history(messages)
        except InvalidHistoryError as e:
            raise ValueError(e.message) from e
        return messages

