"""Base classes for AI provider abstraction."""

import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, AsyncGenerator, Literal

from pydantic import BaseModel


class ToolName(str, Enum):
    """Enum for tool names used in the system."""

    SELECT_HOUSES = "selectHouses"


class ToolStatus(str, Enum):
    """Enum for tool execution status."""

    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


class ToolCall(BaseModel):
    """Function call emitted by the model, with its outcome once executed.

    ``arguments`` is the raw JSON string produced by the model; it is only
    trusted after the tool has validated it.
    """

    tool_call_id: str
    tool_name: str
    arguments: str = "{}"
    status: ToolStatus = ToolStatus.RUNNING
    result: dict[str, Any] | None = None
    error: str | None = None

    def parsed_arguments(self) -> dict[str, Any]:
        """Best-effort decode of the raw arguments, for display and logging."""
        try:
            parsed = json.loads(self.arguments)
        except json.JSONDecodeError:
            return {}
        return parsed if isinstance(parsed, dict) else {}


class ChatStreamChunk(BaseModel):
    """Chunk from a streaming chat response.

    A chunk carries a text delta, the function calls completed in this part
    of the stream, or a finish reason. ``response_id`` is set on the final
    chunk of a provider response so a follow-up step can continue from it.
    """

    content: str = ""
    tool_calls: list[ToolCall] = []
    finish_reason: str | None = None
    response_id: str | None = None


class SSEEvent(BaseModel):
    """Server-Sent Event wrapper for type-safe SSE formatting.

    Follows the W3C Server-Sent Events specification:
    https://html.spec.whatwg.org/multipage/server-sent-events.html
    """

    data: str
    event: Literal["done", "error", "heartbeat", "tool_call", "tool_result"] | None = (
        None
    )
    id: str | None = None
    retry: int | None = None

    def format(self) -> str:
        """Format as SSE protocol string.

        Returns:
            str: Properly formatted SSE event with trailing newlines
        """
        lines = []
        if self.event:
            lines.append(f"event: {self.event}")
        if self.id:
            lines.append(f"id: {self.id}")
        if self.retry is not None:
            lines.append(f"retry: {self.retry}")
        lines.append(f"data: {self.data}")
        lines.append("")  # Empty line as event delimiter
        return "\n".join(lines) + "\n"


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Provides a common interface for the model-calling layer so the
    orchestrator can be exercised against any implementation.
    """

    @abstractmethod
    async def stream_chat(
        self,
        input_items: list[dict[str, Any]],
        instructions: str | None = None,
        tools: list[dict[str, Any]] | None = None,
        previous_response_id: str | None = None,
        **kwargs,
    ) -> AsyncGenerator[ChatStreamChunk, None]:
        """Stream one model response.

        Args:
            input_items: Conversation items (messages, function calls and outputs)
            instructions: Optional system prompt/instructions
            tools: Optional function tool definitions the model may call
            previous_response_id: Response to continue from, for multi-step tool use
            **kwargs: Provider-specific options (model, temperature, etc.)

        Yields:
            ChatStreamChunk: Text deltas, completed function calls and the finish reason
        """
        pass
