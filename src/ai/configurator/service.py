"""
House configurator chat service.

Runs the tool-calling loop for one user turn: the conversation goes to the
model together with the system prompt and the serialized catalog, text is
streamed back as it arrives, and selectHouses calls are validated and
answered so the model can continue. A turn is capped by a step count and a
wall-clock budget.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, AsyncGenerator, AsyncIterator

from src.ai.base import AIProvider, ChatStreamChunk, ToolCall, ToolName, ToolStatus
from src.ai.configurator.config import ConfiguratorSettings, get_configurator_settings
from src.ai.configurator.constants import CATALOG_SECTION_HEADER
from src.ai.configurator.exceptions import SelectionValidationError
from src.ai.configurator.schemas import (
    ConversationMessage,
    TextPart,
    validate_history,
)
from src.ai.configurator.tools import (
    build_select_houses_tool,
    execute_select_houses,
    tool_output,
)
from src.ai.providers.factory import AIProviderType, create_ai_provider
from src.catalog.service import CatalogService, get_catalog_service
from src.utils.logger import logger

FINISH_COMPLETED = "completed"
FINISH_INCOMPLETE = "incomplete"
FINISH_MAX_STEPS = "max_steps"
FINISH_TIMEOUT = "timeout"


def to_input_items(messages: list[ConversationMessage]) -> list[dict[str, Any]]:
    """Convert chat history into Responses API input items.

    Text parts become role messages. Completed tool invocations become a
    function_call item followed by its function_call_output; invocations that
    never received an output are dropped because the API rejects unanswered
    calls.

    Args:
        messages: Caller-supplied history

    Returns:
        list[dict]: Input items in conversation order
    """
    items: list[dict[str, Any]] = []
    for message in messages:
        text_buffer = ""
        for part in message.parts:
            if isinstance(part, TextPart):
                text_buffer += part.text
                continue

            if text_buffer:
                items.append({"role": message.role, "content": text_buffer})
                text_buffer = ""
            if part.output is None:
                continue
            items.append(
                {
                    "type": "function_call",
                    "call_id": part.tool_call_id,
                    "name": part.tool_name,
                    "arguments": json.dumps(part.input),
                }
            )
            items.append(
                {
                    "type": "function_call_output",
                    "call_id": part.tool_call_id,
                    "output": json.dumps(part.output),
                }
            )
        if text_buffer:
            items.append({"role": message.role, "content": text_buffer})
    return items


class HouseConfiguratorService:
    """Service for the AI-guided house selection chat."""

    def __init__(
        self,
        provider: AIProvider | None = None,
        catalog: CatalogService | None = None,
        settings: ConfiguratorSettings | None = None,
    ):
        """Initialize the configurator service.

        Args:
            provider: Model-calling layer, defaults to the OpenAI provider
            catalog: Catalog to expose to the model, defaults to the shared one
            settings: Step and time budgets, defaults to environment settings
        """
        self.settings = settings or get_configurator_settings()
        self.provider = provider or create_ai_provider(AIProviderType.OPENAI)
        self.catalog = catalog or get_catalog_service()
        self.system_prompt_file = Path(__file__).parent / "system_prompt.md"
        self.system_prompt = self._load_system_prompt()

    def _load_system_prompt(self) -> str:
        """
        Load the base system prompt from file.

        Returns:
            str: System prompt without catalog data
        """
        prompt = self.system_prompt_file.read_text(encoding="utf-8")
        logger.info("Loaded system prompt", file_name=self.system_prompt_file.name)
        return prompt

    def build_instructions(self) -> str:
        """System prompt followed by the current catalog serialized as JSON."""
        return (
            f"{self.system_prompt.rstrip()}\n\n"
            f"{CATALOG_SECTION_HEADER}\n{self.catalog.to_prompt_data()}\n"
        )

    def _run_tool(self, tool_call: ToolCall, house_ids: list[str]) -> ToolCall:
        """Execute one function call and record its outcome on a copy of the call."""
        if tool_call.tool_name != ToolName.SELECT_HOUSES.value:
            logger.warning("[TOOL] Unknown tool requested", tool_name=tool_call.tool_name)
            return tool_call.model_copy(
                update={
                    "status": ToolStatus.FAILED,
                    "error": f"Unknown tool: {tool_call.tool_name}",
                }
            )

        try:
            result = execute_select_houses(tool_call.arguments, house_ids)
        except SelectionValidationError as e:
            logger.warning(
                "[TOOL] selectHouses rejected",
                call_id=tool_call.tool_call_id,
                error=e.message,
            )
            return tool_call.model_copy(
                update={"status": ToolStatus.FAILED, "error": e.message}
            )

        return tool_call.model_copy(
            update={"status": ToolStatus.COMPLETE, "result": result.model_dump()}
        )

    async def _until_deadline(
        self, stream: AsyncGenerator[ChatStreamChunk, None], deadline: float
    ) -> AsyncIterator[ChatStreamChunk]:
        """Iterate a provider stream, raising TimeoutError once the deadline passes."""
        loop = asyncio.get_running_loop()
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise TimeoutError
                try:
                    chunk = await asyncio.wait_for(anext(stream), timeout=remaining)
                except StopAsyncIteration:
                    return
                yield chunk
        finally:
            await stream.aclose()

    async def stream_chat_response(
        self, messages: list[ConversationMessage]
    ) -> AsyncGenerator[ChatStreamChunk, None]:
        """
        Stream one assistant turn, executing selectHouses calls along the way.

        Provider errors propagate to the caller unchanged; nothing is retried.
        Running out of steps or time ends the turn with a ``max_steps`` or
        ``timeout`` finish reason after whatever was already streamed.

        Args:
            messages: Full conversation history ending with the new user message

        Yields:
            ChatStreamChunk: Text deltas, executed tool calls, and a final
                chunk with the finish reason

        Raises:
            InvalidHistoryError: If the history cannot start a turn
            OpenAIError: If the model provider fails
        """
        validate_history(messages)

        # Tool schema and instructions are rebuilt from the live catalog every turn
        house_ids = self.catalog.house_ids()
        tools = [build_select_houses_tool(house_ids)]
        instructions = self.build_instructions()
        input_items = to_input_items(messages)
        previous_response_id: str | None = None

        deadline = asyncio.get_running_loop().time() + self.settings.max_duration_seconds
        logger.info(
            "Streaming configurator chat",
            message_count=len(messages),
            max_steps=self.settings.max_steps,
        )

        for step in range(1, self.settings.max_steps + 1):
            executed_calls: list[ToolCall] = []
            response_id: str | None = None
            finish_reason: str | None = None

            stream = self.provider.stream_chat(
                input_items=input_items,
                instructions=instructions,
                tools=tools,
                previous_response_id=previous_response_id,
            )
            try:
                async for chunk in self._until_deadline(stream, deadline):
                    if chunk.content:
                        yield ChatStreamChunk(content=chunk.content)

                    for tool_call in chunk.tool_calls:
                        executed = self._run_tool(tool_call, house_ids)
                        executed_calls.append(executed)
                        yield ChatStreamChunk(tool_calls=[executed])

                    if chunk.finish_reason:
                        finish_reason = chunk.finish_reason
                        response_id = chunk.response_id
            except TimeoutError:
                logger.warning(
                    "[STREAM] Time budget exhausted",
                    step=step,
                    budget_seconds=self.settings.max_duration_seconds,
                )
                yield ChatStreamChunk(finish_reason=FINISH_TIMEOUT)
                return

            if finish_reason == FINISH_INCOMPLETE or not executed_calls:
                logger.info("Configurator turn finished", step=step)
                yield ChatStreamChunk(finish_reason=finish_reason or FINISH_COMPLETED)
                return

            outputs = [
                {
                    "type": "function_call_output",
                    "call_id": call.tool_call_id,
                    "output": tool_output(call.result, call.error),
                }
                for call in executed_calls
            ]
            if response_id:
                previous_response_id = response_id
                input_items = outputs
            else:
                input_items = input_items + [
                    {
                        "type": "function_call",
                        "call_id": call.tool_call_id,
                        "name": call.tool_name,
                        "arguments": call.arguments,
                    }
                    for call in executed_calls
                ] + outputs

        logger.warning("[STREAM] Step budget exhausted", max_steps=self.settings.max_steps)
        yield ChatStreamChunk(finish_reason=FINISH_MAX_STEPS)
