"""FastAPI router for the house configurator chat with SSE streaming."""

import asyncio
import json
from contextlib import suppress
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from src.ai.base import SSEEvent, ToolCall
from src.ai.configurator.config import get_configurator_settings
from src.ai.configurator.schemas import ChatRequest
from src.ai.configurator.service import HouseConfiguratorService
from src.utils.logger import logger

router = APIRouter(prefix="/chat", tags=["Chat"])


# Singleton service instance
_configurator_service: HouseConfiguratorService | None = None


def get_configurator_service() -> HouseConfiguratorService:
    """
    Get or create the configurator service singleton.

    Returns:
        HouseConfiguratorService: The configurator service instance
    """
    global _configurator_service
    if _configurator_service is None:
        _configurator_service = HouseConfiguratorService()
        logger.info("Initialized HouseConfiguratorService")
    return _configurator_service


def _tool_call_event(tool_call: ToolCall) -> SSEEvent:
    return SSEEvent(
        event="tool_call",
        data=json.dumps(
            {
                "toolCallId": tool_call.tool_call_id,
                "toolName": tool_call.tool_name,
                "input": tool_call.parsed_arguments(),
            }
        ),
    )


def _tool_result_event(tool_call: ToolCall) -> SSEEvent:
    return SSEEvent(
        event="tool_result",
        data=json.dumps(
            {
                "toolCallId": tool_call.tool_call_id,
                "toolName": tool_call.tool_name,
                "status": tool_call.status.value,
                "output": tool_call.result,
                "error": tool_call.error,
            }
        ),
    )


@router.post("/configurator")
async def stream_configurator_chat(
    request: ChatRequest,
    chat_service: Annotated[HouseConfiguratorService, Depends(get_configurator_service)],
) -> StreamingResponse:
    """
    Stream configurator chat responses via Server-Sent Events.

    Args:
        request: Chat request with the full message history
        chat_service: Configurator service dependency

    Returns:
        StreamingResponse: SSE stream of text deltas, tool events and a done marker
    """
    logger.info("Configurator chat request", message_count=len(request.messages))
    logger.info("[USER_INPUT]", input=request.messages[-1].text)

    async def event_generator():
        """Generate SSE events from the chat stream, with heartbeats while idle."""
        heartbeat_interval = get_configurator_settings().heartbeat_interval_seconds
        accumulated_output = ""
        tool_calls_used: list[str] = []
        next_chunk_task: asyncio.Task | None = None

        try:
            stream = chat_service.stream_chat_response(request.messages)
            stream_iter = stream.__aiter__()
            next_chunk_task = asyncio.create_task(stream_iter.__anext__())

            while True:
                done, _ = await asyncio.wait(
                    {next_chunk_task}, timeout=heartbeat_interval
                )

                if next_chunk_task not in done:
                    # Keep the connection alive while the model is thinking
                    yield SSEEvent(event="heartbeat", data="keep-alive").format()
                    continue

                try:
                    chunk = next_chunk_task.result()
                except StopAsyncIteration:
                    break

                next_chunk_task = asyncio.create_task(stream_iter.__anext__())

                for tool_call in chunk.tool_calls:
                    if tool_call.tool_name not in tool_calls_used:
                        tool_calls_used.append(tool_call.tool_name)
                    yield _tool_call_event(tool_call).format()
                    yield _tool_result_event(tool_call).format()

                if chunk.content:
                    accumulated_output += chunk.content
                    # Line breaks would end the SSE data field
                    escaped_content = chunk.content.replace("\r", "\\r").replace(
                        "\n", "\\n"
                    )
                    yield SSEEvent(data=escaped_content).format()

                if chunk.finish_reason:
                    yield SSEEvent(event="done", data=chunk.finish_reason).format()
                    break

            if accumulated_output:
                logger.info("[AGENT_OUTPUT]", output=accumulated_output)
            if tool_calls_used:
                logger.info("[TOOLS_USED]", tools=tool_calls_used)

        except Exception as e:
            logger.error(
                "Error in configurator stream", error=str(e), error_type=type(e).__name__
            )
            yield SSEEvent(event="error", data=str(e)).format()
            yield SSEEvent(event="done", data="error").format()
        finally:
            if next_chunk_task and not next_chunk_task.done():
                next_chunk_task.cancel()
                with suppress(asyncio.CancelledError):
                    await next_chunk_task

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
