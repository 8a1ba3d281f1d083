"""OpenAI provider implementation."""

from typing import Any, AsyncGenerator

import httpx
from braintrust import init_logger, wrap_openai
from openai import APIError, AsyncOpenAI
from openai.types.responses import (
    ResponseCompletedEvent,
    ResponseErrorEvent,
    ResponseFailedEvent,
    ResponseFunctionToolCall,
    ResponseIncompleteEvent,
    ResponseOutputItemDoneEvent,
    ResponseTextDeltaEvent,
)
from openai.types.responses.response_create_params import (
    Reasoning as ReasoningParam,
)
from openai.types.responses.response_create_params import (
    ResponseCreateParamsStreaming,
    ResponseTextConfigParam,
)
from openai.types.shared import ReasoningEffort

from src.ai.base import AIProvider, ChatStreamChunk, ToolCall
from src.ai.openai.config import get_openai_settings
from src.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
    OpenAIError,
)
from src.utils.logger import logger


class OpenAIProvider(AIProvider):
    """OpenAI provider implementation.

    Streams responses from the Responses API and reports function calls the
    model makes so the caller can execute them and continue the response.
    """

    def __init__(self, enable_braintrust: bool | None = None):
        """Initialize OpenAI provider.

        Args:
            enable_braintrust: Whether to enable Braintrust tracing for this
                provider instance. Defaults to the OPENAI_ENABLE_BRAINTRUST setting.
        """
        self.settings = get_openai_settings()
        self._client: AsyncOpenAI | None = None
        self.enable_braintrust = (
            self.settings.enable_braintrust
            if enable_braintrust is None
            else enable_braintrust
        )

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client.

        Automatically wraps the client with Braintrust tracing if enabled.
        """
        if self._client is None:
            try:
                timeout = httpx.Timeout(
                    timeout=self.settings.request_timeout,
                    connect=10.0,
                )
                client = AsyncOpenAI(api_key=self.settings.api_key, timeout=timeout)

                if self.enable_braintrust:
                    init_logger(project=self.settings.braintrust_project_name)
                    client = wrap_openai(client)
                    logger.info(
                        "[OPENAI] Client initialized with Braintrust tracing",
                        project=self.settings.braintrust_project_name,
                    )

                self._client = client
                logger.info(
                    "[OPENAI] Client initialized",
                    timeout_seconds=self.settings.request_timeout,
                )
            except Exception as e:
                logger.error("[OPENAI] Failed to initialize client", error=str(e))
                raise OpenAIAuthenticationError(
                    f"Failed to authenticate with OpenAI: {e}", e
                )
        return self._client

    def _is_reasoning_model(self, model: str) -> bool:
        """Check if a model is a reasoning model.

        Args:
            model: Model name

        Returns:
            True if reasoning model (gpt-5, o1, o3), False otherwise
        """
        return any(model.startswith(prefix) for prefix in ["gpt-5", "o1", "o3"])

    def _build_stream_params(
        self,
        input_items: list[dict[str, Any]],
        instructions: str | None = None,
        tools: list[dict[str, Any]] | None = None,
        previous_response_id: str | None = None,
        **kwargs,
    ) -> ResponseCreateParamsStreaming:
        """Build Responses API parameters for a streamed request.

        Args:
            input_items: Conversation items for this request
            instructions: Optional system prompt
            tools: Optional function tool definitions
            previous_response_id: Response to continue from
            **kwargs: model, reasoning_effort, text_verbosity, max_output_tokens,
                temperature, max_tokens

        Returns:
            ResponseCreateParamsStreaming: Params for client.responses.create
        """
        model = kwargs.get("model") or self.settings.model_name
        is_reasoning_model = self._is_reasoning_model(model)

        stream_params: ResponseCreateParamsStreaming = {
            "model": model,
            "input": input_items,  # type: ignore[typeddict-item]
            "stream": True,
        }

        if instructions:
            stream_params["instructions"] = instructions

        if tools:
            stream_params["tools"] = tools  # type: ignore[typeddict-item]

        if previous_response_id:
            stream_params["previous_response_id"] = previous_response_id

        if is_reasoning_model:
            reasoning_effort: ReasoningEffort | None = kwargs.get(
                "reasoning_effort", self.settings.reasoning_effort
            )
            if reasoning_effort:
                stream_params["reasoning"] = ReasoningParam(effort=reasoning_effort)

            text_verbosity = kwargs.get("text_verbosity", self.settings.text_verbosity)
            if text_verbosity:
                stream_params["text"] = ResponseTextConfigParam(
                    verbosity=text_verbosity
                )

            max_output_tokens = kwargs.get(
                "max_output_tokens", self.settings.max_tokens
            )
            if max_output_tokens:
                stream_params["max_output_tokens"] = max_output_tokens

            if "temperature" in kwargs:
                logger.warning(
                    "[OPENAI] temperature parameter ignored for reasoning model",
                    model=model,
                )
        else:
            temperature = kwargs.get("temperature", self.settings.temperature)
            max_tokens = kwargs.get("max_tokens", self.settings.max_tokens)

            if temperature is not None:
                stream_params["temperature"] = temperature
            if max_tokens:
                stream_params["max_output_tokens"] = max_tokens

        logger.debug(
            "[OPENAI] Stream params",
            model=model,
            input_items=len(input_items),
            has_instructions=bool(instructions),
            tool_count=len(tools or []),
            continues_response=bool(previous_response_id),
        )

        return stream_params

    def _handle_output_item_done(self, event: ResponseOutputItemDoneEvent) -> ToolCall | None:
        """Turn a finished function_call output item into a ToolCall.

        Args:
            event: Output item done event from OpenAI

        Returns:
            ToolCall for function calls, None for any other item
        """
        item = event.item
        if not isinstance(item, ResponseFunctionToolCall):
            return None

        logger.info(
            "[TOOL] Function call received",
            tool_name=item.name,
            call_id=item.call_id,
        )
        return ToolCall(
            tool_call_id=item.call_id,
            tool_name=item.name,
            arguments=item.arguments or "{}",
        )

    async def stream_chat(
        self,
        input_items: list[dict[str, Any]],
        instructions: str | None = None,
        tools: list[dict[str, Any]] | None = None,
        previous_response_id: str | None = None,
        **kwargs,
    ) -> AsyncGenerator[ChatStreamChunk, None]:
        """Stream one model response from the Responses API.

        Text deltas are yielded as they arrive. Function calls are yielded once
        their arguments are complete. The final chunk carries the finish reason
        and the response ID.

        Args:
            input_items: Conversation items (messages, function calls and outputs)
            instructions: Optional system prompt/instructions
            tools: Optional function tool definitions
            previous_response_id: Response to continue from
            **kwargs: Provider-specific options (see _build_stream_params)

        Yields:
            ChatStreamChunk: Stream chunks

        Raises:
            OpenAIContentGenerationError: If the request fails or the response errors out
        """
        client = self._get_client()
        stream_params = self._build_stream_params(
            input_items=input_items,
            instructions=instructions,
            tools=tools,
            previous_response_id=previous_response_id,
            **kwargs,
        )

        try:
            logger.info("[STREAM] Creating stream with OpenAI Responses API...")
            stream = await client.responses.create(**stream_params)

            async for event in stream:
                if isinstance(event, ResponseTextDeltaEvent):
                    if event.delta:
                        yield ChatStreamChunk(content=event.delta)

                elif isinstance(event, ResponseOutputItemDoneEvent):
                    tool_call = self._handle_output_item_done(event)
                    if tool_call:
                        yield ChatStreamChunk(tool_calls=[tool_call])

                elif isinstance(event, ResponseCompletedEvent):
                    logger.info("[STREAM] Completed successfully")
                    yield ChatStreamChunk(
                        finish_reason="completed", response_id=event.response.id
                    )

                elif isinstance(event, ResponseIncompleteEvent):
                    details = event.response.incomplete_details
                    logger.warning(
                        "[STREAM] Response incomplete",
                        reason=details.reason if details else None,
                    )
                    yield ChatStreamChunk(
                        finish_reason="incomplete", response_id=event.response.id
                    )

                elif isinstance(event, ResponseFailedEvent):
                    error = event.response.error
                    message = error.message if error else "response failed"
                    logger.error("[STREAM] Failed", error=message)
                    raise OpenAIContentGenerationError(
                        f"Model response failed: {message}",
                        code=error.code if error else None,
                    )

                elif isinstance(event, ResponseErrorEvent):
                    logger.error("[STREAM] Error event", error=event.message, code=event.code)
                    raise OpenAIContentGenerationError(
                        f"Model stream error: {event.message}", code=event.code
                    )

                else:
                    # Lifecycle and argument-delta events carry nothing we forward
                    continue

        except OpenAIError:
            raise
        except APIError as e:
            logger.error("[STREAM] OpenAI API error", error=str(e), code=e.code)
            raise OpenAIContentGenerationError(f"Streaming chat failed: {e}", e, code=e.code)
        except Exception as e:
            logger.error("[STREAM] Streaming chat failed", error=str(e))
            raise OpenAIContentGenerationError(f"Streaming chat failed: {e}", e)
