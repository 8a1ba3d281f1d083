"""
Chat session state for the configurator UI.

A session holds what the chat screen shows: the message list, whether a
response is streaming, the houses currently on display and which image tab is
selected. Every external event (user input, stream chunk, tool call, tab
click) is applied as one method call on the session.
"""

import asyncio
from enum import Enum
from typing import Any, AsyncIterable

from src.ai.base import ChatStreamChunk, ToolCall, ToolName, ToolStatus
from src.ai.configurator.config import get_configurator_settings
from src.ai.configurator.constants import WELCOME_MESSAGE, WELCOME_MESSAGE_ID
from src.ai.configurator.exceptions import SelectionValidationError, SessionStateError
from src.ai.configurator.schemas import ConversationMessage, TextPart, ToolInvocationPart
from src.ai.configurator.tools import parse_select_houses
from src.catalog.cards import render_selection
from src.catalog.constants import ImageView
from src.catalog.schemas import HouseRecord, SelectionCards
from src.catalog.service import CatalogService, get_catalog_service
from src.utils.logger import logger


class SessionStatus(str, Enum):
    """Whether a model response is in flight."""

    IDLE = "idle"
    STREAMING = "streaming"


def welcome_message() -> ConversationMessage:
    return ConversationMessage(
        id=WELCOME_MESSAGE_ID,
        role="assistant",
        parts=[TextPart(text=WELCOME_MESSAGE)],
    )


class ConfiguratorSession:
    """State of one configurator chat.

    Attributes:
        messages: Visible history, starting with the welcome message
        status: IDLE or STREAMING
        is_loading: True while a selection is waiting out its display delay
        display_selection: Houses from the latest accepted selectHouses call
        selected_view: Image tab shown on the house cards
    """

    def __init__(
        self,
        catalog: CatalogService | None = None,
        selection_delay: float | None = None,
    ):
        self.catalog = catalog or get_catalog_service()
        self.selection_delay = (
            get_configurator_settings().selection_delay_seconds
            if selection_delay is None
            else selection_delay
        )
        self.messages: list[ConversationMessage] = [welcome_message()]
        self.status = SessionStatus.IDLE
        self.is_loading = False
        self.display_selection: list[HouseRecord] = []
        self.selected_view = ImageView.FACADE
        self._pending_selection: asyncio.Task | None = None
        self._message_count = 0

    def _next_message_id(self) -> str:
        self._message_count += 1
        return f"msg_{self._message_count}"

    def send_message(self, text: str) -> ConversationMessage | None:
        """Append a user message. Blank input is ignored.

        Input is accepted in any state, including while a selection is loading.
        """
        if not text.strip():
            return None
        message = ConversationMessage(
            id=self._next_message_id(), role="user", parts=[TextPart(text=text)]
        )
        self.messages.append(message)
        return message

    def start_stream(self) -> ConversationMessage:
        """Open an assistant message that incoming chunks will fill."""
        if self.status == SessionStatus.STREAMING:
            raise SessionStateError("a response is already streaming")
        self.status = SessionStatus.STREAMING
        message = ConversationMessage(id=self._next_message_id(), role="assistant")
        self.messages.append(message)
        return message

    def finish_stream(self) -> None:
        self.status = SessionStatus.IDLE

    def apply_chunk(self, chunk: ChatStreamChunk) -> None:
        """Apply one stream chunk to the open assistant message, in arrival order.

        Accepted selectHouses calls schedule their display on the running loop,
        so chunks carrying them must be applied from async code.
        """
        if self.status != SessionStatus.STREAMING:
            raise SessionStateError("no response is streaming")

        message = self.messages[-1]
        if chunk.content:
            last_part = message.parts[-1] if message.parts else None
            if isinstance(last_part, TextPart):
                last_part.text += chunk.content
            else:
                message.parts.append(TextPart(text=chunk.content))

        for tool_call in chunk.tool_calls:
            message.parts.append(self._invocation_part(tool_call))
            if (
                tool_call.tool_name == ToolName.SELECT_HOUSES.value
                and tool_call.status != ToolStatus.FAILED
            ):
                self.on_select_houses(tool_call.parsed_arguments())

        if chunk.finish_reason:
            self.finish_stream()

    def _invocation_part(self, tool_call: ToolCall) -> ToolInvocationPart:
        output: dict[str, Any] | None = tool_call.result
        if tool_call.error is not None:
            output = {"success": False, "error": tool_call.error}
        return ToolInvocationPart(
            tool_call_id=tool_call.tool_call_id,
            tool_name=tool_call.tool_name,
            input=tool_call.parsed_arguments(),
            output=output,
        )

    def on_select_houses(self, arguments: str | dict[str, Any]) -> bool:
        """Handle a selectHouses call observed in the stream.

        Valid arguments show the loading skeleton and schedule the new
        selection to replace the current one after the display delay. A newer
        call supersedes one still waiting. Invalid arguments leave the display
        untouched. Scheduling the display needs a running event loop.

        Returns:
            bool: True if the selection was accepted

        Raises:
            SessionStateError: If called outside a running event loop
        """
        try:
            selection = parse_select_houses(arguments, self.catalog.house_ids())
        except SelectionValidationError as e:
            logger.warning("Ignoring invalid selection", error=e.message)
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SessionStateError("selection display needs a running event loop") from e

        if self._pending_selection and not self._pending_selection.done():
            self._pending_selection.cancel()

        self.is_loading = True
        self._pending_selection = loop.create_task(
            self._resolve_after_delay(selection.house_ids)
        )
        return True

    async def _resolve_after_delay(self, house_ids: list[str]) -> None:
        await asyncio.sleep(self.selection_delay)
        self.display_selection = self.catalog.resolve_houses(house_ids)
        self.is_loading = False
        logger.info(
            "Selection displayed",
            house_ids=[house.id for house in self.display_selection],
        )

    async def wait_for_selection(self) -> None:
        """Wait until any pending selection has been displayed."""
        if self._pending_selection is not None:
            try:
                await self._pending_selection
            except asyncio.CancelledError:
                if not self._pending_selection.cancelled():
                    raise

    async def consume(self, stream: AsyncIterable[ChatStreamChunk]) -> None:
        """Apply a whole response stream, leaving the session idle afterwards."""
        self.start_stream()
        try:
            async for chunk in stream:
                self.apply_chunk(chunk)
        finally:
            self.finish_stream()

    def select_view(self, view: ImageView | str) -> None:
        self.selected_view = ImageView(view)

    @property
    def shows_selection_panel(self) -> bool:
        return bool(self.display_selection) or self.is_loading

    def render_cards(self) -> SelectionCards:
        return render_selection(
            self.display_selection, self.selected_view, self.is_loading
        )
