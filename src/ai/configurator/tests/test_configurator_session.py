"""Tests for the configurator chat session state."""

import asyncio

import pytest

from src.ai.base import ChatStreamChunk, ToolCall, ToolStatus
from src.ai.configurator.constants import WELCOME_MESSAGE, WELCOME_MESSAGE_ID
from src.ai.configurator.exceptions import SessionStateError
from src.ai.configurator.schemas import TextPart, ToolInvocationPart
from src.ai.configurator.session import ConfiguratorSession, SessionStatus
from src.ai.configurator.tests.fakes import completed, select_call, text
from src.catalog.constants import SKELETON_CARD_COUNT, ImageView
from src.catalog.service import CatalogService


@pytest.fixture
def session():
    return ConfiguratorSession(catalog=CatalogService(), selection_delay=0)


async def stream_of(*chunks: ChatStreamChunk):
    for chunk in chunks:
        yield chunk


class TestSessionMessages:
    """Test suite for message handling."""

    def test_starts_with_welcome_message(self, session):
        assert len(session.messages) == 1
        welcome = session.messages[0]
        assert welcome.id == WELCOME_MESSAGE_ID
        assert welcome.role == "assistant"
        assert welcome.text == WELCOME_MESSAGE
        assert session.status == SessionStatus.IDLE
        assert not session.shows_selection_panel

    def test_welcome_lines_end_in_hard_breaks(self):
        lines = WELCOME_MESSAGE.split("\n")

        assert "### Sobre MOOD  " in lines
        assert all(line.endswith("  ") for line in lines if line)
        assert WELCOME_MESSAGE.endswith("✨  \n")

    def test_send_message_appends_user_message(self, session):
        message = session.send_message("Somos una familia de cuatro")

        assert message is not None
        assert message.role == "user"
        assert session.messages[-1] is message
        assert message.text == "Somos una familia de cuatro"

    def test_blank_input_is_ignored(self, session):
        assert session.send_message("   ") is None
        assert len(session.messages) == 1

    def test_message_ids_are_unique(self, session):
        first = session.send_message("uno")
        session.start_stream()
        session.finish_stream()
        second = session.send_message("dos")

        ids = [message.id for message in session.messages]
        assert len(set(ids)) == len(ids)
        assert first.id != second.id

    def test_cannot_start_two_streams(self, session):
        session.start_stream()
        with pytest.raises(SessionStateError):
            session.start_stream()

    def test_chunks_require_an_open_stream(self, session):
        with pytest.raises(SessionStateError):
            session.apply_chunk(text("hola"))


class TestSessionStreaming:
    """Test suite for applying stream chunks."""

    @pytest.mark.asyncio
    async def test_text_deltas_are_concatenated(self, session):
        session.send_message("hola")
        await session.consume(stream_of(text("Ho"), text("la!"), completed()))

        reply = session.messages[-1]
        assert reply.role == "assistant"
        assert reply.text == "Hola!"
        assert len(reply.parts) == 1
        assert session.status == SessionStatus.IDLE

    @pytest.mark.asyncio
    async def test_parts_keep_arrival_order(self, session):
        session.send_message("Somos dos")
        await session.consume(
            stream_of(
                text("Mirá "),
                text("estas:"),
                select_call("call_1", '{"houseIds": ["xsa"]}'),
                text("¿Te gustan?"),
                completed(),
            )
        )

        parts = session.messages[-1].parts
        assert [type(part) for part in parts] == [TextPart, ToolInvocationPart, TextPart]
        assert parts[0].text == "Mirá estas:"
        assert parts[1].tool_call_id == "call_1"
        assert parts[1].input == {"houseIds": ["xsa"]}
        assert parts[2].text == "¿Te gustan?"

    @pytest.mark.asyncio
    async def test_finish_reason_returns_to_idle(self, session):
        session.start_stream()
        session.apply_chunk(text("Hola"))
        assert session.status == SessionStatus.STREAMING

        session.apply_chunk(completed())
        assert session.status == SessionStatus.IDLE

    @pytest.mark.asyncio
    async def test_stream_error_still_returns_to_idle(self, session):
        async def broken():
            yield text("Ho")
            raise RuntimeError("connection lost")

        with pytest.raises(RuntimeError):
            await session.consume(broken())
        assert session.status == SessionStatus.IDLE
        assert session.messages[-1].text == "Ho"

    @pytest.mark.asyncio
    async def test_failed_tool_call_records_error(self, session):
        failed = ChatStreamChunk(
            tool_calls=[
                ToolCall(
                    tool_call_id="call_1",
                    tool_name="selectHouses",
                    arguments='{"houseIds": ["nope"]}',
                    status=ToolStatus.FAILED,
                    error="unknown house IDs: nope",
                )
            ]
        )
        session.start_stream()
        session.apply_chunk(failed)

        part = session.messages[-1].parts[0]
        assert part.output == {"success": False, "error": "unknown house IDs: nope"}
        assert not session.is_loading
        assert session.display_selection == []


class TestSessionSelection:
    """Test suite for selection display."""

    @pytest.mark.asyncio
    async def test_selection_shows_loading_then_houses(self):
        session = ConfiguratorSession(catalog=CatalogService(), selection_delay=0.05)

        assert session.on_select_houses({"houseIds": ["xsa", "ma"]}) is True
        assert session.is_loading
        assert session.shows_selection_panel
        loading = session.render_cards()
        assert loading.is_loading
        assert len(loading.cards) == SKELETON_CARD_COUNT

        await session.wait_for_selection()

        assert not session.is_loading
        assert [house.id for house in session.display_selection] == ["xsa", "ma"]
        cards = session.render_cards()
        assert not cards.is_loading
        assert [card.id for card in cards.cards] == ["xsa", "ma"]

    @pytest.mark.asyncio
    async def test_newer_selection_supersedes_pending_one(self):
        session = ConfiguratorSession(catalog=CatalogService(), selection_delay=0.05)

        session.on_select_houses({"houseIds": ["xsa"]})
        await asyncio.sleep(0.01)
        session.on_select_houses({"houseIds": ["lp", "xlp"]})
        await session.wait_for_selection()

        assert [house.id for house in session.display_selection] == ["lp", "xlp"]
        assert not session.is_loading

    @pytest.mark.asyncio
    async def test_invalid_selection_leaves_display_untouched(self, session):
        session.on_select_houses({"houseIds": ["sa"]})
        await session.wait_for_selection()

        assert session.on_select_houses({"houseIds": ["sa", "not-a-real-id"]}) is False
        assert session.on_select_houses('{"houseIds": "sa"}') is False
        assert session.on_select_houses("not json") is False

        assert not session.is_loading
        assert [house.id for house in session.display_selection] == ["sa"]

    @pytest.mark.asyncio
    async def test_empty_selection_hides_panel(self, session):
        session.on_select_houses({"houseIds": ["sa"]})
        await session.wait_for_selection()
        assert session.shows_selection_panel

        session.on_select_houses({"houseIds": []})
        await session.wait_for_selection()

        assert session.display_selection == []
        assert not session.shows_selection_panel

    @pytest.mark.asyncio
    async def test_stream_tool_call_triggers_selection(self, session):
        session.send_message("Somos dos")
        await session.consume(
            stream_of(select_call("call_1", '{"houseIds": ["xla"]}'), completed())
        )
        await session.wait_for_selection()

        assert [house.id for house in session.display_selection] == ["xla"]

    @pytest.mark.asyncio
    async def test_user_can_type_while_loading(self):
        session = ConfiguratorSession(catalog=CatalogService(), selection_delay=0.05)
        session.on_select_houses({"houseIds": ["xsa"]})

        assert session.send_message("¿y algo más grande?") is not None
        await session.wait_for_selection()

    @pytest.mark.asyncio
    async def test_select_view_changes_card_images(self, session):
        session.on_select_houses({"houseIds": ["xsa"]})
        await session.wait_for_selection()

        session.select_view("layout")
        assert session.selected_view == ImageView.LAYOUT

        card = session.render_cards().cards[0]
        assert card.image_src.endswith("/XS_A/XS_A_layout.jpg")

    def test_select_view_rejects_unknown_tab(self, session):
        with pytest.raises(ValueError):
            session.select_view("aerial")

    def test_selection_outside_event_loop_is_rejected(self, session):
        """Accepted selections need a running loop to schedule their display."""
        session.start_stream()

        with pytest.raises(SessionStateError):
            session.apply_chunk(select_call("call_1", '{"houseIds": ["xsa"]}'))

        assert not session.is_loading
        assert session.display_selection == []
