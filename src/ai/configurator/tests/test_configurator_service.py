"""Tests for the configurator chat orchestration."""

import json

import pytest

from src.ai.base import ChatStreamChunk, ToolCall, ToolStatus
from src.ai.configurator.config import ConfiguratorSettings
from src.ai.configurator.constants import CATALOG_SECTION_HEADER
from src.ai.configurator.exceptions import InvalidHistoryError
from src.ai.configurator.schemas import ConversationMessage, TextPart, ToolInvocationPart
from src.ai.configurator.service import HouseConfiguratorService, to_input_items
from src.ai.configurator.tests.fakes import (
    ScriptedProvider,
    SlowProvider,
    completed,
    select_call,
    text,
)
from src.ai.openai.exceptions import OpenAIContentGenerationError
from src.catalog.service import CatalogService


def user(content: str) -> ConversationMessage:
    return ConversationMessage(role="user", parts=[TextPart(text=content)])


def make_service(provider, **settings) -> HouseConfiguratorService:
    return HouseConfiguratorService(
        provider=provider,
        catalog=CatalogService(),
        settings=ConfiguratorSettings(**settings),
    )


async def collect(service, messages) -> list[ChatStreamChunk]:
    return [chunk async for chunk in service.stream_chat_response(messages)]


class TestToInputItems:
    """Test suite for history conversion."""

    def test_text_messages(self):
        messages = [
            ConversationMessage(role="assistant", parts=[TextPart(text="Hola!")]),
            ConversationMessage(
                role="user", parts=[TextPart(text="Somos "), TextPart(text="cuatro")]
            ),
        ]

        assert to_input_items(messages) == [
            {"role": "assistant", "content": "Hola!"},
            {"role": "user", "content": "Somos cuatro"},
        ]

    def test_tool_invocations_become_call_and_output(self):
        messages = [
            ConversationMessage(
                role="assistant",
                parts=[
                    TextPart(text="Estas opciones:"),
                    ToolInvocationPart(
                        tool_call_id="call_1",
                        tool_name="selectHouses",
                        input={"houseIds": ["xsa"]},
                        output={"success": True},
                    ),
                    TextPart(text="¿Cuál preferís?"),
                ],
            )
        ]

        assert to_input_items(messages) == [
            {"role": "assistant", "content": "Estas opciones:"},
            {
                "type": "function_call",
                "call_id": "call_1",
                "name": "selectHouses",
                "arguments": json.dumps({"houseIds": ["xsa"]}),
            },
            {
                "type": "function_call_output",
                "call_id": "call_1",
                "output": json.dumps({"success": True}),
            },
            {"role": "assistant", "content": "¿Cuál preferís?"},
        ]

    def test_unanswered_invocations_are_dropped(self):
        messages = [
            ConversationMessage(
                role="assistant",
                parts=[
                    ToolInvocationPart(
                        tool_call_id="call_1", tool_name="selectHouses", input={}
                    )
                ],
            )
        ]
        assert to_input_items(messages) == []


class TestHouseConfiguratorService:
    """Test suite for HouseConfiguratorService.stream_chat_response."""

    @pytest.mark.asyncio
    async def test_text_only_turn(self):
        provider = ScriptedProvider([[text("Hola"), text(" mundo"), completed("resp_1")]])
        service = make_service(provider)

        chunks = await collect(service, [user("Somos una pareja")])

        assert "".join(chunk.content for chunk in chunks) == "Hola mundo"
        assert chunks[-1].finish_reason == "completed"
        assert len(provider.requests) == 1

        request = provider.requests[0]
        assert request["input_items"] == [{"role": "user", "content": "Somos una pareja"}]
        assert request["previous_response_id"] is None
        assert CATALOG_SECTION_HEADER in request["instructions"]
        assert '"xsa"' in request["instructions"]
        assert "MOOD" in request["instructions"]
        enum = request["tools"][0]["parameters"]["properties"]["houseIds"]["items"]["enum"]
        assert enum == CatalogService().house_ids()

    @pytest.mark.asyncio
    async def test_tool_call_then_answer(self):
        provider = ScriptedProvider(
            [
                [
                    text("Tengo dos opciones."),
                    select_call("call_1", '{"houseIds": ["xsa", "sa"]}'),
                    completed("resp_1"),
                ],
                [text("¿Cuál te gusta más?"), completed("resp_2")],
            ]
        )
        service = make_service(provider)

        chunks = await collect(service, [user("Somos dos")])

        tool_chunks = [chunk for chunk in chunks if chunk.tool_calls]
        assert len(tool_chunks) == 1
        executed = tool_chunks[0].tool_calls[0]
        assert executed.status == ToolStatus.COMPLETE
        assert executed.result == {"success": True}
        assert executed.error is None

        assert len(provider.requests) == 2
        follow_up = provider.requests[1]
        assert follow_up["previous_response_id"] == "resp_1"
        assert follow_up["input_items"] == [
            {
                "type": "function_call_output",
                "call_id": "call_1",
                "output": json.dumps({"success": True}),
            }
        ]
        assert chunks[-1].finish_reason == "completed"
        assert "".join(c.content for c in chunks) == "Tengo dos opciones.¿Cuál te gusta más?"

    @pytest.mark.asyncio
    async def test_invalid_selection_is_reported_back_to_model(self):
        provider = ScriptedProvider(
            [
                [select_call("call_1", '{"houseIds": ["xsa", "not-a-real-id"]}'), completed("resp_1")],
                [select_call("call_2", '{"houseIds": ["xsa"]}'), completed("resp_2")],
                [text("Listo"), completed("resp_3")],
            ]
        )
        service = make_service(provider)

        chunks = await collect(service, [user("Somos dos")])

        calls = [call for chunk in chunks for call in chunk.tool_calls]
        assert [call.status for call in calls] == [ToolStatus.FAILED, ToolStatus.COMPLETE]
        assert "not-a-real-id" in calls[0].error

        rejected_output = json.loads(provider.requests[1]["input_items"][0]["output"])
        assert rejected_output["success"] is False
        assert "not-a-real-id" in rejected_output["error"]
        assert chunks[-1].finish_reason == "completed"

    @pytest.mark.asyncio
    async def test_unknown_tool_is_not_executed(self):
        unknown = ChatStreamChunk(
            tool_calls=[ToolCall(tool_call_id="call_1", tool_name="deleteHouses")]
        )
        provider = ScriptedProvider([[unknown, completed("resp_1")], [completed("resp_2")]])
        service = make_service(provider)

        chunks = await collect(service, [user("hola")])

        call = chunks[0].tool_calls[0]
        assert call.status == ToolStatus.FAILED
        assert "deleteHouses" in call.error

    @pytest.mark.asyncio
    async def test_without_response_id_history_is_resent(self):
        provider = ScriptedProvider(
            [
                [select_call("call_1", '{"houseIds": []}'), completed()],
                [completed()],
            ]
        )
        service = make_service(provider)

        await collect(service, [user("hola")])

        follow_up = provider.requests[1]
        assert follow_up["previous_response_id"] is None
        assert follow_up["input_items"] == [
            {"role": "user", "content": "hola"},
            {
                "type": "function_call",
                "call_id": "call_1",
                "name": "selectHouses",
                "arguments": '{"houseIds": []}',
            },
            {
                "type": "function_call_output",
                "call_id": "call_1",
                "output": json.dumps({"success": True}),
            },
        ]

    @pytest.mark.asyncio
    async def test_step_budget_ends_turn(self):
        looping = [
            [select_call(f"call_{i}", '{"houseIds": ["xsa"]}'), completed(f"resp_{i}")]
            for i in range(5)
        ]
        provider = ScriptedProvider(looping)
        service = make_service(provider, max_steps=3)

        chunks = await collect(service, [user("hola")])

        assert len(provider.requests) == 3
        assert chunks[-1].finish_reason == "max_steps"
        assert sum(len(chunk.tool_calls) for chunk in chunks) == 3

    @pytest.mark.asyncio
    async def test_time_budget_keeps_partial_output(self):
        provider = SlowProvider(stall_seconds=5)
        service = make_service(provider, max_duration_seconds=0.2)

        chunks = await collect(service, [user("hola")])

        assert [chunk.content for chunk in chunks if chunk.content] == ["Hola"]
        assert chunks[-1].finish_reason == "timeout"
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_incomplete_response_ends_turn(self):
        provider = ScriptedProvider(
            [
                [
                    select_call("call_1", '{"houseIds": ["xsa"]}'),
                    ChatStreamChunk(finish_reason="incomplete", response_id="resp_1"),
                ]
            ]
        )
        service = make_service(provider)

        chunks = await collect(service, [user("hola")])

        assert chunks[-1].finish_reason == "incomplete"
        assert len(provider.requests) == 1

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self):
        provider = ScriptedProvider([], error=OpenAIContentGenerationError("boom"))
        service = make_service(provider)

        with pytest.raises(OpenAIContentGenerationError):
            await collect(service, [user("hola")])
        assert len(provider.requests) == 1

    @pytest.mark.asyncio
    async def test_invalid_history_rejected_before_model_call(self):
        provider = ScriptedProvider([])
        service = make_service(provider)

        with pytest.raises(InvalidHistoryError):
            await collect(
                service,
                [ConversationMessage(role="assistant", parts=[TextPart(text="Hola")])],
            )
        with pytest.raises(InvalidHistoryError):
            await collect(service, [])
        assert provider.requests == []
