"""Testes para ai/core/agent_runtime.py e ai/core/mock_runtime.py."""

from __future__ import annotations

import json

import pytest

from ai.core import (
    AgentSessionConfig,
    AssistantMessageDelta,
    MockAgentRuntime,
    SessionIdle,
    ToolCallStarted,
    open_agent_session,
)
from ai.core.mock_runtime import recommend_package
from ai.models.accommodation import ACCOMMODATION_PACKAGES
from ai.tools import ACCOMMODATIONS_TOOL
from tests.fakes.fake_agent_runtime import ScriptedAgentRuntime
from utils.errors import AgentRuntimeClosedError


async def _drain(runtime: MockAgentRuntime, prompt: str, config: AgentSessionConfig) -> list:
    async with open_agent_session(runtime, config) as session:
        return [event async for event in session.stream_turn(prompt)]


def _reply(events: list) -> dict:
    text = "".join(e.content for e in events if isinstance(e, AssistantMessageDelta))
    return json.loads(text)


class TestAgentSessionConfig:
    def test_find_tool(self) -> None:
        config = AgentSessionConfig(tools=(ACCOMMODATIONS_TOOL,))
        assert config.find_tool("get_accommodations") is ACCOMMODATIONS_TOOL
        assert config.find_tool("book_room") is None


class TestOpenAgentSession:
    @pytest.mark.asyncio
    async def test_closes_session_on_normal_exit(self) -> None:
        runtime = ScriptedAgentRuntime([SessionIdle()])
        async with open_agent_session(runtime, AgentSessionConfig()) as session:
            assert not session.closed
        assert session.close_calls == 1

    @pytest.mark.asyncio
    async def test_closes_session_on_error(self) -> None:
        runtime = ScriptedAgentRuntime()
        with pytest.raises(RuntimeError, match="boom"):
            async with open_agent_session(runtime, AgentSessionConfig()):
                raise RuntimeError("boom")
        assert runtime.sessions[0].close_calls == 1

    @pytest.mark.asyncio
    async def test_stopped_runtime_refuses_session(self) -> None:
        runtime = ScriptedAgentRuntime(running=False)
        with pytest.raises(AgentRuntimeClosedError):
            async with open_agent_session(runtime, AgentSessionConfig()):
                pass
        assert runtime.sessions == []


class TestRecommendPackage:
    def test_workspace_under_budget_picks_business(self) -> None:
        chosen = recommend_package(
            ACCOMMODATION_PACKAGES, "I need a room with a workspace under $150"
        )
        assert chosen is not None
        assert chosen.package_id == 3

    def test_cheapest_within_budget(self) -> None:
        chosen = recommend_package(ACCOMMODATION_PACKAGES, "a cheap room under 100")
        assert chosen is not None
        assert chosen.package_id == 1

    def test_desk_requirement_is_case_insensitive(self) -> None:
        chosen = recommend_package(ACCOMMODATION_PACKAGES, "I need a DESK")
        assert chosen is not None
        assert chosen.has_amenity("Desk")
        assert chosen.package_id == 3

    def test_no_match(self) -> None:
        assert recommend_package(ACCOMMODATION_PACKAGES, "a desk for $60") is None

    def test_restricted_to_given_packages(self) -> None:
        only_premium = [package for package in ACCOMMODATION_PACKAGES if package.package_id == 4]
        chosen = recommend_package(only_premium, "a room with a desk")
        assert chosen is not None
        assert chosen.package_id == 4


class TestMockAgentRuntime:
    @pytest.mark.asyncio
    async def test_lifecycle_is_idempotent(self) -> None:
        runtime = MockAgentRuntime()
        assert runtime.is_running is False

        await runtime.start()
        assert runtime.is_running is True

        await runtime.stop()
        await runtime.stop()
        assert runtime.is_running is False
        with pytest.raises(AgentRuntimeClosedError, match="not running"):
            await runtime.create_session(AgentSessionConfig())

    @pytest.mark.asyncio
    async def test_lodging_request_invokes_tool(self) -> None:
        runtime = MockAgentRuntime()
        await runtime.start()
        config = AgentSessionConfig(tools=(ACCOMMODATIONS_TOOL,))

        events = await _drain(runtime, "I need a room with a workspace under $150", config)

        assert events[0] == ToolCallStarted(name="get_accommodations", arguments="{}")
        assert isinstance(events[-1], SessionIdle)
        assert _reply(events)["fields"]["accommodation"] == 3

    @pytest.mark.asyncio
    async def test_without_tool_declared_no_tool_call(self) -> None:
        runtime = MockAgentRuntime()
        await runtime.start()

        events = await _drain(runtime, "a room please", AgentSessionConfig())

        assert not any(isinstance(e, ToolCallStarted) for e in events)
        assert _reply(events)["fields"]["accommodation"] is None

    @pytest.mark.asyncio
    async def test_non_streaming_emits_single_delta(self) -> None:
        runtime = MockAgentRuntime()
        await runtime.start()

        events = await _drain(runtime, "hello", AgentSessionConfig(streaming=False))

        deltas = [e for e in events if isinstance(e, AssistantMessageDelta)]
        assert len(deltas) == 1
        assert set(_reply(events)) == {"fields", "message"}
