"""Testes HTTP dos endpoints /ai/* com runtime roteirizado."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from ai.core.agent_runtime import AssistantMessageDelta, SessionIdle, ToolCallStarted
from app.app import create_app
from tests.fakes.fake_agent_runtime import ScriptedAgentRuntime, reply_deltas
from utils.errors import AgentRuntimeError

REPLY = json.dumps(
    {
        "fields": {
            "full_name": "John Smith",
            "institution": "Health services",
            "role": "Nurse",
            "accommodation": "3",
        },
        "message": "Got it!",
    }
)


def _parse_sse(body: str) -> list[tuple[str, dict]]:
    events = []
    for frame in body.strip().split("\n\n"):
        name_line, data_line = frame.split("\n")
        events.append(
            (name_line.removeprefix("event: "), json.loads(data_line.removeprefix("data: ")))
        )
    return events


@pytest.fixture
def runtime() -> ScriptedAgentRuntime:
    return ScriptedAgentRuntime(
        [ToolCallStarted(name="get_accommodations"), *reply_deltas(REPLY)],
        running=False,
    )


@pytest.fixture
def client(runtime: ScriptedAgentRuntime):
    with TestClient(create_app(agent_runtime=runtime)) as test_client:
        yield test_client


class TestAssistEndpoint:
    def test_streams_sse_events(self, client: TestClient, runtime: ScriptedAgentRuntime) -> None:
        response = client.post(
            "/ai/assist",
            json={"prompt": "I'm John Smith, a nurse", "currentFormState": {"city": "Jakarta"}},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"

        events = _parse_sse(response.text)
        names = [name for name, _ in events]
        assert names[0] == "tool_call"
        assert set(names[1:-2]) == {"delta"}
        assert names[-2:] == ["result", "done"]
        assert "".join(data["text"] for name, data in events if name == "delta") == REPLY

        result = events[-2][1]
        assert result["fields"] == {
            "full_name": "John Smith",
            "email": None,
            "city": None,
            "institution": "Health services",
            "role": "Nurse",
            "position": None,
            "accommodation": 3,
        }
        assert result["message"] == "Got it!"
        assert events[-1][1] == {"success": True}
        assert runtime.sessions[0].close_calls == 1
        assert "Jakarta" in runtime.sessions[0].prompts[0]

    @pytest.mark.parametrize(
        "body",
        [{}, {"prompt": ""}, {"prompt": "  "}, {"prompt": "hi", "currentFormState": [1]}],
    )
    def test_invalid_body_is_422_without_session(
        self, client: TestClient, runtime: ScriptedAgentRuntime, body: dict
    ) -> None:
        response = client.post("/ai/assist", json=body)

        assert response.status_code == 422
        assert runtime.sessions == []

    def test_runtime_error_becomes_error_event(self) -> None:
        runtime = ScriptedAgentRuntime([ConnectionError("upstream reset")])
        with TestClient(create_app(agent_runtime=runtime)) as client:
            response = client.post("/ai/assist", json={"prompt": "hi"})

        assert response.status_code == 200
        assert _parse_sse(response.text) == [("error", {"message": "upstream reset"})]

    def test_stopped_runtime_is_503(self) -> None:
        runtime = ScriptedAgentRuntime(running=False)
        client = TestClient(create_app(agent_runtime=runtime))

        response = client.post("/ai/assist", json={"prompt": "hi"})

        assert response.status_code == 503
        assert response.json() == {"detail": "Agent runtime is not running"}
        assert runtime.sessions == []


class TestChatEndpoints:
    def test_hello(self) -> None:
        runtime = ScriptedAgentRuntime([AssistantMessageDelta(content="Hi!"), SessionIdle()])
        with TestClient(create_app(agent_runtime=runtime)) as client:
            response = client.post("/ai/hello", json={"prompt": "Say hi"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "prompt": "Say hi", "answer": "Hi!"}
        assert runtime.sessions[0].config.streaming is False

    def test_hello_runtime_failure_is_502(self) -> None:
        runtime = ScriptedAgentRuntime([AgentRuntimeError("model unavailable")])
        with TestClient(create_app(agent_runtime=runtime)) as client:
            response = client.post("/ai/hello", json={"prompt": "Say hi"})

        assert response.status_code == 502
        assert response.json() == {"detail": "model unavailable"}

    def test_stream(self) -> None:
        runtime = ScriptedAgentRuntime(
            [
                AssistantMessageDelta(content="Hel"),
                AssistantMessageDelta(content="lo"),
                SessionIdle(),
            ]
        )
        with TestClient(create_app(agent_runtime=runtime)) as client:
            response = client.post("/ai/stream", json={"prompt": "hello", "model": "gpt-4o"})

        assert _parse_sse(response.text) == [
            ("delta", {"text": "Hel"}),
            ("delta", {"text": "lo"}),
            ("done", {"success": True}),
        ]
        assert runtime.sessions[0].config.model == "gpt-4o"


class TestAppSurface:
    def test_field_options(self, client: TestClient) -> None:
        payload = client.get("/ai/field-options").json()

        assert payload["institutions"] == ["Industry", "Academia", "Health services", "Government"]
        assert payload["roles"]["Industry"] == ["Management", "R&D", "QA", "Production"]
        assert [p["packageId"] for p in payload["packages"]] == [1, 2, 3, 4]

    def test_institution_options(self, client: TestClient) -> None:
        response = client.get("/ai/field-options/Health services")

        assert response.status_code == 200
        assert response.json() == {
            "roles": ["Physician", "Nurse", "Pharmacist", "Allied Health"],
            "positions": ["Senior", "Junior", "Resident"],
        }

    def test_unknown_institution_options_are_empty(self, client: TestClient) -> None:
        response = client.get("/ai/field-options/Hogwarts")

        assert response.status_code == 200
        assert response.json() == {"roles": [], "positions": []}

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/health", headers={"x-correlation-id": "req-42"})
        assert response.headers["x-correlation-id"] == "req-42"

    def test_correlation_id_is_generated(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.headers["x-correlation-id"]

    def test_lifespan_starts_and_stops_runtime(self, runtime: ScriptedAgentRuntime) -> None:
        with TestClient(create_app(agent_runtime=runtime)) as client:
            assert client.get("/ready").status_code == 200
            assert runtime.is_running is True

        assert runtime.start_calls == 1
        assert runtime.stop_calls == 1
        assert runtime.is_running is False
