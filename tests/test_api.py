import pytest
from fastapi.testclient import TestClient

from post_enhancer.api.app import _is_missing, app, service
from post_enhancer.api.schemas import REQUIRED_FIELDS
from post_enhancer.config import Settings
from post_enhancer.providers.llm.base import ProviderResponse
from post_enhancer.workflow.generation import PostGenerationWorkflow

client = TestClient(app)

VALID_BODY = {
    "context": "Acme builds open-source observability tooling.",
    "idea": "We just shipped distributed tracing for edge functions.",
    "audience": "Platform engineers",
    "tone": "informational",
    "cta": "Ask a Question",
}


class _StubProvider:
    def __init__(self, response: ProviderResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or ProviderResponse(text="Example post text", finish_reason="STOP")
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt, config) -> ProviderResponse:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def _install(monkeypatch, provider: _StubProvider, api_key: str = "test-key") -> None:
    settings = Settings(AI_PROVIDER_API_KEY=api_key)
    monkeypatch.setattr(service, "workflow", PostGenerationWorkflow(settings=settings, provider=provider))


def test_healthz() -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_generate_returns_post_unmodified(monkeypatch) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider)

    resp = client.post("/api/generate", json=VALID_BODY)
    assert resp.status_code == 200
    assert resp.json() == {"post": "Example post text"}
    assert len(provider.prompts) == 1
    assert VALID_BODY["context"] in provider.prompts[0]
    assert VALID_BODY["idea"] in provider.prompts[0]


def test_generate_keeps_markdown_and_whitespace(monkeypatch) -> None:
    raw = "  **Big news** 🚀\n\n---\n# What do you think?\n#Tracing #DevOps #Edge\n"
    _install(monkeypatch, _StubProvider(response=ProviderResponse(text=raw)))

    resp = client.post("/api/generate", json=VALID_BODY)
    assert resp.status_code == 200
    assert resp.json()["post"] == raw


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_missing_field_is_rejected_without_provider_call(monkeypatch, field: str) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider)
    body = {key: value for key, value in VALID_BODY.items() if key != field}

    resp = client.post("/api/generate", json=body)
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error.startswith("Missing required fields in request")
    assert field in error
    assert provider.prompts == []


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
@pytest.mark.parametrize("value", ["", None])
def test_empty_or_null_field_is_rejected(monkeypatch, field: str, value) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider)

    resp = client.post("/api/generate", json={**VALID_BODY, field: value})
    assert resp.status_code == 400
    assert field in resp.json()["error"]
    assert provider.prompts == []


def test_missing_fields_are_listed_in_order(monkeypatch) -> None:
    _install(monkeypatch, _StubProvider())
    resp = client.post("/api/generate", json={"audience": "Founders", "tone": "casual"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields in request: context, idea, cta."}


def test_empty_body_is_rejected(monkeypatch) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider)
    resp = client.post("/api/generate", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields in request: context, idea, audience, tone, cta."
    assert provider.prompts == []


def test_unknown_tone_is_rejected(monkeypatch) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider)
    resp = client.post("/api/generate", json={**VALID_BODY, "tone": "sarcastic"})
    assert resp.status_code == 400
    assert "formal, casual, inspirational, informational" in resp.json()["error"]
    assert provider.prompts == []


def test_malformed_json_is_rejected(monkeypatch) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider)
    resp = client.post(
        "/api/generate",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]
    assert provider.prompts == []


def test_blocked_prompt_returns_500_with_reason(monkeypatch) -> None:
    _install(monkeypatch, _StubProvider(response=ProviderResponse(text="", block_reason="SAFETY")))

    resp = client.post("/api/generate", json=VALID_BODY)
    assert resp.status_code == 500
    error = resp.json()["error"]
    assert "SAFETY" in error
    assert "blocked for safety reasons" in error


def test_partially_blocked_candidate_returns_500(monkeypatch) -> None:
    provider = _StubProvider(response=ProviderResponse(text="Partial post cut", finish_reason="SAFETY"))
    _install(monkeypatch, provider)

    resp = client.post("/api/generate", json=VALID_BODY)
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Failed to generate post. Reason: Request was blocked for safety reasons: SAFETY"
    }
    assert len(provider.prompts) == 1


def test_empty_provider_text_returns_500(monkeypatch) -> None:
    _install(monkeypatch, _StubProvider(response=ProviderResponse(text="", finish_reason="STOP")))

    resp = client.post("/api/generate", json=VALID_BODY)
    assert resp.status_code == 500
    assert "empty response" in resp.json()["error"]


def test_provider_failure_returns_500(monkeypatch) -> None:
    _install(monkeypatch, _StubProvider(error=RuntimeError("upstream unavailable")))

    resp = client.post("/api/generate", json=VALID_BODY)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate post. Reason: upstream unavailable"}


def test_missing_api_key_fails_every_request_without_provider_call(monkeypatch) -> None:
    provider = _StubProvider()
    _install(monkeypatch, provider, api_key="")

    for _ in range(2):
        resp = client.post("/api/generate", json=VALID_BODY)
        assert resp.status_code == 500
        assert resp.json() == {"error": "AI_PROVIDER_API_KEY is not set in environment variables."}
    assert provider.prompts == []


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        ({"type": "missing", "loc": ("body", "idea"), "input": {}}, True),
        ({"type": "string_too_short", "loc": ("body", "idea"), "input": ""}, True),
        ({"type": "string_type", "loc": ("body", "idea"), "input": None}, True),
        ({"type": "literal_error", "loc": ("body", "tone"), "input": ""}, True),
        ({"type": "literal_error", "loc": ("body", "tone"), "input": "sarcastic"}, False),
        ({"type": "string_type", "loc": ("body", "idea"), "input": 0}, False),
        ({"type": "string_type", "loc": ("body", "idea")}, False),
    ],
)
def test_is_missing(error: dict, expected: bool) -> None:
    assert _is_missing(error) is expected
