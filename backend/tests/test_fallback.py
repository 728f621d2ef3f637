"""
Tests for the Gemini fallback caller and client helpers.

All Gemini calls are mocked, so tests run without API keys.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from google.genai import errors, types

from gemini.client import build_client, extract_text
from gemini.config import DEFAULT_MODEL_CHAIN, model_chain
from gemini.fallback import (
    UNAVAILABLE_MESSAGE,
    AllModelsUnavailableError,
    FallbackCaller,
)

MODELS = ("model-a", "model-b", "model-c")


def _response(text):
    """Build a GenerateContentResponse with a single text part."""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def _api_error(code: int, status: str = "ERROR"):
    body = {"error": {"code": code, "message": f"{status} from test", "status": status}}
    if code >= 500:
        return errors.ServerError(code, body)
    return errors.ClientError(code, body)


def _client(*outcomes):
    """Mock genai.Client whose generate_content yields outcomes in order."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=list(outcomes))
    return client


def _models_tried(client) -> list[str]:
    return [c.kwargs["model"] for c in client.aio.models.generate_content.call_args_list]


def _call(caller: FallbackCaller, prompt: str = "Explain caching", **kwargs) -> str:
    return asyncio.run(caller.call(prompt, **kwargs))


# ─── Short-circuit ──────────────────────────────────────────────────────────

class TestShortCircuit:

    def test_first_model_success_makes_one_call(self):
        client = _client(_response("Caching keeps answers close."))
        result = _call(FallbackCaller(client, MODELS))
        assert result == "Caching keeps answers close."
        assert _models_tried(client) == ["model-a"]

    def test_returned_text_is_trimmed(self):
        client = _client(_response("  padded reply \n"))
        assert _call(FallbackCaller(client, MODELS)) == "padded reply"

    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_last_model_success_after_soft_failures(self, n):
        models = tuple(f"model-{i}" for i in range(n))
        outcomes = [_api_error(429, "RESOURCE_EXHAUSTED")] * (n - 1) + [_response("finally")]
        client = _client(*outcomes)
        assert _call(FallbackCaller(client, models)) == "finally"
        assert _models_tried(client) == list(models)


# ─── Soft failures ──────────────────────────────────────────────────────────

class TestSoftFailures:

    def test_quota_error_advances(self):
        client = _client(_api_error(429, "RESOURCE_EXHAUSTED"), _response("ok"))
        assert _call(FallbackCaller(client, MODELS)) == "ok"
        assert _models_tried(client) == ["model-a", "model-b"]

    def test_permission_error_advances(self):
        client = _client(_api_error(403, "PERMISSION_DENIED"), _response("ok"))
        assert _call(FallbackCaller(client, MODELS)) == "ok"

    def test_other_status_advances(self):
        client = _client(_api_error(404, "NOT_FOUND"), _api_error(500, "INTERNAL"), _response("ok"))
        assert _call(FallbackCaller(client, MODELS)) == "ok"
        assert _models_tried(client) == list(MODELS)

    def test_transport_failure_advances(self):
        client = _client(httpx.ConnectError("connection refused"), _response("ok"))
        assert _call(FallbackCaller(client, MODELS)) == "ok"
        assert _models_tried(client) == ["model-a", "model-b"]

    def test_empty_text_advances(self):
        client = _client(_response("   "), _response("ok"))
        assert _call(FallbackCaller(client, MODELS)) == "ok"
        assert _models_tried(client) == ["model-a", "model-b"]

    def test_no_candidates_advances(self):
        client = _client(types.GenerateContentResponse(candidates=[]), _response("ok"))
        assert _call(FallbackCaller(client, MODELS)) == "ok"

    def test_quota_error_is_logged(self, caplog):
        client = _client(_api_error(429, "RESOURCE_EXHAUSTED"), _response("ok"))
        with caplog.at_level("WARNING", logger="gemini.fallback"):
            _call(FallbackCaller(client, MODELS))
        assert "model-a" in caplog.text
        assert "quota/permission" in caplog.text


# ─── Terminal failure ───────────────────────────────────────────────────────

class TestExhaustion:

    def test_all_models_fail_raises_after_n_calls(self):
        client = _client(
            _api_error(429, "RESOURCE_EXHAUSTED"),
            httpx.ReadTimeout("timed out"),
            _response(""),
        )
        with pytest.raises(AllModelsUnavailableError) as excinfo:
            _call(FallbackCaller(client, MODELS))
        assert str(excinfo.value) == UNAVAILABLE_MESSAGE
        assert _models_tried(client) == list(MODELS)

    def test_each_model_tried_once(self):
        client = _client(*[_api_error(503, "UNAVAILABLE")] * len(MODELS))
        with pytest.raises(AllModelsUnavailableError):
            _call(FallbackCaller(client, MODELS))
        assert client.aio.models.generate_content.await_count == len(MODELS)

    def test_missing_client_fails_without_calls(self):
        with pytest.raises(AllModelsUnavailableError):
            _call(FallbackCaller(None, MODELS))


# ─── Request shape ──────────────────────────────────────────────────────────

class TestRequestShape:

    def test_prompt_and_generation_config_forwarded(self):
        client = _client(_response("ok"))
        _call(FallbackCaller(client, MODELS), "Hello there", temperature=0.2, max_output_tokens=42)

        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["contents"] == [{"role": "user", "parts": [{"text": "Hello there"}]}]
        assert kwargs["config"].temperature == 0.2
        assert kwargs["config"].max_output_tokens == 42

    def test_default_generation_config(self):
        client = _client(_response("ok"))
        _call(FallbackCaller(client, MODELS))

        config = client.aio.models.generate_content.call_args.kwargs["config"]
        assert config.temperature == 0.7
        assert config.max_output_tokens == 300


# ─── Client helpers and model chain ─────────────────────────────────────────

class TestClientHelpers:

    def test_extract_text_first_part(self):
        response = types.GenerateContentResponse(
            candidates=[
                types.Candidate(content=types.Content(parts=[types.Part(text=" first "), types.Part(text="second")])),
                types.Candidate(content=types.Content(parts=[types.Part(text="other candidate")])),
            ]
        )
        assert extract_text(response) == "first"

    def test_extract_text_missing_content(self):
        assert extract_text(types.GenerateContentResponse(candidates=[types.Candidate()])) == ""
        assert extract_text(types.GenerateContentResponse()) == ""
        assert extract_text(None) == ""

    def test_build_client_without_key(self):
        assert build_client("") is None

    def test_build_client_with_key(self):
        with patch("gemini.client.genai.Client") as client_cls:
            client = build_client("test-key")
        client_cls.assert_called_once_with(api_key="test-key")
        assert client is client_cls.return_value


class TestModelChain:

    def test_default_order(self):
        assert model_chain() == DEFAULT_MODEL_CHAIN
        assert model_chain()[0] == "gemma-3-4b-it"

    def test_primary_prepended(self):
        chain = model_chain("gemini-2.5-flash")
        assert chain[0] == "gemini-2.5-flash"
        assert chain[1:] == DEFAULT_MODEL_CHAIN

    def test_primary_deduplicated(self):
        chain = model_chain("gemini-2.5-flash-lite")
        assert chain[0] == "gemini-2.5-flash-lite"
        assert chain.count("gemini-2.5-flash-lite") == 1
        assert len(chain) == len(DEFAULT_MODEL_CHAIN)
