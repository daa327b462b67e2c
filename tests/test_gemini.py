import json

import httpx
import pytest

from taskgen.config import Settings
from taskgen.errors import ConfigurationError, EmptyResponseError, UpstreamError
from taskgen.gemini import GeminiClient, build_prompt, parse_steps


def _gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client(handler, api_key="test-key"):
    settings = Settings(gemini_api_key=api_key)
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiClient(settings, http_client=http_client)


def test_build_prompt_embeds_topic():
    assert build_prompt("Rust") == (
        "Generate 5 actionable steps to learn about Rust. "
        "Return only the steps on separate lines, no numbering or formatting."
    )


def test_parse_steps_drops_blank_lines():
    assert parse_steps("Step 1\n\nStep 2\nStep 3") == ["Step 1", "Step 2", "Step 3"]


def test_parse_steps_drops_whitespace_only_lines_and_keeps_order():
    assert parse_steps("  \nB\n\t\nA\n") == ["B", "A"]


def test_generate_steps_sends_single_turn_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_body("Read docs\nWrite code\n"))

    steps = _client(handler).generate_steps("Python")

    assert steps == ["Read docs", "Write code"]
    assert seen["url"].path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert seen["url"].params["key"] == "test-key"
    assert seen["body"] == {"contents": [{"parts": [{"text": build_prompt("Python")}]}]}


def test_missing_api_key_fails_before_network():
    def handler(request):
        raise AssertionError("network should not be called")

    with pytest.raises(ConfigurationError):
        _client(handler, api_key=None).generate_steps("Python")


def test_upstream_error_status_carries_status_and_body():
    def handler(request):
        return httpx.Response(503, text="overloaded")

    with pytest.raises(UpstreamError) as excinfo:
        _client(handler).generate_steps("Python")

    assert excinfo.value.status_code == 503
    assert excinfo.value.body == "overloaded"


def test_network_failure_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        _client(handler).generate_steps("Python")

    assert excinfo.value.status_code is None


@pytest.mark.parametrize("body", [{}, {"candidates": []}, _gemini_body("")])
def test_response_without_text_is_empty_response(body):
    def handler(request):
        return httpx.Response(200, json=body)

    with pytest.raises(EmptyResponseError):
        _client(handler).generate_steps("Python")


def test_non_json_body_is_upstream_error():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(UpstreamError):
        _client(handler).generate_steps("Python")


def test_blank_lines_only_is_empty_response():
    def handler(request):
        return httpx.Response(200, json=_gemini_body("\n  \n"))

    with pytest.raises(EmptyResponseError):
        _client(handler).generate_steps("Go")
