import base64

import httpx
import pytest

from glide_functions.services.llm_service import generate, list_available_models

GEMINI_HELLO = {"candidates": [{"content": {"parts": [{"text": "hello"}]}}]}
MODEL_LIST = {
    "models": [
        {"name": "models/gemini-1.5-flash", "supportedGenerationMethods": ["generateContent"]},
        {"name": "models/gemini-1.5-pro", "supportedGenerationMethods": ["generateContent"]},
        {"name": "models/embedding-001", "supportedGenerationMethods": ["embedContent"]},
    ]
}


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["", "   ", None])
async def test_blank_api_key_makes_no_network_call(upstream, api_key):
    result = await generate(prompt="hi", api_key=api_key, model="gpt-4o", http=upstream.client())

    assert result.ok is False
    assert result.value == "Error: API key is required"
    assert upstream.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("command", ["list", "help", "INFO"])
async def test_list_command_with_blank_api_key_makes_no_network_call(upstream, command):
    result = await generate(prompt="", api_key="  ", model=command, http=upstream.client())

    assert result.ok is False
    assert result.value == "Error: API key is required"
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_blank_prompt_makes_no_network_call(upstream):
    result = await generate(prompt="  ", api_key="k", model="gpt-4o", http=upstream.client())

    assert result.ok is False
    assert result.value == "Error: Prompt is required"
    assert upstream.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("command", ["list", "HELP", "Info"])
async def test_list_commands_only_call_model_listing(upstream, command):
    upstream.queue(httpx.Response(200, json=MODEL_LIST))

    result = await generate(prompt="", api_key="k", model=command, http=upstream.client())

    assert result.ok is True
    assert result.value == "Available models:\ngemini-1.5-flash, gemini-1.5-pro"
    assert len(upstream.requests) == 1
    request = upstream.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/v1beta/models"
    assert request.url.params["key"] == "k"


@pytest.mark.asyncio
async def test_model_listing_vendor_error(upstream):
    upstream.queue(
        httpx.Response(400, json={"error": {"code": 400, "message": "API key not valid"}})
    )

    result = await list_available_models("bad", http=upstream.client())

    assert result.ok is False
    assert result.value == "Error listing models: API key not valid"


@pytest.mark.asyncio
async def test_model_listing_non_json_body(upstream):
    upstream.queue(httpx.Response(502, content=b"<html>bad gateway</html>"))

    result = await list_available_models("k", http=upstream.client())

    assert result.value.startswith("Error fetching model list:")


@pytest.mark.asyncio
async def test_model_listing_network_failure(upstream):
    upstream.queue(httpx.ConnectError("connection refused"))

    result = await list_available_models("k", http=upstream.client())

    assert result.value == "Error fetching model list: connection refused"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{"models": {"a": 1}}, {"models": "gemini-pro"}],
)
async def test_model_listing_unexpected_models_shape(upstream, body):
    upstream.queue(httpx.Response(200, json=body))

    result = await list_available_models("k", http=upstream.client())

    assert result.ok is False
    assert result.value == "Error fetching model list: Invalid model list"


@pytest.mark.asyncio
async def test_model_listing_skips_non_object_entries(upstream):
    upstream.queue(
        httpx.Response(
            200,
            json={
                "models": [
                    "models/gemini-pro",
                    {"name": "models/gemini-1.5-flash", "supportedGenerationMethods": ["generateContent"]},
                ]
            },
        )
    )

    result = await list_available_models("k", http=upstream.client())

    assert result.ok is True
    assert result.value == "Available models:\ngemini-1.5-flash"


@pytest.mark.asyncio
async def test_model_listing_string_entries_only(upstream):
    upstream.queue(httpx.Response(200, json={"models": ["models/gemini-pro"]}))

    result = await list_available_models("k", http=upstream.client())

    assert result.ok is True
    assert result.value == "No models support content generation."


@pytest.mark.asyncio
async def test_model_listing_encodes_api_key(upstream):
    upstream.queue(httpx.Response(200, json=MODEL_LIST))

    await list_available_models("abc&alt=sse", http=upstream.client())

    params = upstream.requests[0].url.params
    assert params["key"] == "abc&alt=sse"
    assert "alt" not in params


@pytest.mark.asyncio
async def test_model_listing_without_generative_models(upstream):
    upstream.queue(httpx.Response(200, json={"models": []}))

    result = await list_available_models("k", http=upstream.client())

    assert result.ok is True
    assert result.value == "No models support content generation."


@pytest.mark.asyncio
async def test_openai_success(upstream):
    upstream.queue(
        httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "hi there"}}]})
    )

    result = await generate(prompt="hi", api_key="sk", model="gpt-4o", http=upstream.client())

    assert result.ok is True
    assert result.value == "hi there"
    request = upstream.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk"
    assert upstream.body()["model"] == "gpt-4o"


@pytest.mark.asyncio
async def test_empty_model_uses_openai_default(upstream):
    upstream.queue(httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}))

    await generate(prompt="hi", api_key="sk", model="", http=upstream.client())

    assert upstream.body()["model"] == "gpt-4o-mini"
    assert upstream.body()["temperature"] == 0.7
    assert upstream.body()["max_tokens"] == 1000


@pytest.mark.asyncio
async def test_temperature_is_clamped(upstream):
    upstream.queue(httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}))

    await generate(prompt="hi", api_key="sk", model="gpt-4o", temperature=5.0, http=upstream.client())

    assert upstream.body()["temperature"] == 2.0


@pytest.mark.asyncio
async def test_anthropic_success(upstream):
    upstream.queue(httpx.Response(200, json={"content": [{"type": "text", "text": "bonjour"}]}))

    result = await generate(
        prompt="hi", api_key="sk-ant", model="claude-3-haiku", max_tokens=64, http=upstream.client()
    )

    assert result.value == "bonjour"
    request = upstream.requests[0]
    assert request.url.path == "/v1/messages"
    assert request.headers["x-api-key"] == "sk-ant"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert upstream.body()["max_tokens"] == 64


@pytest.mark.asyncio
async def test_gemini_success_returns_exact_text(upstream):
    upstream.queue(httpx.Response(200, json=GEMINI_HELLO))

    result = await generate(prompt="hi", api_key="g", model="gemini-1.5-flash", http=upstream.client())

    assert result.ok is True
    assert result.value == "hello"
    request = upstream.requests[0]
    assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert request.url.params["key"] == "g"


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["abc&alt=sse", "a+b=c#frag", "key with space"])
async def test_gemini_key_is_a_single_query_parameter(upstream, api_key):
    upstream.queue(httpx.Response(200, json=GEMINI_HELLO))

    result = await generate(prompt="hi", api_key=api_key, model="gemini-pro", http=upstream.client())

    assert result.value == "hello"
    request = upstream.requests[0]
    assert request.url.path == "/v1beta/models/gemini-pro:generateContent"
    assert dict(request.url.params) == {"key": api_key}


@pytest.mark.asyncio
async def test_gemini_blocked_prompt(upstream):
    upstream.queue(httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))

    result = await generate(prompt="hi", api_key="g", model="gemini-pro", http=upstream.client())

    assert result.ok is False
    assert result.value.startswith("Blocked: SAFETY")


@pytest.mark.asyncio
async def test_http_error_surfaces_vendor_message(upstream):
    upstream.queue(httpx.Response(401, json={"error": {"message": "bad key"}}))

    result = await generate(prompt="hi", api_key="sk", model="gpt-4o", http=upstream.client())

    assert result.ok is False
    assert "bad key" in result.value
    assert result.value == "Error (gpt-4o): bad key"


@pytest.mark.asyncio
async def test_http_error_without_json_falls_back_to_status(upstream):
    upstream.queue(httpx.Response(503, content=b"Service Unavailable"))

    result = await generate(prompt="hi", api_key="sk", model="claude-3-opus", http=upstream.client())

    assert result.value == "Error (claude-3-opus): HTTP 503"


@pytest.mark.asyncio
async def test_vendor_error_payload_on_success_status(upstream):
    upstream.queue(httpx.Response(200, json={"error": {"message": "model overloaded"}}))

    result = await generate(prompt="hi", api_key="sk", model="gpt-4o", http=upstream.client())

    assert result.value == "Error (gpt-4o): model overloaded"


@pytest.mark.asyncio
async def test_malformed_success_body(upstream):
    upstream.queue(httpx.Response(200, content=b"not json"))

    result = await generate(prompt="hi", api_key="sk", model="gpt-4o", http=upstream.client())

    assert result.value == "Error (gpt-4o): Invalid JSON response"


@pytest.mark.asyncio
async def test_missing_text_returns_placeholder(upstream):
    upstream.queue(httpx.Response(200, json={"candidates": []}))

    result = await generate(prompt="hi", api_key="g", model="gemini-pro", http=upstream.client())

    assert result.ok is True
    assert result.value == "No response generated from Gemini."


@pytest.mark.asyncio
async def test_network_failure_becomes_system_error(upstream):
    upstream.queue(httpx.ConnectError("connection refused"))

    result = await generate(prompt="hi", api_key="sk", model="gpt-4o", http=upstream.client())

    assert result.ok is False
    assert result.value == "System Error: connection refused"


@pytest.mark.asyncio
async def test_silent_exception_is_named_in_system_error(upstream):
    upstream.queue(httpx.ReadTimeout(""))

    result = await generate(prompt="hi", api_key="sk", model="gpt-4o", http=upstream.client())

    assert result.ok is False
    assert result.value == "System Error: ReadTimeout"


@pytest.mark.asyncio
async def test_gemini_attachment_is_inlined(upstream):
    image = b"\x89PNG\r\n\x1a\n"
    upstream.queue(
        httpx.Response(200, content=image, headers={"content-type": "image/png; charset=binary"}),
        httpx.Response(200, json=GEMINI_HELLO),
    )

    result = await generate(
        prompt="describe",
        api_key="g",
        model="gemini-1.5-flash",
        attachment_url="https://cdn.example.com/cat.png",
        http=upstream.client(),
    )

    assert result.value == "hello"
    fetch, call = upstream.requests
    assert fetch.method == "GET"
    assert str(fetch.url) == "https://cdn.example.com/cat.png"
    parts = upstream.body()["contents"][0]["parts"]
    assert parts[0] == {"text": "describe"}
    assert parts[1]["inline_data"] == {
        "mime_type": "image/png",
        "data": base64.b64encode(image).decode("ascii"),
    }


@pytest.mark.asyncio
async def test_attachment_without_content_type_defaults_to_jpeg(upstream):
    upstream.queue(httpx.Response(200, content=b"\xff\xd8\xff"), httpx.Response(200, json=GEMINI_HELLO))

    await generate(
        prompt="describe",
        api_key="g",
        model="gemini-1.5-flash",
        attachment_url="https://cdn.example.com/photo",
        http=upstream.client(),
    )

    parts = upstream.body()["contents"][0]["parts"]
    assert parts[1]["inline_data"]["mime_type"] == "image/jpeg"


@pytest.mark.asyncio
async def test_failed_attachment_fetch_skips_generation(upstream):
    upstream.queue(httpx.Response(404))

    result = await generate(
        prompt="describe",
        api_key="g",
        model="gemini-1.5-flash",
        attachment_url="https://cdn.example.com/missing.png",
        http=upstream.client(),
    )

    assert result.value == "Error: Failed to fetch attachment (HTTP 404)"
    assert len(upstream.requests) == 1


@pytest.mark.asyncio
async def test_attachment_ignored_for_other_providers(upstream):
    upstream.queue(httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}))

    result = await generate(
        prompt="describe",
        api_key="sk",
        model="gpt-4o",
        attachment_url="https://cdn.example.com/cat.png",
        http=upstream.client(),
    )

    assert result.value == "ok"
    assert len(upstream.requests) == 1
    assert upstream.body()["messages"] == [{"role": "user", "content": "describe"}]
