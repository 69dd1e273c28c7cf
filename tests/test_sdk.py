# tests/test_sdk.py
import json

import httpx
import pytest
import respx

from sharpai import ApiError, ArgumentNullError, SdkConfiguration, Severity, SharpAISdk, TransportError
from tests.conftest import BASE, TOKEN

MODEL = "llama3.1:latest"


def test_sdk_requires_endpoint():
    with pytest.raises(ArgumentNullError, match="ArgumentNullException: Endpoint is null or empty"):
        SharpAISdk(endpoint="")

def test_sdk_from_keywords():
    sdk = SharpAISdk(endpoint="http://view.local:11434", bearer_token="abc")
    assert sdk.config.endpoint == "http://view.local:11434/"
    assert sdk.config.default_headers == {"Authorization": "Bearer abc"}

def test_sdk_setters_replace_snapshot(sdk):
    # each setter swaps in a new configuration; the old snapshot is untouched
    before = sdk.config
    sdk.set_basic_auth("", "")
    assert sdk.config.default_headers == {"Authorization": "Basic Og=="}
    sdk.set_bearer_token("abc")
    assert sdk.config.default_headers == {"Authorization": "Bearer abc"}
    sdk.set_timeout_ms(1000)
    sdk.set_log_level(Severity.ERROR)
    assert (sdk.config.timeout_ms, sdk.config.log_level) == (1000, Severity.ERROR)
    assert before.default_headers == {"Authorization": f"Bearer {TOKEN}"}
    assert before.timeout_ms == 300000


@pytest.mark.asyncio
@respx.mock
async def test_validate_connectivity(sdk):
    route = respx.head(BASE).mock(return_value=httpx.Response(200))
    assert await sdk.validate_connectivity() is True
    assert route.calls.last.request.headers["Authorization"] == f"Bearer {TOKEN}"

@pytest.mark.asyncio
@respx.mock
async def test_validate_connectivity_failure(sdk):
    respx.head(BASE).mock(return_value=httpx.Response(401))
    with pytest.raises(TransportError):
        await sdk.validate_connectivity()


# --------- OpenAI facade ---------

@pytest.mark.asyncio
@respx.mock
async def test_openai_endpoints(sdk):
    # each method posts the payload untouched to its v1/ path and returns the parsed body
    cases = [
        ("v1/completions", sdk.openai.generate_completion, {"model": MODEL, "prompt": "Once upon a time", "max_tokens": 512}),
        ("v1/chat/completions", sdk.openai.generate_chat_completion, {"model": MODEL, "messages": [{"role": "user", "content": "Hello"}]}),
        ("v1/embeddings", sdk.openai.generate_embeddings, {"model": MODEL, "input": "Hello world"}),
    ]
    for path, method, payload in cases:
        route = respx.post(f"{BASE}{path}").mock(return_value=httpx.Response(200, json={"path": path}))
        assert await method(payload) == {"path": path}
        assert json.loads(route.calls.last.request.content) == payload

@pytest.mark.asyncio
@respx.mock
async def test_openai_streaming_callback(sdk):
    body = b'data: {"choices":[{"text":"Once"}]}\n\ndata: [DONE]\n'
    respx.post(f"{BASE}v1/completions").mock(return_value=httpx.Response(200, content=body))
    tokens = []
    result = await sdk.openai.generate_completion({"model": MODEL, "prompt": "x", "stream": True}, tokens.append)
    assert result is None
    assert [t for t in tokens if t] == ['data: {"choices":[{"text":"Once"}]}', "data: [DONE]"]

@pytest.mark.asyncio
@respx.mock
async def test_openai_stream_chat_iterator(sdk):
    respx.post(f"{BASE}v1/chat/completions").mock(return_value=httpx.Response(200, content=b"a\nb"))
    assert await sdk.openai.stream_chat_completion({"model": MODEL, "messages": []}).collect() == ["a", "b"]


# --------- Ollama facade ---------

@pytest.mark.asyncio
@respx.mock
async def test_ollama_post_endpoints(sdk):
    cases = [
        ("api/generate", sdk.ollama.generate_completion, {"model": MODEL, "prompt": "Once upon a time", "stream": False}),
        ("api/chat", sdk.ollama.generate_chat_completion, {"model": MODEL, "messages": [{"role": "user", "content": "Hello!"}], "stream": False}),
        ("api/pull", sdk.ollama.pull_model, {"name": MODEL}),
        ("api/embed", sdk.ollama.generate_embeddings, {"model": MODEL, "input": ["a", "b"]}),
    ]
    for path, method, payload in cases:
        route = respx.post(f"{BASE}{path}").mock(return_value=httpx.Response(200, json={"path": path}))
        assert await method(payload) == {"path": path}
        assert json.loads(route.calls.last.request.content) == payload

@pytest.mark.asyncio
@respx.mock
async def test_ollama_list_local_models(sdk):
    models = {"models": [{"name": MODEL, "model": MODEL, "size": 4661224676}]}
    respx.get(f"{BASE}api/tags").mock(return_value=httpx.Response(200, json=models))
    assert await sdk.ollama.list_local_models() == models

@pytest.mark.asyncio
@respx.mock
async def test_ollama_delete_model(sdk):
    route = respx.delete(f"{BASE}api/delete").mock(return_value=httpx.Response(200))
    assert await sdk.ollama.delete_model({"name": MODEL}) is True
    assert json.loads(route.calls.last.request.content) == {"name": MODEL}

@pytest.mark.asyncio
@respx.mock
async def test_ollama_delete_missing_model(sdk):
    respx.delete(f"{BASE}api/delete").mock(return_value=httpx.Response(404, json={"error": f"model '{MODEL}' not found"}))
    with pytest.raises(ApiError) as exc:
        await sdk.ollama.delete_model({"name": MODEL})
    assert exc.value.error == f"model '{MODEL}' not found"

@pytest.mark.asyncio
@respx.mock
async def test_ollama_streaming_generate(sdk):
    # ndjson lines reach the callback one by one; the caller parses them
    chunks = [b'{"response":"he","done":false}\n', b'{"response":"llo","done":false}\n', b'{"response":"","done":true}\n']
    respx.post(f"{BASE}api/generate").mock(
        return_value=httpx.Response(200, content=b"".join(chunks), headers={"Content-Type": "application/x-ndjson"})
    )
    acc = []
    def on_token(line):
        if line:
            acc.append(json.loads(line)["response"])
    await sdk.ollama.generate_completion({"model": MODEL, "prompt": "hi", "stream": True}, on_token)
    assert "".join(acc) == "hello"

@pytest.mark.asyncio
@respx.mock
async def test_ollama_stream_pull_iterator(sdk):
    body = b'{"status":"pulling manifest"}\n{"status":"success"}\n'
    respx.post(f"{BASE}api/pull").mock(return_value=httpx.Response(200, content=body))
    statuses = [json.loads(line)["status"] async for line in sdk.ollama.stream_pull_model({"name": MODEL}) if line]
    assert statuses == ["pulling manifest", "success"]


# --------- argument checks ---------

@pytest.mark.asyncio
async def test_null_request_fails_before_network(sdk):
    # every facade method rejects a missing request before any HTTP call
    async_methods = [
        sdk.openai.generate_completion,
        sdk.openai.generate_chat_completion,
        sdk.openai.generate_embeddings,
        sdk.ollama.generate_completion,
        sdk.ollama.generate_chat_completion,
        sdk.ollama.pull_model,
        sdk.ollama.delete_model,
        sdk.ollama.generate_embeddings,
    ]
    stream_methods = [
        sdk.openai.stream_completion,
        sdk.openai.stream_chat_completion,
        sdk.ollama.stream_completion,
        sdk.ollama.stream_chat_completion,
        sdk.ollama.stream_pull_model,
    ]
    with respx.mock(assert_all_called=False) as router:
        route = router.route().mock(return_value=httpx.Response(200))
        for method in async_methods:
            with pytest.raises(ArgumentNullError, match="ArgumentNullException: request is null or empty"):
                await method(None)
        for method in stream_methods:
            with pytest.raises(ArgumentNullError, match="ArgumentNullException: request is null or empty"):
                method(None)
    assert not route.called

@pytest.mark.asyncio
@respx.mock
async def test_facades_follow_endpoint_change(sdk):
    sdk.configure(SdkConfiguration(endpoint="http://other:9000", bearer_token="xyz"))
    route = respx.get("http://other:9000/api/tags").mock(return_value=httpx.Response(200, json={"models": []}))
    assert await sdk.ollama.list_local_models() == {"models": []}
    assert route.calls.last.request.headers["Authorization"] == "Bearer xyz"
