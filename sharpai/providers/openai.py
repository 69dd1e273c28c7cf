# OpenAI-compatible endpoints (v1/completions, v1/chat/completions, v1/embeddings)
# payloads are passed through untouched; the server owns the schema

from typing import Any, Dict, Optional

from sharpai.core.errors import require
from sharpai.core.executor import CancellationToken, RequestExecutor
from sharpai.utils.stream import OnToken, TokenStream

Payload = Dict[str, Any]


class OpenAIClient:
    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def _url(self, path: str) -> str:
        return f"{self._executor.config.endpoint}{path}"

    async def generate_completion(
        self,
        request: Payload,
        on_token: Optional[OnToken] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        require(request, "request")
        return await self._executor.post(self._url("v1/completions"), request, cancellation, on_token)

    async def generate_chat_completion(
        self,
        request: Payload,
        on_token: Optional[OnToken] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        require(request, "request")
        return await self._executor.post(self._url("v1/chat/completions"), request, cancellation, on_token)

    async def generate_embeddings(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> Any:
        require(request, "request")
        return await self._executor.post(self._url("v1/embeddings"), request, cancellation)

    # async-iterator variants: `async for line in client.stream_completion({...})`

    def stream_completion(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> TokenStream:
        require(request, "request")
        return self._executor.stream(self._url("v1/completions"), request, cancellation)

    def stream_chat_completion(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> TokenStream:
        require(request, "request")
        return self._executor.stream(self._url("v1/chat/completions"), request, cancellation)
