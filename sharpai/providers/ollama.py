# Ollama endpoints under {endpoint}api/...
# same pass-through contract as the OpenAI facade; streaming endpoints emit one JSON object per line

from typing import Any, Dict, Optional

from sharpai.core.errors import require
from sharpai.core.executor import CancellationToken, RequestExecutor
from sharpai.utils.stream import OnToken, TokenStream

Payload = Dict[str, Any]


class OllamaClient:
    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def _url(self, path: str) -> str:
        return f"{self._executor.config.endpoint}api/{path}"

    async def generate_completion(
        self,
        request: Payload,
        on_token: Optional[OnToken] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        require(request, "request")
        return await self._executor.post(self._url("generate"), request, cancellation, on_token)

    async def generate_chat_completion(
        self,
        request: Payload,
        on_token: Optional[OnToken] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        require(request, "request")
        return await self._executor.post(self._url("chat"), request, cancellation, on_token)

    async def pull_model(
        self,
        request: Payload,
        on_token: Optional[OnToken] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        # request: {"name": "llama3.1:latest"}; progress lines arrive through on_token when streaming
        require(request, "request")
        return await self._executor.post(self._url("pull"), request, cancellation, on_token)

    async def delete_model(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> bool:
        require(request, "request")
        return await self._executor.delete(self._url("delete"), request, cancellation)

    async def list_local_models(self, cancellation: Optional[CancellationToken] = None) -> Any:
        return await self._executor.get(self._url("tags"), cancellation)

    async def generate_embeddings(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> Any:
        require(request, "request")
        return await self._executor.post(self._url("embed"), request, cancellation)

    def stream_completion(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> TokenStream:
        require(request, "request")
        return self._executor.stream(self._url("generate"), request, cancellation)

    def stream_chat_completion(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> TokenStream:
        require(request, "request")
        return self._executor.stream(self._url("chat"), request, cancellation)

    def stream_pull_model(self, request: Payload, cancellation: Optional[CancellationToken] = None) -> TokenStream:
        require(request, "request")
        return self._executor.stream(self._url("pull"), request, cancellation)
