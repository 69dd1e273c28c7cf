# top-level entry point: one shared RequestExecutor, one facade per API
# configuration changes replace the executor's snapshot, so both facades see them on their next call

from typing import Optional

import httpx

from sharpai.core.config import Credentials, SdkConfiguration
from sharpai.core.errors import ArgumentNullError
from sharpai.core.executor import CancellationToken, RequestExecutor
from sharpai.core.log import Severity
from sharpai.providers.ollama import OllamaClient
from sharpai.providers.openai import OpenAIClient


class SharpAISdk:
    """
    Usage:
        sdk = SharpAISdk(endpoint="http://localhost:11434", bearer_token="...")
        models = await sdk.ollama.list_local_models()
        async for line in sdk.ollama.stream_completion({"model": "llama3.1", "prompt": "hi"}):
            ...
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        bearer_token: Optional[str] = None,
        *,
        config: Optional[SdkConfiguration] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if config is None:
            if not endpoint:
                raise ArgumentNullError("Endpoint")
            config = SdkConfiguration(endpoint=endpoint, bearer_token=bearer_token)
        self._executor = RequestExecutor(config, transport=transport)
        self.openai = OpenAIClient(self._executor)
        self.ollama = OllamaClient(self._executor)

    @property
    def config(self) -> SdkConfiguration:
        return self._executor.config

    def configure(self, config: SdkConfiguration) -> None:
        self._executor.configure(config)

    def set_bearer_token(self, token: str) -> None:
        self.configure(self.config.with_bearer_token(token))

    def set_basic_auth(self, email: str, password: str) -> None:
        self.configure(self.config.with_basic_auth(Credentials(email=email, password=password)))

    def set_timeout_ms(self, timeout_ms: int) -> None:
        self.configure(self.config.with_timeout_ms(timeout_ms))

    def set_log_level(self, level: Optional[Severity]) -> None:
        self.configure(self.config.with_log_level(level))

    async def validate_connectivity(self, cancellation: Optional[CancellationToken] = None) -> bool:
        # HEAD against the bare endpoint; any 2xx counts as reachable
        return await self._executor.head(self.config.endpoint, cancellation)
