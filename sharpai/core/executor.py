# shared HTTP core used by every facade: one request per call, one result or one error
# applies auth headers + timeout from a configuration snapshot, (de)serializes JSON,
# normalizes httpx failures into SdkError subclasses and wires caller-owned cancellation
# no retries: a single transport failure ends the call

import asyncio
import functools
from typing import Any, Dict, Optional

import httpx

from sharpai.core.config import SdkConfiguration
from sharpai.core.errors import ApiError, InvalidArgumentError, SdkError, TransportError
from sharpai.core.log import SdkLogger
from sharpai.utils.serializer import deserialize, serialize
from sharpai.utils.stream import OnToken, StreamParser, TokenStream


class CancellationToken:
    """
    Caller-owned handle for aborting one in-flight request.

    The executor binds it when the request is issued. Calling abort() before that
    point does nothing and the request runs normally; a later abort() is not replayed.
    """

    def __init__(self) -> None:
        self._abort: Optional[Any] = None
        self.aborted = False

    @property
    def bound(self) -> bool:
        return self._abort is not None

    def bind(self, abort) -> None:
        self._abort = abort

    def abort(self) -> None:
        if self._abort is None:
            return
        self.aborted = True
        self._abort()


class RequestExecutor:
    def __init__(self, config: SdkConfiguration, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        if config is None:
            raise InvalidArgumentError("config cannot be null.")
        self._config = config
        # only set in tests (httpx.MockTransport); None means the default network transport
        self._transport = transport

    @property
    def config(self) -> SdkConfiguration:
        return self._config

    def configure(self, config: SdkConfiguration) -> None:
        # swaps the whole snapshot; calls already in flight keep the one they started with
        if config is None:
            raise InvalidArgumentError("config cannot be null.")
        self._config = config

    # --------- verbs ---------

    async def get(
        self,
        url: str,
        cancellation: Optional[CancellationToken] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        r = await self._send("GET", url, headers=headers, cancellation=cancellation)
        return deserialize(r.text)

    async def put(self, url: str, body: Any, cancellation: Optional[CancellationToken] = None) -> Any:
        r = await self._send("PUT", url, body=body, cancellation=cancellation)
        return deserialize(r.text)

    async def post(
        self,
        url: str,
        body: Any,
        cancellation: Optional[CancellationToken] = None,
        on_token: Optional[OnToken] = None,
    ) -> Any:
        # with on_token the tokens are the output; the call just finishes with None
        r = await self._send("POST", url, body=body, cancellation=cancellation, on_token=on_token)
        if on_token is not None:
            return None
        return deserialize(r.text)

    async def delete(self, url: str, body: Any = None, cancellation: Optional[CancellationToken] = None) -> bool:
        await self._send("DELETE", url, body=body, cancellation=cancellation)
        return True

    async def head(self, url: str, cancellation: Optional[CancellationToken] = None) -> bool:
        r = await self._send("HEAD", url, cancellation=cancellation)
        return r.is_success

    def stream(self, url: str, body: Any, cancellation: Optional[CancellationToken] = None) -> TokenStream:
        # must be called with a running event loop; the POST runs as the stream's producer task
        if not url:
            raise InvalidArgumentError("URL cannot be null or empty.")
        tokens = TokenStream()
        tokens.attach(asyncio.ensure_future(self.post(url, body, cancellation, on_token=tokens.put)))
        return tokens

    # --------- request lifecycle ---------

    async def _send(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        cancellation: Optional[CancellationToken] = None,
        on_token: Optional[OnToken] = None,
    ) -> httpx.Response:
        if not url:
            raise InvalidArgumentError("URL cannot be null or empty.")

        # read the configuration once; a concurrent configure() can't change this call halfway
        config = self._config
        log = SdkLogger(minimum=config.log_level)

        request_headers: Dict[str, str] = {**config.default_headers, **(headers or {})}
        content = None
        if body is not None:
            request_headers["Content-Type"] = "application/json"
            content = serialize(body, pretty=False)

        exchange = asyncio.ensure_future(
            self._exchange(config, log, method, url, request_headers, content, on_token)
        )
        # bind before the first await so abort() is live as soon as the request exists
        if cancellation is not None:
            cancellation.bind(functools.partial(self._abort, exchange, url, log))

        try:
            return await exchange
        except asyncio.CancelledError:
            if cancellation is not None and cancellation.aborted and exchange.cancelled():
                message = f"Request aborted to {url}."
                log.warn(f"Failed to retrieve object from {url}: {message}")
                raise TransportError(message) from None
            raise

    async def _exchange(
        self,
        config: SdkConfiguration,
        log: SdkLogger,
        method: str,
        url: str,
        headers: Dict[str, str],
        content: Optional[str],
        on_token: Optional[OnToken],
    ) -> httpx.Response:
        timeout = httpx.Timeout(config.timeout_s)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                if on_token is None:
                    r = await client.request(method, url, headers=headers, content=content)
                    r.raise_for_status()
                else:
                    async with client.stream(method, url, headers=headers, content=content) as r:
                        if not r.is_success:
                            # error bodies are small; read them so the structured error can be extracted
                            await r.aread()
                            r.raise_for_status()
                        parser = StreamParser(on_token)
                        async for chunk in r.aiter_bytes():
                            parser.write(chunk)
                        parser.close()
        except httpx.HTTPError as e:
            error = self._normalize(e)
            log.warn(f"Failed to retrieve object from {url}: {error}")
            raise error from e

        log.debug(f"Success reported from {url}: {r.status_code}")
        return r

    @staticmethod
    def _normalize(exc: httpx.HTTPError) -> SdkError:
        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            payload = deserialize(response.text)
            if isinstance(payload, dict) and payload.get("error"):
                return ApiError(payload["error"])
            reason = response.reason_phrase or "HTTP error"
            return TransportError(f"{response.status_code} {reason}", status_code=response.status_code)
        # some httpx errors (e.g. bare timeouts) carry no message
        return TransportError(str(exc) or repr(exc))

    @staticmethod
    def _abort(exchange: "asyncio.Future[Any]", url: str, log: SdkLogger) -> None:
        if not exchange.done():
            exchange.cancel()
        log.debug(f"Request aborted to {url}.")
