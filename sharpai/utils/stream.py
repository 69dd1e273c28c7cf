# turns a streamed HTTP body into tokens
# StreamParser splits each chunk on "\n" and hands every segment to a callback (blank ones included);
# TokenStream is the async-iterator side for callers who prefer `async for` over callbacks

import asyncio
import codecs
import json
from typing import Any, AsyncIterator, Callable, Optional, Union

OnToken = Callable[[str], Any]


class StreamParser:
    def __init__(self, on_token: OnToken) -> None:
        self._on_token = on_token
        # keeps multi-byte characters intact when a chunk ends mid-sequence
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.closed = False

    def write(self, chunk: Union[bytes, str]) -> None:
        if self.closed:
            raise RuntimeError("write after close")
        text = chunk if isinstance(chunk, str) else self._decoder.decode(chunk)
        # each chunk is split on its own; a line cut across two chunks arrives as two tokens
        for line in text.split("\n"):
            self._on_token(line.strip())

    def close(self) -> None:
        if self.closed:
            return
        self._decoder.decode(b"", final=True)
        self.closed = True


def extract_token(text: Any) -> Optional[str]:
    # None is the "no token" answer: bad JSON, no object, or no/empty `token` field
    try:
        obj = json.loads(text)
    except (TypeError, ValueError):
        return None
    if not isinstance(obj, dict):
        return None
    return obj.get("token") or None


class _End:
    def __init__(self, error: Optional[BaseException]) -> None:
        self.error = error


class TokenStream:
    """
    One-shot channel of tokens for a single streaming request.

    The producer (the executor's request task) calls put() per token and close() once,
    passing the exception if the request failed. The consumer iterates with `async for`;
    iteration stops on completion or re-raises the producer's error. Not restartable.
    """

    def __init__(self) -> None:
        self._queue: "asyncio.Queue[Union[str, _End]]" = asyncio.Queue()
        self._producer: Optional["asyncio.Task[Any]"] = None
        self._closed = False
        self._finished = False

    @property
    def closed(self) -> bool:
        return self._closed

    def attach(self, producer: "asyncio.Task[Any]") -> None:
        self._producer = producer
        producer.add_done_callback(self._on_producer_done)

    def put(self, token: str) -> None:
        if self._closed:
            raise RuntimeError("token stream is closed")
        self._queue.put_nowait(token)

    def close(self, error: Optional[BaseException] = None) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_End(error))

    def _on_producer_done(self, task: "asyncio.Task[Any]") -> None:
        if task.cancelled():
            self.close()
            return
        self.close(task.exception())

    async def aclose(self) -> None:
        # stops the producer; tokens already queued are dropped
        if self._producer is not None and not self._producer.done():
            self._producer.cancel()
            try:
                await self._producer
            except asyncio.CancelledError:
                pass
        self.close()
        self._finished = True

    def __aiter__(self) -> AsyncIterator[str]:
        return self

    async def __anext__(self) -> str:
        if self._finished:
            raise StopAsyncIteration
        item = await self._queue.get()
        if isinstance(item, _End):
            self._finished = True
            if item.error is not None:
                raise item.error
            raise StopAsyncIteration
        return item

    async def collect(self) -> list:
        return [token async for token in self]
