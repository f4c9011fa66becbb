"""Reply stream shared by providers, the chat transport and the controller."""

from collections.abc import AsyncIterator, Callable

TokenUsage = dict[str, int]


class StreamingResponse:
    """One model reply, delivered as text fragments.

    Providers only learn token usage after the last fragment, so the
    producer is handed the response it feeds and records usage on that
    response. Two replies in flight at once never see each other's counts.

    Usage:
        stream = await session.send_message_stream("Hello")
        async for chunk in stream:
            ...
        stream.usage  # {"prompt_tokens": 12, "completion_tokens": 40, ...}
    """

    def __init__(self, produce: Callable[["StreamingResponse"], AsyncIterator[str]]):
        """Create the response and start its producer.

        Args:
            produce: Async generator function receiving this response and
                yielding reply fragments in order
        """
        self._usage: TokenUsage | None = None
        self._chunks = produce(self)

    @property
    def usage(self) -> TokenUsage | None:
        """Token counts for this reply, None until the stream is exhausted."""
        return self._usage

    def record_usage(self, usage: TokenUsage | None) -> None:
        if usage:
            self._usage = dict(usage)

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        return await self._chunks.__anext__()
