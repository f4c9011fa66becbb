"""Chat transport over a remote LLM provider.

Hides the remote session lifecycle from the controller: when a session is
opened, how it is configured, and how provider failures are reported.
Each transport owns at most one live session; the controller owns the
transport, so there is no process-wide session state.
"""

from collections.abc import AsyncIterator

from ..debug import DebugCallback
from ..errors import ChatTransportError, MissingCredentialError, TransportError
from ..llm import ChatSession, LLMProvider, StreamingResponse

DEFAULT_TEMPERATURE = 0.7


class ChatTransport:
    """Streams replies from one remote chat session.

    Hidden design decisions:
    - Lazy session creation on first send
    - Fixed system instruction and temperature per session
    - Wrapping of provider errors into TransportError
    """

    def __init__(
        self,
        provider: LLMProvider | None,
        system_instruction: str,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        """Initialize the transport.

        Args:
            provider: LLM provider, or None when no API key is configured
            system_instruction: Instruction given to every new session
            temperature: Sampling temperature for every new session
        """
        self._provider = provider
        self._system_instruction = system_instruction
        self._temperature = temperature
        self._session: ChatSession | None = None
        self._debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving (level, component, message) logs."""
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Transport", message)

    @property
    def is_configured(self) -> bool:
        """True when a provider (and therefore a credential) is available."""
        return self._provider is not None

    @property
    def has_session(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> ChatSession | None:
        return self._session

    def initialize(self) -> ChatSession:
        """Open a fresh session, replacing any existing one.

        Returns:
            The new session

        Raises:
            MissingCredentialError: If no provider is configured
        """
        if self._provider is None:
            self._debug("error", "API key is missing, chat session unavailable")
            raise MissingCredentialError()

        self._session = self._provider.start_chat(
            self._system_instruction,
            temperature=self._temperature,
        )
        self._debug("info", f"Opened chat session on {self._provider.model}")
        return self._session

    async def send_stream(self, text: str) -> StreamingResponse:
        """Send a user turn and return the reply as a stream of text chunks.

        Args:
            text: User message

        Returns:
            Finite, ordered, single-use stream of reply fragments

        Raises:
            MissingCredentialError: If no session exists and none can be opened
            TransportError: If the remote stream cannot be established. A
                connection dropped mid-stream raises TransportError from
                the iterator.
        """
        session = self._session if self._session is not None else self.initialize()

        try:
            upstream = await session.send_message_stream(text)
        except ChatTransportError:
            raise
        except Exception as e:
            self._debug("error", f"Failed to send message: {e}")
            raise TransportError(f"Could not reach the chat model: {e}") from e

        self._debug("debug", f"Stream established for {len(text)} chars")
        return StreamingResponse(lambda response: self._guard(upstream, response))

    async def _guard(
        self, upstream: StreamingResponse, response: StreamingResponse
    ) -> AsyncIterator[str]:
        """Re-raise mid-stream provider failures as TransportError."""
        try:
            async for chunk in upstream:
                yield chunk
        except ChatTransportError:
            raise
        except Exception as e:
            self._debug("error", f"Stream interrupted: {e}")
            raise TransportError(f"Chat stream interrupted: {e}") from e

        response.record_usage(upstream.usage)
        if upstream.usage:
            self._debug("debug", f"Usage: {upstream.usage}")

    def reset(self) -> ChatSession:
        """Discard the current session and open a fresh one.

        Raises:
            MissingCredentialError: If no provider is configured; the old
                session is still discarded
        """
        self._session = None
        return self.initialize()

    def close(self) -> None:
        """Drop the current session without opening a new one."""
        self._session = None
