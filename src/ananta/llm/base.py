from abc import ABC, abstractmethod
from typing import Any

from .models import StreamingResponse


class ChatSession(ABC):
    """A live multi-turn conversation with a remote model.

    The session keeps the remote conversational context; each call to
    send_message_stream adds one user turn and one model turn to it.
    """

    @abstractmethod
    async def send_message_stream(self, text: str) -> StreamingResponse:
        """Send one user turn and stream the model's reply.

        The remote call is established before this coroutine returns, so
        connection failures raise here rather than from the iterator.

        Args:
            text: User message

        Returns:
            StreamingResponse yielding text chunks. After iteration, access
            usage via stream_response.usage

        Raises:
            Exception: Provider-specific errors establishing the stream
        """
        pass


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which LLM provider to use.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Chat session creation and system instructions
    - Response chunk extraction

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            session = provider.start_chat(system_instruction, temperature=0.7)
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Get the default model name."""

    @abstractmethod
    def start_chat(
        self,
        system_instruction: str,
        temperature: float = 0.7,
        **kwargs: Any
    ) -> ChatSession:
        """Open a new chat session.

        Args:
            system_instruction: Fixed instruction for every turn
            temperature: Sampling temperature (0.0 to 2.0)
            **kwargs: Provider-specific parameters

        Returns:
            A fresh ChatSession with empty remote context
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            # Suppress harmless cleanup errors from httpx/anyio
            if "Event loop is closed" not in str(e):
                raise
