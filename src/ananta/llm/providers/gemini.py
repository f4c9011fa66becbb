"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK async chats API.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty chunks (safety filtering, trailing usage-only
chunks). Those are skipped rather than yielded as empty strings.
"""

from collections.abc import AsyncIterator
from typing import Any

from google import genai
from google.genai import types

from ..base import ChatSession, LLMProvider
from ..models import StreamingResponse


def _extract_content(response: Any) -> str:
    """Extract text content from a Gemini response, handling empty responses.

    Args:
        response: Gemini GenerateContentResponse

    Returns:
        Text content or empty string
    """
    # Check if response has valid candidates with content
    if response.candidates and len(response.candidates) > 0:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            # Join all text parts
            texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts)

    # Fallback to response.text (may raise or return None)
    try:
        return response.text or ""
    except (ValueError, AttributeError):
        return ""


def _extract_usage(response: Any) -> dict[str, int] | None:
    metadata = getattr(response, "usage_metadata", None)
    if not metadata:
        return None
    return {
        "prompt_tokens": metadata.prompt_token_count or 0,
        "completion_tokens": metadata.candidates_token_count or 0,
        "total_tokens": metadata.total_token_count or 0,
    }


class GeminiChatSession(ChatSession):
    """One Gemini chat with its own remote history."""

    def __init__(self, chat: Any):
        self._chat = chat

    async def send_message_stream(self, text: str) -> StreamingResponse:
        """Send a user turn and stream the reply text."""
        stream = await self._chat.send_message_stream(text)
        return StreamingResponse(lambda response: self._stream_generator(stream, response))

    async def _stream_generator(
        self, stream: AsyncIterator[Any], response: StreamingResponse
    ) -> AsyncIterator[str]:
        """Yield reply text and record usage on the response it feeds."""
        usage = None

        async for chunk in stream:
            # usage_metadata is complete on the final chunk
            chunk_usage = _extract_usage(chunk)
            if chunk_usage:
                usage = chunk_usage

            text = _extract_content(chunk)
            if text:
                yield text

        response.record_usage(usage)


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Chat session configuration (system instruction, temperature)
    - Chunk text extraction
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, gemini-3-flash-preview)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def start_chat(
        self,
        system_instruction: str,
        temperature: float = 0.7,
        **kwargs: Any
    ) -> GeminiChatSession:
        """Open a new Gemini chat.

        Args:
            system_instruction: Instruction applied to every turn
            temperature: Sampling temperature
            **kwargs: Additional GenerateContentConfig fields

        Returns:
            GeminiChatSession with empty history
        """
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            **kwargs
        )
        chat = self._client.aio.chats.create(model=self._model, config=config)
        return GeminiChatSession(chat)

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
