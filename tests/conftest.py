"""Pytest configuration and shared fixtures."""
from collections.abc import AsyncIterator
from typing import Any

import pytest

from ananta.auth import CredentialService, User
from ananta.chat import ChatController, ChatTransport, ConversationStore
from ananta.journal import JournalStore
from ananta.llm import ChatSession, LLMProvider, StreamingResponse
from ananta.storage import FileRecordStore, InMemoryRecordStore


class ScriptedSession(ChatSession):
    """Chat session replaying scripted replies, one per turn.

    A reply is a list of chunks; an Exception instance in that list is
    raised at that point in the stream. A reply that is itself an
    Exception is raised before the stream starts.
    """

    def __init__(self, replies: list[Any]):
        self._replies = list(replies)
        self.sent: list[str] = []

    async def send_message_stream(self, text: str) -> StreamingResponse:
        self.sent.append(text)
        reply = self._replies.pop(0) if self._replies else []
        if isinstance(reply, Exception):
            raise reply
        return StreamingResponse(lambda response: self._generate(reply, response))

    async def _generate(self, chunks: list[Any], response: StreamingResponse) -> AsyncIterator[str]:
        for chunk in chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk
        response.record_usage({"prompt_tokens": 3, "completion_tokens": len(chunks)})


class ScriptedProvider(LLMProvider):
    """LLM provider whose sessions replay a shared script."""

    def __init__(self, replies: list[Any] | None = None):
        self.replies = list(replies or [])
        self.sessions: list[ScriptedSession] = []
        self.started_with: list[dict[str, Any]] = []

    @property
    def model(self) -> str:
        return "scripted-model"

    def start_chat(self, system_instruction: str, temperature: float = 0.7, **kwargs: Any) -> ScriptedSession:
        self.started_with.append({"system_instruction": system_instruction, "temperature": temperature})
        session = ScriptedSession(self.replies)
        self.replies = []
        self.sessions.append(session)
        return session

    async def close(self) -> None:
        pass


@pytest.fixture
def memory_store():
    """Return an empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def file_store(tmp_path):
    """Return a record store rooted in a temporary directory."""
    return FileRecordStore(tmp_path / "data")


@pytest.fixture
def user(memory_store):
    """Register and return a user in the memory store."""
    return CredentialService(memory_store).register("Asha", "lotus")


@pytest.fixture
def other_user(memory_store):
    return CredentialService(memory_store).register("Ravi", "river")


@pytest.fixture
def journal(memory_store):
    return JournalStore(memory_store)


@pytest.fixture
def make_controller(memory_store):
    """Build a controller around a scripted provider.

    Pass provider=None to simulate a missing API key.
    """
    def _make(replies: list[Any] | None = None, provider: Any = "scripted") -> tuple[ChatController, Any]:
        if provider == "scripted":
            provider = ScriptedProvider(replies)
        transport = ChatTransport(provider, "Be kind.", temperature=0.7)
        controller = ChatController(
            transport,
            ConversationStore(memory_store),
            welcome_message="Namaste.",
            fallback_message="Please repeat that.",
        )
        return controller, provider

    return _make


@pytest.fixture
def asha() -> User:
    """A user that is not registered anywhere."""
    return User(id="u-asha", username="Asha")
