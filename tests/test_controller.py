"""Unit tests for the chat controller state machine."""
import asyncio
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any

import pytest

from ananta.chat import ChatController, ChatStatus, ChatTransport, ConversationStore, Message, Role
from ananta.errors import TransportError
from ananta.llm import ChatSession, LLMProvider, StreamingResponse
from ananta.storage import chat_key


class GatedSession(ChatSession):
    """Session that holds its reply until the test opens the gate."""

    def __init__(self, chunks: list[str], head: list[str]):
        self.chunks = chunks
        self.head = head
        self.gate = asyncio.Event()

    async def send_message_stream(self, text: str) -> StreamingResponse:
        return StreamingResponse(lambda response: self._generate())

    async def _generate(self) -> AsyncIterator[str]:
        for chunk in self.head:
            yield chunk
        await self.gate.wait()
        for chunk in self.chunks:
            yield chunk


class GatedProvider(LLMProvider):
    """Provider whose sessions yield head chunks, then wait for the gate."""

    def __init__(self, chunks: list[str], head: list[str] | None = None):
        self.chunks = chunks
        self.head = head or []
        self.sessions: list[GatedSession] = []

    @property
    def model(self) -> str:
        return "gated-model"

    def start_chat(self, system_instruction: str, temperature: float = 0.7, **kwargs: Any) -> GatedSession:
        session = GatedSession(self.chunks, self.head)
        self.sessions.append(session)
        return session

    async def close(self) -> None:
        pass


async def _wait_for(predicate, attempts: int = 50) -> None:
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


def _gated_controller(
    memory_store, chunks: list[str], head: list[str] | None = None
) -> tuple[ChatController, GatedProvider]:
    provider = GatedProvider(chunks, head)
    controller = ChatController(
        ChatTransport(provider, "Be kind."),
        ConversationStore(memory_store),
        welcome_message="Namaste.",
        fallback_message="Please repeat that.",
    )
    return controller, provider


class TestLoadHistory:
    """Tests for making a user active."""

    def test_fresh_user_gets_welcome(self, make_controller, user):
        controller, _ = make_controller()
        controller.load_history(user)

        assert controller.user == user
        assert controller.status is ChatStatus.IDLE
        assert [(m.role, m.text) for m in controller.messages] == [(Role.MODEL, "Namaste.")]

    def test_welcome_not_persisted_until_first_save(self, make_controller, memory_store, user):
        controller, _ = make_controller()
        controller.load_history(user)

        assert memory_store.get(chat_key(user.id)) is None

    def test_stored_conversation_restored(self, make_controller, memory_store, user):
        stored = [Message.from_model("Namaste."), Message.from_user("hello")]
        ConversationStore(memory_store).save(user.id, stored)

        controller, _ = make_controller()
        controller.load_history(user)

        assert controller.messages == stored

    def test_history_without_timezone_read_as_utc(self, make_controller, memory_store, user):
        memory_store.set(chat_key(user.id), [
            {"id": "m1", "role": "model", "text": "Namaste.", "created_at": "2024-01-01T09:30:00"},
        ])
        controller, _ = make_controller()
        controller.load_history(user)

        created = controller.messages[0].created_at
        assert created == datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_malformed_history_replaced_by_welcome(self, make_controller, memory_store, user):
        memory_store.set_raw(chat_key(user.id), "[{broken")
        controller, _ = make_controller()
        controller.load_history(user)

        assert [m.text for m in controller.messages] == ["Namaste."]

    def test_missing_api_key_sets_credential_error(self, make_controller, user):
        controller, _ = make_controller(provider=None)
        controller.load_history(user)

        assert controller.credential_error == "API key not found"
        assert [m.text for m in controller.messages] == ["Namaste."]

    def test_listeners_notified(self, make_controller, user):
        controller, _ = make_controller()
        seen = []
        controller.add_listener(lambda c: seen.append(c.status))

        controller.load_history(user)

        assert seen == [ChatStatus.IDLE]


class TestSendMessage:
    """Tests for the send/stream/finalize cycle."""

    @pytest.mark.asyncio
    async def test_streamed_reply_is_accumulated(self, make_controller, user):
        controller, provider = make_controller([["Your", " path", " begins within."]])
        controller.load_history(user)

        ok = await controller.send_message("I feel lost")

        assert ok
        last = controller.messages[-1]
        assert last.role is Role.MODEL
        assert last.text == "Your path begins within."
        assert last.is_streaming is False
        assert provider.sessions[0].sent == ["I feel lost"]

    @pytest.mark.asyncio
    async def test_success_adds_exactly_two_messages(self, make_controller, user):
        controller, _ = make_controller([["Breathe."]])
        controller.load_history(user)
        before = len(controller.messages)

        await controller.send_message("hello")

        messages = controller.messages
        assert len(messages) == before + 2
        assert (messages[-2].role, messages[-2].text) == (Role.USER, "hello")
        assert controller.status is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_status_transitions_on_success(self, make_controller, user):
        controller, _ = make_controller([["a", "b"]])
        controller.load_history(user)
        seen = []
        controller.add_listener(lambda c: seen.append(c.status))

        await controller.send_message("hello")

        assert seen[0] is ChatStatus.WAITING
        assert ChatStatus.STREAMING in seen
        assert seen[-1] is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_placeholder_text_grows_with_chunks(self, make_controller, user):
        controller, _ = make_controller([["Your", " path"]])
        controller.load_history(user)
        partials = []

        def record(c: ChatController) -> None:
            last = c.messages[-1]
            if last.role is Role.MODEL and last.is_streaming:
                partials.append(last.text)

        controller.add_listener(record)
        await controller.send_message("hello")

        assert partials == ["Your", "Your path"]

    @pytest.mark.asyncio
    async def test_failure_before_stream_appends_fallback(self, make_controller, user):
        controller, _ = make_controller([ConnectionError("offline")])
        controller.load_history(user)
        before = len(controller.messages)
        seen = []
        controller.add_listener(lambda c: seen.append(c.status))

        ok = await controller.send_message("hello")

        assert not ok
        messages = controller.messages
        assert len(messages) == before + 2
        assert messages[-1].text == "Please repeat that."
        assert ChatStatus.ERROR in seen
        assert controller.status is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_failure_mid_stream_drops_partial_reply(self, make_controller, user):
        controller, _ = make_controller([["Your", TransportError("dropped")]])
        controller.load_history(user)
        before = len(controller.messages)

        await controller.send_message("hello")

        messages = controller.messages
        assert len(messages) == before + 2
        assert [m.text for m in messages[-2:]] == ["hello", "Please repeat that."]
        assert not any(m.is_streaming for m in messages)

    @pytest.mark.asyncio
    async def test_missing_api_key_appends_fallback(self, make_controller, user):
        controller, _ = make_controller(provider=None)
        controller.load_history(user)

        ok = await controller.send_message("hello")

        assert not ok
        assert controller.messages[-1].text == "Please repeat that."
        assert controller.status is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_empty_stream_finalizes_empty_reply(self, make_controller, user):
        controller, _ = make_controller([[]])
        controller.load_history(user)

        assert await controller.send_message("hello")

        last = controller.messages[-1]
        assert (last.role, last.text, last.is_streaming) == (Role.MODEL, "", False)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_text_ignored(self, make_controller, user, text):
        controller, provider = make_controller([["never"]])
        controller.load_history(user)

        assert not await controller.send_message(text)
        assert len(controller.messages) == 1
        assert provider.sessions[0].sent == []

    @pytest.mark.asyncio
    async def test_no_user_ignored(self, make_controller):
        controller, _ = make_controller([["never"]])
        assert not await controller.send_message("hello")
        assert controller.messages == []

    @pytest.mark.asyncio
    async def test_send_while_busy_is_dropped(self, memory_store, user):
        controller, provider = _gated_controller(memory_store, ["ok"])
        controller.load_history(user)

        first = asyncio.create_task(controller.send_message("first"))
        await _wait_for(lambda: controller.status is ChatStatus.WAITING)
        length = len(controller.messages)

        for text in ("second", "third"):
            assert not await controller.send_message(text)
        assert len(controller.messages) == length
        assert not controller.can_send

        provider.sessions[0].gate.set()
        assert await first
        assert [m.text for m in controller.messages[-2:]] == ["first", "ok"]

    @pytest.mark.asyncio
    async def test_usage_of_last_reply(self, make_controller, user):
        controller, _ = make_controller([["Your", " path", " begins within."]])
        controller.load_history(user)
        assert controller.last_usage is None

        await controller.send_message("I feel lost")

        assert controller.last_usage == {"prompt_tokens": 3, "completion_tokens": 3}

    @pytest.mark.asyncio
    async def test_conversation_persisted_after_reply(self, make_controller, memory_store, user):
        controller, _ = make_controller([["Breathe."]])
        controller.load_history(user)
        await controller.send_message("hello")

        reloaded = ConversationStore(memory_store).load(user.id)

        assert reloaded == controller.messages

    @pytest.mark.asyncio
    async def test_user_turn_persisted_before_reply(self, memory_store, user):
        controller, provider = _gated_controller(memory_store, ["ok"])
        controller.load_history(user)

        task = asyncio.create_task(controller.send_message("hello"))
        await _wait_for(lambda: controller.status is ChatStatus.WAITING)

        stored = ConversationStore(memory_store).load(user.id)
        assert [m.text for m in stored] == ["Namaste.", "hello"]

        provider.sessions[0].gate.set()
        await task


class TestStaleReplies:
    """Replies arriving after the user or session changed are discarded."""

    @pytest.mark.asyncio
    async def test_reply_after_logout_is_dropped(self, memory_store, user):
        controller, provider = _gated_controller(memory_store, ["late"])
        controller.load_history(user)

        task = asyncio.create_task(controller.send_message("hello"))
        await _wait_for(lambda: controller.status is ChatStatus.WAITING)
        controller.logout()
        provider.sessions[0].gate.set()

        assert not await task
        assert controller.messages == []
        stored = ConversationStore(memory_store).load(user.id)
        assert [m.text for m in stored] == ["Namaste.", "hello"]

    @pytest.mark.asyncio
    async def test_reply_after_user_switch_is_dropped(self, memory_store, user, other_user):
        controller, provider = _gated_controller(memory_store, ["late"])
        controller.load_history(user)

        task = asyncio.create_task(controller.send_message("hello"))
        await _wait_for(lambda: controller.status is ChatStatus.WAITING)
        controller.load_history(other_user)
        provider.sessions[0].gate.set()

        assert not await task
        assert [m.text for m in controller.messages] == ["Namaste."]
        assert ConversationStore(memory_store).load(other_user.id) is None

    @pytest.mark.asyncio
    async def test_reply_after_reset_is_dropped(self, memory_store, user):
        controller, provider = _gated_controller(memory_store, [" within."], head=["Your path"])
        controller.load_history(user)

        task = asyncio.create_task(controller.send_message("hello"))
        await _wait_for(lambda: controller.status is ChatStatus.STREAMING)
        controller.reset_session()
        provider.sessions[0].gate.set()

        assert not await task
        assert [m.text for m in controller.messages] == ["Namaste."]
        assert controller.status is ChatStatus.IDLE
        stored = ConversationStore(memory_store).load(user.id)
        assert [m.text for m in stored] == ["Namaste."]


class TestCancellation:
    """A cancelled turn leaves no streaming message behind."""

    @pytest.mark.asyncio
    async def test_cancel_mid_stream_drops_placeholder(self, memory_store, user):
        controller, _ = _gated_controller(memory_store, [" within."], head=["Your path"])
        controller.load_history(user)

        task = asyncio.create_task(controller.send_message("hello"))
        await _wait_for(lambda: controller.status is ChatStatus.STREAMING)
        assert controller.messages[-1].is_streaming

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.status is ChatStatus.IDLE
        assert [m.text for m in controller.messages] == ["Namaste.", "hello"]
        assert not any(m.is_streaming for m in controller.messages)
        stored = ConversationStore(memory_store).load(user.id)
        assert [m.text for m in stored] == ["Namaste.", "hello"]

    @pytest.mark.asyncio
    async def test_cancel_while_waiting_returns_to_idle(self, memory_store, user):
        controller, _ = _gated_controller(memory_store, ["late"])
        controller.load_history(user)

        task = asyncio.create_task(controller.send_message("hello"))
        await _wait_for(lambda: controller.status is ChatStatus.WAITING)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.status is ChatStatus.IDLE
        assert controller.can_send


class TestResetAndLogout:
    """Tests for session reset and logout."""

    @pytest.mark.asyncio
    async def test_reset_replaces_history_with_welcome(self, make_controller, memory_store, user):
        controller, provider = make_controller([["Breathe."]])
        controller.load_history(user)
        await controller.send_message("hello")

        controller.reset_session()

        assert [m.text for m in controller.messages] == ["Namaste."]
        assert [m.text for m in ConversationStore(memory_store).load(user.id)] == ["Namaste."]
        assert len(provider.sessions) == 2

    def test_reset_without_user_is_noop(self, make_controller):
        controller, provider = make_controller()
        controller.reset_session()

        assert controller.messages == []
        assert provider.sessions == []

    def test_logout_clears_state(self, make_controller, user):
        controller, _ = make_controller()
        controller.load_history(user)
        controller.set_input("draft")

        controller.logout()

        assert controller.user is None
        assert controller.messages == []
        assert controller.input_text == ""
        assert not controller.can_send

    def test_messages_returns_a_copy(self, make_controller, user):
        controller, _ = make_controller()
        controller.load_history(user)

        controller.messages.append(Message.from_user("sneaky"))

        assert len(controller.messages) == 1
