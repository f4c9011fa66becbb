"""Data models for chat conversations.

These models define the structure of messages and controller status,
independent of how the conversation is stored or displayed.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    """Collision-resistant identifier for messages and entries."""
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read a timestamp stored without an offset as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    MODEL = "model"


class ChatStatus(str, Enum):
    """Controller state.

    idle -> waiting -> streaming -> idle on success,
    idle -> waiting -> error -> idle on failure.
    """

    IDLE = "idle"
    WAITING = "waiting"
    STREAMING = "streaming"
    ERROR = "error"


class Message(BaseModel):
    """A single chat message.

    Messages are immutable; the controller replaces a streaming message
    with an updated copy on every chunk.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    role: Role
    text: str
    created_at: datetime = Field(default_factory=utc_now)
    is_streaming: bool = Field(
        default=False,
        description="True only while a model reply is being filled in"
    )

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_user(cls, text: str) -> "Message":
        return cls(role=Role.USER, text=text)

    @classmethod
    def from_model(cls, text: str, is_streaming: bool = False) -> "Message":
        return cls(role=Role.MODEL, text=text, is_streaming=is_streaming)
