"""Data models for the conversation core.

These models define the transcript, the session read model and the
failure notification, independent of how they are rendered.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..config import ERROR_NOTIFICATION_DESCRIPTION, ERROR_NOTIFICATION_TITLE
from ..intent import get_greeting


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MessageRole(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    ASSISTANT = "assistant"


class SessionStatus(str, Enum):
    """Request lifecycle state of a session."""

    IDLE = "idle"
    SENDING = "sending"
    IDLE_WITH_ERROR = "idle_with_error"


class Message(BaseModel):
    """An immutable transcript entry."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex, description="Unique message token")
    role: MessageRole = Field(description="Who wrote the message")
    body: str = Field(description="Message text")
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def user(cls, body: str) -> "Message":
        return cls(role=MessageRole.USER, body=body)

    @classmethod
    def assistant(cls, body: str) -> "Message":
        return cls(role=MessageRole.ASSISTANT, body=body)


class Notification(BaseModel):
    """A non-blocking, user-visible report of a failed request."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    level: str = "error"
    detail: str | None = Field(default=None, description="Underlying failure message")

    @classmethod
    def provider_failure(cls, detail: str | None = None) -> "Notification":
        return cls(
            title=ERROR_NOTIFICATION_TITLE,
            description=ERROR_NOTIFICATION_DESCRIPTION,
            detail=detail,
        )


class ConversationSession(BaseModel):
    """Transcript and request state for one interaction context.

    The transcript only ever grows. ``pending`` is True exactly while a
    request is in flight.
    """

    session_id: str = Field(default_factory=lambda: str(uuid4()))
    pending: bool = False
    status: SessionStatus = SessionStatus.IDLE
    last_error: str | None = Field(default=None, description="Message of the last rejection")
    created_at: datetime = Field(default_factory=_utcnow)

    # Only reachable through ``transcript`` and ``append``
    _messages: list[Message] = PrivateAttr(default_factory=list)

    @classmethod
    def start(cls, greeting: str | None = None) -> "ConversationSession":
        """Create a session seeded with a single assistant greeting.

        Args:
            greeting: Greeting text (defaults to the packaged greeting)
        """
        if greeting is None:
            greeting = get_greeting()
        session = cls()
        session.append(Message.assistant(greeting))
        return session

    @property
    def transcript(self) -> tuple[Message, ...]:
        """Read-only, creation-ordered view of the transcript."""
        return tuple(self._messages)

    def append(self, message: Message) -> Message:
        """Append a message, keeping creation timestamps non-decreasing.

        A message stamped earlier than the current tail (clock step back)
        is re-stamped with the tail's timestamp.

        Returns:
            The message as stored
        """
        if self._messages and message.created_at < self._messages[-1].created_at:
            message = message.model_copy(update={"created_at": self._messages[-1].created_at})
        self._messages.append(message)
        return message

    def begin_request(self) -> None:
        self.pending = True
        self.status = SessionStatus.SENDING
        self.last_error = None

    def record_failure(self, error: str) -> None:
        self.last_error = error
        self.status = SessionStatus.IDLE_WITH_ERROR

    def end_request(self) -> None:
        self.pending = False
        if self.status == SessionStatus.SENDING:
            self.status = SessionStatus.IDLE
