"""Conversation manager.

Owns one session's transcript and in-flight flag and drives the request
lifecycle:

    idle --send--> sending --resolve--> idle
                           --reject---> idle_with_error

Only one request may be outstanding per session, so replies always
append in the order prompts were sent.
"""

import asyncio
import contextlib
from typing import Any

from ..config import CHAT_MESSAGE_MAX_PREVIEW
from ..errors import PromptValidationError, ProviderError
from ..providers import ResponseProvider
from .models import ConversationSession, Message, Notification
from .quick_actions import QuickAction, get_quick_action


def validate_prompt(text: str) -> str:
    """Return the prompt unchanged if it has visible content.

    Raises:
        PromptValidationError: If the prompt is empty or whitespace-only
    """
    if not text or not text.strip():
        raise PromptValidationError("Prompt is empty")
    return text


def _preview(text: str) -> str:
    if len(text) > CHAT_MESSAGE_MAX_PREVIEW:
        return text[:CHAT_MESSAGE_MAX_PREVIEW] + "..."
    return text


class ConversationManager:
    """Single-flight conversation state machine.

    Hidden design decisions:
    - Transcript ownership and ordering
    - Single-flight request discipline
    - Mapping of provider failures to notifications
    - Cancellation on teardown
    """

    def __init__(
        self,
        provider: ResponseProvider,
        session: ConversationSession | None = None,
        notify_callback: Any | None = None,
        debug_callback: Any | None = None,
    ):
        """Initialize the manager.

        Args:
            provider: Response provider used to serve prompts
            session: Existing session (a greeting-seeded one is created if omitted)
            notify_callback: Optional callable(Notification) for failure reports
            debug_callback: Optional callable(level, component, message) for tracing
        """
        self._provider = provider
        self._session = session or ConversationSession.start()
        self._notify_callback = notify_callback
        self._debug_callback: Any | None = None
        self._inflight: asyncio.Task | None = None
        self._closed = False

        if debug_callback is not None:
            self.set_debug_callback(debug_callback)

    @property
    def session(self) -> ConversationSession:
        """Session read model (transcript, pending flag, status)."""
        return self._session

    @property
    def transcript(self) -> tuple[Message, ...]:
        return self._session.transcript

    @property
    def pending(self) -> bool:
        return self._session.pending

    @property
    def closed(self) -> bool:
        return self._closed

    def set_notify_callback(self, callback: Any) -> None:
        """Set the callback that receives failure notifications."""
        self._notify_callback = callback

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for execution tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._provider.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Conversation", message)

    def _accepts(self, text: str) -> bool:
        if self._closed:
            self._debug("debug", "Session closed; ignoring prompt")
            return False
        try:
            validate_prompt(text)
        except PromptValidationError:
            self._debug("debug", "Ignoring blank prompt")
            return False
        if self._session.pending:
            self._debug("debug", "Request already in flight; ignoring prompt")
            return False
        return True

    def _begin(self, text: str) -> bool:
        """Accept a prompt: append the user message and enter ``sending``.

        Runs synchronously so the session reflects the request before the
        caller yields to the event loop.
        """
        if not self._accepts(text):
            return False

        self._session.append(Message.user(text))
        self._session.begin_request()
        self._debug("info", f"Sending: {_preview(text)}")
        return True

    async def _complete(self, text: str) -> Message | None:
        """Await the provider for an accepted prompt and record the outcome."""
        self._inflight = asyncio.current_task()
        try:
            response = await self._provider.issue(text)
        except ProviderError as e:
            self._session.record_failure(str(e))
            self._debug("error", f"Provider '{e.provider}' rejected request: {e}")
            self._notify(Notification.provider_failure(str(e)))
            return None
        except asyncio.CancelledError:
            self._debug("warning", "Request cancelled")
            raise
        finally:
            self._session.end_request()
            if self._inflight is asyncio.current_task():
                self._inflight = None

        if self._closed:
            self._debug("debug", "Session closed; dropping reply")
            return None

        reply = self._session.append(Message.assistant(response.content))
        self._debug("info", f"Reply received from {response.provider} in {response.elapsed_ms:.0f} ms")
        return reply

    async def send(self, text: str) -> Message | None:
        """Send a prompt and wait for the exchange to finish.

        Blank prompts, prompts sent while a request is pending, and prompts
        sent after ``close`` are ignored.

        Args:
            text: Prompt as typed

        Returns:
            The appended assistant message, or None if the prompt was
            ignored or the provider rejected it
        """
        if not self._begin(text):
            return None
        return await self._complete(text)

    def submit(self, text: str) -> "asyncio.Task[Message | None] | None":
        """Fire-and-forget variant of ``send``.

        The user message and the pending flag are recorded before this
        returns; only the provider call runs in the background. Must be
        called from a running event loop.

        Returns:
            The scheduled task, or None if the prompt was ignored
        """
        if not self._begin(text):
            return None

        self._inflight = asyncio.get_running_loop().create_task(self._complete(text))
        return self._inflight

    async def run_quick_action(self, action: QuickAction | str) -> Message | None:
        """Send a quick action's canned prompt through ``send``.

        Args:
            action: QuickAction instance or its key

        Raises:
            KeyError: If a key does not name a quick action
        """
        if isinstance(action, str):
            action = get_quick_action(action)
        self._debug("debug", f"Quick action: {action.key}")
        return await self.send(action.prompt)

    def _notify(self, notification: Notification) -> None:
        if self._notify_callback:
            self._notify_callback(notification)

    async def close(self) -> None:
        """Tear down the session.

        Cancels the request still in flight, whether it came from ``submit``
        or from an awaited ``send`` (no assistant message is appended), then
        closes the provider.
        """
        if self._closed:
            return
        self._closed = True

        inflight = self._inflight
        if inflight is not None and inflight is not asyncio.current_task() and not inflight.done():
            inflight.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await inflight
        self._inflight = None

        await self._provider.close()
        self._debug("debug", "Session closed")

    async def __aenter__(self) -> "ConversationManager":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
