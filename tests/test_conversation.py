"""Unit tests for the conversation module."""
import asyncio
from datetime import timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from retail_assistant.conversation import (
    QUICK_ACTIONS,
    ConversationManager,
    ConversationSession,
    Message,
    MessageRole,
    Notification,
    SessionStatus,
    get_quick_action,
    validate_prompt,
)
from retail_assistant.errors import PromptValidationError, ProviderError
from retail_assistant.intent import IntentCategory, get_greeting, get_template
from retail_assistant.providers import OfflineProvider, ProviderResponse, ResponseProvider

PRICING_PROMPT = "Analyze my pricing strategy and suggest improvements for better profitability"


class TestMessage:
    """Tests for the Message model."""

    def test_factories(self):
        """Test the role-specific constructors."""
        user = Message.user("hi")
        assistant = Message.assistant("hello")

        assert user.role == MessageRole.USER
        assert assistant.role == MessageRole.ASSISTANT
        assert user.id != assistant.id
        assert user.created_at.tzinfo is not None

    def test_message_is_frozen(self):
        """Test that messages cannot be mutated."""
        message = Message.user("hi")
        with pytest.raises(ValueError):
            message.body = "changed"  # type: ignore[misc]


class TestConversationSession:
    """Tests for the ConversationSession model."""

    def test_start_seeds_greeting(self):
        """Test that a new session holds exactly the assistant greeting."""
        session = ConversationSession.start()

        assert len(session.transcript) == 1
        assert session.transcript[0].role == MessageRole.ASSISTANT
        assert session.transcript[0].body == get_greeting()
        assert session.pending is False
        assert session.status == SessionStatus.IDLE

    def test_start_with_custom_greeting(self):
        session = ConversationSession.start(greeting="Welcome back")
        assert session.transcript[0].body == "Welcome back"

    def test_transcript_is_a_snapshot(self):
        """Test that the transcript view cannot be used to mutate the session."""
        session = ConversationSession.start()
        transcript = session.transcript

        assert isinstance(transcript, tuple)
        session.append(Message.user("more"))
        assert len(transcript) == 1
        assert len(session.transcript) == 2

    def test_transcript_storage_is_private(self):
        """Test that messages can only be added through append."""
        session = ConversationSession.start()

        assert "messages" not in ConversationSession.model_fields
        assert not hasattr(session, "messages")
        assert "messages" not in session.model_dump()

        seeded = ConversationSession(messages=[Message.user("injected")])
        assert seeded.transcript == ()

    def test_append_keeps_timestamps_monotonic(self):
        """Test that a message stamped before the tail is re-stamped."""
        session = ConversationSession.start()
        tail = session.transcript[-1]
        earlier = Message(
            role=MessageRole.USER,
            body="late clock",
            created_at=tail.created_at - timedelta(seconds=5),
        )

        stored = session.append(earlier)

        assert stored.created_at == tail.created_at
        assert stored.id == earlier.id
        assert stored.body == "late clock"

    def test_request_lifecycle(self):
        """Test the pending flag and status across a failed request."""
        session = ConversationSession.start()

        session.begin_request()
        assert session.pending is True
        assert session.status == SessionStatus.SENDING

        session.record_failure("boom")
        session.end_request()
        assert session.pending is False
        assert session.status == SessionStatus.IDLE_WITH_ERROR
        assert session.last_error == "boom"

        session.begin_request()
        assert session.last_error is None
        session.end_request()
        assert session.status == SessionStatus.IDLE


class TestValidatePrompt:
    """Tests for prompt validation."""

    def test_valid_prompt_is_unchanged(self):
        assert validate_prompt("  sales  ") == "  sales  "

    @given(st.text(alphabet=" \t\r\n"))
    def test_blank_prompt_raises(self, text: str):
        """Property test: empty and whitespace-only prompts are invalid."""
        with pytest.raises(PromptValidationError):
            validate_prompt(text)


class TestConversationManager:
    """Tests for the ConversationManager state machine."""

    def test_initial_state(self, manager):
        """Test that a new manager starts idle with the greeting."""
        assert len(manager.transcript) == 1
        assert manager.pending is False
        assert manager.session.status == SessionStatus.IDLE

    @pytest.mark.asyncio
    async def test_sales_exchange(self, manager):
        """Test the end-to-end sales trend scenario."""
        reply = await manager.send("Analyze my current sales trends")

        transcript = manager.transcript
        assert len(transcript) == 3
        assert [m.role for m in transcript] == [
            MessageRole.ASSISTANT,
            MessageRole.USER,
            MessageRole.ASSISTANT,
        ]
        assert transcript[1].body == "Analyze my current sales trends"
        assert transcript[2] == reply
        assert reply.body == get_template(IntentCategory.SALES_TREND).body
        assert manager.pending is False
        assert manager.session.status == SessionStatus.IDLE

    @pytest.mark.asyncio
    async def test_stock_exchange(self, manager):
        """Test the end-to-end inventory scenario."""
        reply = await manager.send("What should I stock more of?")
        assert reply.body == get_template(IntentCategory.INVENTORY_STOCK).body

    @pytest.mark.asyncio
    async def test_default_exchange(self, manager):
        """Test that an unrecognized prompt gets the catch-all template."""
        reply = await manager.send("tell me a joke")
        assert reply.body == get_template(IntentCategory.DEFAULT).body
        assert manager.session.last_error is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_prompt_is_noop(self, manager, notifications, text):
        """Test that blank prompts leave the session untouched."""
        before = manager.transcript

        assert await manager.send(text) is None

        assert manager.transcript == before
        assert manager.pending is False
        assert manager.submit(text) is None
        assert notifications == []

    @pytest.mark.asyncio
    async def test_send_while_pending_is_noop(self, gated_provider):
        """Test the single-flight discipline."""
        manager = ConversationManager(gated_provider)

        first = asyncio.create_task(manager.send("sales"))
        await asyncio.sleep(0)
        assert manager.pending is True
        assert manager.session.status == SessionStatus.SENDING

        assert await manager.send("price") is None
        assert len(manager.transcript) == 2
        assert gated_provider.prompts == ["sales"]

        gated_provider.release()
        reply = await first

        assert reply.body == "gated reply"
        assert len(manager.transcript) == 3
        assert manager.pending is False

    @pytest.mark.asyncio
    async def test_submit_is_fire_and_forget(self, gated_provider):
        """Test scheduling a send and observing it through the session."""
        manager = ConversationManager(gated_provider)

        task = manager.submit("inventory check")
        assert task is not None
        assert manager.submit("another") is None

        await asyncio.sleep(0)
        assert manager.pending is True

        gated_provider.release()
        await task

        assert manager.pending is False
        assert [m.body for m in manager.transcript[1:]] == ["inventory check", "gated reply"]

    @pytest.mark.asyncio
    async def test_submit_enters_sending_before_yielding(self, gated_provider):
        """Test that submit records the prompt and the pending flag synchronously."""
        manager = ConversationManager(gated_provider)

        task = manager.submit("sales")

        assert manager.pending is True
        assert manager.session.status == SessionStatus.SENDING
        assert [m.body for m in manager.transcript[1:]] == ["sales"]

        assert await manager.send("price") is None
        assert len(manager.transcript) == 2

        gated_provider.release()
        await task

        assert gated_provider.prompts == ["sales"]
        assert [m.body for m in manager.transcript[1:]] == ["sales", "gated reply"]

    @pytest.mark.asyncio
    async def test_provider_failure_notifies(self, failing_provider, notifications):
        """Test that a rejection is surfaced without touching the transcript."""
        manager = ConversationManager(failing_provider, notify_callback=notifications.append)

        assert await manager.send("Analyze my current sales trends") is None

        assert len(manager.transcript) == 2
        assert manager.transcript[-1].role == MessageRole.USER
        assert manager.pending is False
        assert manager.session.status == SessionStatus.IDLE_WITH_ERROR
        assert manager.session.last_error == "Simulated provider failure"
        assert len(notifications) == 1
        assert isinstance(notifications[0], Notification)
        assert notifications[0].title == "Error"
        assert notifications[0].detail == "Simulated provider failure"

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, scripted_provider, notifications):
        """Test that sending again after a rejection succeeds normally."""
        provider = scripted_provider(ProviderError("timeout", provider="scripted"), "second try")
        manager = ConversationManager(provider, notify_callback=notifications.append)

        await manager.send("pricing")
        reply = await manager.send("pricing")

        assert reply.body == "second try"
        assert [m.role for m in manager.transcript] == [
            MessageRole.ASSISTANT,
            MessageRole.USER,
            MessageRole.USER,
            MessageRole.ASSISTANT,
        ]
        assert manager.session.status == SessionStatus.IDLE
        assert manager.session.last_error is None
        assert len(notifications) == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_propagates(self, scripted_provider):
        """Test that non-provider errors are raised after the flag is reset."""
        manager = ConversationManager(scripted_provider(RuntimeError("bug")))

        with pytest.raises(RuntimeError, match="bug"):
            await manager.send("sales")

        assert manager.pending is False
        assert len(manager.transcript) == 2

    @pytest.mark.asyncio
    async def test_transcript_is_ordered(self, manager):
        """Test that replies append in send order with non-decreasing timestamps."""
        prompts = ["sales", "stock", "product", "price", "hello"]
        for prompt in prompts:
            await manager.send(prompt)

        transcript = manager.transcript
        assert len(transcript) == 1 + 2 * len(prompts)
        assert [m.body for m in transcript[1::2]] == prompts
        for earlier, later in zip(transcript, transcript[1:]):
            assert earlier.created_at <= later.created_at
        assert len({m.id for m in transcript}) == len(transcript)

    @pytest.mark.asyncio
    async def test_quick_action_matches_typed_prompt(self):
        """Test that a quick action behaves exactly like typing its prompt."""
        typed = ConversationManager(OfflineProvider(delay=0))
        clicked = ConversationManager(OfflineProvider(delay=0))

        typed_reply = await typed.send(PRICING_PROMPT)
        clicked_reply = await clicked.run_quick_action("pricing")

        assert clicked_reply.body == typed_reply.body
        assert clicked_reply.body == get_template(IntentCategory.PRICING_STRATEGY).body
        assert clicked.transcript[1].body == PRICING_PROMPT

    @pytest.mark.asyncio
    async def test_quick_action_accepts_instance(self, manager):
        reply = await manager.run_quick_action(QUICK_ACTIONS[0])
        assert reply.body == get_template(IntentCategory.SALES_TREND).body

    @pytest.mark.asyncio
    async def test_unknown_quick_action_raises(self, manager):
        with pytest.raises(KeyError):
            await manager.run_quick_action("refunds")

    @pytest.mark.asyncio
    async def test_close_cancels_inflight_request(self, gated_provider):
        """Test that teardown cancels a submitted request without a reply."""
        manager = ConversationManager(gated_provider)

        task = manager.submit("sales")
        await asyncio.sleep(0)
        await manager.close()

        assert task.cancelled()
        assert manager.pending is False
        assert manager.session.status == SessionStatus.IDLE
        assert [m.role for m in manager.transcript] == [MessageRole.ASSISTANT, MessageRole.USER]
        assert gated_provider.closed is True
        assert manager.closed is True

    @pytest.mark.asyncio
    async def test_close_cancels_awaited_send(self, gated_provider):
        """Test that teardown also cancels a send awaited by another task."""
        manager = ConversationManager(gated_provider)

        task = asyncio.create_task(manager.send("sales"))
        await asyncio.sleep(0)
        assert manager.pending is True

        await manager.close()

        assert task.cancelled()
        assert manager.pending is False
        assert [m.role for m in manager.transcript] == [MessageRole.ASSISTANT, MessageRole.USER]

    @pytest.mark.asyncio
    async def test_reply_after_close_is_dropped(self):
        """Test that a reply resolving after close is not appended."""

        class ClosingProvider(ResponseProvider):
            manager: ConversationManager

            @property
            def name(self) -> str:
                return "closing"

            async def issue(self, prompt: str) -> ProviderResponse:
                await self.manager.close()
                return ProviderResponse(content="late reply", provider=self.name)

            async def close(self) -> None:
                pass

        provider = ClosingProvider()
        manager = ConversationManager(provider)
        provider.manager = manager

        assert await manager.send("sales") is None

        assert manager.closed is True
        assert manager.pending is False
        assert [m.body for m in manager.transcript[1:]] == ["sales"]

    @pytest.mark.asyncio
    async def test_send_after_close_is_noop(self, manager):
        async with manager:
            pass

        assert await manager.send("sales") is None
        assert len(manager.transcript) == 1

    @pytest.mark.asyncio
    async def test_debug_callback_traces_exchange(self, manager):
        """Test that tracing reaches both the manager and its provider."""
        entries = []
        manager.set_debug_callback(lambda *entry: entries.append(entry))

        await manager.send("")
        await manager.send("price check")

        components = {component for _, component, _ in entries}
        assert components == {"Conversation", "Provider"}
        assert ("debug", "Conversation", "Ignoring blank prompt") in entries
        assert ("info", "Conversation", "Sending: price check") in entries


class TestQuickActions:
    """Tests for quick action lookup."""

    def test_four_actions(self):
        assert [a.key for a in QUICK_ACTIONS] == ["sales-trends", "inventory", "products", "pricing"]

    def test_lookup_is_case_insensitive(self):
        assert get_quick_action("PRICING").prompt == PRICING_PROMPT

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError, match="Unknown quick action"):
            get_quick_action("refunds")
