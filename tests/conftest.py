"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from retail_assistant.conversation import ConversationManager
from retail_assistant.providers import OfflineProvider, ProviderResponse, ResponseProvider


class GatedProvider(ResponseProvider):
    """Provider whose requests stay in flight until ``release`` is called."""

    def __init__(self, content: str = "gated reply"):
        super().__init__()
        self.content = content
        self.gate = asyncio.Event()
        self.prompts: list[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "gated"

    def release(self) -> None:
        self.gate.set()

    async def issue(self, prompt: str) -> ProviderResponse:
        self.prompts.append(prompt)
        await self.gate.wait()
        return ProviderResponse(content=self.content, provider=self.name)

    async def close(self) -> None:
        self.closed = True


class ScriptedProvider(ResponseProvider):
    """Provider that replays a script of replies and exceptions."""

    def __init__(self, *outcomes):
        super().__init__()
        self._outcomes = list(outcomes)
        self.prompts: list[str] = []

    @property
    def name(self) -> str:
        return "scripted"

    async def issue(self, prompt: str) -> ProviderResponse:
        self.prompts.append(prompt)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return ProviderResponse(content=outcome, provider=self.name)

    async def close(self) -> None:
        pass


@pytest.fixture
def offline_provider():
    """Offline provider without artificial latency."""
    return OfflineProvider(delay=0)


@pytest.fixture
def failing_provider():
    """Offline provider that rejects every request."""
    return OfflineProvider(delay=0, failure_rate=1.0)


@pytest.fixture
def gated_provider():
    return GatedProvider()


@pytest.fixture
def notifications():
    """List collecting notifications emitted by a manager."""
    return []


@pytest.fixture
def manager(offline_provider, notifications):
    """Conversation manager backed by the zero-delay offline provider."""
    return ConversationManager(offline_provider, notify_callback=notifications.append)


@pytest.fixture
def sample_prompts():
    """Prompts with their expected intent category values."""
    return {
        "Analyze my current sales trends": "sales_trend",
        "What should I stock more of?": "inventory_stock",
        "Can you recommend something new?": "product_recommendation",
        "Is my price too high?": "pricing_strategy",
        "tell me a joke": "default",
    }


@pytest.fixture
def scripted_provider():
    """Factory for providers that replay replies and exceptions in order."""
    return ScriptedProvider
