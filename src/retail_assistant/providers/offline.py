"""Offline response provider.

Deterministic demo mode: waits out a fixed artificial latency, then
answers from the template catalog. Rejections only happen when a
failure rate is configured.
"""

import asyncio
import random
import time

from ..config import DEFAULT_FAILURE_RATE, DEFAULT_RESPONSE_DELAY_MS
from ..errors import ProviderError
from ..intent import classify, synthesize
from .base import ResponseProvider
from .models import ProviderResponse


class OfflineProvider(ResponseProvider):
    """Template-backed provider that simulates a remote call.

    Hidden design decisions:
    - Latency model (single fixed delay)
    - Failure injection (seeded Bernoulli trial per request)
    - Routing (keyword classification + template lookup)
    """

    def __init__(
        self,
        delay: float = DEFAULT_RESPONSE_DELAY_MS / 1000,
        failure_rate: float = DEFAULT_FAILURE_RATE,
        seed: int | None = None,
    ):
        """Initialize the offline provider.

        Args:
            delay: Seconds to wait before resolving (default: 2.0)
            failure_rate: Probability in [0, 1] that a request is rejected
            seed: Optional seed for reproducible failure injection
        """
        super().__init__()
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be between 0 and 1, got {failure_rate}")

        self._delay = delay
        self._failure_rate = failure_rate
        self._rng = random.Random(seed)
        self._closed = False

    @property
    def name(self) -> str:
        return "offline"

    @property
    def delay(self) -> float:
        """Artificial latency in seconds."""
        return self._delay

    @property
    def failure_rate(self) -> float:
        """Probability that a request is rejected."""
        return self._failure_rate

    async def issue(self, prompt: str) -> ProviderResponse:
        """Resolve a prompt after the configured delay.

        Args:
            prompt: User prompt

        Returns:
            ProviderResponse with the template for the classified intent

        Raises:
            ProviderError: If the provider is closed or the simulated call fails
        """
        if self._closed:
            raise ProviderError("Provider is closed", provider=self.name)

        started = time.perf_counter()
        self._debug("debug", f"Simulating {self._delay * 1000:.0f} ms latency")
        await asyncio.sleep(self._delay)

        if self._failure_rate and self._rng.random() < self._failure_rate:
            self._debug("warning", "Simulated provider failure")
            raise ProviderError("Simulated provider failure", provider=self.name)

        category = classify(prompt)
        self._debug("info", f"Routed prompt to {category.value}")

        return ProviderResponse(
            content=synthesize(category, prompt),
            provider=self.name,
            category=category,
            elapsed_ms=(time.perf_counter() - started) * 1000,
        )

    async def close(self) -> None:
        """Mark the provider closed (no external resources to release)."""
        self._closed = True
