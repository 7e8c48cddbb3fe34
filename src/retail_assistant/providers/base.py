from abc import ABC, abstractmethod
from typing import Any

from .models import ProviderResponse


class ResponseProvider(ABC):
    """Abstract base class for response providers.

    This module hides the design decision of where assistant replies come
    from. The conversation manager only sees "prompt in, response out or
    ProviderError", so an offline simulator and a networked language-model
    client are interchangeable.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.issue("How are sales?")
        # Automatically cleaned up
    """

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier used in responses and errors."""

    @abstractmethod
    async def issue(self, prompt: str) -> ProviderResponse:
        """Serve a single prompt.

        Args:
            prompt: Non-blank user prompt

        Returns:
            ProviderResponse containing the reply text and metadata

        Raises:
            ProviderError: Transport or provider failure
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for execution tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Provider", message)

    async def __aenter__(self) -> "ResponseProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
