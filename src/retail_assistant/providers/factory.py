from typing import Any

from .base import ResponseProvider
from .offline import OfflineProvider


def create_response_provider(provider: str = "offline", **config: Any) -> ResponseProvider:
    """Create a response provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (currently only 'offline')
        **config: Provider-specific configuration
            For offline:
                - delay: float seconds (default: 2.0)
                - failure_rate: float in [0, 1] (default: 0.0)
                - seed: int | None

    Returns:
        Initialized response provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_response_provider("offline", delay=0.5)

        >>> flaky = create_response_provider(
        ...     "offline",
        ...     failure_rate=0.25,
        ...     seed=7
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower in ("offline", "demo"):
        return OfflineProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'offline'"
    )
