from .base import ResponseProvider
from .factory import create_response_provider
from .models import ProviderResponse
from .offline import OfflineProvider

__all__ = [
    "ResponseProvider",
    "create_response_provider",
    "ProviderResponse",
    "OfflineProvider",
]
