"""Exception hierarchy for the assistant core."""


class AssistantError(Exception):
    """Base class for assistant errors."""


class PromptValidationError(AssistantError, ValueError):
    """Raised when a prompt is empty or whitespace-only.

    The conversation manager treats this as a silent no-op; it never
    reaches the user.
    """


class ProviderError(AssistantError):
    """Raised when a response provider rejects a request.

    Covers transport and provider failures. The conversation manager turns
    it into a non-blocking notification and leaves the transcript intact.
    """

    def __init__(self, message: str, provider: str = "unknown"):
        super().__init__(message)
        self.provider = provider
