"""Assistant configuration.

Centralizes default values and environment-driven settings for the
response engine, the conversation manager and the CLI.
"""

import os
from enum import IntEnum

from pydantic import BaseModel, Field, field_validator


class LogLevel(IntEnum):
    """Trace threshold. An entry is shown when its level is at or above it."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level: str) -> "LogLevel":
        """Parse a level name such as ``"info"`` (case-insensitive).

        Raises:
            ValueError: If the name is not a trace level
        """
        try:
            return cls[level.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {level}") from None


# Request simulation
DEFAULT_PROVIDER = "offline"
DEFAULT_RESPONSE_DELAY_MS = 2000  # Artificial latency before the offline provider resolves
DEFAULT_FAILURE_RATE = 0.0  # Offline provider never rejects unless configured

# Failure notification (shown instead of an assistant message)
ERROR_NOTIFICATION_TITLE = "Error"
ERROR_NOTIFICATION_DESCRIPTION = (
    "Failed to get AI response. Please check your provider configuration."
)

# Trace output
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating trace messages

# Chat display
CHAT_MESSAGE_MAX_PREVIEW = 80  # Characters of a prompt shown in trace entries
EXIT_COMMANDS = ("exit", "quit", "q")


class AssistantSettings(BaseModel):
    """Runtime settings for the assistant, usually read from the environment."""

    provider: str = Field(default=DEFAULT_PROVIDER, description="Response provider name")
    delay_ms: int = Field(
        default=DEFAULT_RESPONSE_DELAY_MS,
        ge=0,
        description="Artificial delay before a response resolves"
    )
    failure_rate: float = Field(
        default=DEFAULT_FAILURE_RATE,
        ge=0.0,
        le=1.0,
        description="Probability that a simulated request is rejected"
    )
    seed: int | None = Field(default=None, description="Seed for the failure RNG")
    log_level: str | None = Field(
        default=None,
        description="Trace level: debug, info, warning or error (None disables tracing)"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return LogLevel.from_string(value).name.lower()

    @classmethod
    def from_env(cls) -> "AssistantSettings":
        """Build settings from environment variables.

        Environment variables:
            RETAIL_ASSISTANT_PROVIDER: Provider type (default: offline)
            RETAIL_ASSISTANT_DELAY_MS: Response delay in ms (default: 2000)
            RETAIL_ASSISTANT_FAILURE_RATE: Rejection probability (default: 0.0)
            RETAIL_ASSISTANT_SEED: Optional integer seed for failure injection
            RETAIL_ASSISTANT_LOG_LEVEL: Optional trace level

        Values are passed through as strings and coerced by the model.

        Raises:
            pydantic.ValidationError: If a variable holds a malformed or
                out-of-range value
        """
        return cls(
            provider=os.getenv("RETAIL_ASSISTANT_PROVIDER", DEFAULT_PROVIDER),
            delay_ms=os.getenv("RETAIL_ASSISTANT_DELAY_MS") or DEFAULT_RESPONSE_DELAY_MS,
            failure_rate=os.getenv("RETAIL_ASSISTANT_FAILURE_RATE") or DEFAULT_FAILURE_RATE,
            seed=os.getenv("RETAIL_ASSISTANT_SEED") or None,
            log_level=os.getenv("RETAIL_ASSISTANT_LOG_LEVEL") or None,
        )

    def provider_config(self) -> dict:
        """Keyword arguments for ``create_response_provider``."""
        return {
            "delay": self.delay_ms / 1000,
            "failure_rate": self.failure_rate,
            "seed": self.seed,
        }
