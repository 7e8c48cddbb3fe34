from pydantic import BaseModel, ConfigDict, Field

from ..intent.models import IntentCategory


class ProviderResponse(BaseModel):
    """Response from a response provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated response text")
    provider: str = Field(description="Provider that generated the response")
    category: IntentCategory | None = Field(
        default=None,
        description="Intent category used to route the prompt, if the provider classifies"
    )
    elapsed_ms: float = Field(default=0.0, description="Time spent serving the request")
