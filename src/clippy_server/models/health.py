"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of clippy-server.
        ollama_connected: Optional boolean indicating Ollama connectivity.
        ollama_host: Optional string with the Ollama host URL.
        tools: Names of the tools available to the model.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of clippy-server")
    ollama_connected: bool | None = Field(
        default=None,
        description="Whether Ollama is connected",
    )
    ollama_host: str | None = Field(
        default=None,
        description="Ollama host URL",
    )
    tools: list[str] = Field(
        default_factory=list,
        description="Registered tool names",
    )
