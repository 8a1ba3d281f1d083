"""OpenAI API configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """Settings for OpenAI API integration.

    Attributes:
        api_key: OpenAI API key for authentication
        model_name: Model used by the house configurator
        temperature: Default temperature for non-reasoning models (0.0-2.0)
        max_tokens: Default max output tokens for generation
        reasoning_effort: Default reasoning effort for reasoning models
        text_verbosity: Default text verbosity for reasoning models
        request_timeout: HTTP timeout for a single API request
        enable_braintrust: Whether to trace API calls with Braintrust

    Note:
        For reasoning models (gpt-5, o1, o3), temperature/top_p/logprobs are not
        supported. Use reasoning_effort and text_verbosity instead.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(
        ...,
        description="OpenAI API key",
    )
    model_name: str = Field(
        default="gpt-5-mini",
        description="OpenAI model used for the configurator chat",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Default temperature for non-reasoning models (not used with reasoning models)",
    )
    max_tokens: int = Field(
        default=4000,
        gt=0,
        description="Default max output tokens per model response",
    )
    reasoning_effort: str = Field(
        default="low",
        description="Default reasoning effort for reasoning models (minimal, low, medium, high)",
    )
    text_verbosity: str = Field(
        default="low",
        description="Default text verbosity for reasoning models (low, medium, high)",
    )
    request_timeout: int = Field(
        default=30,
        gt=0,
        description="HTTP request timeout in seconds",
    )
    enable_braintrust: bool = Field(
        default=False,
        description="Wrap the OpenAI client with Braintrust tracing",
    )
    braintrust_project_name: str = Field(
        default="mood-configurator",
        description="Braintrust project that receives traces",
    )


@lru_cache
def get_openai_settings() -> OpenAISettings:
    """Get cached OpenAI settings instance.

    Returns:
        OpenAISettings: Cached settings instance
    """
    return OpenAISettings()
