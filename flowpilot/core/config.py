"""
Configuration management using Pydantic Settings.
Loads from environment variables and .env file.

`Settings` is read once at the edges of the application (runners, entry
points). The conversation engine itself only ever receives an explicit
`AIConfig` value.
"""

from typing import Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ProviderName = Literal["openai", "anthropic"]


class AIConfig(BaseModel):
    """Explicit configuration handed to the AI client and LLM providers."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderName = "anthropic"
    api_key: str = ""
    model: str = "claude-3-5-sonnet-latest"

    # Conversation bounds
    max_retries: int = Field(default=3, ge=1)
    max_turns: int = Field(default=40, ge=1)

    # Delay before attempt n+1 is base * backoff**(n-1), capped at max
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    retry_backoff: float = Field(default=2.0, ge=1.0)
    retry_max_delay: float = Field(default=10.0, ge=0.0)

    # Generation
    max_tokens: int = Field(default=1024, ge=1)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)


class Settings(BaseSettings):
    """Application configuration loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM Provider
    llm_provider: ProviderName = Field(
        default="anthropic",
        description="Which LLM provider to use"
    )

    # OpenAI
    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o", description="OpenAI model name")

    # Anthropic
    anthropic_api_key: str = Field(default="", description="Anthropic API key")
    anthropic_model: str = Field(
        default="claude-3-5-sonnet-latest",
        description="Anthropic model name"
    )

    # Conversation bounds
    ai_max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per action before giving up"
    )
    ai_max_turns: int = Field(
        default=40,
        ge=1,
        description="Model turns allowed within a single attempt"
    )
    ai_retry_base_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Seconds to wait before the second attempt"
    )
    ai_retry_backoff: float = Field(
        default=2.0,
        ge=1.0,
        description="Multiplier applied to the delay for each further attempt"
    )
    ai_retry_max_delay: float = Field(
        default=10.0,
        ge=0.0,
        description="Upper bound for the delay between attempts"
    )
    ai_max_tokens: int = Field(default=1024, ge=1, description="Max tokens per model turn")
    ai_temperature: float = Field(default=0.0, description="Sampling temperature")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    def ai_config(self) -> AIConfig:
        """
        Build the explicit AI configuration for the selected provider.

        Returns:
            AIConfig with the provider's key and model filled in
        """
        if self.llm_provider == "openai":
            api_key, model = self.openai_api_key, self.openai_model
        else:
            api_key, model = self.anthropic_api_key, self.anthropic_model

        return AIConfig(
            provider=self.llm_provider,
            api_key=api_key,
            model=model,
            max_retries=self.ai_max_retries,
            max_turns=self.ai_max_turns,
            retry_base_delay=self.ai_retry_base_delay,
            retry_backoff=self.ai_retry_backoff,
            retry_max_delay=self.ai_retry_max_delay,
            max_tokens=self.ai_max_tokens,
            temperature=self.ai_temperature,
        )


# Global settings instance
settings = Settings()
