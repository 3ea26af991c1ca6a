"""
Unified LLM Provider Interface.
Abstracts OpenAI and Anthropic behind a common, single-turn interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal
from pydantic import BaseModel, Field

from ..core.config import AIConfig
from ..core.models import FinishReason, TokenUsage, ToolCall


class LLMMessage(BaseModel):
    """Message in LLM conversation."""
    role: Literal["system", "user", "assistant", "tool"]
    content: str = ""
    name: str | None = None

    # Assistant turns that requested tools
    tool_calls: list[ToolCall] | None = None

    # Tool results
    tool_call_id: str | None = None
    is_error: bool = False
    images: list[str] = Field(default_factory=list)


class LLMResponse(BaseModel):
    """Response from one model turn."""
    content: str
    model: str
    usage: TokenUsage = Field(default_factory=TokenUsage)
    tool_calls: list[ToolCall] | None = None
    finish_reason: FinishReason = FinishReason.STOP


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.
    Implemented by OpenAI and Anthropic clients.
    """

    @abstractmethod
    async def invoke(
        self,
        messages: list[LLMMessage] | str,
        system_prompt: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResponse:
        """
        Run one model turn.

        Args:
            messages: Conversation so far or a single user message string
            system_prompt: Optional system prompt
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            tools: Optional tool descriptors ({name, description, parameters})

        Returns:
            LLM response with normalized finish reason and usage
        """
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name being used."""
        pass


def get_llm_provider(config: AIConfig) -> LLMProvider:
    """
    Get LLM provider instance for the given configuration.

    Args:
        config: Explicit AI configuration

    Returns:
        LLMProvider instance
    """
    if config.provider == "openai":
        from .openai_client import OpenAIClient
        return OpenAIClient(api_key=config.api_key, model=config.model)
    elif config.provider == "anthropic":
        from .anthropic_client import AnthropicClient
        return AnthropicClient(api_key=config.api_key, model=config.model)
    else:
        raise ValueError(f"Unknown LLM provider: {config.provider}")
