"""LLM module - Unified interface for OpenAI and Anthropic providers."""

from .provider import LLMMessage, LLMProvider, LLMResponse, get_llm_provider
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient

__all__ = [
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "get_llm_provider",
    "OpenAIClient",
    "AnthropicClient",
]
