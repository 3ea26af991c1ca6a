"""
OpenAI LLM Client.
Implements LLMProvider for OpenAI GPT models.
"""

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from .provider import LLMProvider, LLMMessage, LLMResponse
from ..core.models import FinishReason, TokenUsage, ToolCall

logger = logging.getLogger(__name__)

FINISH_REASONS = {
    "stop": FinishReason.STOP,
    "tool_calls": FinishReason.TOOL_CALLS,
    "function_call": FinishReason.TOOL_CALLS,
    "content_filter": FinishReason.CONTENT_FILTER,
    "length": FinishReason.LENGTH,
}


class OpenAIClient(LLMProvider):
    """
    OpenAI GPT client implementing LLMProvider interface.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model name
            client: Preconfigured SDK client (mainly for tests)
        """
        if client is None and not api_key:
            raise ValueError("OpenAI API key not configured")

        self._model = model
        self.client = client or AsyncOpenAI(api_key=api_key)

    @property
    def model_name(self) -> str:
        return self._model

    async def invoke(
        self,
        messages: list[LLMMessage] | str,
        system_prompt: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResponse:
        """
        Invoke OpenAI API.

        Args:
            messages: Messages or single user message
            system_prompt: Optional system prompt
            temperature: Sampling temperature
            max_tokens: Maximum tokens
            tools: Optional tool definitions

        Returns:
            LLM response
        """
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": self._format_messages(messages, system_prompt),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        if tools:
            kwargs["tools"] = self._format_tools(tools)

        response = await self.client.chat.completions.create(**kwargs)

        choice = response.choices[0]
        content = choice.message.content or ""

        tool_calls = None
        if choice.message.tool_calls:
            tool_calls = [
                ToolCall(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=self._parse_arguments(tc.function.arguments),
                )
                for tc in choice.message.tool_calls
            ]

        usage = TokenUsage()
        if response.usage:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage,
            tool_calls=tool_calls,
            finish_reason=FINISH_REASONS.get(choice.finish_reason, FinishReason.ERROR),
        )

    def _format_messages(
        self,
        messages: list[LLMMessage] | str,
        system_prompt: str | None,
    ) -> list[dict[str, Any]]:
        """
        Convert conversation messages to Chat Completions format.

        Tool results become `tool` messages. Screenshots attached to tool
        results cannot travel inside a `tool` message, so they follow as one
        user message once the tool results of that turn are complete.
        """
        api_messages: list[dict[str, Any]] = []

        if system_prompt:
            api_messages.append({"role": "system", "content": system_prompt})

        if isinstance(messages, str):
            api_messages.append({"role": "user", "content": messages})
            return api_messages

        pending_images: list[str] = []
        for msg in messages:
            if msg.role != "tool" and pending_images:
                api_messages.append(self._image_message(pending_images))
                pending_images = []

            if msg.role == "tool":
                api_messages.append({
                    "role": "tool",
                    "tool_call_id": msg.tool_call_id,
                    "content": msg.content,
                })
                pending_images.extend(msg.images)
            elif msg.role == "assistant" and msg.tool_calls:
                api_messages.append({
                    "role": "assistant",
                    "content": msg.content or None,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.name,
                                "arguments": json.dumps(call.arguments),
                            },
                        }
                        for call in msg.tool_calls
                    ],
                })
            else:
                api_messages.append({
                    "role": msg.role,
                    "content": msg.content,
                    **({"name": msg.name} if msg.name else {})
                })

        if pending_images:
            api_messages.append(self._image_message(pending_images))

        return api_messages

    def _image_message(self, images: list[str]) -> dict[str, Any]:
        return {
            "role": "user",
            "content": [
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:image/png;base64,{image}"},
                }
                for image in images
            ],
        }

    def _parse_arguments(self, raw: str | None) -> dict[str, Any]:
        """Decode tool arguments; malformed JSON yields no arguments."""
        if not raw:
            return {}
        try:
            arguments = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed tool arguments: %s", raw[:200])
            return {}
        return arguments if isinstance(arguments, dict) else {}

    def _format_tools(self, tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Format tools for OpenAI API.

        Args:
            tools: Tool definitions

        Returns:
            OpenAI-formatted tools
        """
        formatted = []
        for tool in tools:
            formatted.append({
                "type": "function",
                "function": {
                    "name": tool.get("name"),
                    "description": tool.get("description", ""),
                    "parameters": tool.get("parameters", {"type": "object", "properties": {}})
                }
            })
        return formatted
