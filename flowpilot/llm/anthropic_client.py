"""
Anthropic LLM Client.
Implements LLMProvider for Claude models.
"""

from typing import Any

from anthropic import AsyncAnthropic

from .provider import LLMProvider, LLMMessage, LLMResponse
from ..core.models import FinishReason, TokenUsage, ToolCall

FINISH_REASONS = {
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "tool_use": FinishReason.TOOL_CALLS,
    "max_tokens": FinishReason.LENGTH,
    "refusal": FinishReason.CONTENT_FILTER,
}


class AnthropicClient(LLMProvider):
    """
    Anthropic Claude client implementing LLMProvider interface.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-sonnet-latest",
        client: AsyncAnthropic | None = None,
    ):
        """
        Initialize Anthropic client.

        Args:
            api_key: Anthropic API key
            model: Model name
            client: Preconfigured SDK client (mainly for tests)
        """
        if client is None and not api_key:
            raise ValueError("Anthropic API key not configured")

        self._model = model
        self.client = client or AsyncAnthropic(api_key=api_key)

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
        Invoke Anthropic API.

        Args:
            messages: Messages or single user message
            system_prompt: Optional system prompt
            temperature: Sampling temperature
            max_tokens: Maximum tokens
            tools: Optional tool definitions

        Returns:
            LLM response
        """
        if isinstance(messages, str):
            messages = [LLMMessage(role="user", content=messages)]

        # Anthropic doesn't include system in messages
        for msg in messages:
            if msg.role == "system":
                system_prompt = f"{system_prompt or ''}\n{msg.content}".strip()

        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": self._format_messages(messages),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        if system_prompt:
            kwargs["system"] = system_prompt

        if tools:
            kwargs["tools"] = self._format_tools(tools)

        response = await self.client.messages.create(**kwargs)

        content = ""
        tool_calls = []

        for block in response.content:
            if block.type == "text":
                content += block.text
            elif block.type == "tool_use":
                tool_calls.append(ToolCall(
                    id=block.id,
                    name=block.name,
                    arguments=dict(block.input or {}),
                ))

        return LLMResponse(
            content=content,
            model=response.model,
            usage=TokenUsage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
                total_tokens=response.usage.input_tokens + response.usage.output_tokens,
            ),
            tool_calls=tool_calls if tool_calls else None,
            finish_reason=FINISH_REASONS.get(response.stop_reason, FinishReason.ERROR),
        )

    def _format_messages(self, messages: list[LLMMessage]) -> list[dict[str, Any]]:
        """
        Convert conversation messages to Messages API format.

        Consecutive tool results are merged into a single user turn, as the
        API requires all results for one assistant turn to arrive together.
        """
        api_messages: list[dict[str, Any]] = []

        for msg in messages:
            if msg.role == "system":
                continue

            if msg.role == "tool":
                block = self._tool_result_block(msg)
                previous = api_messages[-1] if api_messages else None
                if (
                    previous is not None
                    and previous["role"] == "user"
                    and isinstance(previous["content"], list)
                    and all(b.get("type") == "tool_result" for b in previous["content"])
                ):
                    previous["content"].append(block)
                else:
                    api_messages.append({"role": "user", "content": [block]})
            elif msg.role == "assistant" and msg.tool_calls:
                blocks: list[dict[str, Any]] = []
                if msg.content:
                    blocks.append({"type": "text", "text": msg.content})
                for call in msg.tool_calls:
                    blocks.append({
                        "type": "tool_use",
                        "id": call.id,
                        "name": call.name,
                        "input": call.arguments,
                    })
                api_messages.append({"role": "assistant", "content": blocks})
            else:
                api_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        return api_messages

    def _tool_result_block(self, msg: LLMMessage) -> dict[str, Any]:
        content: list[dict[str, Any]] = [{"type": "text", "text": msg.content or "(no output)"}]
        for image in msg.images:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": "image/png",
                    "data": image,
                },
            })

        block: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": msg.tool_call_id,
            "content": content,
        }
        if msg.is_error:
            block["is_error"] = True
        return block

    def _format_tools(self, tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Format tools for Anthropic API.

        Args:
            tools: Tool definitions

        Returns:
            Anthropic-formatted tools
        """
        formatted = []
        for tool in tools:
            formatted.append({
                "name": tool.get("name"),
                "description": tool.get("description", ""),
                "input_schema": tool.get("parameters", {"type": "object", "properties": {}})
            })
        return formatted
