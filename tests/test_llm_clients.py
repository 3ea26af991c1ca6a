"""Tests for the OpenAI and Anthropic provider clients with stubbed SDKs."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from flowpilot.core.config import AIConfig
from flowpilot.core.models import FinishReason, ToolCall
from flowpilot.llm.anthropic_client import AnthropicClient
from flowpilot.llm.openai_client import OpenAIClient
from flowpilot.llm.provider import LLMMessage, get_llm_provider

TOOLS = [{
    "name": "click",
    "description": "Click",
    "parameters": {"type": "object", "properties": {"selector": {"type": "string"}}},
}]

CONVERSATION = [
    LLMMessage(role="user", content="Login"),
    LLMMessage(
        role="assistant",
        content="",
        tool_calls=[
            ToolCall(id="c1", name="click", arguments={"selector": "#login"}),
            ToolCall(id="c2", name="screenshot"),
        ],
    ),
    LLMMessage(role="tool", content="clicked", tool_call_id="c1", name="click"),
    LLMMessage(
        role="tool", content="captured", tool_call_id="c2", name="screenshot",
        images=["aW1n"],
    ),
]


# ==============================================================================
# OpenAI
# ==============================================================================

def openai_completion(content=None, tool_calls=None, finish_reason="stop"):
    return SimpleNamespace(
        model="gpt-4o",
        choices=[SimpleNamespace(
            message=SimpleNamespace(content=content, tool_calls=tool_calls),
            finish_reason=finish_reason,
        )],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=3, total_tokens=15),
    )


def openai_sdk(response):
    create = AsyncMock(return_value=response)
    sdk = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return sdk, create


class TestOpenAIClient:
    """Chat Completions request and response mapping."""

    @pytest.mark.asyncio
    async def test_text_response(self):
        sdk, create = openai_sdk(openai_completion(content='{"status": "passed"}'))
        client = OpenAIClient(api_key="k", model="gpt-4o", client=sdk)

        response = await client.invoke("hello", system_prompt="system")

        assert response.content == '{"status": "passed"}'
        assert response.finish_reason is FinishReason.STOP
        assert response.usage.total_tokens == 15
        kwargs = create.call_args.kwargs
        assert kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "hello"},
        ]
        assert "tools" not in kwargs

    @pytest.mark.asyncio
    async def test_tool_call_response(self):
        tool_call = SimpleNamespace(
            id="call_1",
            type="function",
            function=SimpleNamespace(name="click", arguments='{"selector": "#go"}'),
        )
        sdk, create = openai_sdk(openai_completion(tool_calls=[tool_call], finish_reason="tool_calls"))
        client = OpenAIClient(api_key="k", client=sdk)

        response = await client.invoke("hello", tools=TOOLS)

        assert response.finish_reason is FinishReason.TOOL_CALLS
        assert response.tool_calls == [ToolCall(id="call_1", name="click", arguments={"selector": "#go"})]
        assert create.call_args.kwargs["tools"][0] == {
            "type": "function",
            "function": {
                "name": "click",
                "description": "Click",
                "parameters": TOOLS[0]["parameters"],
            },
        }

    @pytest.mark.asyncio
    async def test_malformed_arguments(self):
        tool_call = SimpleNamespace(
            id="call_1",
            type="function",
            function=SimpleNamespace(name="click", arguments="{not json"),
        )
        sdk, _ = openai_sdk(openai_completion(tool_calls=[tool_call], finish_reason="tool_calls"))

        response = await OpenAIClient(api_key="k", client=sdk).invoke("hello")

        assert response.tool_calls[0].arguments == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("stop", FinishReason.STOP),
            ("tool_calls", FinishReason.TOOL_CALLS),
            ("content_filter", FinishReason.CONTENT_FILTER),
            ("length", FinishReason.LENGTH),
            ("something_new", FinishReason.ERROR),
        ],
    )
    async def test_finish_reason_mapping(self, raw, expected):
        sdk, _ = openai_sdk(openai_completion(content="", finish_reason=raw))

        response = await OpenAIClient(api_key="k", client=sdk).invoke("hello")

        assert response.finish_reason is expected

    def test_conversation_formatting(self):
        client = OpenAIClient(api_key="k", client=SimpleNamespace())

        messages = client._format_messages(CONVERSATION, "system")

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "tool", "tool", "user"]
        assert messages[2]["tool_calls"][0]["function"] == {
            "name": "click",
            "arguments": json.dumps({"selector": "#login"}),
        }
        assert messages[3] == {"role": "tool", "tool_call_id": "c1", "content": "clicked"}
        assert messages[5]["content"][0]["image_url"]["url"] == "data:image/png;base64,aW1n"

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            OpenAIClient(api_key="")


# ==============================================================================
# Anthropic
# ==============================================================================

def anthropic_message(blocks, stop_reason="end_turn"):
    return SimpleNamespace(
        model="claude",
        content=blocks,
        stop_reason=stop_reason,
        usage=SimpleNamespace(input_tokens=40, output_tokens=8),
    )


def anthropic_sdk(response):
    create = AsyncMock(return_value=response)
    return SimpleNamespace(messages=SimpleNamespace(create=create)), create


class TestAnthropicClient:
    """Messages API request and response mapping."""

    @pytest.mark.asyncio
    async def test_text_response(self):
        sdk, create = anthropic_sdk(anthropic_message([SimpleNamespace(type="text", text="done")]))
        client = AnthropicClient(api_key="k", model="claude", client=sdk)

        response = await client.invoke("hello", system_prompt="system")

        assert response.content == "done"
        assert response.finish_reason is FinishReason.STOP
        assert response.usage.prompt_tokens == 40
        assert response.usage.total_tokens == 48
        kwargs = create.call_args.kwargs
        assert kwargs["system"] == "system"
        assert kwargs["messages"] == [{"role": "user", "content": "hello"}]

    @pytest.mark.asyncio
    async def test_tool_use_response(self):
        blocks = [
            SimpleNamespace(type="text", text="Let me click."),
            SimpleNamespace(type="tool_use", id="tu_1", name="click", input={"selector": "#go"}),
        ]
        sdk, create = anthropic_sdk(anthropic_message(blocks, stop_reason="tool_use"))

        response = await AnthropicClient(api_key="k", client=sdk).invoke("hello", tools=TOOLS)

        assert response.finish_reason is FinishReason.TOOL_CALLS
        assert response.content == "Let me click."
        assert response.tool_calls == [ToolCall(id="tu_1", name="click", arguments={"selector": "#go"})]
        assert create.call_args.kwargs["tools"] == [{
            "name": "click",
            "description": "Click",
            "input_schema": TOOLS[0]["parameters"],
        }]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("end_turn", FinishReason.STOP),
            ("stop_sequence", FinishReason.STOP),
            ("tool_use", FinishReason.TOOL_CALLS),
            ("max_tokens", FinishReason.LENGTH),
            ("refusal", FinishReason.CONTENT_FILTER),
            ("pause_turn", FinishReason.ERROR),
        ],
    )
    async def test_stop_reason_mapping(self, raw, expected):
        sdk, _ = anthropic_sdk(anthropic_message([], stop_reason=raw))

        response = await AnthropicClient(api_key="k", client=sdk).invoke("hello")

        assert response.finish_reason is expected

    def test_tool_results_merged_into_one_turn(self):
        client = AnthropicClient(api_key="k", client=SimpleNamespace())

        messages = client._format_messages(CONVERSATION)

        assert [m["role"] for m in messages] == ["user", "assistant", "user"]
        assert [b["type"] for b in messages[1]["content"]] == ["tool_use", "tool_use"]
        results = messages[2]["content"]
        assert [b["tool_use_id"] for b in results] == ["c1", "c2"]
        assert results[1]["content"][1]["source"]["data"] == "aW1n"

    def test_error_results_flagged(self):
        client = AnthropicClient(api_key="k", client=SimpleNamespace())

        messages = client._format_messages([
            LLMMessage(role="tool", content="Error: gone", tool_call_id="c1", is_error=True),
        ])

        assert messages[0]["content"][0]["is_error"] is True

    @pytest.mark.asyncio
    async def test_system_messages_join_system_prompt(self):
        sdk, create = anthropic_sdk(anthropic_message([SimpleNamespace(type="text", text="ok")]))

        await AnthropicClient(api_key="k", client=sdk).invoke(
            [LLMMessage(role="system", content="extra"), LLMMessage(role="user", content="hi")],
            system_prompt="base",
        )

        kwargs = create.call_args.kwargs
        assert kwargs["system"] == "base\nextra"
        assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


class TestProviderFactory:
    """Provider selection from explicit configuration."""

    def test_openai(self):
        provider = get_llm_provider(AIConfig(provider="openai", api_key="k", model="gpt-4o"))

        assert isinstance(provider, OpenAIClient)
        assert provider.model_name == "gpt-4o"

    def test_anthropic(self):
        provider = get_llm_provider(AIConfig(provider="anthropic", api_key="k", model="claude"))

        assert isinstance(provider, AnthropicClient)
        assert provider.model_name == "claude"
