"""
Pytest configuration and shared fixtures for flowpilot tests.

Provides a scripted LLM provider and a recording browser tool so the
conversation engine can be exercised without network or browser.
"""

from typing import Any

import pytest

from flowpilot.core.config import AIConfig
from flowpilot.core.models import (
    ActionInput,
    FinishReason,
    TokenUsage,
    ToolCall,
    ToolResult,
)
from flowpilot.llm.provider import LLMMessage, LLMProvider, LLMResponse


class ScriptedProvider(LLMProvider):
    """LLM provider that replays queued responses (or raises queued errors)."""

    def __init__(self, responses: list[LLMResponse | Exception] | None = None):
        self.responses: list[LLMResponse | Exception] = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    @property
    def model_name(self) -> str:
        return "scripted"

    def queue(self, *responses: LLMResponse | Exception) -> None:
        self.responses.extend(responses)

    async def invoke(
        self,
        messages: list[LLMMessage] | str,
        system_prompt: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        tools: list[dict[str, Any]] | None = None,
    ) -> LLMResponse:
        self.calls.append({
            "messages": [m.model_copy(deep=True) for m in messages],
            "system_prompt": system_prompt,
            "tools": tools,
        })
        if not self.responses:
            raise AssertionError("ScriptedProvider ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class RecordingBrowserTool:
    """Browser tool that records actions and returns canned results."""

    def __init__(self):
        self.actions: list[ActionInput] = []
        self.results: dict[str, ToolResult | Exception] = {}

    async def execute(self, action_input: ActionInput) -> ToolResult:
        self.actions.append(action_input)
        result = self.results.get(action_input.action)
        if isinstance(result, Exception):
            raise result
        return result or ToolResult(output=f"{action_input.action} done")


class StatusError(Exception):
    """Provider-style error carrying an HTTP status."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


# Response builders

def usage(prompt: int = 20, completion: int = 10) -> TokenUsage:
    return TokenUsage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=prompt + completion,
    )


def final(text: str, tokens: TokenUsage | None = None) -> LLMResponse:
    return LLMResponse(
        content=text,
        model="scripted",
        usage=tokens or usage(),
        finish_reason=FinishReason.STOP,
    )


def tool_turn(*calls: ToolCall, tokens: TokenUsage | None = None) -> LLMResponse:
    return LLMResponse(
        content="",
        model="scripted",
        usage=tokens or usage(),
        tool_calls=list(calls),
        finish_reason=FinishReason.TOOL_CALLS,
    )


def finished(reason: FinishReason) -> LLMResponse:
    return LLMResponse(content="", model="scripted", finish_reason=reason)


PASSED = '{"status": "passed", "reason": "test passed"}'


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def browser_tool() -> RecordingBrowserTool:
    return RecordingBrowserTool()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def sleep(seconds: float) -> None:
        sleeps.append(seconds)
    return sleep


@pytest.fixture
def config() -> AIConfig:
    return AIConfig(provider="anthropic", api_key="test-key", model="test-model")
