"""
Pydantic models for the flowpilot system.
Defines the data structures exchanged between the model, the browser tools,
the run sinks and the callers of the AI client.
"""

from enum import Enum
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# ==============================================================================
# Enumerations
# ==============================================================================

class RunMode(str, Enum):
    """Which kind of run the AI client is driving."""
    TEST = "test"
    EXPLORER = "explorer"
    CRAWLER = "crawler"
    NONE = "none"


class FinishReason(str, Enum):
    """Why the model stopped generating in a turn."""
    STOP = "stop"
    TOOL_CALLS = "tool-calls"
    CONTENT_FILTER = "content-filter"
    LENGTH = "length"
    ERROR = "error"


class RunStatus(str, Enum):
    """Lifecycle status of a test run."""
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


# ==============================================================================
# Token accounting
# ==============================================================================

class TokenUsage(BaseModel):
    """Token counts for one or more model calls."""
    completion_tokens: int = 0
    prompt_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            completion_tokens=self.completion_tokens + other.completion_tokens,
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


# ==============================================================================
# Tool calls
# ==============================================================================

class ToolCall(BaseModel):
    """A tool invocation requested by the model in one turn."""
    id: str = Field(default_factory=lambda: f"call_{uuid4().hex[:12]}")
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """
    Outcome of executing a tool call.

    Failure is encoded in `error` instead of being raised so the conversation
    can continue and the model can react to it.
    """
    output: str | None = None
    error: str | None = None
    base64_image: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_content(self) -> str:
        """Render the result as the text the model sees."""
        if self.error is not None:
            return f"Error: {self.error}"
        return self.output or ""


class ActionInput(BaseModel):
    """Browser action handed to the external browser tool."""
    model_config = ConfigDict(extra="allow")

    action: str


# ==============================================================================
# Steps and flows
# ==============================================================================

class Step(BaseModel):
    """
    Recorded projection of one executed tool call and its result.

    Any additional call arguments (coordinates, key names, ...) are kept as
    extra fields.
    """
    model_config = ConfigDict(extra="allow")

    action: str
    selector: str | None = None
    value: str | None = None
    result: str | None = None

    @classmethod
    def from_tool_call(cls, call: ToolCall, result: ToolResult) -> "Step":
        """Build a step from a call/result pair."""
        fields = dict(call.arguments)
        fields["action"] = str(fields.get("action") or call.name)
        for key in ("selector", "value"):
            if fields.get(key) is not None:
                fields[key] = str(fields[key])
        fields["result"] = result.output if result.ok else result.error
        return cls(**fields)


class FlowStep(BaseModel):
    """Literal, replayable action inside a crawler flow."""
    model_config = ConfigDict(extra="allow")

    action: str
    selector: str | None = None
    value: str | None = None


class ExplorerFlow(BaseModel):
    """User flow described as natural-language steps."""
    id: str
    steps: list[str] = Field(default_factory=list)
    reusable: bool = False


class CrawlerFlow(BaseModel):
    """User flow described as literal browser actions."""
    id: str
    steps: list[FlowStep] = Field(default_factory=list)
    reusable: bool = False


# ==============================================================================
# Final payloads
# ==============================================================================

class TestVerdict(BaseModel):
    """Result of verifying a test case."""

    status: Literal["passed", "failed"]
    reason: str


class ExplorerReport(BaseModel):
    """Flows discovered in explorer mode."""
    flows: list[ExplorerFlow]


class CrawlerReport(BaseModel):
    """Flows discovered in crawler mode."""
    flows: list[CrawlerFlow]


ActionPayload = TestVerdict | ExplorerReport | CrawlerReport


class ActionMetadata(BaseModel):
    """Metadata attached to a successful action."""
    usage: TokenUsage = Field(default_factory=TokenUsage)


class ActionResult(BaseModel):
    """Terminal success value of `AIClient.run_action`."""
    response: ActionPayload
    metadata: ActionMetadata = Field(default_factory=ActionMetadata)


class TestCase(BaseModel):
    """A prescribed test for the agent to verify."""

    name: str
    file_path: str = ""
    payload: dict[str, Any] | None = None
    identifier: str = Field(default_factory=lambda: uuid4().hex[:8])
