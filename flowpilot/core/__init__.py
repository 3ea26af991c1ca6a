"""Core module - configuration, models, errors, run sinks and logging."""

from .config import AIConfig, Settings, settings
from .errors import AIError, ParseError, as_ai_error
from .log import configure_logging
from .models import (
    ActionInput,
    ActionMetadata,
    ActionResult,
    CrawlerFlow,
    CrawlerReport,
    ExplorerFlow,
    ExplorerReport,
    FinishReason,
    FlowStep,
    RunMode,
    RunStatus,
    Step,
    TestCase,
    TestVerdict,
    TokenUsage,
    ToolCall,
    ToolResult,
)
from .runs import CrawlerRun, ExplorerRun, NullRun, StepRecorder, TestRun

__all__ = [
    "AIConfig",
    "Settings",
    "settings",
    "AIError",
    "ParseError",
    "as_ai_error",
    "configure_logging",
    "ActionInput",
    "ActionMetadata",
    "ActionResult",
    "CrawlerFlow",
    "CrawlerReport",
    "ExplorerFlow",
    "ExplorerReport",
    "FinishReason",
    "FlowStep",
    "RunMode",
    "RunStatus",
    "Step",
    "TestCase",
    "TestVerdict",
    "TokenUsage",
    "ToolCall",
    "ToolResult",
    "CrawlerRun",
    "ExplorerRun",
    "NullRun",
    "StepRecorder",
    "TestRun",
]
