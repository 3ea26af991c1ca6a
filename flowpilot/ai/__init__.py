"""AI module - conversation engine, prompts, tools, retry and result extraction."""

from .client import AIClient, StepEvent
from .extraction import (
    ResultExtractor,
    extract_json_objects,
    extract_json_payload,
    iter_nested_objects,
)
from .prompts import (
    build_crawler_prompt,
    build_explorer_prompt,
    build_prompt,
    build_system_prompt,
    build_test_prompt,
)
from .retry import ErrorClassifier, RetryPolicy
from .tools import BROWSER_TOOLS, BrowserTool, ToolDefinition, ToolRegistry

__all__ = [
    "AIClient",
    "StepEvent",
    "ResultExtractor",
    "extract_json_objects",
    "extract_json_payload",
    "iter_nested_objects",
    "build_crawler_prompt",
    "build_explorer_prompt",
    "build_prompt",
    "build_system_prompt",
    "build_test_prompt",
    "ErrorClassifier",
    "RetryPolicy",
    "BROWSER_TOOLS",
    "BrowserTool",
    "ToolDefinition",
    "ToolRegistry",
]
