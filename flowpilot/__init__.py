"""
flowpilot
=========

An AI agent that drives a browser through tool calls to verify test cases
or to discover the user flows of a web application.

    Instruction → Model turn → Browser tools → Steps recorded → ... → Result
"""

from .ai import AIClient, ToolRegistry
from .core import (
    ActionResult,
    AIConfig,
    AIError,
    CrawlerRun,
    ExplorerRun,
    RunMode,
    TestCase,
    TestRun,
)
from .llm import get_llm_provider

__version__ = "0.1.0"

__all__ = [
    "AIClient",
    "ToolRegistry",
    "ActionResult",
    "AIConfig",
    "AIError",
    "CrawlerRun",
    "ExplorerRun",
    "RunMode",
    "TestCase",
    "TestRun",
    "get_llm_provider",
]
