"""
Runner Module - orchestration around the AI client.

Runners:
    - ExplorerRunner: natural-language flow discovery
    - CrawlerRunner: selector-level flow discovery
    - TestCaseRunner: pass/fail verification of test cases
"""

from .base import BaseRunner
from .crawler import CrawlerRunner
from .explorer import ExplorerRunner
from .reporter import FlowReporter, TestReporter
from .tester import TestCaseRunner, build_test_instruction

__all__ = [
    "BaseRunner",
    "CrawlerRunner",
    "ExplorerRunner",
    "FlowReporter",
    "TestReporter",
    "TestCaseRunner",
    "build_test_instruction",
]
