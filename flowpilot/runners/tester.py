"""
Test Case Runner - verifies prescribed test cases through the AI client.
"""

import json

from .base import BaseRunner
from .reporter import TestReporter
from ..ai.tools import BrowserTool
from ..core.config import AIConfig
from ..core.errors import as_ai_error
from ..core.models import TestCase, TestVerdict
from ..core.runs import TestRun
from ..llm.provider import LLMProvider


def build_test_instruction(test_case: TestCase) -> str:
    """
    Turn a test case into the instruction given to the agent.

    Args:
        test_case: Test case to verify

    Returns:
        Instruction text
    """
    lines = [f"Test: {test_case.name}"]
    if test_case.payload:
        lines.append(f"Context: {json.dumps(test_case.payload, sort_keys=True)}")
    return "\n".join(lines)


class TestCaseRunner(BaseRunner):
    """
    Runs test cases one at a time and records their outcome on a TestRun.
    """

    def __init__(
        self,
        browser_tool: BrowserTool,
        config: AIConfig | None = None,
        llm_provider: LLMProvider | None = None,
        reporter: TestReporter | None = None,
    ):
        super().__init__("tester", browser_tool, config, llm_provider)
        self.reporter = reporter or TestReporter(self.logger)

    async def run(self, test_case: TestCase) -> TestRun:
        """
        Verify one test case.

        Failures of the AI client do not propagate: the run is marked failed
        with the error's one-line message.

        Args:
            test_case: Test case to verify

        Returns:
            The finished run
        """
        run = TestRun.create(test_case)
        client = self.create_client(test_run=run)

        run.mark_running()
        self.reporter.on_test_start(run)
        try:
            result = await client.run_action(build_test_instruction(test_case))
        except Exception as e:
            error = as_ai_error(e)
            run.mark_failed(f"[{error.type}] {error.message}")
        else:
            verdict = result.response
            if isinstance(verdict, TestVerdict) and verdict.status == "passed":
                run.mark_passed(verdict.reason)
            else:
                run.mark_failed(getattr(verdict, "reason", "Unexpected result"))
            run.usage = result.metadata.usage

        self.reporter.on_test_end(run)
        return run

    async def run_all(self, test_cases: list[TestCase]) -> list[TestRun]:
        """Run test cases sequentially; they share one browser."""
        return [await self.run(test_case) for test_case in test_cases]
