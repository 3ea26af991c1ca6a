"""Reporters - human-readable progress lines for runners."""

import logging

from ..core.models import CrawlerFlow, ExplorerFlow, RunStatus
from ..core.runs import TestRun


class FlowReporter:
    """Reports flows discovered by the explorer or the crawler."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_flow(self, flow: ExplorerFlow | CrawlerFlow) -> None:
        suffix = " (reusable)" if flow.reusable else ""
        self.logger.info("✓ discovered flow: %s%s", flow.id, suffix)

    def on_run_end(self, flows: list[ExplorerFlow] | list[CrawlerFlow]) -> None:
        self.logger.info("Discovered %d flow(s)", len(flows))


class TestReporter:
    """Reports the outcome of test runs."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_test_start(self, run: TestRun) -> None:
        self.logger.info("Running: %s", run.test_case.name)

    def on_test_end(self, run: TestRun) -> None:
        mark = "✓" if run.status is RunStatus.PASSED else "✗"
        self.logger.info(
            "%s %s (%d step(s)) - %s",
            mark, run.test_case.name, len(run.steps), run.reason,
        )
