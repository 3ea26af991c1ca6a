"""
Run sinks - collect the steps executed during one run.

Exactly one sink is attached to an AI client. The sink type also decides the
run mode (which system prompt and output schema the client uses).
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from .models import CrawlerFlow, FlowStep, RunMode, RunStatus, Step, TestCase, TokenUsage


@runtime_checkable
class StepRecorder(Protocol):
    """Anything that can record executed steps."""

    mode: RunMode

    def add_step(self, step: Step) -> None:
        ...


class TestRun:
    """Steps and outcome of executing one test case."""

    mode = RunMode.TEST

    def __init__(self, test_case: TestCase):
        self.test_case = test_case
        self.steps: list[Step] = []
        self.status = RunStatus.PENDING
        self.reason: str | None = None
        self.started_at: datetime | None = None
        self.finished_at: datetime | None = None
        self.usage: TokenUsage | None = None

    @classmethod
    def create(cls, test_case: TestCase) -> "TestRun":
        return cls(test_case)

    def add_step(self, step: Step) -> None:
        self.steps.append(step)

    def mark_running(self) -> None:
        self.status = RunStatus.RUNNING
        self.started_at = datetime.now()

    def mark_passed(self, reason: str) -> None:
        self._finish(RunStatus.PASSED, reason)

    def mark_failed(self, reason: str) -> None:
        self._finish(RunStatus.FAILED, reason)

    def _finish(self, status: RunStatus, reason: str) -> None:
        self.status = status
        self.reason = reason
        self.finished_at = datetime.now()


class ExplorerRun:
    """Steps taken while exploring an application in natural-language mode."""

    mode = RunMode.EXPLORER

    def __init__(self):
        self.steps: list[Step] = []

    def add_step(self, step: Step) -> None:
        self.steps.append(step)


class CrawlerRun:
    """
    Steps taken while crawling an application.

    Steps accumulate in a buffer until `finalize_flow` groups them into a
    named flow.
    """

    mode = RunMode.CRAWLER

    def __init__(self):
        self.flows: list[CrawlerFlow] = []
        self.current_steps: list[Step] = []

    def add_step(self, step: Step) -> None:
        self.current_steps.append(step)

    def finalize_flow(self, id: str, reusable: bool = False) -> CrawlerFlow:
        """
        Close the current buffer as a flow.

        Args:
            id: Flow identifier
            reusable: Whether the flow is a reusable sub-flow (e.g. login)

        Returns:
            The finalized flow
        """
        flow = CrawlerFlow(
            id=id,
            steps=[
                FlowStep(**step.model_dump(exclude={"result"}, exclude_none=True))
                for step in self.current_steps
            ],
            reusable=reusable,
        )
        self.flows.append(flow)
        self.current_steps = []
        return flow


class NullRun:
    """Sink used when the client runs without a run context."""

    mode = RunMode.NONE

    def add_step(self, step: Step) -> None:
        pass
