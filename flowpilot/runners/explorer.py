"""
Explorer Runner - discovers user flows described in natural language.
"""

from .base import BaseRunner
from .reporter import FlowReporter
from ..ai.tools import BrowserTool
from ..core.config import AIConfig
from ..core.models import ExplorerFlow, ExplorerReport
from ..core.runs import ExplorerRun
from ..llm.provider import LLMProvider

EXPLORE_INSTRUCTION = "Explore the application"


class ExplorerRunner(BaseRunner):
    """
    Lets the agent roam the application and report the user flows it found.
    """

    def __init__(
        self,
        browser_tool: BrowserTool,
        config: AIConfig | None = None,
        llm_provider: LLMProvider | None = None,
        reporter: FlowReporter | None = None,
    ):
        super().__init__("explorer", browser_tool, config, llm_provider)
        self.reporter = reporter or FlowReporter(self.logger)
        self.run: ExplorerRun | None = None

    async def discover_flows(self, instruction: str = EXPLORE_INSTRUCTION) -> list[ExplorerFlow]:
        """
        Run one exploration.

        A failed exploration is logged and yields no flows.

        Args:
            instruction: Instruction given to the agent

        Returns:
            Discovered flows
        """
        self.run = ExplorerRun()
        client = self.create_client(explorer_run=self.run)

        flows: list[ExplorerFlow] = []
        try:
            result = await client.run_action(instruction)
            if isinstance(result.response, ExplorerReport):
                flows = result.response.flows
            for flow in flows:
                self.reporter.on_flow(flow)
        except Exception as e:
            self.logger.error("Explorer exploration failed: %s", e)

        self.reporter.on_run_end(flows)
        return flows
