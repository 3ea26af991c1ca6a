"""
Crawler Runner - discovers user flows as literal, replayable browser actions.
"""

from .base import BaseRunner
from .reporter import FlowReporter
from ..ai.tools import BrowserTool
from ..core.config import AIConfig
from ..core.models import CrawlerFlow, CrawlerReport
from ..core.runs import CrawlerRun
from ..llm.provider import LLMProvider

CRAWL_INSTRUCTION = "Explore the application"


class CrawlerRunner(BaseRunner):
    """
    Crawls the application and reports flows with selector-level steps.
    """

    def __init__(
        self,
        browser_tool: BrowserTool,
        config: AIConfig | None = None,
        llm_provider: LLMProvider | None = None,
        reporter: FlowReporter | None = None,
    ):
        super().__init__("crawler", browser_tool, config, llm_provider)
        self.reporter = reporter or FlowReporter(self.logger)
        self.run: CrawlerRun | None = None

    async def discover_flows(self, instruction: str = CRAWL_INSTRUCTION) -> list[CrawlerFlow]:
        """
        Run one crawl.

        A failed crawl is logged and yields no flows.

        Args:
            instruction: Instruction given to the agent

        Returns:
            Discovered flows
        """
        self.run = CrawlerRun()
        client = self.create_client(crawler_run=self.run)

        flows: list[CrawlerFlow] = []
        try:
            result = await client.run_action(instruction)
            if isinstance(result.response, CrawlerReport):
                flows = result.response.flows
            for flow in flows:
                self.reporter.on_flow(flow)
        except Exception as e:
            self.logger.error("Crawler exploration failed: %s", e)

        self.reporter.on_run_end(flows)
        return flows
