"""
Base Runner Class.
Common wiring for the explorer, crawler and test-case runners.
"""

import logging

from ..ai.client import AIClient
from ..ai.tools import BrowserTool
from ..core.config import AIConfig, settings
from ..core.log import configure_logging
from ..core.runs import CrawlerRun, ExplorerRun, TestRun
from ..llm.provider import LLMProvider, get_llm_provider


class BaseRunner:
    """
    Holds the collaborators every runner needs and builds AI clients for
    a given run sink.
    """

    def __init__(
        self,
        name: str,
        browser_tool: BrowserTool,
        config: AIConfig | None = None,
        llm_provider: LLMProvider | None = None,
    ):
        """
        Initialize runner.

        Args:
            name: Runner name, used as the logger suffix
            browser_tool: Ready-to-use executor for browser actions
            config: AI configuration (defaults to the environment settings,
                which also configure logging)
            llm_provider: Optional LLM provider (built from config if not provided)
        """
        if config is None:
            configure_logging(settings.log_level)
            config = settings.ai_config()

        self.name = name
        self.browser_tool = browser_tool
        self.config = config
        self.llm = llm_provider or get_llm_provider(self.config)
        self.logger = logging.getLogger(f"flowpilot.runners.{name}")

    def create_client(
        self,
        test_run: TestRun | None = None,
        explorer_run: ExplorerRun | None = None,
        crawler_run: CrawlerRun | None = None,
    ) -> AIClient:
        """Create an AI client bound to one run sink."""
        return AIClient(
            self.llm,
            self.config,
            browser_tool=self.browser_tool,
            test_run=test_run,
            explorer_run=explorer_run,
            crawler_run=crawler_run,
        )
