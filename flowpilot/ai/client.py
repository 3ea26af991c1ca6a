"""
AI Client - drives the conversation between the model and the browser.

One `run_action` call owns one conversation. Inside each attempt the model may
request browser tools; the client executes them in order, feeds the results
back and records every executed call as a step on the attached run. The
attempt ends when the model stops with a final answer (parsed into the mode's
payload) or a terminal finish reason. Failed attempts are retried from a fresh
conversation while the error is retryable and attempts remain.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from .extraction import ResultExtractor
from .prompts import build_prompt
from .retry import ErrorClassifier, RetryPolicy, Sleep
from .tools import BrowserTool, ToolRegistry
from ..core.config import AIConfig
from ..core.errors import AIError
from ..core.models import (
    ActionMetadata,
    ActionResult,
    FinishReason,
    RunMode,
    Step,
    TokenUsage,
    ToolCall,
    ToolResult,
)
from ..core.runs import CrawlerRun, ExplorerRun, NullRun, StepRecorder, TestRun
from ..llm.provider import LLMMessage, LLMProvider

logger = logging.getLogger(__name__)


@dataclass
class StepEvent:
    """Everything that happened in one tool turn."""

    tool_calls: list[ToolCall]
    tool_results: list[ToolResult]
    usage: TokenUsage = field(default_factory=TokenUsage)


class AIClient:
    """
    Conversation and retry engine for one run context.

    Usage:
        client = AIClient(provider, config, browser_tool=tool, test_run=run)
        result = await client.run_action("Login with valid credentials")
        result.response.status  # "passed" | "failed"
    """

    def __init__(
        self,
        provider: LLMProvider,
        config: AIConfig | None = None,
        *,
        browser_tool: BrowserTool | None = None,
        tools: ToolRegistry | None = None,
        test_run: TestRun | None = None,
        explorer_run: ExplorerRun | None = None,
        crawler_run: CrawlerRun | None = None,
        error_classifier: ErrorClassifier | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the client.

        Args:
            provider: Model generation backend
            config: Explicit AI configuration (defaults apply if omitted)
            browser_tool: Executor for browser actions, used to build the
                default tool registry
            tools: Custom tool registry (overrides browser_tool)
            test_run: Run sink for test mode
            explorer_run: Run sink for explorer mode
            crawler_run: Run sink for crawler mode
            error_classifier: Decides which failures are retried
            retry_policy: Attempt budget and delays (built from config if omitted)
            sleep: Awaitable sleep used between attempts

        Raises:
            ValueError: If more than one run sink is given, or no tools are available
        """
        runs = [run for run in (test_run, explorer_run, crawler_run) if run is not None]
        if len(runs) > 1:
            raise ValueError("Only one of test_run, explorer_run or crawler_run may be given")

        if tools is None:
            if browser_tool is None:
                raise ValueError("Must provide either browser_tool or tools")
            tools = ToolRegistry.for_browser(browser_tool)

        self.provider = provider
        self.config = config or AIConfig()
        self.tools = tools
        self.run: StepRecorder = runs[0] if runs else NullRun()
        self.mode: RunMode = self.run.mode
        self.system_prompt = build_prompt(self.mode)
        self.extractor = ResultExtractor(self.mode)
        self.error_classifier = error_classifier or ErrorClassifier()
        self.retry_policy = retry_policy or RetryPolicy.from_config(self.config, sleep=sleep)

    async def run_action(self, prompt: str) -> ActionResult:
        """
        Run an instruction to completion, retrying failed attempts.

        Args:
            prompt: Natural-language instruction for the agent

        Returns:
            Validated payload and token usage of the successful attempt

        Raises:
            AIError: On a terminal finish reason, a runaway tool loop, or when
                retries are exhausted (type "max-retries-reached")
            Exception: Non-retryable provider errors (e.g. HTTP 401) unchanged
        """
        max_retries = self.retry_policy.max_retries

        for attempt in range(1, max_retries + 1):
            logger.debug("Attempt %d/%d (%s mode)", attempt, max_retries, self.mode.value)
            try:
                return await self.run_conversation(prompt)
            except Exception as e:
                if not self.error_classifier.is_retryable(e):
                    logger.error("Action failed: %s", e)
                    raise

                if not self.retry_policy.can_retry(attempt):
                    logger.error("Giving up after %d attempts: %s", attempt, e)
                    raise AIError("max-retries-reached", "Max retries reached") from e

                delay = self.retry_policy.delay(attempt)
                logger.warning(
                    "Attempt %d/%d failed (%s), retrying in %.1fs",
                    attempt, max_retries, e, delay,
                )
                await self.retry_policy.wait(attempt)

        raise AIError("max-retries-reached", "Max retries reached")

    async def run_conversation(self, prompt: str) -> ActionResult:
        """
        Run one attempt: loop model turns and tool calls until a final answer.

        Every attempt starts from the bare instruction; nothing from a failed
        attempt is carried over.

        Args:
            prompt: Natural-language instruction

        Returns:
            Result of this attempt

        Raises:
            AIError: On a terminal finish reason, when the turn cap is hit, or
                (retryable) when a tool-call turn carries no calls
            ParseError: If the final answer does not match the schema
        """
        messages = [LLMMessage(role="user", content=prompt)]
        usage = TokenUsage()
        descriptors = self.tools.descriptors()
        max_turns = self.config.max_turns

        for turn in range(1, max_turns + 1):
            logger.debug("Turn %d/%d", turn, max_turns)
            response = await self.provider.invoke(
                messages=messages,
                system_prompt=self.system_prompt,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                tools=descriptors,
            )
            usage = usage + response.usage

            if response.finish_reason is FinishReason.TOOL_CALLS and not response.tool_calls:
                raise AIError(
                    "transient",
                    "Model reported tool calls but requested none",
                )

            if response.finish_reason is FinishReason.TOOL_CALLS:
                messages.append(LLMMessage(
                    role="assistant",
                    content=response.content,
                    tool_calls=response.tool_calls,
                ))

                results = []
                for call in response.tool_calls:
                    result = await self.tools.dispatch(call)
                    messages.append(LLMMessage(
                        role="tool",
                        content=result.to_content(),
                        name=call.name,
                        tool_call_id=call.id,
                        is_error=not result.ok,
                        images=[result.base64_image] if result.base64_image else [],
                    ))
                    results.append(result)

                self.on_step_finish(StepEvent(
                    tool_calls=list(response.tool_calls),
                    tool_results=results,
                    usage=response.usage,
                ))
                continue

            if response.finish_reason is FinishReason.STOP:
                payload = self.extractor.extract(response.content)
                return ActionResult(
                    response=payload,
                    metadata=ActionMetadata(usage=usage),
                )

            self.throw_on_error_finish_reason(response.finish_reason)

        raise AIError(
            "max-turns-reached",
            f"Reached the limit of {max_turns} turns without a final answer",
        )

    def on_step_finish(self, event: StepEvent) -> None:
        """Record one step per executed tool call of a turn, in call order."""
        for call, result in zip(event.tool_calls, event.tool_results):
            self.run.add_step(Step.from_tool_call(call, result))

    def throw_on_error_finish_reason(self, reason: FinishReason) -> None:
        """
        Raise the fatal error matching a terminal finish reason.

        Raises:
            AIError: Always
        """
        if reason is FinishReason.CONTENT_FILTER:
            raise AIError(
                "unsafe-content-detected",
                "Content filter violation: generation aborted.",
            )
        if reason is FinishReason.LENGTH:
            raise AIError(
                "token-limit-exceeded",
                "Generation stopped because the maximum token length was reached.",
            )
        raise AIError("unknown", "An error occurred during generation.")
