"""Tests for the browser tool registry."""

import pytest

from conftest import RecordingBrowserTool
from flowpilot.ai.tools import BROWSER_TOOLS, ToolDefinition, ToolRegistry
from flowpilot.core.models import ToolCall, ToolResult


class TestRegistryTable:
    """The capability table presented to the model."""

    def test_default_capabilities(self):
        registry = ToolRegistry.for_browser(RecordingBrowserTool())

        expected = [
            "click", "double_click", "type", "key", "scroll",
            "screenshot", "get_dom", "set_viewport", "navigate", "wait",
        ]
        assert registry.names == expected
        assert len(registry) == len(BROWSER_TOOLS)

    def test_descriptors_shape(self):
        registry = ToolRegistry.for_browser(RecordingBrowserTool())

        for descriptor in registry.descriptors():
            assert set(descriptor) == {"name", "description", "parameters"}
            assert descriptor["parameters"]["type"] == "object"

    def test_duplicate_names_rejected(self):
        async def handler(arguments):
            return ToolResult(output="")

        definition = ToolDefinition("click", "Click", {"type": "object"}, handler)

        with pytest.raises(ValueError):
            ToolRegistry([definition, definition])


class TestDispatch:
    """Dispatching a call never raises."""

    @pytest.mark.asyncio
    async def test_forwards_to_browser_tool(self):
        browser = RecordingBrowserTool()
        browser.results["type"] = ToolResult(output="typed")
        registry = ToolRegistry.for_browser(browser)

        result = await registry.dispatch(
            ToolCall(name="type", arguments={"text": "hello", "selector": "#q"})
        )

        assert result.output == "typed"
        assert browser.actions[0].action == "type"
        assert browser.actions[0].text == "hello"
        assert browser.actions[0].selector == "#q"

    @pytest.mark.asyncio
    async def test_exception_becomes_error_result(self):
        browser = RecordingBrowserTool()
        browser.results["navigate"] = TimeoutError("page load timed out")
        registry = ToolRegistry.for_browser(browser)

        result = await registry.dispatch(
            ToolCall(name="navigate", arguments={"url": "http://localhost"})
        )

        assert result.ok is False
        assert "page load timed out" in result.error
        assert result.to_content().startswith("Error: ")

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        browser = RecordingBrowserTool()
        registry = ToolRegistry.for_browser(browser)

        result = await registry.dispatch(ToolCall(name="teleport"))

        assert result.error == "Unknown tool: teleport"
        assert browser.actions == []

    @pytest.mark.asyncio
    async def test_missing_required_arguments(self):
        browser = RecordingBrowserTool()
        registry = ToolRegistry.for_browser(browser)

        result = await registry.dispatch(ToolCall(name="set_viewport", arguments={"width": 800}))

        assert "missing height" in result.error
        assert browser.actions == []

    @pytest.mark.asyncio
    async def test_custom_handler(self):
        seen = []

        async def handler(arguments):
            seen.append(arguments)
            return ToolResult(output="pong")

        registry = ToolRegistry([
            ToolDefinition("ping", "Ping", {"type": "object", "properties": {}}, handler)
        ])

        result = await registry.dispatch(ToolCall(name="ping", arguments={"n": 1}))

        assert result.output == "pong"
        assert seen == [{"n": 1}]
