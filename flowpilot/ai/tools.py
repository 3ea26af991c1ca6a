"""
Browser tools exposed to the model.

The registry is a fixed table of `{name, description, parameters, handler}`
entries built once per client. Dispatching a call never raises: failures of
the browser tool come back as `ToolResult.error` so the model can see them and
adapt on its next turn.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol

from ..core.models import ActionInput, ToolCall, ToolResult

logger = logging.getLogger(__name__)


class BrowserTool(Protocol):
    """External executor for browser actions."""

    async def execute(self, action_input: ActionInput) -> ToolResult:
        ...


ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    """One capability offered to the model."""

    name: str
    description: str
    parameters: dict[str, Any]
    handler: ToolHandler

    def descriptor(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }

    def missing_arguments(self, arguments: dict[str, Any]) -> list[str]:
        return [key for key in self.parameters.get("required", []) if key not in arguments]


def _coordinates(description: str) -> dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "integer"},
        "minItems": 2,
        "maxItems": 2,
        "description": description,
    }


# Tool definitions for the browser
BROWSER_TOOLS: list[dict[str, Any]] = [
    {
        "name": "click",
        "description": "Left-click at viewport coordinates, or on the element matching a CSS selector",
        "parameters": {
            "type": "object",
            "properties": {
                "coordinate": _coordinates("[x, y] position relative to the viewport"),
                "selector": {
                    "type": "string",
                    "description": "CSS selector of the element to click"
                }
            }
        }
    },
    {
        "name": "double_click",
        "description": "Double-click at viewport coordinates",
        "parameters": {
            "type": "object",
            "properties": {
                "coordinate": _coordinates("[x, y] position relative to the viewport")
            },
            "required": ["coordinate"]
        }
    },
    {
        "name": "type",
        "description": "Type text into the focused element, or into the element matching a selector",
        "parameters": {
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "The text to type"
                },
                "selector": {
                    "type": "string",
                    "description": "CSS selector of the input to type into"
                }
            },
            "required": ["text"]
        }
    },
    {
        "name": "key",
        "description": "Press a key or key combination (e.g. Enter, Tab, Control+A)",
        "parameters": {
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "Key or combination to press"
                }
            },
            "required": ["text"]
        }
    },
    {
        "name": "scroll",
        "description": "Scroll the page to reveal more content",
        "parameters": {
            "type": "object",
            "properties": {
                "direction": {
                    "type": "string",
                    "enum": ["up", "down", "left", "right"],
                    "description": "Direction to scroll"
                },
                "amount": {
                    "type": "integer",
                    "description": "Distance in pixels (default 300)"
                }
            },
            "required": ["direction"]
        }
    },
    {
        "name": "screenshot",
        "description": "Capture a screenshot of the current viewport",
        "parameters": {
            "type": "object",
            "properties": {}
        }
    },
    {
        "name": "get_dom",
        "description": "Return a simplified DOM snapshot of the page, or of the element matching a selector",
        "parameters": {
            "type": "object",
            "properties": {
                "selector": {
                    "type": "string",
                    "description": "Limit the snapshot to this element"
                }
            }
        }
    },
    {
        "name": "set_viewport",
        "description": "Resize the browser viewport",
        "parameters": {
            "type": "object",
            "properties": {
                "width": {"type": "integer", "description": "Viewport width in pixels"},
                "height": {"type": "integer", "description": "Viewport height in pixels"}
            },
            "required": ["width", "height"]
        }
    },
    {
        "name": "navigate",
        "description": "Navigate directly to a URL (use sparingly)",
        "parameters": {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "The URL to navigate to"
                }
            },
            "required": ["url"]
        }
    },
    {
        "name": "wait",
        "description": "Wait for dynamic content to load",
        "parameters": {
            "type": "object",
            "properties": {
                "duration": {
                    "type": "number",
                    "description": "Seconds to wait"
                }
            }
        }
    },
]


class ToolRegistry:
    """Capability table presented to the model, with dispatch."""

    def __init__(self, definitions: list[ToolDefinition]):
        self._tools: dict[str, ToolDefinition] = {}
        for definition in definitions:
            if definition.name in self._tools:
                raise ValueError(f"Duplicate tool: {definition.name}")
            self._tools[definition.name] = definition

    @classmethod
    def for_browser(cls, browser_tool: BrowserTool) -> "ToolRegistry":
        """
        Build the default registry backed by a browser tool.

        Every tool forwards its arguments as an `ActionInput` whose action is
        the tool name.

        Args:
            browser_tool: Executor for browser actions

        Returns:
            Registry with the standard browser capabilities
        """
        def make_handler(name: str) -> ToolHandler:
            async def handler(arguments: dict[str, Any]) -> ToolResult:
                return await browser_tool.execute(ActionInput(**{**arguments, "action": name}))
            return handler

        return cls([
            ToolDefinition(
                name=tool["name"],
                description=tool["description"],
                parameters=tool["parameters"],
                handler=make_handler(tool["name"]),
            )
            for tool in BROWSER_TOOLS
        ])

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def descriptors(self) -> list[dict[str, Any]]:
        """Tool descriptors in the provider-neutral `{name, description, parameters}` shape."""
        return [tool.descriptor() for tool in self._tools.values()]

    async def dispatch(self, call: ToolCall) -> ToolResult:
        """
        Execute a tool call.

        Args:
            call: Tool call requested by the model

        Returns:
            The tool result; errors are reported in `ToolResult.error`
        """
        tool = self._tools.get(call.name)
        if tool is None:
            logger.warning("Model requested unknown tool: %s", call.name)
            return ToolResult(error=f"Unknown tool: {call.name}")

        missing = tool.missing_arguments(call.arguments)
        if missing:
            return ToolResult(
                error=f"Invalid arguments for {call.name}: missing {', '.join(missing)}"
            )

        logger.debug("Dispatching %s %s", call.name, call.arguments)
        try:
            result = await tool.handler(call.arguments)
        except Exception as e:
            logger.warning("Tool %s failed: %s", call.name, e)
            return ToolResult(error=f"Failed to execute {call.name}: {e}")

        if result is None:
            return ToolResult(output="")
        return result
