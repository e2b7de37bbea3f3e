# =============================================================================
# websim_tools/dispatcher.py  —  Route one tool call, return one envelope
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. look the name up in the registry (unknown name → error envelope,
#      the Request Client is never touched)
#   2. validate + default the arguments against the tool's Param table
#   3. run the handler, which makes exactly one upstream request
#   4. wrap the markdown in a success envelope
#
# ERROR ENVELOPES:
#   Every failure (unknown tool, bad arguments, upstream error, a bug in a
#   handler) comes back as ToolResult(is_error=True) with the text
#
#       Failed to <tool name in words>: <cause>
#
#       Timestamp: 2024-01-05T15:04:05+00:00
#
#   Nothing raises out of call_tool(); the server process keeps serving.
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from websim.context import WebSimContext
from websim.errors import UnknownToolError, WebSimError
from websim_tools.console import log_failure, log_request, log_response, log_status
from websim_tools.registry import ToolDescriptor
from websim_tools.schema import to_json_schema, validate_arguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """The text handed back to the MCP client, plus how it ended."""

    text: str
    is_error: bool = False
    error: Optional[BaseException] = None
    timestamp: Optional[str] = None


class Dispatcher:
    def __init__(self, tools: tuple[ToolDescriptor, ...], context: WebSimContext):
        self._tools = tuple(tools)
        self._by_name = {tool.name: tool for tool in self._tools}
        self._context = context

    def list_tools(self) -> list[dict]:
        """Describe every registered tool in registry order."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": to_json_schema(tool.params),
            }
            for tool in self._tools
        ]

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Run one tool and wrap the outcome.

        Args:
            name: The tool name exactly as listed.
            arguments: Raw arguments from the transport.

        Returns:
            A success ToolResult carrying the handler's markdown, or an error
            ToolResult describing why the call failed.
        """
        log_request(name, **(dict(arguments) if isinstance(arguments, Mapping) else {}))
        try:
            tool = self._by_name.get(name)
            if tool is None:
                raise UnknownToolError(name)
            checked = validate_arguments(tool.params, arguments)
            log_status(f"arguments accepted: {checked}")
            text = tool.handler(self._context, **checked)
        except WebSimError as exc:
            log_failure(name, exc)
            return _error_result(name, exc)
        except Exception as exc:
            logger.exception("Unexpected failure in tool %s", name)
            return _error_result(name, exc)
        return ToolResult(log_response(name, text))


def _error_result(name: str, error: BaseException) -> ToolResult:
    timestamp = datetime.now(timezone.utc).isoformat()
    action = name.replace("_", " ")
    text = f"Failed to {action}: {error}\n\nTimestamp: {timestamp}"
    return ToolResult(text, is_error=True, error=error, timestamp=timestamp)
