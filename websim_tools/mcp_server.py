# =============================================================================
# websim_tools/mcp_server.py  —  FastMCP server publishing the registry
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server named "websim-mcp-server" and adds one tool per
#   ToolDescriptor in registry.py.
#
# HOW IT WORKS (the flow):
#   1. An MCP client lists tools and sees each descriptor's name,
#      description and inputSchema (the JSON Schema of the pydantic model
#      built from its Param table)
#   2. It calls a tool by name, e.g. "list_trending_projects"
#   3. FastMCP hands the raw arguments to RegistryTool.run()
#   4. run() passes them to the Dispatcher on a worker thread, because the
#      upstream request is a blocking urllib call
#   5. A success envelope becomes the tool's text content; an error
#      envelope is raised as ToolError, which FastMCP reports with
#      isError = true
#
# WHY NOT @mcp.tool() DECORATORS:
#   The argument rules live in one declarative table per tool so the
#   dispatcher can validate them without the transport.  A decorator would
#   derive a second model from Python signatures; RegistryTool publishes
#   the schema of the model schema.py builds from the table instead.
#
# RUNNING THIS SERVER:
#     a) Through the entry point:  python main.py   (or websim-mcp-server)
#     b) Standalone:               python -m websim_tools.mcp_server
#   Both go through main.main(), so .env loading and config errors behave
#   the same way.
# =============================================================================

import asyncio
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool, ToolResult

from websim.config import SERVER_NAME, Settings
from websim.context import WebSimContext
from websim_tools.console import log_status
from websim_tools.dispatcher import Dispatcher
from websim_tools.registry import ToolDescriptor, build_registry
from websim_tools.schema import to_json_schema


class RegistryTool(Tool):
    """A FastMCP tool that forwards every call to the Dispatcher."""

    def __init__(self, descriptor: ToolDescriptor, dispatcher: Dispatcher):
        super().__init__(
            name=descriptor.name,
            description=descriptor.description,
            parameters=to_json_schema(descriptor.params),
        )
        self._dispatcher = dispatcher

    def __repr__(self) -> str:
        return f"RegistryTool(name={self.name!r})"

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        result = await asyncio.to_thread(self._dispatcher.call_tool, self.name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return ToolResult(content=result.text)


def build_server(settings: Settings, context: Optional[WebSimContext] = None) -> FastMCP:
    """Create the FastMCP server with every registered tool attached.

    Args:
        settings: Resolved runtime settings (API base, timeout, links).
        context: Prebuilt handler context; built from settings when omitted.

    Returns:
        A FastMCP instance ready for .run().
    """
    tools = build_registry()
    dispatcher = Dispatcher(tools, context or WebSimContext.from_settings(settings))

    mcp = FastMCP(SERVER_NAME)
    for descriptor in tools:
        mcp.add_tool(RegistryTool(descriptor, dispatcher))
    log_status(f"registered {len(tools)} tools against {settings.api_base_url}")
    return mcp


if __name__ == "__main__":
    from main import main

    main()
