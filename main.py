# =============================================================================
# main.py  —  Entry Point for the WebSim MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#   (or, once installed:  websim-mcp-server)
#
# WHAT HAPPENS:
#   1. Loads a local .env file into the environment, if one exists
#   2. Reads settings (API base, timeout, PORT, LOG_LEVEL) from websim/config.py
#   3. Sends log output to stderr (stdout belongs to the MCP transport)
#   4. Starts the /health endpoint when PORT is set
#   5. Builds the FastMCP server and serves it over stdio until the client
#      disconnects
#
# A malformed setting stops the process here, before any tool is served.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from websim.config import load_settings
from websim.errors import ConfigurationError
from websim_tools.console import configure_logging
from websim_tools.health import start_health_server
from websim_tools.mcp_server import build_server


def main() -> None:
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"websim-mcp-server: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(settings.log_level)
    logging.getLogger(__name__).info(
        "Starting WebSim MCP server (api=%s, timeout=%dms)",
        settings.api_base_url,
        settings.timeout_ms,
    )

    if settings.health_port is not None:
        start_health_server(settings.health_port)

    build_server(settings).run()


if __name__ == "__main__":
    main()
