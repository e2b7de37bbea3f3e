# =============================================================================
# websim_tools/console.py  —  Colour-coded stderr logging for tool calls
# =============================================================================
# We log to STDERR because the MCP server talks to its client over
# STDOUT (stdin/stdout is the MCP transport).  Anything printed to stdout
# would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + arguments)
#     - YELLOW for intermediate status/progress messages
#     - GREEN for responses
#     - RED for failed calls
# =============================================================================

import logging
import sys

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Failures
_RESET = "\033[0m"     # Reset to default terminal color

# Longest slice of a rendered response echoed to the log
_PREVIEW_CHARS = 120

logger = logging.getLogger("websim")


def configure_logging(level: str = "INFO") -> None:
    """Send every log record to stderr in the "[MCP]" format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def log_request(tool_name: str, /, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, text: str) -> str:
    """Log the size and first line of a response in GREEN, then return it."""
    first_line = text.strip().splitlines()[0] if text.strip() else ""
    if len(first_line) > _PREVIEW_CHARS:
        first_line = first_line[:_PREVIEW_CHARS] + "..."
    logger.info(f"{_GREEN}  ← {tool_name} response: {len(text)} chars, {first_line!r}{_RESET}")
    return text


def log_failure(tool_name: str, error: BaseException) -> None:
    """Log a failed call in RED."""
    logger.warning(f"{_RED}  ✗ {tool_name} failed: {type(error).__name__}: {error}{_RESET}")
