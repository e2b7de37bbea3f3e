# =============================================================================
# websim/config.py  —  Environment-driven settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the handful of knobs this server has from environment variables.
#   main.py calls load_dotenv() first, so a local .env file works too.
#
# VARIABLES:
#   WEBSIM_API_BASE    upstream base address   (default https://api.websim.com)
#   WEBSIM_SITE_URL    base for deep links     (default https://websim.com)
#   WEBSIM_USER_AGENT  outbound User-Agent     (default websim-mcp-server/1.0.0)
#   WEBSIM_TIMEOUT     request timeout, ms     (default 30000)
#   PORT               health endpoint port    (unset = no health endpoint)
#   LOG_LEVEL          logging level           (default INFO)
#
# The base address differs between deployments of this server, so it is
# always read from here and never derived from a tool.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from websim.errors import ConfigurationError

SERVER_NAME = "websim-mcp-server"
VERSION = "1.0.0"

DEFAULT_API_BASE = "https://api.websim.com"
DEFAULT_SITE_URL = "https://websim.com"
DEFAULT_USER_AGENT = f"{SERVER_NAME}/{VERSION}"
DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one server process."""

    api_base_url: str = DEFAULT_API_BASE
    site_url: str = DEFAULT_SITE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    health_port: Optional[int] = None
    log_level: str = "INFO"


def _positive_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Returns:
        A frozen Settings instance.

    Raises:
        ConfigurationError: if WEBSIM_TIMEOUT, PORT or LOG_LEVEL is malformed.
    """
    if environ is None:
        environ = os.environ

    log_level = environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"LOG_LEVEL {log_level!r} is not a logging level")

    timeout_ms = _positive_int(environ, "WEBSIM_TIMEOUT")

    return Settings(
        api_base_url=environ.get("WEBSIM_API_BASE", "").strip().rstrip("/") or DEFAULT_API_BASE,
        site_url=environ.get("WEBSIM_SITE_URL", "").strip().rstrip("/") or DEFAULT_SITE_URL,
        user_agent=environ.get("WEBSIM_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
        timeout_ms=timeout_ms if timeout_ms is not None else DEFAULT_TIMEOUT_MS,
        health_port=_positive_int(environ, "PORT"),
        log_level=log_level,
    )
