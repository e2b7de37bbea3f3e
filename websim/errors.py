# =============================================================================
# websim/errors.py  —  The failure taxonomy
# =============================================================================
#
# Every failure a tool call can hit is one of these classes.  The dispatcher
# catches WebSimError at its boundary and turns it into an error envelope,
# so a single failed call never takes the server down.
#
#   NotFoundError            HTTP 404
#   RateLimitedError         HTTP 429
#   ServiceUnavailableError  HTTP 5xx
#   ApiError                 any other non-2xx
#   RequestTimeoutError      no response before the deadline
#   NetworkError             DNS / connection failure
#   InvalidResponseError     2xx body that is not JSON
#   ValidationError          arguments violate the declared schema
#   UnknownToolError         no tool registered under that name
#
# ConfigurationError is raised at startup only and is not a tool failure.
# =============================================================================

from typing import Optional


class WebSimError(Exception):
    """Base class for every tool-call failure."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


class NotFoundError(WebSimError):
    pass


class RateLimitedError(WebSimError):
    pass


class ServiceUnavailableError(WebSimError):
    pass


class ApiError(WebSimError):
    pass


class RequestTimeoutError(WebSimError):
    pass


class NetworkError(WebSimError):
    pass


class InvalidResponseError(WebSimError):
    pass


class ValidationError(WebSimError):
    """An argument failed its declared constraint."""

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class UnknownToolError(WebSimError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ConfigurationError(Exception):
    """An environment setting could not be parsed."""
