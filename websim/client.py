# =============================================================================
# websim/client.py  —  The Request Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs exactly ONE HTTP request against the WebSim API per call and
#   returns the parsed JSON body, or raises one error from websim/errors.py.
#
# HOW A CALL GOES:
#   1. base address + path               → https://api.websim.com/api/v1/...
#   2. params with value None are dropped, the rest become the query string
#   3. Accept: application/json and the configured User-Agent are sent
#      (POST adds a JSON body and Content-Type)
#   4. the request gets ONE wall-clock deadline; there is no retry and no cache
#   5. a non-2xx status is classified:
#        404 → NotFoundError, 429 → RateLimitedError, 5xx → ServiceUnavailableError,
#        anything else → ApiError (with the upstream message when one parses)
#   6. a 2xx body that is not JSON → InvalidResponseError
#
# TRANSPORT:
#   urllib.request, same as the rest of this codebase's live-API fetches.
#   The opener is a constructor argument so tests can hand in a fake one.
#   urllib only applies its timeout to each blocking socket operation, so the
#   body is read in chunks and the deadline is checked between chunks.  A body
#   that trickles in one byte at a time still fails at the deadline.
#
#   http.client errors (truncated body, garbage status line) are not OSErrors
#   and get their own branch below.
# =============================================================================

import http.client
import json
import logging
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Mapping, Optional

from websim.errors import (
    ApiError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    RequestTimeoutError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

Opener = Callable[..., Any]

# read1() returns as soon as any bytes arrive, up to this many
_CHUNK_SIZE = 64 * 1024


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _upstream_message(body: bytes) -> Optional[str]:
    """Pull a human message out of an error body, if it has one."""
    try:
        data = json.loads(body.decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, str) and message:
        return message
    error = data.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"] or None
    return None


class WebSimClient:
    """Single-shot JSON client for the WebSim REST API.

    Args:
        base_url: API base address, e.g. "https://api.websim.com".
        user_agent: Value of the User-Agent header on every request.
        timeout_ms: Request timeout in milliseconds.
        opener: Callable with urllib.request.urlopen's signature.
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        timeout_ms: int = 30000,
        opener: Optional[Opener] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms
        self._opener = opener or urllib.request.urlopen

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        if not path.startswith("/"):
            path = "/" + path
        url = self.base_url + path
        if params:
            pairs = [(key, _query_value(value)) for key, value in params.items() if value is not None]
            if pairs:
                url += "?" + urllib.parse.urlencode(pairs)
        return url

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request(path, params)

    def post(self, path: str, body: Any) -> Any:
        return self.request(path, method="POST", body=body)

    def request(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body.

        Raises:
            NotFoundError, RateLimitedError, ServiceUnavailableError, ApiError,
            RequestTimeoutError, NetworkError, InvalidResponseError
        """
        url = self.build_url(path, params)
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        logger.debug("%s %s", method, url)

        deadline = time.monotonic() + self.timeout_ms / 1000
        try:
            with self._opener(req, timeout=self.timeout_ms / 1000) as response:
                raw = self._read_body(response, deadline)
        except urllib.error.HTTPError as exc:
            raise self._status_error(exc) from exc
        except urllib.error.URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                raise self._timeout_error() from exc
            raise NetworkError(
                "Unable to connect to WebSim service. Please check your internet connection."
            ) from exc
        except TimeoutError as exc:
            raise self._timeout_error() from exc
        except OSError as exc:
            # Connection reset / remote disconnect mid-response.
            raise NetworkError(
                "Unable to connect to WebSim service. Please check your internet connection."
            ) from exc
        except http.client.IncompleteRead as exc:
            raise NetworkError(
                f"Connection to WebSim service dropped mid-response ({len(exc.partial)} bytes read)"
            ) from exc
        except http.client.HTTPException as exc:
            raise InvalidResponseError(
                f"WebSim API returned a malformed HTTP response: {type(exc).__name__}"
            ) from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (ValueError, UnicodeDecodeError) as exc:
            raise InvalidResponseError("WebSim API returned an invalid JSON response") from exc

    def _read_body(self, response: Any, deadline: float) -> bytes:
        """Read the body chunk by chunk, giving up once the deadline passes."""
        chunks = []
        while True:
            if time.monotonic() >= deadline:
                raise self._timeout_error()
            chunk = response.read1(_CHUNK_SIZE)
            if not chunk:
                return b"".join(chunks)
            chunks.append(chunk)

    def _timeout_error(self) -> RequestTimeoutError:
        return RequestTimeoutError(f"Request timed out after {self.timeout_ms}ms")

    def _status_error(self, exc: urllib.error.HTTPError) -> Exception:
        status = exc.code
        try:
            detail = _upstream_message(exc.read() or b"")
        except (OSError, http.client.HTTPException):
            detail = None

        if status == 404:
            message = "Resource not found"
            if detail and detail.lower() != message.lower():
                message = f"{message}: {detail}"
            return NotFoundError(message, status=status)
        if status == 429:
            return RateLimitedError("Rate limit exceeded. Please try again later.", status=status)
        if status >= 500:
            return ServiceUnavailableError(
                f"WebSim service temporarily unavailable (HTTP {status})", status=status
            )
        if detail:
            return ApiError(f"WebSim API error: {status} {detail}", status=status)
        return ApiError(f"WebSim API error: {status} {exc.reason}", status=status)
