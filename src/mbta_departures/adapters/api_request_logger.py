"""Opt-in logging of outgoing MBTA API requests.

Enabled with MBTA_LOG_REQUESTS=true. The logged URL is built with yarl the same
way aiohttp builds the request URL, so it can be replayed with curl as is.
"""

import logging
import os
from collections.abc import Mapping

from yarl import URL

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def request_logging_enabled() -> bool:
    return os.getenv("MBTA_LOG_REQUESTS", "").lower() == "true"


def request_url(url: str, params: Mapping[str, str | int] | None = None) -> URL:
    """URL as sent by aiohttp: params appended to any existing query, in order."""
    target = URL(url)
    return target.extend_query(params) if params else target


def masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def log_api_request(
    method: str,
    url: str,
    params: Mapping[str, str | int] | None = None,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Log one request if MBTA_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method.
        url: Request URL, possibly with a query string already.
        params: Query parameters aiohttp will add.
        headers: Request headers. Credentials are masked.
    """
    if not request_logging_enabled():
        return

    message = f"API request: {method} {request_url(url, params)}"
    if headers:
        shown = ", ".join(f"{name}: {value}" for name, value in masked_headers(headers).items())
        message += f" [{shown}]"
    logger.info(message)
