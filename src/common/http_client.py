"""Shared HTTP helpers used by the PEAR channel readers.

Encapsulates request/timeout/retry handling so the document layer only ever
sees bytes or a :class:`TransportError`. This module is dependency-light and
can be imported from registry/* without cycles.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

# Status code reported when no HTTP response was received at all.
NO_RESPONSE = 0


class TransportError(Exception):
    """A document could not be retrieved.

    Attributes:
        status_code: HTTP status of the failed response, or 0 when the request
            never produced a response (timeout, connection refused, ...).
        url: The requested URL.
    """

    def __init__(self, status_code: int, url: str, message: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        detail = message or f"HTTP {status_code}"
        super().__init__(f"{detail} while fetching {safe_url(url)}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _default_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    merged = {"User-Agent": Constants.USER_AGENT}
    if headers:
        merged.update(headers)
    return merged


def fetch_bytes(
    url: str,
    *,
    context: str = "pear",
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> bytes:
    """Perform a GET request and return the body of a 200 response.

    Connection failures and timeouts are retried up to
    ``Constants.HTTP_RETRY_MAX`` attempts with exponential backoff. Any
    non-200 response is returned to the caller immediately as a
    :class:`TransportError` carrying its status code.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs.
        headers: Optional extra request headers.
        **kwargs: Passed through to requests.get.

    Returns:
        bytes: The raw response body.

    Raises:
        TransportError: On a non-200 status or when all attempts failed.
    """
    safe_target = safe_url(url)
    request_headers = _default_headers(headers)
    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1)))
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action="GET",
                        target=safe_target,
                        context=context,
                        attempt=attempt + 1,
                    ),
                )
            try:
                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=request_headers,
                    **kwargs,
                )
            except requests.Timeout:
                last_exception = f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP timeout",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="timeout",
                            attempt=attempt + 1,
                            target=safe_target,
                        ),
                    )
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request exception",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="request_exception",
                            attempt=attempt + 1,
                            target=safe_target,
                        ),
                    )
                continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success" if response.status_code == 200 else "http_error",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        if response.status_code != 200:
            raise TransportError(response.status_code, url)
        return response.content

    logger.error("%s request to %s failed: %s", context, safe_target, last_exception)
    raise TransportError(
        NO_RESPONSE,
        url,
        f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}",
    )
