"""Document fetcher shared by every REST dialect reader."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Optional, TypeVar

from common import http_client
from common.http_client import TransportError
from common.logging_utils import extra_context, is_debug_enabled, safe_url

from .errors import DocumentParseError

logger = logging.getLogger(__name__)

Transport = Callable[[str], bytes]
T = TypeVar("T")


def build_url(base_url: str, path: str) -> str:
    """Join a dialect base URL and a relative document path with one slash."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class DocumentFetcher:
    """Retrieve documents relative to a base URL.

    The transport is any callable taking a URL and returning bytes, raising
    :class:`TransportError` on failure. Most call sites let every failure
    propagate; the ``*_if_found`` variants turn a 404 into ``None`` for the
    sub-resources a channel may legitimately lack.
    """

    def __init__(self, transport: Optional[Transport] = None):
        self._transport = transport or http_client.fetch_bytes

    def fetch_bytes(self, base_url: str, path: str) -> bytes:
        url = build_url(base_url, path)
        if is_debug_enabled(logger):
            logger.debug("Fetching document", extra=extra_context(
                event="function_entry", component="fetcher", action="fetch",
                target=safe_url(url)
            ))
        return self._transport(url)

    def fetch_text(self, base_url: str, path: str) -> str:
        """Fetch an opaque document and decode it as UTF-8."""
        return self.fetch_bytes(base_url, path).decode("utf-8", errors="replace")

    def fetch_xml(self, base_url: str, path: str) -> ET.Element:
        """Fetch a document and parse it into an element tree root.

        Raises:
            TransportError: the document could not be retrieved.
            DocumentParseError: the document is not well-formed XML.
        """
        content = self.fetch_bytes(base_url, path)
        try:
            return ET.fromstring(content)
        except ET.ParseError as exc:
            raise DocumentParseError(safe_url(build_url(base_url, path)), str(exc)) from exc

    def fetch_text_if_found(self, base_url: str, path: str) -> Optional[str]:
        """Like :meth:`fetch_text` but returns None when the document is missing."""
        return self._if_found(self.fetch_text, base_url, path)

    def fetch_xml_if_found(self, base_url: str, path: str) -> Optional[ET.Element]:
        """Like :meth:`fetch_xml` but returns None when the document is missing."""
        return self._if_found(self.fetch_xml, base_url, path)

    @staticmethod
    def _if_found(fetch: Callable[[str, str], T], base_url: str, path: str) -> Optional[T]:
        # Only a 404 is tolerated; every other failure aborts the read.
        try:
            return fetch(base_url, path)
        except TransportError as exc:
            if not exc.is_not_found:
                raise
        if is_debug_enabled(logger):
            logger.debug("Optional document not found", extra=extra_context(
                event="http_response", component="fetcher", action="fetch",
                outcome="not_found", status_code=404,
                target=safe_url(build_url(base_url, path))
            ))
        return None
