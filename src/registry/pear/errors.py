"""Error taxonomy for PEAR channel reads.

Only structural and network failures are raised; version coercion failures
and unrecognized dependency shapes are handled locally and never surface.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from common.http_client import TransportError  # noqa: F401  (re-exported)


class PearChannelError(Exception):
    """Base class for fatal channel read failures."""


class UnsupportedProtocolError(PearChannelError):
    """The channel advertises no REST dialect this reader supports."""

    def __init__(self, channel: str, advertised: Iterable[str], supported: Iterable[str]):
        self.channel = channel
        self.advertised: Tuple[str, ...] = tuple(advertised)
        self.supported: Tuple[str, ...] = tuple(supported)
        super().__init__(
            f"PEAR channel {channel} does not support any of {', '.join(self.supported)} "
            f"protocols (advertised: {', '.join(self.advertised) or 'none'})"
        )


class DocumentParseError(PearChannelError):
    """A fetched document is not well-formed XML."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Unable to parse document {url}: {reason}")


class InvalidRepositoryUrlError(PearChannelError, ValueError):
    """A repository URL cannot be used to reach a channel."""
