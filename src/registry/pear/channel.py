"""PEAR channel reader: negotiate a REST dialect, read it, assemble packages."""
from __future__ import annotations

import logging
import urllib.parse
from typing import Dict, List, Optional, Sequence, Type, Union

from constants import Constants, RestDialects
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

from .assembler import assemble_packages
from .fetcher import DocumentFetcher
from .models import NormalizedPackageVersion, ProtocolSelection
from .negotiator import parse_channel_xml, select_protocol
from .rest10 import ChannelRest10Reader
from .rest11 import ChannelRest11Reader

logger = logging.getLogger(__name__)

DialectReader = Union[ChannelRest10Reader, ChannelRest11Reader]

DIALECT_READERS: Dict[str, Type[DialectReader]] = {
    RestDialects.REST13.value: ChannelRest11Reader,
    RestDialects.REST12.value: ChannelRest11Reader,
    RestDialects.REST11.value: ChannelRest11Reader,
    RestDialects.REST10.value: ChannelRest10Reader,
}


class ChannelReader:
    """Read a PEAR channel and build its normalized package list.

    Each call to :meth:`read` is independent: nothing fetched for one channel
    is reused by the next.
    """

    def __init__(
        self,
        fetcher: Optional[DocumentFetcher] = None,
        preference: Optional[Sequence[str]] = None,
    ):
        self._fetcher = fetcher or DocumentFetcher()
        supported = preference if preference is not None else Constants.PEAR_REST_PREFERENCE
        self._preference = [dialect for dialect in supported if dialect in DIALECT_READERS]
        self.last_selection: Optional[ProtocolSelection] = None

    @property
    def preference(self) -> List[str]:
        return list(self._preference)

    def read(self, url: str) -> List[NormalizedPackageVersion]:
        """Read every package version published by the channel at ``url``.

        Raises:
            UnsupportedProtocolError: the channel serves no supported dialect.
            TransportError: a required document could not be fetched.
            DocumentParseError: a fetched document is not valid XML.
        """
        with Timer() as timer:
            channel = parse_channel_xml(self._fetcher.fetch_xml(url, Constants.PEAR_CHANNEL_FILE))
            selection = select_protocol(channel.capabilities, self._preference, channel=channel.name or url)
            self.last_selection = selection

            logger.info("Reading PEAR channel %s using %s", channel.name, selection.dialect)
            reader = DIALECT_READERS[selection.dialect](self._fetcher)
            descriptors = reader.read(selection.base_url)

            scheme = urllib.parse.urlsplit(url).scheme or Constants.PEAR_DIST_SCHEME
            packages = assemble_packages(channel.name, channel.alias, descriptors, scheme=scheme)

        if is_debug_enabled(logger):
            logger.debug("Channel read complete", extra=extra_context(
                event="function_exit", component="channel", action="read",
                target=safe_url(url), outcome="success", dialect=selection.dialect,
                count=len(packages), duration_ms=timer.duration_ms()
            ))
        return packages
