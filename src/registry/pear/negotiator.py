"""Channel description parsing and REST dialect negotiation.

A channel publishes ``channel.xml`` listing, per REST dialect it serves, the
base URL of that dialect::

    <channel xmlns="http://pear.php.net/channel-1.0">
      <name>pear.example.net</name>
      <suggestedalias>example</suggestedalias>
      <servers><primary><rest>
        <baseurl type="REST1.0">http://pear.example.net/rest/</baseurl>
      </rest></primary></servers>
    </channel>
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import UnsupportedProtocolError
from .models import Capability, ChannelCapabilities, ChannelInfo, ProtocolSelection

logger = logging.getLogger(__name__)

NS = {"ns": Constants.NS_CHANNEL}


def _text(root: ET.Element, path: str) -> str:
    node = root.find(path, NS)
    if node is None or node.text is None:
        return ""
    return node.text.strip()


def parse_channel_xml(root: ET.Element) -> ChannelInfo:
    """Extract name, summary, alias and advertised dialects from channel.xml."""
    capabilities = []
    for node in root.findall("ns:servers/ns:primary/ns:rest/ns:baseurl", NS):
        dialect = node.get("type")
        if not dialect:
            continue
        capabilities.append(Capability(dialect=dialect, base_url=(node.text or "").strip()))
    return ChannelInfo(
        name=_text(root, "ns:name"),
        summary=_text(root, "ns:summary"),
        alias=_text(root, "ns:suggestedalias"),
        capabilities=tuple(capabilities),
    )


def select_protocol(
    capabilities: ChannelCapabilities,
    preference: Sequence[str],
    channel: str = "",
) -> ProtocolSelection:
    """Pick the most preferred dialect the channel advertises.

    Preference order wins over the order the channel lists its dialects in.

    Raises:
        UnsupportedProtocolError: no advertised dialect is in ``preference``.
    """
    advertised = {}
    for capability in capabilities:
        advertised.setdefault(capability.dialect, capability.base_url)

    for dialect in preference:
        if dialect in advertised:
            if is_debug_enabled(logger):
                logger.debug("Selected REST dialect", extra=extra_context(
                    event="decision", component="negotiator", action="select_protocol",
                    outcome=dialect, target=channel or None
                ))
            return ProtocolSelection(dialect=dialect, base_url=advertised[dialect])

    raise UnsupportedProtocolError(channel, [c.dialect for c in capabilities], preference)
