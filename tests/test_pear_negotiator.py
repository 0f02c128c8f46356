"""Tests for channel.xml parsing and REST dialect selection."""

import xml.etree.ElementTree as ET

import pytest

from constants import Constants
from registry.pear.errors import UnsupportedProtocolError
from registry.pear.models import Capability, ProtocolSelection
from registry.pear.negotiator import parse_channel_xml, select_protocol

from conftest import load_fixture

PREFERENCE = ["REST1.3", "REST1.2", "REST1.1", "REST1.0"]


class TestParseChannelXml:
    """Test parse_channel_xml."""

    def test_reads_channel_metadata(self):
        info = parse_channel_xml(ET.fromstring(load_fixture("channel.1.1.xml")))

        assert info.name == "pear.net"
        assert info.alias == "test"
        assert info.summary == "Test PEAR channel"

    def test_capabilities_keep_document_order(self):
        info = parse_channel_xml(ET.fromstring(load_fixture("channel.1.1.xml")))

        assert info.capabilities == (
            Capability("REST1.1", "http://test.loc/rest11/"),
            Capability("REST1.0", "http://test.loc/rest10/"),
        )

    def test_channel_without_rest(self):
        info = parse_channel_xml(ET.fromstring(load_fixture("channel.none.xml")))

        assert info.name == "legacy.net"
        assert info.capabilities == ()


class TestSelectProtocol:
    """Test select_protocol."""

    def test_preference_order_wins(self):
        capabilities = (
            Capability("REST1.0", "http://a/rest10/"),
            Capability("REST1.1", "http://a/rest11/"),
        )

        selection = select_protocol(capabilities, PREFERENCE)

        assert selection == ProtocolSelection("REST1.1", "http://a/rest11/")

    def test_highest_supported_dialect(self):
        capabilities = tuple(Capability(tag, f"http://a/{tag}/") for tag in ("REST1.0", "REST1.3", "REST1.2"))

        assert select_protocol(capabilities, PREFERENCE).dialect == "REST1.3"

    def test_unknown_dialects_are_ignored(self):
        capabilities = (Capability("REST2.0", "http://a/rest20/"), Capability("REST1.0", "http://a/rest10/"))

        assert select_protocol(capabilities, PREFERENCE).dialect == "REST1.0"

    def test_no_intersection_raises(self):
        capabilities = (Capability("REST2.0", "http://a/rest20/"),)

        with pytest.raises(UnsupportedProtocolError) as excinfo:
            select_protocol(capabilities, PREFERENCE, channel="a")

        assert excinfo.value.channel == "a"
        assert excinfo.value.advertised == ("REST2.0",)
        assert excinfo.value.supported == tuple(PREFERENCE)

    def test_default_preference_constant(self):
        assert Constants.PEAR_REST_PREFERENCE == PREFERENCE
