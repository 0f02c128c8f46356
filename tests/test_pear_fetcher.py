"""Tests for the shared document fetcher."""

from unittest.mock import patch

import pytest

from common.http_client import TransportError
from registry.pear.errors import DocumentParseError
from registry.pear.fetcher import DocumentFetcher, build_url

from conftest import FakeTransport

BASE = "http://test.loc/rest/"


class TestBuildUrl:
    """Test build_url."""

    @pytest.mark.parametrize(
        "base,path",
        [("http://test.loc/rest/", "/p/packages.xml"), ("http://test.loc/rest", "p/packages.xml"),
         ("http://test.loc/rest//", "//p/packages.xml")],
    )
    def test_joins_with_single_slash(self, base, path):
        assert build_url(base, path) == "http://test.loc/rest/p/packages.xml"


class TestDocumentFetcher:
    """Test DocumentFetcher."""

    def test_fetch_xml_parses_tree(self):
        transport = FakeTransport({"http://test.loc/rest/doc.xml": b"<a><b>x</b></a>"})

        root = DocumentFetcher(transport).fetch_xml(BASE, "/doc.xml")

        assert root.tag == "a"
        assert root.find("b").text == "x"
        assert transport.calls == ["http://test.loc/rest/doc.xml"]

    def test_fetch_text_returns_raw_content(self):
        transport = FakeTransport({"http://test.loc/rest/deps.txt": b"b:0;"})

        assert DocumentFetcher(transport).fetch_text(BASE, "deps.txt") == "b:0;"

    def test_malformed_xml_raises_parse_error(self):
        transport = FakeTransport({"http://test.loc/rest/doc.xml": b"<a><b></a>"})

        with pytest.raises(DocumentParseError):
            DocumentFetcher(transport).fetch_xml(BASE, "/doc.xml")

    def test_required_fetch_propagates_not_found(self):
        fetcher = DocumentFetcher(FakeTransport({}))

        with pytest.raises(TransportError) as excinfo:
            fetcher.fetch_xml(BASE, "/missing.xml")

        assert excinfo.value.status_code == 404
        assert excinfo.value.is_not_found

    @pytest.mark.parametrize("method", ["fetch_text_if_found", "fetch_xml_if_found"])
    def test_tolerant_fetch_turns_not_found_into_none(self, method):
        fetcher = DocumentFetcher(FakeTransport({}))

        assert getattr(fetcher, method)(BASE, "/missing") is None

    @pytest.mark.parametrize("status", [0, 403, 500, 503])
    def test_tolerant_fetch_reraises_other_failures(self, status):
        transport = FakeTransport({"http://test.loc/rest/r/x/allreleases.xml": status})

        with pytest.raises(TransportError) as excinfo:
            DocumentFetcher(transport).fetch_xml_if_found(BASE, "/r/x/allreleases.xml")

        assert excinfo.value.status_code == status

    def test_defaults_to_http_transport(self):
        with patch("registry.pear.fetcher.http_client.fetch_bytes", return_value=b"<a/>") as mock_fetch:
            root = DocumentFetcher().fetch_xml(BASE, "/a.xml")

        assert root.tag == "a"
        mock_fetch.assert_called_once_with("http://test.loc/rest/a.xml")
