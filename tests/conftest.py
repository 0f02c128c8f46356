"""Shared fixtures: an in-memory transport serving PEAR channel documents."""

import os

import pytest

from common.http_client import TransportError

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures", "pear")


def load_fixture(relative_path):
    with open(os.path.join(FIXTURES_DIR, relative_path), "rb") as handle:
        return handle.read()


class FakeTransport:
    """Serve documents from a url -> bytes mapping.

    Integer values are raised as TransportError with that status; unknown
    URLs answer 404. Every requested URL is recorded in ``calls``.
    """

    def __init__(self, documents):
        self.documents = dict(documents)
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        document = self.documents.get(url, 404)
        if isinstance(document, int):
            raise TransportError(document, url)
        return document


REST10_DOCUMENTS = {
    "http://test.loc/rest10/p/packages.xml": "Rest1.0/packages.xml",
    "http://test.loc/rest10/p/http_client/info.xml": "Rest1.0/http_client_info.xml",
    "http://test.loc/rest10/p/http_request/info.xml": "Rest1.0/http_request_info.xml",
    "http://test.loc/rest10/r/http_client/allreleases.xml": "Rest1.0/http_client_allreleases.xml",
    "http://test.loc/rest10/r/http_client/deps.1.2.1.txt": "Rest1.0/http_client_deps.1.2.1.txt",
}

REST11_DOCUMENTS = {
    "http://test.loc/rest11/c/categories.xml": "Rest1.1/categories.xml",
    "http://test.loc/rest11/c/Default/packagesinfo.xml": "Rest1.1/packagesinfo.xml",
}


def _load_all(mapping):
    return {url: load_fixture(path) for url, path in mapping.items()}


@pytest.fixture
def rest10_documents():
    return _load_all(REST10_DOCUMENTS)


@pytest.fixture
def rest11_documents():
    return _load_all(REST11_DOCUMENTS)


@pytest.fixture
def channel_documents(rest10_documents, rest11_documents):
    """Two channels: pear.1.0.net serves REST1.0 only, pear.1.1.net both dialects."""
    documents = {
        "http://pear.1.0.net/channel.xml": load_fixture("channel.1.0.xml"),
        "http://pear.1.1.net/channel.xml": load_fixture("channel.1.1.xml"),
        "http://legacy.net/channel.xml": load_fixture("channel.none.xml"),
    }
    documents.update(rest10_documents)
    documents.update(rest11_documents)
    return documents
