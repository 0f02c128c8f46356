"""Read channel packages through the PEAR REST 1.1 interface (also 1.2 and 1.3).

REST 1.1 batches metadata, releases and dependencies per category:
 {baseUrl}/c/categories.xml
 {baseUrl}/c/{category}/packagesinfo.xml
"""
from __future__ import annotations

import logging
import urllib.parse
import xml.etree.ElementTree as ET
from typing import Dict, List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .dependencies import decode_dependency_blob, normalize_dependencies
from .fetcher import DocumentFetcher
from .models import NO_DATA_FETCHED, RawPackageDescriptor, ReleaseInfo

logger = logging.getLogger(__name__)

NS = {"ns": Constants.NS_CATEGORY_PACKAGES_INFO}


def _text(node: ET.Element, path: str) -> str:
    child = node.find(path, NS)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


class ChannelRest11Reader:
    """Category-batched reader: one combined document per category."""

    def __init__(self, fetcher: DocumentFetcher):
        self._fetcher = fetcher

    def read(self, base_url: str) -> List[RawPackageDescriptor]:
        """Read all categories and flatten their packages in category-then-document order.

        A package filed under several categories appears once per category.
        """
        index = self._fetcher.fetch_xml(base_url, "/c/categories.xml")
        result: List[RawPackageDescriptor] = []
        for node in index.findall(f"{{{Constants.NS_ALL_CATEGORIES}}}c"):
            category = (node.text or "").strip()
            if not category:
                continue
            result.extend(self._read_category(base_url, category))
        logger.info("Read %d packages from %s", len(result), base_url)
        return result

    def _read_category(self, base_url: str, category: str) -> List[RawPackageDescriptor]:
        path = f"/c/{urllib.parse.quote_plus(category)}/packagesinfo.xml"
        document = self._fetcher.fetch_xml(base_url, path)
        packages = [parse_package_info(node) for node in document.findall("ns:pi", NS)]
        if is_debug_enabled(logger):
            logger.debug("Read category", extra=extra_context(
                event="function_exit", component="rest11", action="read_category",
                target=category, count=len(packages)
            ))
        return packages


def parse_package_info(node: ET.Element) -> RawPackageDescriptor:
    """Build a descriptor from one ``pi`` element of packagesinfo.xml.

    Releases listed under ``a`` start without dependency data; each ``deps``
    entry then fills in its version, adding the version when ``a`` lacks it.
    """
    versions: Dict[str, ReleaseInfo] = {}
    for release in node.findall("ns:a/ns:r", NS):
        version = _text(release, "ns:v")
        if version:
            versions[version] = ReleaseInfo(stability=_text(release, "ns:s"), dependencies=NO_DATA_FETCHED)

    for deps in node.findall("ns:deps", NS):
        version = _text(deps, "ns:v")
        if not version:
            continue
        dependencies = normalize_dependencies(decode_dependency_blob(_text(deps, "ns:d")))
        if version in versions:
            versions[version].dependencies = dependencies
        else:
            versions[version] = ReleaseInfo(stability="", dependencies=dependencies)

    return RawPackageDescriptor(
        channel=_text(node, "ns:p/ns:c"),
        name=_text(node, "ns:p/ns:n"),
        license=_text(node, "ns:p/ns:l"),
        short_description=_text(node, "ns:p/ns:s"),
        description=_text(node, "ns:p/ns:d"),
        versions=versions,
    )
