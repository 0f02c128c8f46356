"""Read channel packages through the PEAR REST 1.0 interface.

REST 1.0 spreads a package over several documents:
 {baseUrl}/p/packages.xml
 {baseUrl}/p/{package}/info.xml
 {baseUrl}/r/{package}/allreleases.xml
 {baseUrl}/r/{package}/deps.{version}.txt
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .dependencies import decode_dependency_blob, normalize_dependencies
from .fetcher import DocumentFetcher
from .models import NO_DATA_FETCHED, RawPackageDescriptor, ReleaseInfo

logger = logging.getLogger(__name__)


def _child_text(node: ET.Element, tag: str, namespace: str) -> str:
    child = node.find(f"{{{namespace}}}{tag}")
    if child is None or child.text is None:
        return ""
    return child.text.strip()


class ChannelRest10Reader:
    """Flat, index-driven reader: one document per package, release and dependency set."""

    def __init__(self, fetcher: DocumentFetcher):
        self._fetcher = fetcher

    def read(self, base_url: str) -> List[RawPackageDescriptor]:
        """Read every package listed in the channel's package index, in index order."""
        index = self._fetcher.fetch_xml(base_url, "/p/packages.xml")
        result = []
        for node in index.findall(f"{{{Constants.NS_ALL_PACKAGES}}}p"):
            package_name = (node.text or "").strip()
            if not package_name:
                continue
            result.append(self._read_package(base_url, package_name))
        logger.info("Read %d packages from %s", len(result), base_url)
        return result

    def _read_package(self, base_url: str, package_name: str) -> RawPackageDescriptor:
        info = self._fetcher.fetch_xml(base_url, f"/p/{package_name.lower()}/info.xml")
        ns = Constants.NS_PACKAGE_INFO
        name = _child_text(info, "n", ns) or package_name
        return RawPackageDescriptor(
            channel=_child_text(info, "c", ns),
            name=name,
            license=_child_text(info, "l", ns),
            short_description=_child_text(info, "s", ns),
            description=_child_text(info, "d", ns),
            versions=self._read_releases(base_url, name),
        )

    def _read_releases(self, base_url: str, package_name: str) -> Dict[str, ReleaseInfo]:
        releases = self._fetcher.fetch_xml_if_found(
            base_url, f"/r/{package_name.lower()}/allreleases.xml"
        )
        if releases is None:
            # registered package without any release yet
            return {}

        ns = Constants.NS_ALL_RELEASES
        versions: Dict[str, ReleaseInfo] = {}
        for node in releases.findall(f"{{{ns}}}r"):
            version = _child_text(node, "v", ns)
            if not version:
                continue
            versions[version] = ReleaseInfo(
                stability=_child_text(node, "s", ns),
                dependencies=self._read_release_dependencies(base_url, package_name, version),
            )
        return versions

    def _read_release_dependencies(self, base_url: str, package_name: str, version: str):
        blob = self._fetcher.fetch_text_if_found(
            base_url, f"/r/{package_name.lower()}/deps.{version}.txt"
        )
        if blob is None:
            if is_debug_enabled(logger):
                logger.debug("No dependency data for release", extra=extra_context(
                    event="decision", component="rest10", action="read_dependencies",
                    outcome="no_data", package=package_name, version=version
                ))
            return NO_DATA_FETCHED
        return normalize_dependencies(decode_dependency_blob(blob))
