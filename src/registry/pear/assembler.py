"""Turn raw package descriptors into normalized package versions."""
from __future__ import annotations

import logging
from typing import Iterable, List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import (
    DependencyKind,
    DependencyLink,
    LinkRelation,
    NoDataFetched,
    NormalizedPackageVersion,
    RawPackageDescriptor,
    ReleaseInfo,
)
from .versions import canonical_package_name, coerce_version, normalize_constraint

logger = logging.getLogger(__name__)

_LINK_RELATIONS = {
    DependencyKind.REQUIRED: LinkRelation.REQUIRES,
    DependencyKind.CONFLICTS: LinkRelation.CONFLICTS,
    DependencyKind.REPLACES: LinkRelation.REPLACES,
}


def build_dist_url(scheme: str, channel_name: str, package_name: str, raw_version: str) -> str:
    """Download location of a release; uses the version label as published."""
    return f"{scheme}://{channel_name}/get/{package_name}-{raw_version}.tgz"


def assemble_packages(
    channel_name: str,
    channel_alias: str,
    descriptors: Iterable[RawPackageDescriptor],
    scheme: str = Constants.PEAR_DIST_SCHEME,
) -> List[NormalizedPackageVersion]:
    """Build one NormalizedPackageVersion per usable (package, version) pair.

    Releases without fetched dependency data and releases whose version does
    not coerce are skipped. Packages of the channel being read also replace
    their alias-qualified name, since only that channel's alias is known.

    Args:
        channel_name: Name of the channel under negotiation.
        channel_alias: Its suggested alias.
        descriptors: Raw package descriptors from a dialect reader.
        scheme: URL scheme used for distribution URLs.

    Returns:
        list: Normalized package versions in descriptor-then-version order.
    """
    result = []
    for descriptor in descriptors:
        for raw_version, release in descriptor.versions.items():
            package = _assemble_version(channel_name, channel_alias, descriptor, raw_version, release, scheme)
            if package is not None:
                result.append(package)
    return result


def _assemble_version(
    channel_name: str,
    channel_alias: str,
    descriptor: RawPackageDescriptor,
    raw_version: str,
    release: ReleaseInfo,
    scheme: str,
):
    if isinstance(release.dependencies, NoDataFetched):
        _log_dropped(descriptor, raw_version, "no_release_data")
        return None
    version = coerce_version(raw_version)
    if version is None:
        _log_dropped(descriptor, raw_version, "unparsable_version")
        return None

    name = canonical_package_name(descriptor.channel, descriptor.name)
    requires: List[DependencyLink] = []
    conflicts: List[DependencyLink] = []
    suggests: List[str] = []
    replaces: List[DependencyLink] = []

    if descriptor.channel == channel_name:
        alias_constraint = f"=={version}"
        replaces.append(DependencyLink(
            source=name,
            target=canonical_package_name(channel_alias, descriptor.name),
            constraint=alias_constraint,
            relation=LinkRelation.REPLACES,
            pretty_constraint=f"== {version}",
        ))

    for dependency in release.dependencies:
        target = canonical_package_name(dependency.channel, dependency.name)
        if dependency.kind is DependencyKind.OPTIONAL:
            suggests.append(target)
            continue
        relation = _LINK_RELATIONS[dependency.kind]
        link = DependencyLink(
            source=name,
            target=target,
            constraint=normalize_constraint(dependency.constraint),
            relation=relation,
            pretty_constraint=dependency.constraint,
        )
        if relation is LinkRelation.REQUIRES:
            requires.append(link)
        elif relation is LinkRelation.CONFLICTS:
            conflicts.append(link)
        else:
            replaces.append(link)

    return NormalizedPackageVersion(
        name=name,
        version=version,
        pretty_version=raw_version,
        dist_url=build_dist_url(scheme, channel_name, descriptor.name, raw_version),
        description=descriptor.description,
        license=descriptor.license,
        short_description=descriptor.short_description,
        stability=release.stability,
        requires=tuple(requires),
        conflicts=tuple(conflicts),
        suggests=tuple(suggests),
        replaces=tuple(replaces),
    )


def _log_dropped(descriptor: RawPackageDescriptor, raw_version: str, reason: str) -> None:
    if is_debug_enabled(logger):
        logger.debug("Skipping package version", extra=extra_context(
            event="decision", component="assembler", action="assemble",
            outcome="skipped", reason=reason,
            package=f"{descriptor.channel}/{descriptor.name}", version=raw_version
        ))
