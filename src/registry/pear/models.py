"""Data models for PEAR channel reads and the normalized package graph."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union


class DependencyKind(Enum):
    """Classification produced by the dependency normalizer."""
    REQUIRED = "required"
    OPTIONAL = "optional"
    CONFLICTS = "conflicts"
    REPLACES = "replaces"


class LinkRelation(Enum):
    """Relation carried by a DependencyLink."""
    REQUIRES = "requires"
    CONFLICTS = "conflicts"
    REPLACES = "replaces"


@dataclass(frozen=True)
class Capability:
    """One REST dialect advertised by a channel."""
    dialect: str
    base_url: str


ChannelCapabilities = Tuple[Capability, ...]


@dataclass(frozen=True)
class ChannelInfo:
    """Parsed channel.xml."""
    name: str
    summary: str
    alias: str
    capabilities: ChannelCapabilities


@dataclass(frozen=True)
class ProtocolSelection:
    """Dialect chosen for one channel read."""
    dialect: str
    base_url: str


@dataclass(frozen=True)
class RawDependencyDescriptor:
    """One dependency as emitted by the normalizer."""
    kind: DependencyKind
    constraint: str
    channel: str
    name: str


class NoDataFetched:
    """Marker for a release whose dependency data was never retrieved.

    Distinct from an empty tuple, which means dependencies were fetched and
    there are none.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DATA_FETCHED"

    def __bool__(self) -> bool:
        return False


NO_DATA_FETCHED = NoDataFetched()

DependencyData = Union[NoDataFetched, Tuple[RawDependencyDescriptor, ...]]


@dataclass
class ReleaseInfo:
    """Stability and dependency data of one release."""
    stability: str
    dependencies: DependencyData = NO_DATA_FETCHED


@dataclass
class RawPackageDescriptor:
    """Package record extracted from a dialect's documents, not yet normalized."""
    channel: str
    name: str
    license: str = ""
    short_description: str = ""
    description: str = ""
    versions: Dict[str, ReleaseInfo] = field(default_factory=dict)


@dataclass(frozen=True)
class DependencyLink:
    """Edge of the package graph.

    ``constraint`` is the normalized expression, ``pretty_constraint`` the one
    received from the channel.
    """
    source: str
    target: str
    constraint: str
    relation: LinkRelation
    pretty_constraint: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "constraint": self.constraint,
            "relation": self.relation.value,
            "prettyConstraint": self.pretty_constraint,
        }


@dataclass(frozen=True)
class NormalizedPackageVersion:  # pylint: disable=too-many-instance-attributes
    """One (package, version) pair ready for the downstream resolver."""
    name: str
    version: str
    pretty_version: str
    dist_url: str
    description: str = ""
    license: str = ""
    short_description: str = ""
    stability: str = ""
    requires: Tuple[DependencyLink, ...] = ()
    conflicts: Tuple[DependencyLink, ...] = ()
    suggests: Tuple[str, ...] = ()
    replaces: Tuple[DependencyLink, ...] = ()
    package_type: str = "library"
    dist_type: str = "pear"
    classmap: Tuple[str, ...] = ("",)
    include_paths: Tuple[str, ...] = ("/",)

    @property
    def autoload(self) -> Dict[str, Any]:
        return {"classmap": list(self.classmap)}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready mapping with a stable key order."""
        return {
            "name": self.name,
            "version": self.version,
            "prettyVersion": self.pretty_version,
            "type": self.package_type,
            "description": self.description,
            "shortDescription": self.short_description,
            "license": self.license,
            "stability": self.stability,
            "dist": {"type": self.dist_type, "url": self.dist_url},
            "autoload": self.autoload,
            "includePaths": list(self.include_paths),
            "requires": [link.to_dict() for link in self.requires],
            "conflicts": [link.to_dict() for link in self.conflicts],
            "suggests": list(self.suggests),
            "replaces": [link.to_dict() for link in self.replaces],
        }
