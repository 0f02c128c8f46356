"""PEAR channel registry package.

This package reads PEAR channels into normalized package versions:
- negotiator.py: channel.xml parsing and REST dialect selection
- fetcher.py: document retrieval with 404 tolerance for optional documents
- dependencies.py: package.xml 1.0 / 2.0 dependency normalization
- rest10.py / rest11.py: the two REST dialect readers
- assembler.py: normalized package versions and dependency links
- channel.py: the channel read orchestration
- repository.py: URL handling and lazy initialization
"""

from .errors import (  # noqa: F401
    DocumentParseError,
    InvalidRepositoryUrlError,
    PearChannelError,
    TransportError,
    UnsupportedProtocolError,
)
from .models import (  # noqa: F401
    NO_DATA_FETCHED,
    DependencyKind,
    DependencyLink,
    LinkRelation,
    NormalizedPackageVersion,
    ProtocolSelection,
    RawDependencyDescriptor,
    RawPackageDescriptor,
    ReleaseInfo,
)
from .versions import canonical_package_name, coerce_version  # noqa: F401
from .dependencies import normalize_dependencies  # noqa: F401
from .fetcher import DocumentFetcher  # noqa: F401
from .assembler import assemble_packages  # noqa: F401
from .channel import ChannelReader  # noqa: F401
from .repository import PearRepository  # noqa: F401

__all__ = [
    "ChannelReader",
    "DocumentFetcher",
    "PearRepository",
    "assemble_packages",
    "canonical_package_name",
    "coerce_version",
    "normalize_dependencies",
    "DependencyKind",
    "DependencyLink",
    "LinkRelation",
    "NormalizedPackageVersion",
    "ProtocolSelection",
    "RawDependencyDescriptor",
    "RawPackageDescriptor",
    "ReleaseInfo",
    "NO_DATA_FETCHED",
    "DocumentParseError",
    "InvalidRepositoryUrlError",
    "PearChannelError",
    "TransportError",
    "UnsupportedProtocolError",
]
