"""Repository wrapper exposing a PEAR channel's packages."""
from __future__ import annotations

import logging
import re
import urllib.parse
from typing import List, Optional

from .channel import ChannelReader
from .errors import InvalidRepositoryUrlError
from .models import NormalizedPackageVersion

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_repository_url(url: str) -> str:
    """Default to http://, require a host, and drop trailing slashes."""
    candidate = (url or "").strip()
    if not _SCHEME_RE.match(candidate):
        candidate = "http://" + candidate
    parts = urllib.parse.urlsplit(candidate)
    if not parts.hostname or " " in candidate:
        raise InvalidRepositoryUrlError(f"Invalid url given for PEAR repository: {candidate}")
    return candidate.rstrip("/")


class PearRepository:
    """Packages of one PEAR channel, read on first access."""

    def __init__(self, url: str, reader: Optional[ChannelReader] = None):
        self.url = normalize_repository_url(url)
        self._reader = reader or ChannelReader()
        self._packages: Optional[List[NormalizedPackageVersion]] = None

    @property
    def packages(self) -> List[NormalizedPackageVersion]:
        if self._packages is None:
            logger.info("Initializing PEAR repository %s", self.url)
            self._packages = self._reader.read(self.url)
        return list(self._packages)
