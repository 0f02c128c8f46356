"""Version coercion, canonical identifiers and constraint normalization."""

import re
from typing import Optional

# Leading numeric-dotted run: optional "v", 1-3 digits, up to three ".digits".
_VERSION_RE = re.compile(r"^v?(\d{1,3})(\.\d+)?(\.\d+)?(\.\d+)?", re.IGNORECASE)
_CONSTRAINT_TERM_RE = re.compile(r"^(<>|!=|>=|<=|==|=|<|>)?\s*(.*)$")
_OPERATOR_ALIASES = {None: "==", "=": "==", "<>": "!="}

WILDCARD = "*"


def coerce_version(version: Optional[str]) -> Optional[str]:
    """Coerce a loosely formatted version into four dotted numeric components.

    Returns None when ``version`` does not start with a numeric run.

    >>> coerce_version("v2.3")
    '2.3.0.0'
    """
    if not isinstance(version, str):
        return None
    match = _VERSION_RE.match(version)
    if not match:
        return None
    parts = [match.group(1)]
    parts.extend(group[1:] if group else "0" for group in match.groups()[1:])
    return ".".join(parts)


def coerce_or_passthrough(version: str) -> str:
    """Coerce ``version``; on failure hand back the original string unchanged."""
    coerced = coerce_version(version)
    return coerced if coerced is not None else version


def canonical_package_name(channel: str, name: str) -> str:
    """Build the identifier under which a channel package is exposed."""
    if channel == "php":
        return "php"
    if channel == "ext":
        return f"ext-{name}"
    return f"pear-{channel}/{name}"


def normalize_constraint(expression: str) -> str:
    """Normalize a comma-joined constraint expression term by term.

    Bare versions become ``==`` terms and ``<>`` becomes ``!=``; version parts
    are coerced, or kept as-is when they do not coerce.
    """
    terms = []
    for raw_term in expression.split(","):
        term = raw_term.strip()
        if not term or term == WILDCARD:
            terms.append(WILDCARD)
            continue
        match = _CONSTRAINT_TERM_RE.match(term)
        operator, version = match.group(1), match.group(2).strip()
        operator = _OPERATOR_ALIASES.get(operator, operator)
        terms.append(operator + coerce_or_passthrough(version))
    return ",".join(terms)
