"""Dependency normalizer for the two PEAR dependency schemas.

Release dependencies are published as PHP-serialized arrays in one of two
shapes:

* package.xml 1.0 (flat list): a list of rules, each carrying ``rel``,
  ``type``, ``optional``, ``channel``, ``name`` and ``version``.
* package.xml 2.0 (nested map): keyed by category (``required``,
  ``optional``, ``group``), then by kind (``php``, ``package``,
  ``extension``, ``subpackage``, ...). A kind holds either one descriptor or
  a list of them; PHP arrays do not say which, see :func:`is_list_like`.

Both are reduced to a tuple of :class:`RawDependencyDescriptor`. Rules whose
shape is not understood are dropped, never reported to the caller.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import phpserialize

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import DependencyKind, RawDependencyDescriptor
from .versions import WILDCARD, coerce_or_passthrough

logger = logging.getLogger(__name__)

Dependencies = Tuple[RawDependencyDescriptor, ...]

# package.xml 1.0 relation -> constraint operator
FLAT_RELATIONS = {
    "has": "==",
    "eq": "==",
    "ge": ">=",
    "gt": ">",
    "le": "<=",
    "lt": "<",
    "not": "==",
}
# package.xml 2.0 range field -> constraint operator, in join order
RANGE_FIELDS = (
    ("has", "=="),
    ("min", ">="),
    ("max", "<="),
    ("exclude", "<>"),
)


def decode_dependency_blob(blob: Union[bytes, str, None]) -> Any:
    """Unserialize a PHP dependency blob.

    Empty input and blobs that do not unserialize both yield False, the value
    PHP channels use to say "no dependency data".
    """
    if blob is None:
        return False
    raw = blob.encode("utf-8") if isinstance(blob, str) else blob
    if not raw.strip():
        return False
    try:
        return phpserialize.loads(raw.strip(), decode_strings=True)
    except (ValueError, TypeError) as exc:
        # TypeError: phpserialize rejects arrays used as array keys
        logger.warning("Discarding unparsable dependency data: %s", exc)
        return False


def is_list_like(value: Any) -> bool:
    """Tell a list of descriptors from a single descriptor.

    PHP arrays arrive as dicts. A dict holding key ``0`` or ``1`` is treated as
    a list, so both zero-based and the one-based lists written by package.xml
    1.0 tooling qualify. A one-entry dict keyed ``0`` therefore reads as a list
    of one; the wire format cannot express the difference.
    """
    if isinstance(value, (list, tuple)):
        return True
    if not isinstance(value, dict):
        return False
    return 0 in value or 1 in value


def as_list(value: Any) -> List[Any]:
    """Return the items of a list-like value, or ``[value]`` for a single mapping."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if is_list_like(value):
        return [value[key] for key in sorted(value, key=_key_order)]
    if isinstance(value, dict):
        return [value]
    return []


def _key_order(key: Any) -> Tuple[bool, Any]:
    # integer keys first, numerically; stray string keys after them
    return (isinstance(key, str), key if isinstance(key, int) else str(key))


def normalize_dependencies(payload: Any) -> Dependencies:
    """Normalize an unserialized dependency payload of either schema."""
    if payload is None or payload is False or payload == "":
        return ()
    if is_list_like(payload):
        return tuple(_normalize_flat(as_list(payload)))
    if isinstance(payload, dict):
        return tuple(_normalize_nested(payload))
    _log_skipped("payload", repr(type(payload).__name__))
    return ()


def _log_skipped(action: str, reason: str) -> None:
    if is_debug_enabled(logger):
        logger.debug("Skipping dependency entry", extra=extra_context(
            event="anomaly", component="dependencies", action=action,
            outcome="skipped", reason=reason
        ))


def _normalize_flat(items: List[Any]) -> List[RawDependencyDescriptor]:
    result = []
    for item in items:
        if not isinstance(item, dict):
            _log_skipped("flat", "not a mapping")
            continue
        relation = item.get("rel")
        if not relation or relation not in FLAT_RELATIONS:
            _log_skipped("flat", f"unknown relation {relation!r}")
            continue

        optional = str(item.get("optional") or "").lower() == "yes"
        kind = DependencyKind.OPTIONAL if optional else DependencyKind.REQUIRED
        if relation == "not":
            kind = DependencyKind.CONFLICTS

        raw_version = item.get("version")
        version = coerce_or_passthrough(str(raw_version)) if raw_version else WILDCARD
        if relation in ("has", "not") and version == WILDCARD:
            constraint = WILDCARD
        else:
            constraint = FLAT_RELATIONS[relation] + coerce_or_passthrough(version)

        channel, name = _flat_target(item)
        if not channel:
            _log_skipped("flat", f"unsupported type {item.get('type')!r}")
            continue
        result.append(RawDependencyDescriptor(kind, constraint, channel, name))
    return result


def _flat_target(item: Dict[str, Any]) -> Tuple[str, str]:
    dep_type = item.get("type")
    if dep_type == "php":
        return "php", ""
    if dep_type == "pkg":
        return item.get("channel") or Constants.PEAR_DEFAULT_CHANNEL, item.get("name") or ""
    if dep_type == "ext":
        return "ext", item.get("name") or ""
    # os, sapi and anything unknown carry no installable target
    return "", ""


def _normalize_nested(payload: Dict[Any, Any]) -> List[RawDependencyDescriptor]:
    result: List[RawDependencyDescriptor] = []
    for category, section in payload.items():
        if not isinstance(section, (dict, list, tuple)):
            continue
        if category in ("required", "optional"):
            if not isinstance(section, dict):
                continue
            kind = DependencyKind(category)
            for dep_type, value in section.items():
                result.extend(_nested_kind(dep_type, value, kind))
        elif category == "group":
            for group in as_list(section):
                if not isinstance(group, dict):
                    continue
                for dep_type in ("package", "subpackage"):
                    if dep_type in group:
                        result.extend(_package_dependencies(group[dep_type], DependencyKind.REPLACES))
        else:
            _log_skipped("nested", f"unknown category {category!r}")
    return result


def _nested_kind(dep_type: Any, value: Any, kind: DependencyKind) -> List[RawDependencyDescriptor]:
    if dep_type == "php":
        if not isinstance(value, dict):
            return []
        return [RawDependencyDescriptor(kind, range_constraint(value), "php", "")]
    if dep_type == "package":
        return _package_dependencies(value, kind)
    if dep_type == "extension":
        return [
            RawDependencyDescriptor(kind, range_constraint(item), "ext", item.get("name") or "")
            for item in as_list(value)
            if isinstance(item, dict)
        ]
    if dep_type == "subpackage":
        return _package_dependencies(value, DependencyKind.REPLACES)
    if dep_type not in ("os", "pearinstaller"):
        _log_skipped("nested", f"unknown kind {dep_type!r}")
    return []


def _package_dependencies(value: Any, kind: DependencyKind) -> List[RawDependencyDescriptor]:
    result = []
    for item in as_list(value):
        if not isinstance(item, dict):
            continue
        channel = item.get("channel") or ""
        if not channel:
            # uri-only packages cannot be resolved against a channel
            _log_skipped("nested", "package without channel")
            continue
        item_kind = DependencyKind.CONFLICTS if "conflicts" in item else kind
        result.append(RawDependencyDescriptor(item_kind, range_constraint(item), channel, item.get("name") or ""))
    return result


def range_constraint(descriptor: Dict[str, Any]) -> str:
    """Build a constraint string from the has/min/max/exclude fields.

    ``min`` equal to ``exclude`` collapses into a strict lower bound, ``max``
    equal to ``exclude`` into a strict upper bound.
    """
    present = [(field, operator) for field, operator in RANGE_FIELDS if field in descriptor]
    if not present:
        return WILDCARD
    minimum: Optional[Any] = descriptor.get("min")
    maximum: Optional[Any] = descriptor.get("max")
    exclude: Optional[Any] = descriptor.get("exclude")
    if minimum is not None and exclude is not None and minimum == exclude:
        return ">" + coerce_or_passthrough(str(minimum))
    if maximum is not None and exclude is not None and maximum == exclude:
        return "<" + coerce_or_passthrough(str(maximum))

    terms = []
    for field, operator in present:
        value = descriptor[field]
        if field == "exclude" and is_list_like(value):
            terms.extend(operator + coerce_or_passthrough(str(part)) for part in as_list(value))
        else:
            terms.append(operator + coerce_or_passthrough(str(value)))
    return ",".join(terms)
