"""Manifest field paths and safe accessors.

All manifest reads go through safe_get() so a learner's incomplete
manifest degrades to MISSING instead of raising mid-evaluation.
"""

import re
from typing import Any, Iterable, Tuple, Union

PathSegment = Union[str, int]


class _Missing:
    """Marker for a path that does not resolve. Distinct from YAML null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

# "name" or "name[0][1]"
_SEGMENT_RE = re.compile(r"^(?P<key>[^.\[\]]+)?(?P<indexes>(\[\d+\])*)$")
_INDEX_RE = re.compile(r"\[(\d+)\]")


def parse_path(path: str) -> Tuple[PathSegment, ...]:
    """Split a path like "spec.template.spec.containers[0].image" into segments.

    Raises:
        ValueError: If the path is syntactically malformed
    """
    if not path:
        raise ValueError("Field path must not be empty")

    segments = []
    for part in path.split("."):
        match = _SEGMENT_RE.match(part)
        if not part or match is None:
            raise ValueError(f"Malformed field path: {path!r}")
        key = match.group("key")
        if key is not None:
            segments.append(key)
        elif not match.group("indexes"):
            raise ValueError(f"Malformed field path: {path!r}")
        segments.extend(int(i) for i in _INDEX_RE.findall(match.group("indexes")))
    return tuple(segments)


def safe_get(tree: Any, path: Union[str, Iterable[PathSegment]], default: Any = MISSING) -> Any:
    """Safely get a value from a parsed manifest by path.

    Args:
        tree: Parsed YAML document (nested dicts and lists)
        path: Dotted path with optional indexes, or pre-split segments
        default: Returned when any segment does not resolve

    Returns:
        Value at the path (which may be None for an explicit YAML null),
        default otherwise
    """
    segments = parse_path(path) if isinstance(path, str) else tuple(path)
    current = tree

    for segment in segments:
        if isinstance(segment, int):
            if not isinstance(current, list) or not -len(current) <= segment < len(current):
                return default
            current = current[segment]
        else:
            if not isinstance(current, dict) or segment not in current:
                return default
            current = current[segment]

    return current


def is_missing(value: Any) -> bool:
    return value is MISSING


def is_present(value: Any) -> bool:
    """True if the value resolved and is not null or empty."""
    if value is MISSING or value is None:
        return False
    if isinstance(value, (str, list, dict)) and not value:
        return False
    return True


def find_by_name(items: Any, name: str) -> Any:
    """Return the first mapping in a sequence whose "name" equals name, or MISSING."""
    if not isinstance(items, list):
        return MISSING
    for item in items:
        if isinstance(item, dict) and item.get("name") == name:
            return item
    return MISSING
