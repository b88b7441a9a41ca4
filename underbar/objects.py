"""Helpers for merging mappings. Neither function modifies its arguments."""

from typing import Any, Dict, Mapping, Optional

from .core import each


def extend(target: Optional[Mapping], *sources: Optional[Mapping]) -> Dict[str, Any]:
    """New dict with the keys of target and every source, applied left to right.

    Later sources overwrite earlier keys. None sources are skipped.

    Example:
        >>> extend({"key1": "something"}, {"key2": "new"}, {"key1": "replaced"})
        {'key1': 'replaced', 'key2': 'new'}
    """
    merged: Dict[str, Any] = {}

    def write(value, key):
        merged[key] = value

    def apply(source):
        if source is not None:
            each(source, write)

    each((target,) + sources, apply)
    return merged


def defaults(target: Optional[Mapping], *sources: Optional[Mapping]) -> Dict[str, Any]:
    """Like extend(), but a key keeps the first value it was given.

    Example:
        >>> defaults({"flavor": "chocolate"}, {"flavor": "vanilla", "sprinkles": "lots"})
        {'flavor': 'chocolate', 'sprinkles': 'lots'}
    """
    merged: Dict[str, Any] = {}

    def write(value, key):
        if key not in merged:
            merged[key] = value

    def apply(source):
        if source is not None:
            each(source, write)

    each((target,) + sources, apply)
    return merged
