"""Canonical forms of input keys, error fields and error codes."""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Hashable


def canonical_key(key: Hashable) -> Hashable:
    """Return the canonical form of an input key, error field or error code.

    ``bytes`` decode to ``str`` and ``Enum`` members collapse to their value,
    so ``b"name"``, ``Field.NAME`` and ``"name"`` address the same entry.
    Bytes that are not valid UTF-8 stay as they are.
    """
    if isinstance(key, Enum):
        return canonical_key(key.value)
    if isinstance(key, bytes):
        try:
            return key.decode("utf-8")
        except UnicodeDecodeError:
            return key
    return key


def _is_native(key: Hashable) -> bool:
    return isinstance(key, str) and not isinstance(key, Enum)


def canonicalize(mapping: Mapping) -> Dict[Hashable, Any]:
    """Copy ``mapping`` with canonical keys.

    When several keys collapse onto one, a key that was already a plain
    ``str`` wins; among the rest the later entry wins.
    """
    result: Dict[Hashable, Any] = {}
    native = set()
    for key, value in mapping.items():
        ckey = canonical_key(key)
        if ckey in native and not _is_native(key):
            continue
        result[ckey] = value
        if _is_native(key):
            native.add(ckey)
    return result
