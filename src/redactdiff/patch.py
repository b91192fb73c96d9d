"""JSON Merge Patch (RFC 7396) generation and application.

:func:`create_merge_patch` compares two canonical JSON documents and returns
the minimal merge patch that turns the first into the second. Unchanged
fields are omitted, removed fields map to ``null`` and arrays are replaced
wholesale, so identical documents always produce ``b"{}"``.
"""

from __future__ import annotations

import json
from typing import Any, Mapping


class PatchError(ValueError):
    """Raised when a merge patch cannot be computed."""


def _decode(document: bytes | str, label: str) -> Any:
    try:
        return json.loads(document)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PatchError(f"invalid JSON document ({label}): {exc}") from exc


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _same(left: Any, right: Any) -> bool:
    # ``True == 1`` in Python, JSON keeps them apart.
    if _json_type(left) != _json_type(right):
        return False
    return json.dumps(left, sort_keys=True) == json.dumps(right, sort_keys=True)


def _object_diff(original: Mapping[str, Any], modified: Mapping[str, Any]) -> dict[str, Any]:
    patch: dict[str, Any] = {}
    for key, before in original.items():
        if key not in modified:
            patch[key] = None
            continue
        after = modified[key]
        if isinstance(before, dict) and isinstance(after, dict):
            nested = _object_diff(before, after)
            if nested:
                patch[key] = nested
        elif not _same(before, after):
            patch[key] = after
    for key, after in modified.items():
        if key not in original:
            patch[key] = after
    return patch


def create_merge_patch(original: bytes | str, modified: bytes | str) -> bytes:
    """Return the merge patch turning ``original`` into ``modified``.

    Both documents must decode to JSON objects; anything else raises
    :class:`PatchError`.
    """

    before = _decode(original, "original")
    after = _decode(modified, "modified")

    before_type = _json_type(before)
    after_type = _json_type(after)
    if before_type != after_type:
        raise PatchError(f"mismatched JSON documents: {before_type} vs {after_type}")
    if before_type != "object":
        raise PatchError(f"merge patch documents must be JSON objects, got {before_type}")

    patch = _object_diff(before, after)
    return json.dumps(
        patch, ensure_ascii=False, sort_keys=True, separators=(",", ":")
    ).encode("utf-8")


def apply_merge_patch(document: Any, patch: Any) -> Any:
    """Return ``document`` with the decoded merge ``patch`` applied.

    ``document`` is never mutated. A non-object patch replaces the target.
    """

    if not isinstance(patch, dict):
        return patch
    result = dict(document) if isinstance(document, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = apply_merge_patch(result.get(key), value)
    return result
