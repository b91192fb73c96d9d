"""Canonical JSON encoding for structured resources.

The encoder walks dataclass models, mappings and sequences and produces
deterministic UTF-8 JSON so two semantically equal objects always encode to
the same bytes. Field names follow the Kubernetes convention (camelCase, with
``metadata["json"]`` overrides) and ``None`` fields are omitted.

Example
-------
>>> from redactdiff.resources import ObjectMeta, Secret
>>> encode_object(Secret(metadata=ObjectMeta(name="db"), data={"pw": b"x"}))
b'{"apiVersion":"v1","data":{"pw":"eA=="},"kind":"Secret","metadata":{"name":"db"}}'
"""

from __future__ import annotations

import base64
import dataclasses
import json
import math
from enum import Enum
from typing import Any, Mapping


class EncodingError(ValueError):
    """Raised when an object cannot be rendered as canonical JSON."""


def json_field_name(field: dataclasses.Field) -> str:
    """Return the JSON name for a dataclass ``field``."""

    override = field.metadata.get("json")
    if override:
        return override
    head, *rest = field.name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _to_json_value(value: Any, active: set[int]) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodingError(f"non-finite float {value!r} is not valid JSON")
        return value
    if isinstance(value, Enum):
        return _to_json_value(value.value, active)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")

    marker = id(value)
    if marker in active:
        raise EncodingError(f"cyclic reference detected at {type(value).__name__}")
    active.add(marker)
    try:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            rendered: dict[str, Any] = {}
            for field in dataclasses.fields(value):
                item = getattr(value, field.name)
                if item is None:
                    continue
                rendered[json_field_name(field)] = _to_json_value(item, active)
            return rendered
        if isinstance(value, Mapping):
            rendered = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise EncodingError(
                        f"mapping keys must be strings, got {type(key).__name__}"
                    )
                rendered[key] = _to_json_value(item, active)
            return rendered
        if isinstance(value, (list, tuple)):
            return [_to_json_value(item, active) for item in value]
    finally:
        active.discard(marker)

    raise EncodingError(f"unsupported type {type(value).__name__}")


def to_json_value(obj: Any) -> Any:
    """Return a JSON-compatible tree for ``obj``."""

    return _to_json_value(obj, set())


def encode_object(obj: Any) -> bytes:
    """Return canonical JSON bytes for ``obj``.

    Raises :class:`EncodingError` for unsupported values, non-string keys,
    non-finite floats and cyclic structures.
    """

    tree = to_json_value(obj)
    return json.dumps(
        tree, ensure_ascii=False, sort_keys=True, separators=(",", ":"), allow_nan=False
    ).encode("utf-8")
