"""Redaction policies that rewrite secret fields before diffing.

Each policy receives the caller's ``(original, modified)`` pair and returns
deep copies in which every sensitive value has been swapped for one of the
marker tokens below. Token equality between the two copies tracks equality of
the real values, so the merge patch still reports *whether* a secret changed
without revealing any byte of it.

Policies are looked up per resource type through a small registry so
call sites holding arbitrary resources can share one entry point.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from .resources import Route, Secret

logger = logging.getLogger(__name__)

OLD = "OLD"
NEW = "NEW"
MODIFIED = "MODIFIED"

TLS_KEY_MASKED = "TLS_KEY_MASKED"
TLS_KEY_MODIFIED = "TLS_KEY_MODIFIED"

SECRET_TOKENS = (OLD, NEW, MODIFIED)
TLS_KEY_TOKENS = (TLS_KEY_MASKED, TLS_KEY_MODIFIED)

RedactionPolicy = Callable[[Any, Any], Tuple[Any, Any]]


def identity_policy(original: Any, modified: Any) -> Tuple[Any, Any]:
    """Return the pair untouched for kinds that hold no secrets."""

    return original, modified


def _mask_original(values: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if values is None:
        return None
    return {key: OLD for key in values}


def _classify_modified(
    before: Optional[Mapping[str, Any]],
    after: Optional[Mapping[str, Any]],
    empty: Any,
) -> Optional[Dict[str, str]]:
    if after is None:
        return None
    before = before or {}
    classified: Dict[str, str] = {}
    for key, value in after.items():
        if key not in before:
            classified[key] = NEW
        elif (before[key] or empty) != (value or empty):
            classified[key] = MODIFIED
        else:
            classified[key] = OLD
    return classified


def redact_secret(original: Any, modified: Any) -> Tuple[Any, Any]:
    """Mask the keyed values of two secret-like objects.

    Original values all become ``OLD``. Modified values become ``NEW`` when
    the key is new, ``MODIFIED`` when the bytes differ and ``OLD`` otherwise.
    Keys dropped from the modified object stay dropped so the patch reports a
    removal. ``string_data`` gets the same treatment as ``data``.
    """

    safe_original = copy.deepcopy(original)
    safe_modified = copy.deepcopy(modified)

    safe_original.data = _mask_original(original.data)
    safe_modified.data = _classify_modified(original.data, modified.data, b"")

    if hasattr(original, "string_data") and hasattr(modified, "string_data"):
        before = original.string_data
        after = modified.string_data
        safe_original.string_data = _mask_original(before)
        safe_modified.string_data = _classify_modified(before, after, "")

    return safe_original, safe_modified


def redact_route(original: Any, modified: Any) -> Tuple[Any, Any]:
    """Mask the TLS private key of two route-like objects.

    A side without a TLS block is left as is. The original key is always
    ``TLS_KEY_MASKED``; the modified key is ``TLS_KEY_MODIFIED`` when it
    differs from the original key (a missing original TLS block counts as no
    key) and ``TLS_KEY_MASKED`` otherwise. A new TLS block without a key
    keeps no key.
    """

    safe_original = copy.deepcopy(original)
    safe_modified = copy.deepcopy(modified)

    original_tls = original.spec.tls
    if safe_modified.spec.tls is not None:
        before = original_tls.key if original_tls is not None else None
        after = modified.spec.tls.key
        if original_tls is None and not after:
            safe_modified.spec.tls.key = None
        elif (before or "") != (after or ""):
            safe_modified.spec.tls.key = TLS_KEY_MODIFIED
        else:
            safe_modified.spec.tls.key = TLS_KEY_MASKED
    if safe_original.spec.tls is not None:
        safe_original.spec.tls.key = TLS_KEY_MASKED

    return safe_original, safe_modified


_POLICIES: List[Tuple[Type[Any], RedactionPolicy]] = []


def register_policy(kind: Type[Any], policy: RedactionPolicy) -> None:
    """Register ``policy`` for instances of ``kind``.

    Registering the same policy twice is a no-op. Registering a different
    policy for a type that already has one raises :class:`ValueError`.
    """

    for existing_kind, existing in _POLICIES:
        if existing_kind is not kind:
            continue
        if existing is policy:
            return
        raise ValueError(
            f"A redaction policy for {kind.__name__!r} is already registered: {existing!r}"
        )
    _POLICIES.append((kind, policy))


def get_policy(obj: Any) -> RedactionPolicy:
    """Return the policy registered for ``obj``'s type or one of its bases."""

    registered = dict(_POLICIES)
    for kind in type(obj).__mro__:
        policy = registered.get(kind)
        if policy is not None:
            return policy
    logger.debug("No redaction policy for %s; diffing without redaction.", type(obj).__name__)
    return identity_policy


def registry_summary() -> Tuple[Mapping[str, str], ...]:
    """Return the registered kinds and policies in registration order."""

    return tuple(
        {
            "kind": kind.__name__,
            "policy": getattr(policy, "__qualname__", repr(policy)),
            "module": getattr(policy, "__module__", ""),
        }
        for kind, policy in _POLICIES
    )


register_policy(Secret, redact_secret)
register_policy(Route, redact_route)
