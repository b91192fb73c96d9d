"""String-returning diff helpers for audit and operational logs.

Every entry point takes ``(original, modified)`` and returns text: either the
JSON merge patch between the two objects or a diagnostic sentence naming the
stage that failed. Nothing here raises, because the callers are logging paths
that must carry on whatever happens to the diff.

Example
-------
>>> from redactdiff.resources import Secret
>>> diff_secret_to_string(Secret(data={"a": b"1"}), Secret(data={"a": b"2"}))
'{"data":{"a":"MODIFIED"}}'
>>> diff_to_string(None, Secret())
'original object is nil'
"""

from __future__ import annotations

import json
import logging
from hashlib import sha256
from typing import Any, Sequence

from .encoding import EncodingError, encode_object
from .patch import PatchError, create_merge_patch
from .policies import (
    SECRET_TOKENS,
    TLS_KEY_TOKENS,
    RedactionPolicy,
    get_policy,
    identity_policy,
    redact_route,
    redact_secret,
)
from .redaction import RedactionFilter, collect_secret_literals, resolve_redactor

logger = logging.getLogger(__name__)

ORIGINAL_NIL_MESSAGE = "original object is nil"
MODIFIED_NIL_MESSAGE = "modified object is nil"

_TOKENS = frozenset(SECRET_TOKENS + TLS_KEY_TOKENS)


def _digest(value: str) -> str:
    return f"sha256:{sha256(value.encode('utf-8')).hexdigest()}"


def _truncate_patch(text: str, max_bytes: int | None) -> str:
    if max_bytes is None:
        return text
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    truncated = len(encoded) - max_bytes
    logger.warning(
        "Patch of %s bytes exceeds %s bytes; truncating for safety.", len(encoded), max_bytes
    )
    safe_text = encoded[:max_bytes].decode("utf-8", "ignore")
    return f"{safe_text}\n… [patch truncated {truncated} bytes for safety; digest={_digest(text)}]"


def _secret_scrubber(original: Any, modified: Any) -> RedactionFilter | None:
    literals = collect_secret_literals((original, modified))
    if not literals:
        return None
    return RedactionFilter(tokens=literals, preserved=_TOKENS)


def _scrub_patch(text: str, redactor: RedactionFilter) -> str:
    scrubbed, hits = redactor.scrub(json.loads(text))
    if not hits:
        return text
    logger.debug("Scrubbed %s secret literal occurrence(s) from patch values.", hits)
    return json.dumps(scrubbed, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _encode(obj: Any, side: str) -> tuple[bytes | None, str | None]:
    try:
        return encode_object(obj), None
    except (EncodingError, TypeError, ValueError, RecursionError) as exc:
        logger.debug("Encoding %s object failed: %s", side, exc)
        return None, f"unable to decode {side} to JSON: {exc}"


def _render_patch(
    original: Any,
    modified: Any,
    policy: RedactionPolicy,
    *,
    redactor: RedactionFilter | None = None,
    scrub_secrets: bool = False,
    max_bytes: int | None = None,
) -> str:
    if original is None:
        return ORIGINAL_NIL_MESSAGE
    if modified is None:
        return MODIFIED_NIL_MESSAGE

    try:
        safe_original, safe_modified = policy(original, modified)
        if scrub_secrets:
            redactor = _secret_scrubber(original, modified)
    except Exception as exc:
        # Policies are pluggable; any failure becomes a diagnostic.
        logger.debug("Redaction policy %r failed: %s", policy, exc)
        return f"unable to redact objects: {exc}"

    original_json, failure = _encode(safe_original, "original")
    if failure:
        return failure
    modified_json, failure = _encode(safe_modified, "modified")
    if failure:
        return failure

    try:
        patch = create_merge_patch(original_json, modified_json)
    except PatchError as exc:
        logger.debug("Merge patch creation failed: %s", exc)
        return f"unable to create JSON patch: {exc}"

    text = patch.decode("utf-8")
    if redactor:
        text = _scrub_patch(text, redactor)
    return _truncate_patch(text, max_bytes)


def diff_to_string(
    original: Any,
    modified: Any,
    *,
    redactor: RedactionFilter | None = None,
    mask_tokens: Sequence[str] | None = None,
    placeholder: str = "[REDACTED]",
    max_bytes: int | None = None,
) -> str:
    """Return the merge patch between two objects that hold no secrets.

    ``redactor`` or ``mask_tokens`` scrub literal strings from the patch's
    string values; passing both returns a diagnostic instead of a patch.
    Output is only clamped when ``max_bytes`` is given, in which case an
    oversized patch is cut and ends with a digest notice.
    """

    try:
        active = resolve_redactor(redactor=redactor, mask_tokens=mask_tokens, placeholder=placeholder)
    except ValueError as exc:
        return f"unable to configure redaction: {exc}"
    return _render_patch(original, modified, identity_policy, redactor=active, max_bytes=max_bytes)


def diff_secret_to_string(
    original: Any,
    modified: Any,
    *,
    max_bytes: int | None = None,
) -> str:
    """Return the merge patch between two secrets with every value masked.

    Keys show up as ``NEW``, ``MODIFIED`` or removed (``null``); unchanged
    keys are absent from the patch. Any copy of a secret value left in
    another string field is masked as ``[REDACTED]``.
    """

    return _render_patch(
        original, modified, redact_secret, scrub_secrets=True, max_bytes=max_bytes
    )


def diff_route_to_string(
    original: Any,
    modified: Any,
    *,
    max_bytes: int | None = None,
) -> str:
    """Return the merge patch between two routes with the TLS key masked."""

    return _render_patch(
        original, modified, redact_route, scrub_secrets=True, max_bytes=max_bytes
    )


def diff_object_to_string(
    original: Any,
    modified: Any,
    *,
    max_bytes: int | None = None,
) -> str:
    """Return the merge patch using the policy registered for ``original``."""

    if original is None:
        return ORIGINAL_NIL_MESSAGE
    policy = get_policy(original)
    return _render_patch(
        original,
        modified,
        policy,
        scrub_secrets=policy is not identity_policy,
        max_bytes=max_bytes,
    )
