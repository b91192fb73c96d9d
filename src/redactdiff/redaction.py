"""Literal scrubbing for the string values of a decoded patch.

The policies already keep secret values out of the patch. The filter here is
the second net: it removes any literal copy of a secret value that still
reaches the patch through fields no policy covers, such as an annotation that
embeds the full previous object. Only string values are inspected; object
keys and the policy tokens themselves are left alone so the per-key change
narrative survives.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Iterable, Iterator, Mapping, Sequence

# Shorter values collide with ordinary configuration text too easily.
MIN_SCRUB_LENGTH = 6


@dataclass
class RedactionFilter:
    """Mask literal ``tokens`` found inside string values.

    Strings listed in ``preserved`` are returned untouched even when a token
    occurs inside them.
    """

    tokens: Sequence[str] = ()
    placeholder: str = "[REDACTED]"
    preserved: AbstractSet[str] = frozenset()
    _ordered_tokens: Sequence[str] = field(default_factory=tuple, init=False, repr=False)

    def __post_init__(self) -> None:
        unique = [token for token in dict.fromkeys(self.tokens) if token]
        unique.sort(key=len, reverse=True)
        self._ordered_tokens = tuple(unique)

    def mask_text(self, text: str) -> tuple[str, int]:
        """Return ``text`` with tokens masked and the number of replacements."""

        if not self._ordered_tokens or not text or text in self.preserved:
            return text, 0
        hits = 0
        for token in self._ordered_tokens:
            occurrences = text.count(token)
            if occurrences:
                hits += occurrences
                text = text.replace(token, self.placeholder)
        return text, hits

    def scrub(self, data: Any) -> tuple[Any, int]:
        """Return a copy of decoded JSON ``data`` with string values masked.

        Mapping keys are never rewritten. The second item counts the
        replacements made.
        """

        if isinstance(data, str):
            return self.mask_text(data)
        if isinstance(data, Mapping):
            scrubbed: dict[str, Any] = {}
            total = 0
            for key, value in data.items():
                scrubbed[key], hits = self.scrub(value)
                total += hits
            return scrubbed, total
        if isinstance(data, list):
            items = []
            total = 0
            for value in data:
                item, hits = self.scrub(value)
                items.append(item)
                total += hits
            return items, total
        return data, 0


def resolve_redactor(
    *,
    redactor: RedactionFilter | None = None,
    mask_tokens: Sequence[str] | None = None,
    placeholder: str = "[REDACTED]",
) -> RedactionFilter | None:
    """Return a configured :class:`RedactionFilter` for the provided arguments."""

    if redactor and mask_tokens:
        raise ValueError("Provide either an explicit redactor or mask_tokens, not both.")
    if redactor:
        return redactor
    if mask_tokens:
        return RedactionFilter(tokens=mask_tokens, placeholder=placeholder)
    return None


def _byte_literals(value: bytes) -> Iterator[str]:
    yield base64.b64encode(value).decode("ascii")
    try:
        yield value.decode("utf-8")
    except UnicodeDecodeError:
        return


def collect_secret_literals(objects: Iterable[Any]) -> tuple[str, ...]:
    """Return the textual forms of every secret value held by ``objects``.

    Secret data contributes its decoded text and its base64 form, string
    data its raw text, and route TLS blocks their private key. Values shorter
    than :data:`MIN_SCRUB_LENGTH` are skipped.
    """

    literals: list[str] = []
    for obj in objects:
        if obj is None:
            continue
        for value in (getattr(obj, "data", None) or {}).values():
            if isinstance(value, (bytes, bytearray)):
                literals.extend(_byte_literals(bytes(value)))
            elif isinstance(value, str):
                literals.append(value)
        literals.extend((getattr(obj, "string_data", None) or {}).values())
        spec = getattr(obj, "spec", None)
        tls = getattr(spec, "tls", None)
        if tls is not None and tls.key:
            literals.append(tls.key)
    return tuple(
        literal for literal in dict.fromkeys(literals) if len(literal) >= MIN_SCRUB_LENGTH
    )
