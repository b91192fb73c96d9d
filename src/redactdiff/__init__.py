"""Redacted structural diffs for audit logs.

The package renders JSON merge patches between two versions of a resource
while replacing secret values with classification tokens, so operators can
see that a credential changed without the credential reaching the log.
"""

from __future__ import annotations

from .diff import (
    MODIFIED_NIL_MESSAGE,
    ORIGINAL_NIL_MESSAGE,
    diff_object_to_string,
    diff_route_to_string,
    diff_secret_to_string,
    diff_to_string,
)
from .encoding import EncodingError, encode_object
from .patch import PatchError, apply_merge_patch, create_merge_patch
from .policies import (
    MODIFIED,
    NEW,
    OLD,
    TLS_KEY_MASKED,
    TLS_KEY_MODIFIED,
    get_policy,
    identity_policy,
    redact_route,
    redact_secret,
    register_policy,
    registry_summary,
)
from .redaction import RedactionFilter, collect_secret_literals, resolve_redactor
from .resources import (
    ObjectMeta,
    Route,
    RoutePort,
    RouteSpec,
    RouteTargetReference,
    Secret,
    TLSConfig,
)

__version__ = "0.1.0"

__all__ = [
    "MODIFIED_NIL_MESSAGE",
    "ORIGINAL_NIL_MESSAGE",
    "diff_object_to_string",
    "diff_route_to_string",
    "diff_secret_to_string",
    "diff_to_string",
    "EncodingError",
    "encode_object",
    "PatchError",
    "apply_merge_patch",
    "create_merge_patch",
    "MODIFIED",
    "NEW",
    "OLD",
    "TLS_KEY_MASKED",
    "TLS_KEY_MODIFIED",
    "get_policy",
    "identity_policy",
    "redact_route",
    "redact_secret",
    "register_policy",
    "registry_summary",
    "RedactionFilter",
    "collect_secret_literals",
    "resolve_redactor",
    "ObjectMeta",
    "Route",
    "RoutePort",
    "RouteSpec",
    "RouteTargetReference",
    "Secret",
    "TLSConfig",
]
