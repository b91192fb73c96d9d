"""Resource models for the object kinds that carry secret material.

Only the fields the redaction policies and audit logs care about are
modelled. Unstructured payloads can be converted with ``from_dict`` so call
sites holding decoded API responses reach the same policies.
"""

from __future__ import annotations

import base64
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


def _string_map(value: Any) -> Optional[Dict[str, str]]:
    if value is None:
        return None
    return {str(key): str(item) for key, item in dict(value).items()}


def _bytes_value(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if value is None:
        return b""
    # Unstructured secrets carry base64 text, as served by the API.
    return base64.b64decode(str(value))


@dataclass
class ObjectMeta:
    name: Optional[str] = None
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    resource_version: Optional[str] = None
    generation: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "ObjectMeta":
        payload = payload or {}
        return cls(
            name=payload.get("name"),
            namespace=payload.get("namespace"),
            labels=_string_map(payload.get("labels")),
            annotations=_string_map(payload.get("annotations")),
            resource_version=payload.get("resourceVersion"),
            generation=payload.get("generation"),
        )


@dataclass
class Secret:
    """A bundle of named secret values."""

    api_version: str = "v1"
    kind: str = "Secret"
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    type: Optional[str] = None
    data: Optional[Dict[str, bytes]] = None
    string_data: Optional[Dict[str, str]] = None
    immutable: Optional[bool] = None

    def deep_copy(self) -> "Secret":
        return copy.deepcopy(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Secret":
        data = payload.get("data")
        return cls(
            api_version=payload.get("apiVersion", "v1"),
            kind=payload.get("kind", "Secret"),
            metadata=ObjectMeta.from_dict(payload.get("metadata")),
            type=payload.get("type"),
            data=None if data is None else {str(k): _bytes_value(v) for k, v in data.items()},
            string_data=_string_map(payload.get("stringData")),
            immutable=payload.get("immutable"),
        )


@dataclass
class TLSConfig:
    """Transport security settings; ``key`` holds the PEM private key."""

    termination: Optional[str] = None
    certificate: Optional[str] = None
    key: Optional[str] = None
    ca_certificate: Optional[str] = None
    destination_ca_certificate: Optional[str] = field(
        default=None, metadata={"json": "destinationCACertificate"}
    )
    insecure_edge_termination_policy: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TLSConfig":
        return cls(
            termination=payload.get("termination"),
            certificate=payload.get("certificate"),
            key=payload.get("key"),
            ca_certificate=payload.get("caCertificate"),
            destination_ca_certificate=payload.get("destinationCACertificate"),
            insecure_edge_termination_policy=payload.get("insecureEdgeTerminationPolicy"),
        )


@dataclass
class RouteTargetReference:
    kind: str = "Service"
    name: str = ""
    weight: Optional[int] = None


@dataclass
class RoutePort:
    target_port: Any = None


@dataclass
class RouteSpec:
    host: Optional[str] = None
    path: Optional[str] = None
    to: RouteTargetReference = field(default_factory=RouteTargetReference)
    port: Optional[RoutePort] = None
    tls: Optional[TLSConfig] = None
    wildcard_policy: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "RouteSpec":
        payload = payload or {}
        target = payload.get("to") or {}
        port = payload.get("port")
        tls = payload.get("tls")
        return cls(
            host=payload.get("host"),
            path=payload.get("path"),
            to=RouteTargetReference(
                kind=target.get("kind", "Service"),
                name=target.get("name", ""),
                weight=target.get("weight"),
            ),
            port=None if port is None else RoutePort(target_port=port.get("targetPort")),
            tls=None if tls is None else TLSConfig.from_dict(tls),
            wildcard_policy=payload.get("wildcardPolicy"),
        )


@dataclass
class Route:
    """An externally reachable host name routed to a service."""

    api_version: str = "route.openshift.io/v1"
    kind: str = "Route"
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: RouteSpec = field(default_factory=RouteSpec)

    def deep_copy(self) -> "Route":
        return copy.deepcopy(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Route":
        return cls(
            api_version=payload.get("apiVersion", "route.openshift.io/v1"),
            kind=payload.get("kind", "Route"),
            metadata=ObjectMeta.from_dict(payload.get("metadata")),
            spec=RouteSpec.from_dict(payload.get("spec")),
        )
