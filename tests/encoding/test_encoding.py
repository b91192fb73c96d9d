from __future__ import annotations

import enum

import pytest

from redactdiff.encoding import EncodingError, encode_object, to_json_value
from redactdiff.resources import ObjectMeta, Secret, TLSConfig


class Termination(enum.Enum):
    EDGE = "edge"


def test_encode_object_sorts_keys_and_uses_compact_separators() -> None:
    assert encode_object({"b": 1, "a": [True, None]}) == b'{"a":[true,null],"b":1}'


def test_encode_object_is_deterministic_across_key_order() -> None:
    first = encode_object({"x": {"b": 2, "a": 1}, "y": "z"})
    second = encode_object({"y": "z", "x": {"a": 1, "b": 2}})

    assert first == second


def test_encode_object_keeps_unicode_text() -> None:
    assert encode_object({"name": "café"}) == '{"name":"café"}'.encode("utf-8")


def test_encode_object_renders_bytes_as_base64() -> None:
    assert encode_object({"token": b"hi"}) == b'{"token":"aGk="}'


def test_encode_object_renders_enum_values() -> None:
    assert encode_object({"termination": Termination.EDGE}) == b'{"termination":"edge"}'


def test_dataclass_fields_use_camel_case_and_overrides() -> None:
    tls = TLSConfig(ca_certificate="ca", destination_ca_certificate="dest")

    assert to_json_value(tls) == {"caCertificate": "ca", "destinationCACertificate": "dest"}


def test_dataclass_none_fields_are_omitted() -> None:
    secret = Secret(metadata=ObjectMeta(name="db"), data={"pw": b"x"})

    assert encode_object(secret) == (
        b'{"apiVersion":"v1","data":{"pw":"eA=="},"kind":"Secret","metadata":{"name":"db"}}'
    )


def test_shared_references_are_not_cycles() -> None:
    shared = [1, 2]

    assert encode_object({"a": shared, "b": shared}) == b'{"a":[1,2],"b":[1,2]}'


def test_cyclic_structures_raise() -> None:
    payload: dict = {}
    payload["self"] = payload

    with pytest.raises(EncodingError, match="cyclic"):
        encode_object(payload)


@pytest.mark.parametrize(
    "value, message",
    [
        ({1: "a"}, "mapping keys must be strings"),
        ({"a": float("nan")}, "non-finite"),
        ({"a": {1, 2}}, "unsupported type set"),
        ({"a": object()}, "unsupported type object"),
    ],
)
def test_unsupported_values_raise(value: object, message: str) -> None:
    with pytest.raises(EncodingError, match=message):
        encode_object(value)
