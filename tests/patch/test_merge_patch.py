from __future__ import annotations

import json

import pytest

from redactdiff.patch import PatchError, apply_merge_patch, create_merge_patch


def test_equal_documents_produce_empty_patch() -> None:
    document = b'{"a":1,"b":{"c":[1,2]}}'

    assert create_merge_patch(document, document) == b"{}"


def test_patch_covers_changes_removals_and_additions() -> None:
    original = b'{"a":1,"b":{"c":1,"d":2}}'
    modified = b'{"a":1,"b":{"c":3},"e":[1]}'

    assert create_merge_patch(original, modified) == b'{"b":{"c":3,"d":null},"e":[1]}'


def test_arrays_are_replaced_wholesale() -> None:
    assert create_merge_patch(b'{"a":[1,2]}', b'{"a":[1,3]}') == b'{"a":[1,3]}'


def test_boolean_and_number_are_distinct() -> None:
    assert create_merge_patch(b'{"a":1}', b'{"a":true}') == b'{"a":true}'


def test_nested_object_replaced_by_scalar() -> None:
    assert create_merge_patch(b'{"a":{"b":1}}', b'{"a":2}') == b'{"a":2}'


def test_accepts_text_documents() -> None:
    assert create_merge_patch('{"a":1}', '{"a":2}') == b'{"a":2}'


def test_invalid_json_names_the_failing_side() -> None:
    with pytest.raises(PatchError, match="original"):
        create_merge_patch(b"{", b"{}")
    with pytest.raises(PatchError, match="modified"):
        create_merge_patch(b"{}", b"[")


def test_mismatched_documents_raise() -> None:
    with pytest.raises(PatchError, match="mismatched JSON documents: array vs object"):
        create_merge_patch(b"[1]", b'{"a":1}')


def test_non_object_documents_raise() -> None:
    with pytest.raises(PatchError, match="must be JSON objects"):
        create_merge_patch(b'"x"', b'"y"')


def test_apply_merge_patch_does_not_mutate_document() -> None:
    document = {"a": 1, "b": {"c": 1}}

    result = apply_merge_patch(document, {"b": {"c": None, "d": 2}})

    assert result == {"a": 1, "b": {"d": 2}}
    assert document == {"a": 1, "b": {"c": 1}}


def test_apply_merge_patch_replaces_with_non_object_patch() -> None:
    assert apply_merge_patch({"a": 1}, [1, 2]) == [1, 2]


def test_created_patch_applies_back_to_modified() -> None:
    original = {"spec": {"host": "a", "tls": {"termination": "edge"}}, "keep": True}
    modified = {"spec": {"host": "b"}, "keep": True, "added": ["x"]}

    patch = create_merge_patch(json.dumps(original), json.dumps(modified))

    assert apply_merge_patch(original, json.loads(patch)) == modified
