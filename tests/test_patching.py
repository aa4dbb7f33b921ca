import copy

import pytest

from syskit.patching import (
    PatchError,
    PointerError,
    apply_patch,
    diff,
    merge_patch,
    parse_pointer,
    resolve_pointer,
)

ORIGINAL = {"baz": ["one", "two", "three"], "foo": "bar"}
PATCH = [
    {"op": "replace", "path": "/baz", "value": "boo"},
    {"op": "add", "path": "/hello", "value": ["world"]},
    {"op": "remove", "path": "/foo"},
]
RESULT = {"baz": "boo", "hello": ["world"]}


def test_resolve_pointer_into_array():
    assert resolve_pointer(ORIGINAL, "/baz/1") == "two"
    assert resolve_pointer(ORIGINAL, "/baz/2") == "three"


def test_resolve_pointer_root_returns_document():
    assert resolve_pointer(ORIGINAL, "") == ORIGINAL


def test_resolve_pointer_missing_index():
    with pytest.raises(PointerError):
        resolve_pointer(ORIGINAL, "/baz/5")


def test_resolve_pointer_missing_key():
    with pytest.raises(PointerError):
        resolve_pointer(ORIGINAL, "/nothing")


def test_parse_pointer_unescapes():
    assert parse_pointer("/a~1b/m~0n") == ["a/b", "m~n"]


@pytest.mark.parametrize("pointer", ["baz", "/a~2", "/a~"])
def test_parse_pointer_rejects_malformed(pointer):
    with pytest.raises(PointerError):
        parse_pointer(pointer)


def test_resolve_pointer_rejects_leading_zero():
    with pytest.raises(PointerError):
        resolve_pointer(ORIGINAL, "/baz/01")


def test_apply_patch_matches_documented_result():
    assert apply_patch(ORIGINAL, PATCH) == RESULT


def test_apply_patch_leaves_original_untouched():
    before = copy.deepcopy(ORIGINAL)
    apply_patch(ORIGINAL, PATCH)
    assert ORIGINAL == before


def test_diff_matches_documented_patch():
    assert diff(RESULT, ORIGINAL) == [
        {"op": "replace", "path": "/baz", "value": ["one", "two", "three"]},
        {"op": "remove", "path": "/hello"},
        {"op": "add", "path": "/foo", "value": "bar"},
    ]


@pytest.mark.parametrize(
    "source, target",
    [
        (ORIGINAL, RESULT),
        (RESULT, ORIGINAL),
        ([1, 2, 3, 4], [1, 5]),
        ([1], [1, 2, 3]),
        ({"a/b": {"x": True}}, {"a/b": {"x": 1}}),
        ({"k": None}, {"k": [None]}),
    ],
)
def test_diff_round_trip(source, target):
    assert apply_patch(source, diff(source, target)) == target


def test_diff_of_equal_values_is_empty():
    assert diff(ORIGINAL, copy.deepcopy(ORIGINAL)) == []


def test_add_appends_with_dash():
    doc = apply_patch(ORIGINAL, [{"op": "add", "path": "/baz/-", "value": "four"}])
    assert doc["baz"][-1] == "four"
    assert len(doc["baz"]) == len(ORIGINAL["baz"]) + 1


def test_move_and_copy():
    moved = apply_patch(ORIGINAL, [{"op": "move", "from": "/foo", "path": "/moved"}])
    assert "foo" not in moved and moved["moved"] == ORIGINAL["foo"]
    copied = apply_patch(ORIGINAL, [{"op": "copy", "from": "/baz/0", "path": "/first"}])
    assert copied["first"] == ORIGINAL["baz"][0]
    assert copied["baz"] == ORIGINAL["baz"]


def test_move_into_child_is_rejected():
    with pytest.raises(PatchError):
        apply_patch(ORIGINAL, [{"op": "move", "from": "/baz", "path": "/baz/0"}])


def test_test_operation():
    ok = [{"op": "test", "path": "/foo", "value": "bar"}]
    assert apply_patch(ORIGINAL, ok) == ORIGINAL
    with pytest.raises(PatchError):
        apply_patch(ORIGINAL, [{"op": "test", "path": "/foo", "value": "boo"}])


def test_test_operation_distinguishes_bool_from_number():
    with pytest.raises(PatchError):
        apply_patch({"x": 1}, [{"op": "test", "path": "/x", "value": True}])


@pytest.mark.parametrize(
    "patch",
    [
        [{"op": "remove", "path": "/missing"}],
        [{"op": "replace", "path": "/baz/9", "value": 1}],
        [{"op": "frobnicate", "path": "/foo"}],
        [{"path": "/foo"}],
        [{"op": "add", "path": "/foo"}],
        [{"op": "remove", "path": ""}],
        {"op": "remove", "path": "/foo"},
    ],
)
def test_invalid_patches_raise(patch):
    with pytest.raises(PatchError):
        apply_patch(ORIGINAL, patch)


def test_merge_patch_documented_example():
    document = {"a": "b", "c": {"d": "e", "f": "g"}}
    patch = {"a": "z", "c": {"f": None}}
    assert merge_patch(document, patch) == {"a": "z", "c": {"d": "e"}}
    assert document == {"a": "b", "c": {"d": "e", "f": "g"}}


def test_merge_patch_with_non_object_replaces_whole_document():
    document = {"a": "b", "c": {"d": "e", "f": "g"}}
    assert merge_patch(document, PATCH) == PATCH