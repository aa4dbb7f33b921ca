"""JSON Pointer lookups, JSON Patch application and diffing, and JSON Merge Patch."""

from __future__ import annotations

import copy
import re
from typing import Any

_INDEX = re.compile(r"0|[1-9][0-9]*")
_BAD_ESCAPE = re.compile(r"~(?![01])")


class PointerError(ValueError):
    """Raised for a malformed JSON pointer or one that names nothing."""


class PatchError(ValueError):
    """Raised when a JSON patch is malformed or cannot be applied."""


def parse_pointer(pointer: str) -> list[str]:
    """Split a JSON pointer into its unescaped reference tokens."""
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PointerError(f"JSON pointer must be empty or begin with '/': {pointer!r}")
    tokens = []
    for raw in pointer[1:].split("/"):
        if _BAD_ESCAPE.search(raw):
            raise PointerError(f"escape character '~' must be followed by 0 or 1: {raw!r}")
        tokens.append(raw.replace("~1", "/").replace("~0", "~"))
    return tokens


def _escape(key: str) -> str:
    return key.replace("~", "~0").replace("/", "~1")


def _array_index(token: str, length: int, allow_end: bool = False) -> int:
    if token == "-":
        if allow_end:
            return length
        raise PointerError("array index '-' names no existing element")
    if not _INDEX.fullmatch(token):
        raise PointerError(f"array index {token!r} is not a number without leading zeros")
    return int(token)


def _get(doc: Any, tokens: list[str]) -> Any:
    current = doc
    for token in tokens:
        if isinstance(current, dict):
            if token not in current:
                raise PointerError(f"key {token!r} not found")
            current = current[token]
        elif isinstance(current, list):
            index = _array_index(token, len(current))
            if index >= len(current):
                raise PointerError(f"array index {index} is out of range")
            current = current[index]
        else:
            raise PointerError(f"cannot resolve token {token!r} in a primitive value")
    return current


def resolve_pointer(doc: Any, pointer: str) -> Any:
    """Return the value that ``pointer`` names inside ``doc``."""
    return _get(doc, parse_pointer(pointer))


def _kind(value: Any) -> str:
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
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"not a JSON value: {value!r}")


def _equal(a: Any, b: Any) -> bool:
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind == "array":
        return len(a) == len(b) and all(_equal(x, y) for x, y in zip(a, b))
    if kind == "object":
        return a.keys() == b.keys() and all(_equal(a[k], b[k]) for k in a)
    return a == b


def _add(doc: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    parent = _get(doc, tokens[:-1])
    last = tokens[-1]
    if isinstance(parent, dict):
        parent[last] = value
    elif isinstance(parent, list):
        index = _array_index(last, len(parent), allow_end=True)
        if index > len(parent):
            raise PointerError(f"array index {index} is out of range")
        parent.insert(index, value)
    else:
        raise PointerError(f"cannot add to a primitive value at {last!r}")
    return doc


def _remove(doc: Any, tokens: list[str]) -> tuple[Any, Any]:
    if not tokens:
        raise PatchError("cannot remove the root value")
    parent = _get(doc, tokens[:-1])
    last = tokens[-1]
    if isinstance(parent, dict):
        if last not in parent:
            raise PointerError(f"key {last!r} not found")
        return doc, parent.pop(last)
    if isinstance(parent, list):
        index = _array_index(last, len(parent))
        if index >= len(parent):
            raise PointerError(f"array index {index} is out of range")
        return doc, parent.pop(index)
    raise PointerError(f"cannot remove from a primitive value at {last!r}")


def _replace(doc: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    _get(doc, tokens)
    parent = _get(doc, tokens[:-1])
    if isinstance(parent, dict):
        parent[tokens[-1]] = value
    else:
        parent[int(tokens[-1])] = value
    return doc


def _member(operation: dict, name: str, kind: type | None = None) -> Any:
    if name not in operation:
        raise PatchError(f"operation must have member {name!r}")
    value = operation[name]
    if kind is not None and not isinstance(value, kind):
        raise PatchError(f"member {name!r} must be of type {kind.__name__}")
    return value


def _apply_one(doc: Any, operation: dict) -> Any:
    op = _member(operation, "op", str)
    tokens = parse_pointer(_member(operation, "path", str))
    if op == "add":
        return _add(doc, tokens, copy.deepcopy(_member(operation, "value")))
    if op == "remove":
        return _remove(doc, tokens)[0]
    if op == "replace":
        return _replace(doc, tokens, copy.deepcopy(_member(operation, "value")))
    if op == "move":
        source = parse_pointer(_member(operation, "from", str))
        if source == tokens:
            return doc
        if tokens[: len(source)] == source:
            raise PatchError("cannot move a value into one of its own children")
        doc, value = _remove(doc, source)
        return _add(doc, tokens, value)
    if op == "copy":
        source = parse_pointer(_member(operation, "from", str))
        return _add(doc, tokens, copy.deepcopy(_get(doc, source)))
    if op == "test":
        if not _equal(_get(doc, tokens), _member(operation, "value")):
            raise PatchError(f"unsuccessful test at {operation['path']!r}")
        return doc
    raise PatchError(f"operation {op!r} is invalid")


def apply_patch(doc: Any, patch: list[dict]) -> Any:
    """Apply a JSON patch and return the result; ``doc`` itself is left untouched."""
    if not isinstance(patch, list):
        raise PatchError("a JSON patch must be an array of operations")
    result = copy.deepcopy(doc)
    for number, operation in enumerate(patch):
        if not isinstance(operation, dict):
            raise PatchError(f"operation {number} must be an object")
        try:
            result = _apply_one(result, operation)
        except PointerError as exc:
            raise PatchError(f"operation {number}: {exc}") from exc
    return result


def _diff(source: Any, target: Any, path: str) -> list[dict]:
    if _equal(source, target):
        return []
    if _kind(source) != _kind(target):
        return [{"op": "replace", "path": path, "value": copy.deepcopy(target)}]
    if isinstance(source, list):
        common = min(len(source), len(target))
        ops: list[dict] = []
        for i, (old, new) in enumerate(zip(source, target)):
            ops.extend(_diff(old, new, f"{path}/{i}"))
        ops.extend(
            {"op": "remove", "path": f"{path}/{i}"}
            for i in reversed(range(common, len(source)))
        )
        ops.extend(
            {"op": "add", "path": f"{path}/-", "value": copy.deepcopy(value)}
            for value in target[common:]
        )
        return ops
    if isinstance(source, dict):
        ops = []
        for key, value in source.items():
            child = f"{path}/{_escape(key)}"
            if key in target:
                ops.extend(_diff(value, target[key], child))
            else:
                ops.append({"op": "remove", "path": child})
        for key, value in target.items():
            if key not in source:
                ops.append(
                    {"op": "add", "path": f"{path}/{_escape(key)}", "value": copy.deepcopy(value)}
                )
        return ops
    return [{"op": "replace", "path": path, "value": copy.deepcopy(target)}]


def diff(source: Any, target: Any) -> list[dict]:
    """A JSON patch that turns ``source`` into ``target``."""
    return _diff(source, target, "")


def merge_patch(target: Any, patch: Any) -> Any:
    """Apply a JSON merge patch and return the result; the inputs are left untouched."""
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)
    result = copy.deepcopy(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result