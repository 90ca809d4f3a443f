from __future__ import annotations

import hashlib
import json
from dataclasses import fields, is_dataclass
from typing import Any, Mapping

JsonLike = Any


def _to_primitive(obj: Any) -> JsonLike:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in fields(obj)}
    if hasattr(obj, "model_dump") and callable(getattr(obj, "model_dump")):
        return obj.model_dump(mode="json")
    if isinstance(obj, BaseException):
        return f"{type(obj).__name__}({str(obj)!r})"
    return obj


def canonicalize(obj: Any) -> JsonLike:
    """Reduce captured values to JSON primitives.

    Mappings keep string keys, sequences become lists, sets become sorted
    lists, and anything else that is not a JSON primitive is rendered with
    ``str()`` so diagnostics never fail on exotic parameter values.
    """
    obj = _to_primitive(obj)

    if isinstance(obj, Mapping):
        return {(k if isinstance(k, str) else str(k)): canonicalize(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [canonicalize(item) for item in obj]

    if isinstance(obj, (set, frozenset)):
        return sorted((canonicalize(item) for item in obj), key=repr)

    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj

    return str(obj)


def canonical_dumps_str(obj: Any) -> str:
    return json.dumps(
        canonicalize(obj),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def canonical_dumps_bytes(obj: Any) -> bytes:
    return canonical_dumps_str(obj).encode("utf-8")


def stable_object_hash(obj: Any) -> str:
    return hashlib.sha256(canonical_dumps_bytes(obj)).hexdigest()
