from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import jsonschema


@lru_cache(maxsize=None)
def _load_schema_text(schema_path: Path) -> str:
    return schema_path.read_text(encoding="utf-8")


def load_schema(schema_path: Path) -> Dict[str, Any]:
    return json.loads(_load_schema_text(schema_path))


def validate_json(instance: Any, schema_path: Path) -> None:
    schema = load_schema(schema_path)
    jsonschema.Draft202012Validator(schema).validate(instance)
