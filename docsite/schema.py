from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    return json.loads((SCHEMA_DIR / f"{name}.schema.json").read_text(encoding="utf-8"))


def validate(data, name: str, error_cls: type[Exception], source: str) -> None:
    """Validate ``data`` against a bundled schema, raising ``error_cls`` on failure."""
    try:
        jsonschema.validate(instance=data, schema=load_schema(name))
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise error_cls(f"{source}: invalid {name} at {where}: {e.message}") from e
