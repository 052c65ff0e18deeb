"""Schema loading utilities for solver payload contracts."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import jsonschema

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
_CATALOG_PATH = _SCHEMA_ROOT / "catalog.json"


@dataclass(frozen=True)
class SchemaDescriptor:
    """Descriptor describing a schema entry from the catalog."""

    payload_type: str
    version: str
    schema_id: str
    schema_path: str


_catalog_cache: Dict[str, SchemaDescriptor] | None = None
_schema_cache: Dict[str, Dict[str, Any]] = {}
_compiled_cache: Dict[str, jsonschema.protocols.Validator] = {}


def load_catalog() -> Dict[str, SchemaDescriptor]:
    """Load and cache the schema catalog."""

    global _catalog_cache
    if _catalog_cache is not None:
        return _catalog_cache

    raw_catalog = json.loads(_CATALOG_PATH.read_text("utf-8"))
    catalog: Dict[str, SchemaDescriptor] = {}
    for payload_type, payload in raw_catalog.items():
        catalog[payload_type] = SchemaDescriptor(
            payload_type=payload_type,
            version=payload["version"],
            schema_id=payload["schema_id"],
            schema_path=payload["schema_path"],
        )
    _catalog_cache = catalog
    return catalog


def get_descriptor(payload_type: str) -> SchemaDescriptor:
    catalog = load_catalog()
    if payload_type not in catalog:
        raise KeyError(f"Unknown payload type: {payload_type}")
    return catalog[payload_type]


def load_schema(payload_type: str) -> Dict[str, Any]:
    """Return a copy of the JSON schema registered for ``payload_type``."""

    descriptor = get_descriptor(payload_type)
    if descriptor.schema_id not in _schema_cache:
        resolved = (_SCHEMA_ROOT / descriptor.schema_path).resolve()
        if not str(resolved).startswith(str(_SCHEMA_ROOT)):
            raise ValueError("Schema path escapes the schemas directory")
        schema = json.loads(resolved.read_text("utf-8"))
        if schema.get("$id") != descriptor.schema_id:
            raise ValueError(
                f"Schema id mismatch: catalog has {descriptor.schema_id!r}, schema has {schema.get('$id')!r}"
            )
        _schema_cache[descriptor.schema_id] = schema
    return copy.deepcopy(_schema_cache[descriptor.schema_id])


def get_validator(payload_type: str) -> jsonschema.protocols.Validator:
    """Compile (once) and return the validator for ``payload_type``."""

    descriptor = get_descriptor(payload_type)
    cached = _compiled_cache.get(descriptor.schema_id)
    if cached is not None:
        return cached

    schema = load_schema(payload_type)
    validator_cls = jsonschema.validators.validator_for(schema, default=jsonschema.Draft202012Validator)
    validator_cls.check_schema(schema)
    validator = validator_cls(schema)
    _compiled_cache[descriptor.schema_id] = validator
    return validator


__all__ = [
    "SchemaDescriptor",
    "get_descriptor",
    "get_validator",
    "load_catalog",
    "load_schema",
]
