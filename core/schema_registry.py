from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


@dataclass
class SchemaRegistry:
    base_dir: Path
    schemas: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    validators: Dict[str, Draft202012Validator] = field(default_factory=dict)

    def register(self, name: str, path: Path) -> None:
        payload = json.loads(path.read_text(encoding="utf-8"))
        Draft202012Validator.check_schema(payload)
        self.schemas[name] = payload
        self.validators[name] = Draft202012Validator(payload)

    def validator(self, name: str) -> Draft202012Validator:
        if name not in self.validators:
            raise KeyError(f"Schema not registered: {name}")
        return self.validators[name]

    def definition_validator(self, name: str, definition: str) -> Draft202012Validator:
        """Validator for a single ``$defs`` entry of a registered schema."""
        if name not in self.schemas:
            raise KeyError(f"Schema not registered: {name}")
        schema = self.schemas[name]
        if definition not in (schema.get("$defs") or {}):
            raise KeyError(f"Schema {name} has no definition: {definition}")
        sub_schema = {
            "$schema": schema.get("$schema"),
            "$id": schema.get("$id"),
            "$defs": schema.get("$defs"),
            "$ref": f"#/$defs/{definition}",
        }
        Draft202012Validator.check_schema(sub_schema)
        return Draft202012Validator(sub_schema)


def load_default_registry() -> SchemaRegistry:
    registry = SchemaRegistry(SCHEMA_DIR)
    snapshot_path = SCHEMA_DIR / "graph_snapshot.schema.json"
    if not snapshot_path.exists():
        raise FileNotFoundError(f"Missing schema file: {snapshot_path}")
    registry.register("graph_snapshot", snapshot_path)
    return registry


DEFAULT_REGISTRY = load_default_registry()
