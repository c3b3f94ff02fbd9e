"""Load schema manifests (YAML or JSON) into SchemaModel values.

A manifest is produced by whatever tool introspects the database. It maps
each table to its structure and to the model file that should carry the
annotation:

    tables:
      users:
        model: app/models/user.py
        primary_key: id
        columns:
          - {name: id, type: integer, nullable: false}
        indexes: [...]
        foreign_keys: [...]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from schema_annotator.schema.model import Column, ForeignKey, Index, SchemaModel


@dataclass(frozen=True)
class AnnotationTarget:
    """A table's schema paired with the model file it annotates."""

    schema: SchemaModel
    model_path: Path | None = None

    @property
    def table_name(self) -> str:
        return self.schema.table_name


def load_schema(path: Path | str) -> list[AnnotationTarget]:
    """Read a schema manifest from disk.

    Args:
        path: Path to the manifest (.yaml, .yml or .json).

    Returns:
        One target per table, in manifest order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the document is malformed.
        ValueError: If the manifest structure or a table is invalid.
    """
    manifest_path = Path(path)
    with open(manifest_path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Schema manifest at {manifest_path} is not a mapping")

    return parse_manifest(data)


def parse_manifest(data: dict) -> list[AnnotationTarget]:
    """Build annotation targets from an already-parsed manifest dict."""
    tables = data.get("tables")
    if not isinstance(tables, dict):
        raise ValueError("Schema manifest has no 'tables' mapping")

    targets = []
    for table_name, table in tables.items():
        if not isinstance(table, dict):
            raise ValueError(f"Table '{table_name}': expected a mapping")
        try:
            schema = parse_table(str(table_name), table)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Table '{table_name}': malformed entry ({e})") from e
        model = table.get("model")
        targets.append(AnnotationTarget(schema, Path(model) if model else None))
    return targets


def parse_table(table_name: str, table: dict) -> SchemaModel:
    """Build a SchemaModel from one manifest table entry."""
    try:
        columns, indexes, foreign_keys = _parse_parts(table)
    except ValueError as e:
        raise ValueError(f"Table '{table_name}': {e}") from e

    return SchemaModel(
        table_name=table_name,
        primary_key=table.get("primary_key"),
        columns=columns,
        indexes=indexes,
        foreign_keys=foreign_keys,
    )


def _parse_parts(table: dict) -> tuple[list[Column], list[Index], list[ForeignKey]]:
    columns = [
        Column(
            name=c["name"],
            type=c["type"],
            nullable=c.get("nullable", True),
            default=c.get("default"),
            limit=c.get("limit"),
        )
        for c in table.get("columns", []) or []
    ]
    indexes = [
        Index(
            name=i["name"],
            columns=i["columns"],
            unique=i.get("unique", False),
            where=i.get("where"),
        )
        for i in table.get("indexes", []) or []
    ]
    foreign_keys = [
        ForeignKey(
            name=fk["name"],
            column=fk["column"],
            to_table=fk["to_table"],
            primary_key=fk.get("primary_key", "id"),
            on_delete=fk.get("on_delete"),
            on_update=fk.get("on_update"),
        )
        for fk in table.get("foreign_keys", []) or []
    ]
    return columns, indexes, foreign_keys
