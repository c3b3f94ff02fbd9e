"""Schema info renderer.

Turns a SchemaModel into the text of an annotation block. The output is
fully determined by its inputs, which is what makes repeated annotate
runs a no-op.
"""

from __future__ import annotations

import re
from typing import Any

from schema_annotator.config import AnnotateConfig
from schema_annotator.schema.model import Column, ForeignKey, Index, SchemaModel

TYPE_WIDTH = 16
TIMESTAMP_COLUMNS = ("created_at", "updated_at", "deleted_at")

# Rails names constraints fk_rails_<10 hex chars>
_HASHED_FK_NAME = re.compile(r"(?<=^fk_rails_)[0-9a-f]{10}$")


def render(schema: SchemaModel, header: str, config: AnnotateConfig | None = None) -> str:
    """Render the annotation block for one table.

    Args:
        schema: Table structure to describe.
        header: Marker text for the first line, e.g. ``"== Schema Info"``.
        config: Display options. Defaults to AnnotateConfig().

    Returns:
        Block text: header line first, trailing blank line last.
    """
    config = config or AnnotateConfig()
    p = config.comment_prefix

    lines = [
        f"{p} {header}",
        p,
        f"{p} Table name: {schema.table_name}",
        p,
    ]
    lines.extend(_column_lines(schema, config))

    if config.show_indexes and schema.indexes:
        lines.append(p)
        lines.append(f"{p} Indexes")
        lines.append(p)
        lines.extend(_index_lines(schema.indexes, p))

    if config.show_foreign_keys and schema.foreign_keys:
        lines.append(p)
        lines.append(f"{p} Foreign Keys")
        lines.append(p)
        lines.extend(_foreign_key_lines(schema.foreign_keys, p, config.show_complete_foreign_keys))

    lines.append(p)
    return "\n".join(lines) + "\n\n"


def _column_lines(schema: SchemaModel, config: AnnotateConfig) -> list[str]:
    columns = _ordered_columns(schema, config)
    if not columns:
        return []

    width = max(len(c.name) for c in columns) + 1
    out = []
    for col in columns:
        attrs = ", ".join(_column_attributes(col, schema.primary_key))
        line = f"{config.comment_prefix}  {col.name.ljust(width)}:{col.type_label.ljust(TYPE_WIDTH)} {attrs}"
        out.append(line.rstrip())
    return out


def _ordered_columns(schema: SchemaModel, config: AnnotateConfig) -> list[Column]:
    columns = list(schema.columns)
    if config.classified_sort:
        pk, plain, assoc, stamps = [], [], [], []
        for col in columns:
            if col.name == schema.primary_key:
                pk.append(col)
            elif col.name in TIMESTAMP_COLUMNS:
                stamps.append(col)
            elif col.name.endswith("_id"):
                assoc.append(col)
            else:
                plain.append(col)
        plain.sort(key=lambda c: c.name)
        assoc.sort(key=lambda c: c.name)
        stamps.sort(key=lambda c: TIMESTAMP_COLUMNS.index(c.name))
        return pk + plain + assoc + stamps
    if config.sort:
        return sorted(columns, key=lambda c: c.name)
    return columns


def _column_attributes(col: Column, primary_key: str | None) -> list[str]:
    attrs = []
    if col.default is not None:
        attrs.append(f"default({_format_default(col.default)})")
    if not col.nullable:
        attrs.append("not null")
    if primary_key is not None and col.name == primary_key:
        attrs.append("primary key")
    return attrs


def _format_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def _index_lines(indexes: tuple[Index, ...], prefix: str) -> list[str]:
    ordered = sorted(indexes, key=lambda i: i.name)
    width = max(len(i.name) for i in ordered)
    out = []
    for idx in ordered:
        line = f"{prefix}  {idx.name.ljust(width)}  ({','.join(idx.columns)})"
        if idx.unique:
            line += " UNIQUE"
        if idx.where:
            line += f" WHERE {idx.where}"
        out.append(line)
    return out


def format_foreign_key_name(name: str, complete: bool = False) -> str:
    """Shorten Rails-style hashed constraint names unless complete is set."""
    if complete:
        return name
    return _HASHED_FK_NAME.sub("...", name)


def _foreign_key_lines(foreign_keys: tuple[ForeignKey, ...], prefix: str, complete: bool) -> list[str]:
    ordered = sorted(foreign_keys, key=lambda fk: (fk.name, fk.column))
    names = [format_foreign_key_name(fk.name, complete) for fk in ordered]
    width = max(len(n) for n in names)
    out = []
    for name, fk in zip(names, ordered):
        line = f"{prefix}  {name.ljust(width)}  ({fk.column} => {fk.to_table}.{fk.primary_key})"
        if fk.on_delete is not None:
            line += f" ON DELETE => {fk.on_delete.value}"
        if fk.on_update is not None:
            line += f" ON UPDATE => {fk.on_update.value}"
        out.append(line)
    return out
