"""Schema model types and the schema manifest loader."""

from schema_annotator.schema.model import (
    Column,
    ColumnType,
    ForeignKey,
    Index,
    ReferentialAction,
    SchemaModel,
)

__all__ = [
    "Column",
    "ColumnType",
    "ForeignKey",
    "Index",
    "ReferentialAction",
    "SchemaModel",
]
