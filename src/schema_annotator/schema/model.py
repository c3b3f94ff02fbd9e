"""Schema model value types — columns, indexes, foreign keys, tables.

Everything here is frozen. A SchemaModel is built fresh for each render
and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ColumnType(str, Enum):
    """Storage types a column may declare."""

    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    TIMESTAMP = "timestamp"
    BINARY = "binary"
    JSON = "json"
    UUID = "uuid"

    @classmethod
    def parse(cls, value: str | ColumnType) -> ColumnType:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown column type '{value}'. Valid types: {valid}") from None


class ReferentialAction(str, Enum):
    """ON DELETE / ON UPDATE behaviour of a foreign key."""

    CASCADE = "cascade"
    RESTRICT = "restrict"
    NULLIFY = "nullify"

    @classmethod
    def parse(cls, value: str | ReferentialAction | None) -> ReferentialAction | None:
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown referential action '{value}'. Valid actions: {valid}") from None


@dataclass(frozen=True)
class Column:
    name: str
    type: ColumnType
    nullable: bool = True
    default: Any = None
    limit: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ColumnType.parse(self.type))

    @property
    def type_label(self) -> str:
        """Type as rendered, e.g. ``string(255)``."""
        if self.limit is not None:
            return f"{self.type.value}({self.limit})"
        return self.type.value


@dataclass(frozen=True)
class Index:
    name: str
    columns: tuple[str, ...]
    unique: bool = False
    where: str | None = None

    def __post_init__(self) -> None:
        cols = (self.columns,) if isinstance(self.columns, str) else tuple(self.columns)
        if not cols:
            raise ValueError(f"Index '{self.name}' covers no columns")
        object.__setattr__(self, "columns", cols)


@dataclass(frozen=True)
class ForeignKey:
    name: str
    column: str
    to_table: str
    primary_key: str = "id"
    on_delete: ReferentialAction | None = None
    on_update: ReferentialAction | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "on_delete", ReferentialAction.parse(self.on_delete))
        object.__setattr__(self, "on_update", ReferentialAction.parse(self.on_update))


@dataclass(frozen=True)
class SchemaModel:
    """Resolved structure of one table.

    Column order is declaration order and is preserved when rendering
    unless a sort option asks otherwise.

    Raises:
        ValueError: If two columns share a name.
    """

    table_name: str
    primary_key: str | None = None
    columns: tuple[Column, ...] = field(default_factory=tuple)
    indexes: tuple[Index, ...] = field(default_factory=tuple)
    foreign_keys: tuple[ForeignKey, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "indexes", tuple(self.indexes))
        object.__setattr__(self, "foreign_keys", tuple(self.foreign_keys))

        seen: set[str] = set()
        for col in self.columns:
            if col.name in seen:
                raise ValueError(
                    f"Table '{self.table_name}' declares column '{col.name}' more than once"
                )
            seen.add(col.name)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None
