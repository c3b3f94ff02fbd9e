"""Annotation configuration.

AnnotateConfig is a frozen value passed into every render and merge call.
It can be read from a YAML file and then overridden from the command line:

    position: after
    force: false
    show_foreign_keys: true
    show_indexes: true
    header: "== Schema Info"
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

DEFAULT_HEADER = "== Schema Info"


class Position(str, Enum):
    """Where an annotation block sits in a file."""

    NONE = "none"
    BEFORE = "before"
    AFTER = "after"

    @classmethod
    def parse(cls, value: str | Position) -> Position:
        """Parse a requested position. Only before/after can be requested."""
        if isinstance(value, cls):
            pos = value
        else:
            raw = str(value).lower()
            # Aliases accepted by the original annotate tool
            raw = {"top": "before", "bottom": "after"}.get(raw, raw)
            try:
                pos = cls(raw)
            except ValueError:
                pos = cls.NONE
        if pos is cls.NONE:
            raise ValueError(f"Invalid position '{value}'. Expected 'before' or 'after'")
        return pos


_FLAG_FIELDS = (
    "force",
    "show_foreign_keys",
    "show_indexes",
    "show_complete_foreign_keys",
    "sort",
    "classified_sort",
)


@dataclass(frozen=True)
class AnnotateConfig:
    position: Position = Position.BEFORE
    force: bool = False
    show_foreign_keys: bool = False
    show_indexes: bool = False
    show_complete_foreign_keys: bool = False
    sort: bool = False
    classified_sort: bool = False
    header: str = DEFAULT_HEADER
    comment_prefix: str = "#"

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", Position.parse(self.position))
        for name in _FLAG_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"Config '{name}' must be true or false, got {value!r}")
        for name in ("header", "comment_prefix"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"Config '{name}' must be a string, got {value!r}")
        if not self.header.strip():
            raise ValueError("Annotation header must not be empty")
        if not self.comment_prefix.strip():
            raise ValueError("Comment prefix must not be empty")

    def with_overrides(self, **overrides: Any) -> AnnotateConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


CONFIG_KEYS = {f.name for f in fields(AnnotateConfig)}


def config_from_dict(data: dict) -> AnnotateConfig:
    """Build a config from a mapping, rejecting unknown keys."""
    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    return AnnotateConfig(**data)


def load_config(path: Path | str | None = None) -> AnnotateConfig:
    """Read an annotation config file.

    Args:
        path: Path to a YAML config. None returns the defaults.

    Returns:
        Parsed AnnotateConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the file is not a mapping or has invalid values.
    """
    if path is None:
        return AnnotateConfig()

    config_path = Path(path)
    with open(config_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return AnnotateConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config at {config_path} is not a YAML mapping")

    return config_from_dict(data)
