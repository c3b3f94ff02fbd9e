"""Config and manifest path resolution.

Uses environment variables when available, falls back to conventional
defaults in the working directory.

Environment variables:
    SCHEMA_ANNOTATOR_CONFIG — annotation config file (default: ./.annotate.yaml)
    SCHEMA_ANNOTATOR_SCHEMA — schema manifest (default: ./schema.yaml)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_CONFIG_NAME = ".annotate.yaml"
_DEFAULT_SCHEMA_NAME = "schema.yaml"


def config_path() -> Path | None:
    """Return the config file to use, or None when there isn't one."""
    env = os.environ.get("SCHEMA_ANNOTATOR_CONFIG")
    if env:
        return Path(env)
    default = Path.cwd() / _DEFAULT_CONFIG_NAME
    return default if default.is_file() else None


def schema_path() -> Path:
    """Return the path to the schema manifest."""
    env = os.environ.get("SCHEMA_ANNOTATOR_SCHEMA")
    if env:
        return Path(env)
    return Path.cwd() / _DEFAULT_SCHEMA_NAME
