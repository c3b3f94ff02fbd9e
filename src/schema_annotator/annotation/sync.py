"""Annotation sync — applies rendered blocks to model files on disk.

The per-file pipeline:
1. Read the model file
2. Render the block for its table
3. Locate any existing block
4. Merge, then write only if the content changed

Preserves all file content outside the managed block.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from schema_annotator.annotation.locator import locate
from schema_annotator.annotation.merge import merge, strip
from schema_annotator.annotation.renderer import render
from schema_annotator.config import AnnotateConfig
from schema_annotator.schema.loader import AnnotationTarget
from schema_annotator.schema.model import SchemaModel

logger = logging.getLogger(__name__)


def read_file(path: Path) -> str:
    """Read path without translating line endings."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def annotate_text(text: str, schema: SchemaModel, config: AnnotateConfig) -> str:
    """Return text with the annotation block for schema inserted or refreshed."""
    block = render(schema, config.header, config)
    location = locate(text, config.header, config.comment_prefix)
    return merge(text, location, block, config)


def annotate_file(
    path: Path | str,
    schema: SchemaModel,
    config: AnnotateConfig | None = None,
    dry_run: bool = False,
) -> str:
    """Annotate one model file.

    Returns:
        "updated" or "unchanged".

    Raises:
        FileNotFoundError: If the model file doesn't exist.
    """
    config = config or AnnotateConfig()
    file_path = Path(path)
    content = read_file(file_path)
    new_content = annotate_text(content, schema, config)
    if write_if_changed(file_path, new_content, current=content, dry_run=dry_run):
        logger.info("Annotated %s (%s)", file_path, schema.table_name)
        return "updated"
    logger.debug("Annotation for %s already up to date", file_path)
    return "unchanged"


def remove_annotation(
    path: Path | str,
    config: AnnotateConfig | None = None,
    dry_run: bool = False,
) -> str:
    """Remove the annotation block from one file.

    Returns:
        "removed" or "unchanged".
    """
    config = config or AnnotateConfig()
    file_path = Path(path)
    content = read_file(file_path)
    location = locate(content, config.header, config.comment_prefix)
    if not location.present:
        return "unchanged"
    new_content = strip(content, location)
    write_if_changed(file_path, new_content, current=content, dry_run=dry_run)
    logger.info("Removed annotation from %s", file_path)
    return "removed"


def write_if_changed(
    path: Path,
    new_content: str,
    current: str | None = None,
    dry_run: bool = False,
) -> bool:
    """Write new_content to path unless it already holds exactly that.

    The write goes to a temp file in the same directory which then replaces
    the target, so readers never see a partial file.

    Returns:
        True if the content differs (and was written unless dry_run).
    """
    if current is None:
        current = read_file(path) if path.exists() else None
    if new_content == current:
        return False
    if dry_run:
        return True

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return True


def _resolve(target: AnnotationTarget, root: Path | None) -> Path | None:
    if target.model_path is None:
        return None
    if root is not None and not target.model_path.is_absolute():
        return root / target.model_path
    return target.model_path


def annotate_all(
    targets: Iterable[AnnotationTarget],
    config: AnnotateConfig | None = None,
    root: Path | str | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Annotate every target's model file. Failures don't stop the run."""
    config = config or AnnotateConfig()
    base = Path(root) if root else None

    updated = []
    unchanged = []
    skipped = []
    errors = []

    for target in targets:
        file_path = _resolve(target, base)
        if file_path is None:
            logger.debug("No model file for table %s", target.table_name)
            skipped.append(target.table_name)
            continue
        try:
            action = annotate_file(file_path, target.schema, config, dry_run)
        except (OSError, ValueError) as e:
            logger.error("Failed to annotate %s: %s", file_path, e)
            errors.append({"path": str(file_path), "error": str(e)})
            continue
        if action == "updated":
            updated.append(str(file_path))
        else:
            unchanged.append(str(file_path))

    return {
        "updated": updated,
        "unchanged": unchanged,
        "skipped": skipped,
        "errors": errors,
        "dry_run": dry_run,
    }


def remove_all(
    targets: Iterable[AnnotationTarget],
    config: AnnotateConfig | None = None,
    root: Path | str | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Remove annotation blocks from every target's model file."""
    config = config or AnnotateConfig()
    base = Path(root) if root else None

    removed = []
    unchanged = []
    errors = []

    for target in targets:
        file_path = _resolve(target, base)
        if file_path is None:
            continue
        try:
            action = remove_annotation(file_path, config, dry_run)
        except (OSError, ValueError) as e:
            logger.error("Failed to remove annotation from %s: %s", file_path, e)
            errors.append({"path": str(file_path), "error": str(e)})
            continue
        if action == "removed":
            removed.append(str(file_path))
        else:
            unchanged.append(str(file_path))

    return {
        "removed": removed,
        "unchanged": unchanged,
        "errors": errors,
        "dry_run": dry_run,
    }
