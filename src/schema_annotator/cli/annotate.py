"""Annotate / remove / show CLI commands."""

import argparse

import yaml

from schema_annotator.config import AnnotateConfig

# argparse dest -> AnnotateConfig field
_OVERRIDES = (
    "position",
    "force",
    "show_foreign_keys",
    "show_indexes",
    "show_complete_foreign_keys",
    "sort",
    "classified_sort",
    "header",
    "comment_prefix",
)


def _build_config(args: argparse.Namespace) -> AnnotateConfig:
    from schema_annotator.config import load_config
    from schema_annotator.paths import config_path

    config = load_config(args.config or config_path())
    return config.with_overrides(**{k: getattr(args, k, None) for k in _OVERRIDES})


def _load_targets(args: argparse.Namespace, tables: list[str] | None = None) -> list:
    from schema_annotator.paths import schema_path
    from schema_annotator.schema.loader import load_schema

    targets = load_schema(args.schema or schema_path())
    if tables:
        known = {t.table_name for t in targets}
        missing = [name for name in tables if name not in known]
        if missing:
            raise ValueError(f"Table(s) not found in schema manifest: {', '.join(missing)}")
        targets = [t for t in targets if t.table_name in tables]
    return targets


def _print_errors(result: dict) -> None:
    if result["errors"]:
        print(f"  Errors:    {len(result['errors'])}")
        for e in result["errors"]:
            print(f"    - {e['path']}: {e['error']}")


def cmd_annotate(args: argparse.Namespace) -> int:
    from schema_annotator.annotation.sync import annotate_all

    try:
        config = _build_config(args)
        targets = _load_targets(args, args.table)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    result = annotate_all(targets, config, root=args.root, dry_run=args.dry_run)

    print("Schema Annotation Results")
    print("─" * 40)
    print(f"  Updated:   {len(result['updated'])}")
    for path in result["updated"]:
        print(f"    + {path}")
    print(f"  Unchanged: {len(result['unchanged'])}")
    if result["skipped"]:
        print(f"  Skipped:   {len(result['skipped'])} (no model file)")
    _print_errors(result)

    if result.get("dry_run"):
        print("\n[DRY RUN] No files were modified.")

    return 1 if result["errors"] else 0


def cmd_remove(args: argparse.Namespace) -> int:
    from schema_annotator.annotation.sync import remove_all

    try:
        config = _build_config(args)
        targets = _load_targets(args, args.table)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    result = remove_all(targets, config, root=args.root, dry_run=args.dry_run)

    print("Schema Annotation Removal")
    print("─" * 40)
    print(f"  Removed:   {len(result['removed'])}")
    for path in result["removed"]:
        print(f"    - {path}")
    print(f"  Unchanged: {len(result['unchanged'])}")
    _print_errors(result)

    if result.get("dry_run"):
        print("\n[DRY RUN] No files were modified.")

    return 1 if result["errors"] else 0


def cmd_show(args: argparse.Namespace) -> int:
    from schema_annotator.annotation.renderer import render

    try:
        config = _build_config(args)
        targets = _load_targets(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    for target in targets:
        if target.table_name == args.table:
            print(render(target.schema, config.header, config), end="")
            return 0

    print(f"ERROR: Table '{args.table}' not found in schema manifest")
    return 1
